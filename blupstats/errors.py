"""
Exception classes for blupstats.

File-level errors abort the whole run; ``EmptySetError`` is raised for a
single statistic and recovered by the aggregator.
"""

from typing import Dict, Optional


class BlupStatsError(Exception):
    """Base exception for all blupstats errors."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize blupstats error.

        Parameters
        ----------
        message : str
            Error message
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.details = details or {}


class FileReadError(BlupStatsError):
    """Raised when an input file is missing, unreadable or has short rows."""

    def __init__(self, path: str, reason: str, line_number: Optional[int] = None):
        """Initialize file read error."""
        location = f"{path}:{line_number}" if line_number is not None else path
        message = f"Cannot read {location}: {reason}"
        super().__init__(message, {"file": path, "reason": reason, "line": line_number})
        self.path = path
        self.line_number = line_number


class EmptySetError(BlupStatsError):
    """Raised when a statistic has an empty denominator set."""

    def __init__(self, statistic: str):
        """Initialize empty set error."""
        message = f"Statistic '{statistic}' has an empty denominator"
        super().__init__(message, {"statistic": statistic})
        self.statistic = statistic


class IdentityConflictError(BlupStatsError):
    """Raised when one numeric ID maps to two different alphanumeric IDs."""

    def __init__(self, numeric_id: str, existing: str, new: str):
        """Initialize identity conflict error."""
        message = (
            f"Numeric ID '{numeric_id}' maps to both '{existing}' and '{new}' in the pedigree"
        )
        super().__init__(message, {"numeric_id": numeric_id, "existing": existing, "new": new})
        self.numeric_id = numeric_id


class ConfigError(BlupStatsError):
    """Raised when the configuration or a column layout is invalid."""
