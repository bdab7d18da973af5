# File: blupstats/config.py
# Location: blupstats/blupstats/config.py

"""
Configuration management module.

This module handles loading configuration from a JSON file.
All default values reside in config.json, which is included in
the installed package directory. A user-supplied config file is
merged over these defaults, so it only needs the keys it changes.

The column layouts of the pedigree and data files are part of the
configuration: each logical field is mapped to a 1-based column index.
"""

import copy
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigError

PEDIGREE_FIELDS: Tuple[str, ...] = ("numeric_id", "sire_id", "dam_id", "alphanumeric_id")
DATA_FIELDS: Tuple[str, ...] = ("trait_value", "animal_id")
DUPLICATE_POLICIES: Tuple[str, ...] = ("first", "last", "error")
TEXT_KEYS: Tuple[str, ...] = ("pedigree_file", "data_file", "missing_value", "unknown_parent")


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_json(config_file: str) -> Dict[str, Any]:
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file '{config_file}' not found.")

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing JSON configuration: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file '{config_file}' must contain a JSON object.")
    return config


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from JSON files.

    The packaged 'config.json' is always loaded first. If config_file is
    provided, its values are merged over the defaults (nested sections such
    as 'pedigree_columns' are merged key by key).

    Parameters
    ----------
    config_file : str, optional
        Path to a configuration file in JSON format.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the specified configuration file does not exist.
    ValueError
        If there is an error parsing the JSON configuration file.
    ConfigError
        If a sentinel code or file name is not a JSON string.
    """
    default_file = os.path.join(os.path.dirname(__file__), "config.json")
    config = _read_json(default_file)

    if config_file:
        config = _merge(config, _read_json(config_file))

    check_text_values(config)
    return config


def check_text_values(config: Mapping[str, Any]) -> None:
    """
    Check that file names and sentinel codes are strings.

    Input fields are compared as text, so a JSON number such as
    ``"missing_value": 0`` would never match the "0" read from a file.

    Raises
    ------
    ConfigError
        If one of these keys holds a value that is not a string.
    """
    for key in TEXT_KEYS:
        value = config.get(key)
        if not isinstance(value, str):
            raise ConfigError(
                f"Configuration key '{key}' must be a string, got {value!r}; "
                f"quote it in the JSON file (e.g. \"0\" instead of 0)"
            )


@dataclass(frozen=True)
class ColumnLayout:
    """Mapping of logical field names to 1-based column positions."""

    columns: Tuple[Tuple[str, int], ...]
    min_columns: int

    @classmethod
    def from_config(cls, section: Mapping[str, Any], fields: Tuple[str, ...]) -> "ColumnLayout":
        """
        Build a layout from a config section such as ``config["pedigree_columns"]``.

        Parameters
        ----------
        section : Mapping[str, Any]
            Field name to 1-based column index, plus an optional 'min_columns'.
        fields : tuple of str
            Logical fields that must be present in the section.

        Raises
        ------
        ConfigError
            If a field is missing or a column index is not a positive integer.
        """
        columns = []
        for field in fields:
            if field not in section:
                raise ConfigError(f"Column layout is missing field '{field}'")
            index = section[field]
            if isinstance(index, bool) or not isinstance(index, int) or index < 1:
                raise ConfigError(
                    f"Column index for '{field}' must be a positive integer, got {index!r}"
                )
            columns.append((field, index))

        widest = max(index for _, index in columns)
        min_columns = section.get("min_columns", widest)
        if isinstance(min_columns, bool) or not isinstance(min_columns, int) or min_columns < 1:
            raise ConfigError(f"min_columns must be a positive integer, got {min_columns!r}")

        return cls(columns=tuple(columns), min_columns=max(min_columns, widest))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.columns)

    def index_of(self, field: str) -> int:
        """Return the 0-based position of a logical field."""
        for name, index in self.columns:
            if name == field:
                return index - 1
        raise KeyError(field)


def pedigree_layout(config: Mapping[str, Any]) -> ColumnLayout:
    """Column layout of the pedigree file from a loaded config."""
    return ColumnLayout.from_config(config["pedigree_columns"], PEDIGREE_FIELDS)


def data_layout(config: Mapping[str, Any]) -> ColumnLayout:
    """Column layout of the data file from a loaded config."""
    return ColumnLayout.from_config(config["data_columns"], DATA_FIELDS)
