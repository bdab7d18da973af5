# File: blupstats/filters.py
# Location: blupstats/blupstats/filters.py

"""
Record filtering module.

Removes data-file records whose trait value is the missing-value
sentinel. The comparison is on the raw text, so "0.0" or "00" are
treated as real observations.
"""

import logging

import pandas as pd

logger = logging.getLogger("blupstats")


def filter_missing_traits(data: pd.DataFrame, missing_value: str = "0") -> pd.DataFrame:
    """
    Drop records whose trait value equals ``missing_value``.

    Parameters
    ----------
    data : pd.DataFrame
        Data records with a 'trait_value' column of strings.
    missing_value : str
        Sentinel marking a missing trait record.

    Returns
    -------
    pd.DataFrame
        A new DataFrame holding the remaining records in their original order.
    """
    mask = data["trait_value"] != missing_value
    filtered = data.loc[mask].reset_index(drop=True)
    dropped = len(data) - len(filtered)
    logger.info(
        f"Kept {len(filtered)} of {len(data)} records "
        f"({dropped} with trait value '{missing_value}' removed)"
    )
    return filtered
