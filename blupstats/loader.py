"""
Reader for renumbered BLUPF90 pedigree and data files.

Both files are whitespace-delimited without a header. Blank lines and lines
starting with "#" are skipped. Every field is kept as text so leading zeros
and alphanumeric codes survive unchanged. Only the columns named by a
``ColumnLayout`` are kept in the returned DataFrame.
"""

import gzip
import logging
import os
from typing import List

import pandas as pd

from .config import ColumnLayout
from .errors import FileReadError

logger = logging.getLogger("blupstats")


def smart_open(filename: str, encoding: str = "utf-8"):
    """
    Open a text file for reading, with gzip support based on the file extension.

    Parameters
    ----------
    filename : str
        Path to the file
    encoding : str
        Text encoding

    Returns
    -------
    file object
        Opened text handle
    """
    if filename.endswith(".gz"):
        return gzip.open(filename, "rt", encoding=encoding)
    return open(filename, "r", encoding=encoding)


def read_whitespace_table(file_path: str, layout: ColumnLayout) -> pd.DataFrame:
    """
    Parse a whitespace-delimited file into a DataFrame of strings.

    Args:
        file_path: Path to the input file (optionally gzipped)
        layout: Column layout naming the fields to extract

    Returns:
        DataFrame with one column per layout field, in file order

    Raises:
        FileReadError: If the file cannot be opened or read, or a row has
            fewer than ``layout.min_columns`` fields
    """
    if not os.path.exists(file_path):
        raise FileReadError(file_path, "file not found")
    if not os.path.isfile(file_path):
        raise FileReadError(file_path, "not a regular file")

    positions = [layout.index_of(name) for name in layout.names]
    rows: List[List[str]] = []
    try:
        with smart_open(file_path) as handle:
            for line_number, line in enumerate(handle, start=1):
                fields = line.split()
                if not fields or fields[0].startswith("#"):
                    continue
                if len(fields) < layout.min_columns:
                    raise FileReadError(
                        file_path,
                        f"expected at least {layout.min_columns} columns, found {len(fields)}",
                        line_number,
                    )
                rows.append([fields[pos] for pos in positions])
    except (OSError, UnicodeDecodeError, EOFError) as e:
        raise FileReadError(file_path, str(e)) from e

    if not rows:
        logger.warning(f"Input file {file_path} contains no records")

    df = pd.DataFrame(rows, columns=list(layout.names), dtype=str)
    logger.debug(f"Read {len(df)} rows from {file_path}")
    return df


def read_pedigree(file_path: str, layout: ColumnLayout) -> pd.DataFrame:
    """
    Read a renumbered pedigree file (e.g. renadd04.ped).

    Returns a DataFrame with columns numeric_id, sire_id, dam_id and
    alphanumeric_id (or whatever fields ``layout`` names).
    """
    pedigree = read_whitespace_table(file_path, layout)
    logger.info(f"Loaded pedigree file {file_path} with {len(pedigree)} rows")
    return pedigree


def read_data(file_path: str, layout: ColumnLayout) -> pd.DataFrame:
    """
    Read a renumbered data file (e.g. renf90.dat).

    Returns a DataFrame with columns trait_value and animal_id.
    """
    data = read_whitespace_table(file_path, layout)
    logger.info(f"Loaded data file {file_path} with {len(data)} records")
    return data
