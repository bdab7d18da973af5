"""
Coverage pipeline: load, filter, map and aggregate.

Each stage returns a new value that is passed on explicitly to the next
one; nothing is kept between runs.
"""

import logging
from typing import Any, Dict, List, Optional

from .config import check_text_values, data_layout, pedigree_layout
from .filters import filter_missing_traits
from .identity import IdentityMap
from .loader import read_data, read_pedigree
from .stats import BASIC_KEYS, SummaryStatistic, compute_coverage_stats, select_statistics

logger = logging.getLogger("blupstats")


def run_pipeline(
    cfg: Dict[str, Any],
    pedigree_file: Optional[str] = None,
    data_file: Optional[str] = None,
    extended: bool = False,
) -> List[SummaryStatistic]:
    """
    Compute the coverage summary for one pedigree/data file pair.

    Parameters
    ----------
    cfg : dict
        Loaded configuration (see ``config.load_config``).
    pedigree_file : str, optional
        Pedigree path; defaults to ``cfg["pedigree_file"]``.
    data_file : str, optional
        Data path; defaults to ``cfg["data_file"]``.
    extended : bool
        Return all statistics instead of the basic five.

    Returns
    -------
    list of SummaryStatistic
        Statistics in report order.

    Raises
    ------
    FileReadError
        If either input file cannot be read; no statistics are returned.
    ConfigError
        If the configuration holds an invalid layout or a non-string code.
    """
    check_text_values(cfg)
    pedigree_file = pedigree_file or cfg["pedigree_file"]
    data_file = data_file or cfg["data_file"]

    ped_layout = pedigree_layout(cfg)
    dat_layout = data_layout(cfg)

    pedigree = read_pedigree(pedigree_file, ped_layout)
    data = read_data(data_file, dat_layout)

    filtered = filter_missing_traits(data, cfg["missing_value"])
    identity_map = IdentityMap.from_pedigree(
        pedigree,
        unknown_parent=cfg["unknown_parent"],
        duplicate_policy=cfg["duplicate_policy"],
    )

    stats = compute_coverage_stats(filtered, identity_map)
    if not extended:
        stats = select_statistics(stats, BASIC_KEYS)
    return stats
