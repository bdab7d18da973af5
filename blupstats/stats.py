# File: blupstats/stats.py
# Location: blupstats/blupstats/stats.py

"""
Statistics module for blupstats.

Provides functions to compute:
- Record coverage counts for animals, sires and dams.
- Records-per-animal distribution (min, max, mean).
- Proportions of pedigree animals, sires and dams with records.

Statistics are returned as an ordered list of SummaryStatistic values. A
statistic whose denominator set is empty is reported as not applicable
(value None) instead of failing the whole summary.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

import pandas as pd

from .errors import EmptySetError
from .identity import IdentityMap

logger = logging.getLogger("blupstats")

Number = Union[int, float]

BASIC_KEYS = (
    "animals_with_records",
    "sires_with_records",
    "dams_with_records",
    "total_animals",
    "total_records",
)

LABELS = {
    "animals_with_records": "Number of animals with valid records (trait ≠ 0)",
    "sires_with_records": "Number of sires with valid records",
    "dams_with_records": "Number of dams with valid records",
    "total_animals": "Total animals in pedigree",
    "total_records": "Total number of valid records",
    "animals_in_both": "Animals in both pedigree and data",
    "sires_without_records": "Sires without records",
    "dams_without_records": "Dams without records",
    "min_records_per_animal": "Min records per animal",
    "max_records_per_animal": "Max records per animal",
    "avg_records_per_animal": "Avg records per animal",
    "prop_animals_with_records": "Proportion of pedigree animals with records",
    "prop_sires_with_records": "Proportion of sires with records",
    "prop_dams_with_records": "Proportion of dams with records",
}


@dataclass(frozen=True)
class SummaryStatistic:
    """One labelled row of the summary table."""

    key: str
    label: str
    value: Optional[Number]
    digits: Optional[int] = None

    @property
    def is_applicable(self) -> bool:
        return self.value is not None


def _ratio(numerator: int, denominator: int, statistic: str) -> float:
    if denominator == 0:
        raise EmptySetError(statistic)
    return numerator / denominator


def _statistic(
    key: str, compute: Callable[[], Number], digits: Optional[int] = None
) -> SummaryStatistic:
    """Evaluate one statistic, marking it not applicable on an empty set."""
    try:
        value = compute()
    except EmptySetError as e:
        logger.warning(f"{e}; reporting '{LABELS[key]}' as not applicable")
        return SummaryStatistic(key, LABELS[key], None, digits)

    if digits is not None:
        value = round(float(value), digits)
    else:
        value = int(value)
    return SummaryStatistic(key, LABELS[key], value, digits)


def records_per_animal(filtered_data: pd.DataFrame) -> pd.Series:
    """
    Count records per alphanumeric animal ID.

    Parameters
    ----------
    filtered_data : pd.DataFrame
        Data records with an 'animal_id' column, missing traits already removed.

    Returns
    -------
    pd.Series
        Record counts indexed by animal ID.
    """
    return filtered_data.groupby("animal_id", sort=False).size()


def compute_coverage_stats(
    filtered_data: pd.DataFrame, identity_map: IdentityMap
) -> List[SummaryStatistic]:
    """
    Compute the full (extended) list of coverage statistics.

    Parameters
    ----------
    filtered_data : pd.DataFrame
        Data records without missing traits; needs an 'animal_id' column.
    identity_map : IdentityMap
        Numeric-to-alphanumeric map built from the pedigree.

    Returns
    -------
    list of SummaryStatistic
        Fourteen statistics in report order; the first five are the basic summary.
    """
    logger.debug("Computing coverage stats...")
    data_animals = set(filtered_data["animal_id"])
    pedigree_animals = identity_map.alphanumeric_ids()

    sires, unresolved_sires = identity_map.resolve_all(identity_map.sire_ids())
    dams, unresolved_dams = identity_map.resolve_all(identity_map.dam_ids())
    for role, unresolved in (("sire", unresolved_sires), ("dam", unresolved_dams)):
        if unresolved:
            logger.warning(
                f"{len(unresolved)} {role} IDs are not listed as animals in the pedigree "
                f"and were left out of the {role} counts"
            )
            logger.debug(f"Unresolved {role} IDs: {', '.join(unresolved)}")

    sires_with = len(sires & data_animals)
    dams_with = len(dams & data_animals)
    counts = records_per_animal(filtered_data)

    def _per_animal(key: str, reducer: str) -> Callable[[], Number]:
        def compute() -> Number:
            if counts.empty:
                raise EmptySetError(key)
            return getattr(counts, reducer)()

        return compute

    stats = [
        _statistic("animals_with_records", lambda: len(data_animals)),
        _statistic("sires_with_records", lambda: sires_with),
        _statistic("dams_with_records", lambda: dams_with),
        _statistic("total_animals", lambda: len(pedigree_animals)),
        _statistic("total_records", lambda: len(filtered_data)),
        _statistic("animals_in_both", lambda: len(data_animals & pedigree_animals)),
        _statistic("sires_without_records", lambda: len(sires) - sires_with),
        _statistic("dams_without_records", lambda: len(dams) - dams_with),
        _statistic("min_records_per_animal", _per_animal("min_records_per_animal", "min")),
        _statistic("max_records_per_animal", _per_animal("max_records_per_animal", "max")),
        _statistic(
            "avg_records_per_animal", _per_animal("avg_records_per_animal", "mean"), digits=2
        ),
        _statistic(
            "prop_animals_with_records",
            lambda: _ratio(len(data_animals), len(pedigree_animals), "prop_animals_with_records"),
            digits=3,
        ),
        _statistic(
            "prop_sires_with_records",
            lambda: _ratio(sires_with, len(sires), "prop_sires_with_records"),
            digits=3,
        ),
        _statistic(
            "prop_dams_with_records",
            lambda: _ratio(dams_with, len(dams), "prop_dams_with_records"),
            digits=3,
        ),
    ]
    logger.debug("Coverage stats computed.")
    return stats


def select_statistics(
    stats: Iterable[SummaryStatistic], keys: Iterable[str]
) -> List[SummaryStatistic]:
    """Return the statistics named by ``keys``, in the order of ``keys``."""
    by_key = {stat.key: stat for stat in stats}
    return [by_key[key] for key in keys]


def statistics_to_frame(stats: Iterable[SummaryStatistic]) -> pd.DataFrame:
    """
    Convert statistics to a DataFrame with 'metric' and 'value' columns.

    Not-applicable values become None so they can be written as empty or NA.
    """
    rows = [[stat.label, stat.value] for stat in stats]
    return pd.DataFrame(rows, columns=["metric", "value"], dtype=object)
