"""
Identity mapping between numeric and alphanumeric animal IDs.

renumf90 writes a sequential numeric ID for each animal (pedigree column 1)
next to the original alphanumeric ID (column 10). Sires and dams are only
referenced by numeric ID, so they have to be mapped back before they can be
compared with the animal IDs of the data file.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

import pandas as pd

from .config import DUPLICATE_POLICIES
from .errors import ConfigError, IdentityConflictError

logger = logging.getLogger("blupstats")


def _unique_parents(column: pd.Series, unknown_parent: str) -> Tuple[str, ...]:
    """Unique parent IDs in first-seen order, without the unknown-parent code."""
    return tuple(pid for pid in column.drop_duplicates() if pid != unknown_parent)


class IdentityMap:
    """Read-only lookup from numeric pedigree ID to alphanumeric ID."""

    def __init__(
        self,
        mapping: Dict[str, str],
        sire_ids: Tuple[str, ...],
        dam_ids: Tuple[str, ...],
        alphanumeric_ids: Set[str],
    ):
        self._mapping = dict(mapping)
        self._sire_ids = tuple(sire_ids)
        self._dam_ids = tuple(dam_ids)
        self._alphanumeric_ids = frozenset(alphanumeric_ids)

    @classmethod
    def from_pedigree(
        cls,
        pedigree: pd.DataFrame,
        unknown_parent: str = "0",
        duplicate_policy: str = "first",
    ) -> "IdentityMap":
        """
        Build the map from a pedigree DataFrame.

        Parameters
        ----------
        pedigree : pd.DataFrame
            Pedigree with columns numeric_id, sire_id, dam_id, alphanumeric_id.
        unknown_parent : str
            Parent code meaning "unknown"; excluded from sire and dam sets.
        duplicate_policy : str
            What to do when a numeric ID appears with two different
            alphanumeric IDs: 'first' keeps the first pair, 'last' keeps the
            last one and 'error' raises IdentityConflictError.

        Returns
        -------
        IdentityMap
        """
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ConfigError(
                f"Unknown duplicate policy '{duplicate_policy}', "
                f"expected one of {', '.join(DUPLICATE_POLICIES)}"
            )

        pairs = pedigree[["numeric_id", "alphanumeric_id"]].drop_duplicates()
        mapping: Dict[str, str] = {}
        conflicts = 0
        for numeric_id, alphanumeric_id in pairs.itertuples(index=False, name=None):
            existing = mapping.get(numeric_id)
            if existing is None:
                mapping[numeric_id] = alphanumeric_id
                continue

            conflicts += 1
            if duplicate_policy == "error":
                raise IdentityConflictError(numeric_id, existing, alphanumeric_id)
            logger.debug(
                f"Numeric ID {numeric_id} maps to '{existing}' and '{alphanumeric_id}'"
            )
            if duplicate_policy == "last":
                mapping[numeric_id] = alphanumeric_id

        if conflicts:
            logger.warning(
                f"{conflicts} conflicting numeric-to-alphanumeric pairs in pedigree; "
                f"kept the {duplicate_policy} occurrence"
            )

        identity_map = cls(
            mapping,
            sire_ids=_unique_parents(pedigree["sire_id"], unknown_parent),
            dam_ids=_unique_parents(pedigree["dam_id"], unknown_parent),
            alphanumeric_ids=set(pedigree["alphanumeric_id"]),
        )
        logger.info(
            f"Identity map built: {len(identity_map)} animals, "
            f"{len(identity_map.sire_ids())} sires, {len(identity_map.dam_ids())} dams"
        )
        return identity_map

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, numeric_id: object) -> bool:
        return numeric_id in self._mapping

    def sire_ids(self) -> Tuple[str, ...]:
        return self._sire_ids

    def dam_ids(self) -> Tuple[str, ...]:
        return self._dam_ids

    def alphanumeric_ids(self) -> frozenset:
        """All alphanumeric IDs in the pedigree (the 'total animals' universe)."""
        return self._alphanumeric_ids

    def resolve(self, numeric_id: str) -> Optional[str]:
        """Alphanumeric ID for ``numeric_id``, or None if it never appears as an animal."""
        return self._mapping.get(numeric_id)

    def resolve_all(self, numeric_ids: Iterable[str]) -> Tuple[Set[str], List[str]]:
        """
        Resolve many numeric IDs at once.

        Returns
        -------
        tuple of (set of str, list of str)
            The resolved alphanumeric IDs and the numeric IDs that could not
            be resolved, in input order.
        """
        resolved: Set[str] = set()
        unresolved: List[str] = []
        for numeric_id in numeric_ids:
            alphanumeric_id = self._mapping.get(numeric_id)
            if alphanumeric_id is None:
                unresolved.append(numeric_id)
            else:
                resolved.add(alphanumeric_id)
        return resolved, unresolved
