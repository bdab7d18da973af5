"""Tests for the numeric-to-alphanumeric identity map."""

import pandas as pd
import pytest

from blupstats.errors import ConfigError, IdentityConflictError
from blupstats.identity import IdentityMap


def _pedigree(rows):
    return pd.DataFrame(
        rows, columns=["numeric_id", "sire_id", "dam_id", "alphanumeric_id"], dtype=str
    )


@pytest.fixture
def example_pedigree(example_pedigree_rows):
    return _pedigree(example_pedigree_rows)


class TestIdentityMap:
    """Test the IdentityMap class."""

    def test_parent_ids_exclude_unknown(self, example_pedigree):
        """Test that the unknown-parent code is dropped from sire and dam IDs."""
        identity_map = IdentityMap.from_pedigree(example_pedigree)

        assert identity_map.sire_ids() == ("1",)
        assert identity_map.dam_ids() == ("2",)

    def test_resolve(self, example_pedigree):
        """Test resolving numeric IDs."""
        identity_map = IdentityMap.from_pedigree(example_pedigree)

        assert identity_map.resolve("1") == "A"
        assert identity_map.resolve("3") == "C"
        assert identity_map.resolve("99") is None
        assert "2" in identity_map
        assert "99" not in identity_map
        assert len(identity_map) == 3

    def test_alphanumeric_universe(self, example_pedigree):
        """Test the set of all alphanumeric IDs."""
        identity_map = IdentityMap.from_pedigree(example_pedigree)

        assert identity_map.alphanumeric_ids() == {"A", "B", "C"}

    def test_dangling_parents_unresolved(self):
        """Test that parents never listed as animals are reported as unresolved."""
        pedigree = _pedigree([("1", "0", "0", "A"), ("2", "7", "8", "B"), ("3", "1", "8", "C")])
        identity_map = IdentityMap.from_pedigree(pedigree)

        sires, unresolved_sires = identity_map.resolve_all(identity_map.sire_ids())
        dams, unresolved_dams = identity_map.resolve_all(identity_map.dam_ids())

        assert identity_map.sire_ids() == ("7", "1")
        assert sires == {"A"}
        assert unresolved_sires == ["7"]
        assert dams == set()
        assert unresolved_dams == ["8"]

    def test_parent_ids_unique_in_first_seen_order(self):
        """Test that repeated parents are listed once."""
        pedigree = _pedigree(
            [
                ("1", "0", "0", "S1"),
                ("2", "0", "0", "S2"),
                ("3", "2", "0", "X"),
                ("4", "1", "0", "Y"),
                ("5", "2", "0", "Z"),
            ]
        )
        identity_map = IdentityMap.from_pedigree(pedigree)

        assert identity_map.sire_ids() == ("2", "1")
        assert identity_map.dam_ids() == ()

    def test_custom_unknown_parent_code(self):
        """Test a pedigree that marks unknown parents differently."""
        pedigree = _pedigree([("1", "-", "-", "A"), ("2", "1", "-", "B")])
        identity_map = IdentityMap.from_pedigree(pedigree, unknown_parent="-")

        assert identity_map.sire_ids() == ("1",)
        assert identity_map.dam_ids() == ()

    def test_duplicate_rows_collapse(self):
        """Test that identical duplicate rows do not count as conflicts."""
        pedigree = _pedigree([("1", "0", "0", "A"), ("1", "0", "0", "A")])
        identity_map = IdentityMap.from_pedigree(pedigree, duplicate_policy="error")

        assert identity_map.resolve("1") == "A"
        assert identity_map.alphanumeric_ids() == {"A"}

    @pytest.fixture
    def conflicting_pedigree(self):
        return _pedigree([("1", "0", "0", "A"), ("2", "1", "0", "B"), ("1", "0", "0", "A2")])

    def test_duplicate_first_wins(self, conflicting_pedigree, caplog):
        """Test that the first mapping is kept by default and a warning is logged."""
        identity_map = IdentityMap.from_pedigree(conflicting_pedigree)

        assert identity_map.resolve("1") == "A"
        assert "conflicting" in caplog.text

    def test_duplicate_last_wins(self, conflicting_pedigree):
        """Test the 'last' duplicate policy."""
        identity_map = IdentityMap.from_pedigree(conflicting_pedigree, duplicate_policy="last")

        assert identity_map.resolve("1") == "A2"

    def test_duplicate_error(self, conflicting_pedigree):
        """Test the 'error' duplicate policy."""
        with pytest.raises(IdentityConflictError, match="'1' maps to both 'A' and 'A2'"):
            IdentityMap.from_pedigree(conflicting_pedigree, duplicate_policy="error")

    def test_unknown_policy(self, example_pedigree):
        """Test that an unknown policy is rejected."""
        with pytest.raises(ConfigError, match="Unknown duplicate policy"):
            IdentityMap.from_pedigree(example_pedigree, duplicate_policy="random")
