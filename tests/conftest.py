"""Shared pytest fixtures for all test modules."""

import logging
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import pytest

from blupstats.config import load_config


@pytest.fixture
def default_config():
    """Packaged default configuration."""
    return load_config()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, Sequence[str]], str]:
    """Write lines to a file under tmp_path and return its path."""

    def _write(name: str, lines: Sequence[str]) -> str:
        path = tmp_path / name
        path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def write_pedigree(write_file):
    """Write (numeric_id, sire, dam, alphanumeric_id) tuples as a ten-column pedigree."""

    def _write(rows: Sequence[Tuple[str, str, str, str]], name: str = "renadd04.ped") -> str:
        lines = [f"{nid} {sire} {dam} 1 0 2 0 0 0 {alpha}" for nid, sire, dam, alpha in rows]
        return write_file(name, lines)

    return _write


@pytest.fixture
def write_data(write_file):
    """Write (trait_value, animal_id) tuples as an eight-column data file."""

    def _write(rows: Sequence[Tuple[str, str]], name: str = "renf90.dat") -> str:
        lines = [f"{trait} 1 2015 3 1 {animal} 1 1" for trait, animal in rows]
        return write_file(name, lines)

    return _write


@pytest.fixture
def example_pedigree_rows() -> List[Tuple[str, str, str, str]]:
    """Three animals: A and B are founders, C is their offspring."""
    return [("1", "0", "0", "A"), ("2", "0", "0", "B"), ("3", "1", "2", "C")]


@pytest.fixture
def example_data_rows() -> List[Tuple[str, str]]:
    """Four records; B's record is missing and C has two records."""
    return [("5", "A"), ("0", "B"), ("7", "C"), ("3", "C")]


@pytest.fixture
def example_files(
    write_pedigree, write_data, example_pedigree_rows, example_data_rows
) -> Tuple[str, str]:
    """Paths to the example pedigree and data files."""
    return write_pedigree(example_pedigree_rows), write_data(example_data_rows)


@pytest.fixture(autouse=True)
def reset_blupstats_logger():
    """Undo log level and file handlers set by CLI runs."""
    logger = logging.getLogger("blupstats")
    yield
    logger.setLevel(logging.NOTSET)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
