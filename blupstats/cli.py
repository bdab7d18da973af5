"""Command-line interface for blupstats."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DUPLICATE_POLICIES, load_config
from .errors import BlupStatsError, ConfigError
from .pipeline import run_pipeline
from .reporter import FORMATS, format_summary, write_summary
from .version import __version__

logger = logging.getLogger("blupstats")

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for blupstats CLI."""
    parser = argparse.ArgumentParser(
        description="blupstats: Summarise phenotype record coverage of a BLUPF90 pedigree."
    )

    # General Options
    general_group = parser.add_argument_group("General Options")
    general_group.add_argument(
        "--version",
        action="version",
        version=f"blupstats {__version__}",
        help="Show the current version and exit",
    )
    general_group.add_argument(
        "--log-level",
        choices=list(LOG_LEVEL_MAP),
        default="INFO",
        help="Set the logging level",
    )
    general_group.add_argument(
        "--log-file", help="Path to a file to write logs to (in addition to stderr)."
    )
    general_group.add_argument(
        "-c",
        "--config",
        help="Path to a JSON configuration file merged over the packaged defaults",
        default=None,
    )

    # Core Input/Output
    io_group = parser.add_argument_group("Core Input/Output")
    io_group.add_argument(
        "-p",
        "--pedigree",
        help="Renumbered pedigree file (default from config: renadd04.ped)",
    )
    io_group.add_argument(
        "-d",
        "--data",
        help="Renumbered data file (default from config: renf90.dat)",
    )
    io_group.add_argument(
        "-o",
        "--output-file",
        default=None,
        help="Write the summary to this file instead of stdout ('stdout' or '-' for stdout)",
    )
    io_group.add_argument(
        "--format",
        choices=FORMATS,
        default="simple",
        help="Output format of the summary table",
    )
    io_group.add_argument(
        "--caption",
        default=None,
        help="Table caption (defaults to the caption in the configuration)",
    )

    # Statistics
    stats_group = parser.add_argument_group("Statistics")
    stats_group.add_argument(
        "--extended",
        action="store_true",
        help="Also report overlap, records-per-animal and proportion statistics.",
    )
    stats_group.add_argument(
        "--missing-value",
        default=None,
        help="Trait value marking a missing record (default from config: '0')",
    )
    stats_group.add_argument(
        "--duplicate-ids",
        choices=DUPLICATE_POLICIES,
        default=None,
        help=(
            "How to handle a numeric ID listed with different alphanumeric IDs: keep the "
            "'first' or 'last' pair, or stop with an 'error'."
        ),
    )

    return parser


def parse_args(args_list: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Parameters
    ----------
    args_list : list, optional
        List of arguments to parse. If None, uses sys.argv

    Returns
    -------
    argparse.Namespace
        Parsed arguments
    """
    parser = create_parser()
    return parser.parse_args(args_list)


def _configure_logging(args: argparse.Namespace) -> None:
    logging.getLogger("blupstats").setLevel(LOG_LEVEL_MAP[args.log_level])

    if args.log_file:
        log_file_path = Path(args.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(args.log_file)
        fh.setLevel(LOG_LEVEL_MAP[args.log_level])
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(fh)
        logger.debug(f"Logging to file enabled: {args.log_file}")


def _apply_overrides(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Return a copy of cfg with command-line values taking precedence."""
    cfg = dict(cfg)
    if args.pedigree:
        cfg["pedigree_file"] = args.pedigree
    if args.data:
        cfg["data_file"] = args.data
    if args.missing_value is not None:
        cfg["missing_value"] = args.missing_value
    if args.duplicate_ids:
        cfg["duplicate_policy"] = args.duplicate_ids
    return cfg


def main(args_list: Optional[List[str]] = None) -> int:
    """Run main entry point for blupstats CLI.

    Steps:
        1. Parse arguments.
        2. Configure logging and load config.
        3. Run the load, filter, map and aggregate pipeline.
        4. Format the summary table and write it to stdout or a file.

    Returns
    -------
    int
        0 on success, 1 if an input file, the configuration or the pedigree
        identity mapping could not be processed, or the summary could not be
        written.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    args = parse_args(args_list)
    _configure_logging(args)
    logger.debug(f"CLI arguments: {args}")

    try:
        cfg = _apply_overrides(load_config(args.config), args)
    except (FileNotFoundError, ValueError, ConfigError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1
    logger.debug(f"Configuration loaded: {cfg}")

    try:
        stats = run_pipeline(
            cfg,
            pedigree_file=cfg["pedigree_file"],
            data_file=cfg["data_file"],
            extended=args.extended,
        )
    except BlupStatsError as e:
        logger.error(f"Failed to compute statistics: {e}")
        return 1

    caption = args.caption
    if caption is None:
        caption = cfg.get("captions", {}).get("extended" if args.extended else "basic")

    text = format_summary(stats, fmt=args.format, caption=caption)
    try:
        write_summary(text, args.output_file)
    except OSError as e:
        logger.error(f"Failed to write summary to {args.output_file}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
