"""
Summary table formatting.

Renders an ordered list of SummaryStatistic values as text. No statistic
is computed here; values are only formatted:

- integers are printed as-is,
- floats with exactly their configured number of decimals,
- not-applicable statistics as "NA".
"""

import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .stats import SummaryStatistic, statistics_to_frame
from .version import __version__

logger = logging.getLogger("blupstats")

FORMATS = ("simple", "tsv", "json", "html")
NOT_APPLICABLE = "NA"


def format_value(stat: SummaryStatistic) -> str:
    """Format a single statistic value for display."""
    if not stat.is_applicable:
        return NOT_APPLICABLE
    if stat.digits is not None:
        return f"{stat.value:.{stat.digits}f}"
    return str(stat.value)


def _format_simple(stats: List[SummaryStatistic], caption: Optional[str]) -> str:
    """Two-column table in the style of knitr::kable(format = "simple")."""
    header = ("Statistic", "Value")
    labels = [stat.label for stat in stats]
    values = [format_value(stat) for stat in stats]
    label_width = max([len(header[0])] + [len(label) for label in labels])
    value_width = max([len(header[1])] + [len(value) for value in values])

    lines = []
    if caption:
        lines.extend([f"Table: {caption}", ""])
    lines.append(f"{header[0]:<{label_width}}  {header[1]:>{value_width}}")
    lines.append(f"{'-' * label_width}  {'-' * value_width}")
    for label, value in zip(labels, values):
        lines.append(f"{label:<{label_width}}  {value:>{value_width}}")
    return "\n".join(lines) + "\n"


def _format_tsv(stats: List[SummaryStatistic]) -> str:
    frame = statistics_to_frame(stats)
    frame["value"] = [format_value(stat) for stat in stats]
    return frame.to_csv(sep="\t", index=False)


def _format_json(stats: List[SummaryStatistic]) -> str:
    records = [{"key": stat.key, "label": stat.label, "value": stat.value} for stat in stats]
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


def _format_html(stats: List[SummaryStatistic], caption: Optional[str]) -> str:
    templates_dir = Path(__file__).parent / "templates"
    if not templates_dir.exists():
        raise FileNotFoundError(f"Templates directory not found at: {templates_dir}")

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)), autoescape=select_autoescape(["html"])
    )
    template = env.get_template("summary.html")
    rows = [{"label": stat.label, "value": format_value(stat)} for stat in stats]
    return template.render(caption=caption, rows=rows, version=__version__)


def format_summary(
    stats: Iterable[SummaryStatistic], fmt: str = "simple", caption: Optional[str] = None
) -> str:
    """
    Render statistics as a table.

    Parameters
    ----------
    stats : iterable of SummaryStatistic
        Statistics in display order.
    fmt : str
        One of 'simple', 'tsv', 'json' or 'html'.
    caption : str, optional
        Table caption (used by 'simple' and 'html').

    Returns
    -------
    str
        The rendered table.

    Raises
    ------
    ValueError
        If ``fmt`` is not a known format.
    """
    stats = list(stats)
    if fmt == "simple":
        return _format_simple(stats, caption)
    if fmt == "tsv":
        return _format_tsv(stats)
    if fmt == "json":
        return _format_json(stats)
    if fmt == "html":
        return _format_html(stats, caption)
    raise ValueError(f"Unknown output format '{fmt}', expected one of {', '.join(FORMATS)}")


def write_summary(text: str, output_file: Optional[str] = None) -> None:
    """Write rendered output to ``output_file``, or stdout when it is None, '-' or 'stdout'."""
    if output_file in (None, "-", "stdout"):
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as out_f:
        out_f.write(text)
    logger.info(f"Summary written to {output_path}")
