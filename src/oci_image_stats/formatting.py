"""Console rendering of image statistics."""

from typing import Sequence

from tabulate import tabulate

from .models import ImageStatistics

COLUMNS = [
    "Image",
    "Num Layers",
    "Compressed Size",
    "Uncompressed Size",
    "Space Savings",
]

_BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


def _significant(value: float, digits: int) -> str:
    """Format with at most ``digits`` significant digits, no trailing zeros."""
    return f"{value:.{digits}g}"


def format_bytes(size: int, digits: int = 4) -> str:
    """Compact 1000-based byte count, e.g. 29717632 -> '29.72MB'."""
    value = float(size)
    unit_index = 0
    while abs(value) >= 1000 and unit_index < len(_BYTE_UNITS) - 1:
        value /= 1000
        unit_index += 1
    return f"{_significant(value, digits)}{_BYTE_UNITS[unit_index]}"


def format_percent(ratio: float, digits: int = 4) -> str:
    """Percentage with limited significant digits, e.g. 0.63141 -> '63.14%'."""
    return f"{_significant(ratio * 100, digits)}%"


def statistics_row(stats: ImageStatistics) -> list[str]:
    """Row of display values in COLUMNS order."""
    return [
        str(stats.reference),
        str(stats.total_layers),
        format_bytes(stats.total_compressed_size),
        format_bytes(stats.total_uncompressed_size),
        format_percent(stats.space_savings),
    ]


def render_table(rows: Sequence[Sequence[str]], columns: Sequence[str] = COLUMNS) -> str:
    """Render rows as a plain left-aligned text table under a header."""
    return tabulate(
        rows, headers=list(columns), tablefmt="simple", disable_numparse=True
    )
