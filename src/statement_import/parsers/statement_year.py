"""Statement year inference.

Amex-style rows carry only a month and a day, so the year comes from the
statement header. Statements print their issue date near the top, which
is why only the first lines are scanned.
"""

import re
from datetime import date
from typing import Iterable

DEFAULT_SCAN_LINES = 20

YEAR_PATTERN = re.compile(r"\b(202\d)\b")


def find_year(line: str) -> int | None:
    """Return the first 202x year in a line, if any."""
    match = YEAR_PATTERN.search(line)
    if match:
        return int(match.group(1))
    return None


def resolve_statement_year(
    lines: Iterable[str],
    scan_lines: int = DEFAULT_SCAN_LINES,
    fallback_year: int | None = None,
) -> int:
    """Infer the statement's reference year from its header lines.

    Args:
        lines: Statement lines in document order
        scan_lines: How many leading lines to scan
        fallback_year: Year to use when none is found (default: current year)

    Returns:
        Four-digit year
    """
    for index, line in enumerate(lines):
        if index >= scan_lines:
            break
        year = find_year(line)
        if year is not None:
            return year

    # Statements with unusual headers silently fall back to "now".
    return fallback_year if fallback_year is not None else date.today().year
