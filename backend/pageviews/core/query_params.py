"""Query Parameter Parsing — pure helpers that turn raw query strings into domain values.

Invariants:
    - Time bounds use leading-integer parsing: "1500abc" -> 1500, "abc" -> None
    - A bound of 0 is treated as absent (no filtering)
    - Flags compare the raw string: only "true" enables ?all, only "false" disables ?inc
"""

import re

from pageviews.core.domain_types import TimeWindow

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_time_bound(raw: str | None) -> int | None:
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    return value or None


def parse_time_window(before: str | None, after: str | None) -> TimeWindow:
    return TimeWindow(
        before=parse_time_bound(before), after=parse_time_bound(after),
    )


def wants_all(raw: str | None) -> bool:
    """Bulk export is opt-in via ?all=true."""
    return raw == "true"


def should_increment(raw: str | None) -> bool:
    """Reads increment by default; ?inc=false is the only opt-out."""
    return raw != "false"
