"""Query Parameter Parsing — tests for bound parsing and flag semantics.

Tests cover:
    - parse_time_bound uses leading-integer parsing and treats 0 as absent
    - wants_all only accepts the literal "true"
    - should_increment only opts out on the literal "false"
"""

import pytest

from pageviews.core.query_params import (
    parse_time_bound,
    parse_time_window,
    should_increment,
    wants_all,
)


# ─── parse_time_bound ────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("1500", 1500),
    ("1500abc", 1500),
    (" 42", 42),
    ("-7", -7),
    ("1700000000000", 1_700_000_000_000),
])
def test_parse_time_bound_reads_leading_integer(raw, expected):
    assert parse_time_bound(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "x12", "0", "000"])
def test_parse_time_bound_returns_none_when_unusable(raw):
    assert parse_time_bound(raw) is None


def test_parse_time_window_combines_bounds():
    window = parse_time_window("200", "100")
    assert window.before == 200
    assert window.after == 100


def test_parse_time_window_without_bounds_is_open():
    assert parse_time_window(None, None).is_open


# ─── flags ───────────────────────────────────────────────────────

def test_wants_all_only_for_literal_true():
    assert wants_all("true")
    assert not wants_all("True")
    assert not wants_all("1")
    assert not wants_all("")
    assert not wants_all(None)


def test_should_increment_defaults_to_true():
    assert should_increment(None)
    assert should_increment("")
    assert should_increment("true")
    assert should_increment("FALSE")
    assert should_increment("0")


def test_should_increment_opts_out_on_false():
    assert not should_increment("false")
