"""Domain Types — verifies window filtering, serialization and path rules.

Tests:
    - TimeWindow bounds are exclusive and optional
    - View is immutable and omits absent meta when serialized
    - Only paths longer than "/" are pages
    - Bulk scoping: "/" selects everything, other paths match by prefix
"""

import dataclasses

import pytest

from pageviews.core.domain_types import (
    AdapterFeature, PageViews, TimeWindow, View, ViewEvent,
    is_page_path, matches_prefix, now_ms,
)


def test_time_window_bounds_are_exclusive():
    window = TimeWindow(before=200, after=100)
    assert not window.contains(100)
    assert window.contains(101)
    assert window.contains(199)
    assert not window.contains(200)


def test_time_window_missing_bound_is_open():
    assert TimeWindow(before=50).contains(-1_000)
    assert TimeWindow(after=50).contains(10**15)


def test_time_window_apply_keeps_order():
    views = [View(300), View(100), View(200)]
    assert TimeWindow(after=150).apply(views) == [View(300), View(200)]


def test_open_window_apply_returns_copy():
    views = [View(1)]
    filtered = TimeWindow().apply(views)
    assert filtered == views
    assert filtered is not views


def test_view_is_frozen():
    view = View(1, {"ref": "x"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.timestamp = 2


def test_view_to_dict_omits_missing_meta():
    assert View(5).to_dict() == {"timestamp": 5}
    assert View(5, {"a": 1}).to_dict() == {"timestamp": 5, "meta": {"a": 1}}


def test_view_keeps_falsy_meta():
    assert View(5, 0).to_dict() == {"timestamp": 5, "meta": 0}


def test_view_event_to_dict():
    event = ViewEvent("/blog", View(9, "m"))
    assert event.to_dict() == {
        "pathname": "/blog", "view": {"timestamp": 9, "meta": "m"},
    }


def test_page_views_count():
    assert PageViews("/a", [View(1), View(2)]).count == 2
    assert PageViews("/a").count == 0


def test_is_page_path():
    assert not is_page_path("")
    assert not is_page_path("/")
    assert is_page_path("/a")


def test_matches_prefix():
    assert matches_prefix("/blog/post", "/")
    assert matches_prefix("/blog/post", None)
    assert matches_prefix("/blog/post", "/blog")
    assert not matches_prefix("/about", "/blog")


def test_subscribe_feature_value():
    assert AdapterFeature.SUBSCRIBE.value == "subscribe"


def test_now_ms_is_epoch_milliseconds():
    assert now_ms() > 1_600_000_000_000
