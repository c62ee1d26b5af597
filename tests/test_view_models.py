import random
from datetime import datetime

import pytest

from core.models import PriceSeries, Session
from modules.view_models import INSUFFICIENT_MA, NO_DATA_NOTICE, axis_bounds, build_dashboard_view


def _series(closes):
    return PriceSeries.from_pairs((f"2024-01-{idx + 1:02d}", c) for idx, c in enumerate(closes))


def test_axis_bounds_floor_and_ceil():
    assert axis_bounds([100.4, 103.2, 101.9]) == (100.0, 104.0)


def test_axis_bounds_flat_series_is_widened():
    assert axis_bounds([50.0, 50.0, 50.0]) == (49.0, 51.0)
    assert axis_bounds([7.25]) == (6.25, 8.25)


def test_axis_bounds_contains_series_and_has_height():
    rng = random.Random(11)
    for _ in range(300):
        base = rng.uniform(0.01, 1000)
        prices = [base + rng.choice([0.0, rng.uniform(-5, 5)]) for _ in range(rng.randint(1, 30))]
        y_min, y_max = axis_bounds(prices)
        assert y_min <= min(prices) <= max(prices) <= y_max
        assert y_max > y_min


def test_axis_bounds_rejects_empty():
    with pytest.raises(ValueError):
        axis_bounds([])


def test_empty_session_builds_no_data_view():
    view = build_dashboard_view(Session(symbol="AAPL"))
    assert not view.has_data
    assert view.notice == NO_DATA_NOTICE
    assert view.points == []
    assert view.info_text == ""


def test_view_for_series():
    session = Session(symbol="AAPL", series=_series([100, 102, 101, 103, 105]))
    view = build_dashboard_view(session, ma_window=5, history_days=30)
    assert view.has_data
    assert "AAPL" in view.title
    assert view.summary_rows[0] == ("Last Close", "105.00")
    assert ("Change", "+2.00 (+1.94%)") in view.summary_rows
    assert ("As Of", "2024-01-05") in view.summary_rows
    assert view.points == [(0.0, 100.0), (1.0, 102.0), (2.0, 101.0), (3.0, 103.0), (4.0, 105.0)]
    assert view.x_bounds == (0.0, 5.0)
    assert view.y_bounds == (100.0, 105.0)
    assert view.ma_text == "Moving average of the last 5 closes: 102.20"
    assert view.error_text == ""
    assert view.info_text == view.ma_text
    assert view.chart_title == "Last 30 Daily Closes"


def test_view_reports_insufficient_data_and_error():
    session = Session(symbol="MSFT", series=_series([10.0, 11.0]), last_error="transport: timeout")
    view = build_dashboard_view(session, ma_window=5)
    assert view.ma_text == INSUFFICIENT_MA
    assert view.error_text == "Error: transport: timeout"
    assert view.info_text == f"{INSUFFICIENT_MA}   Error: transport: timeout"


def test_single_close_has_no_change_row():
    view = build_dashboard_view(Session(symbol="IBM", series=_series([42.0])))
    keys = [key for key, _ in view.summary_rows]
    assert "Change" not in keys
    assert view.change is None
    assert view.x_bounds == (0.0, 1.0)


def test_axis_bounds_flat_series_with_huge_prices():
    for price in (2.0 ** 53, 1e17, -1e17, 1e300):
        y_min, y_max = axis_bounds([price, price])
        assert y_min < price < y_max


def test_updated_row_follows_successful_fetch():
    session = Session(symbol="AAPL", series=_series([1.0, 2.0]))
    assert "Updated" not in [key for key, _ in build_dashboard_view(session).summary_rows]
    session.updated_at = datetime(2024, 5, 1, 9, 30, 15)
    assert ("Updated", "09:30:15") in build_dashboard_view(session).summary_rows
