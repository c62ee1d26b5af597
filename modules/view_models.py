from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from core.models import Session
from modules.market_data.calculations import moving_average, price_change


NO_DATA_NOTICE = "No data available. The API returned no prices for this symbol."
INSUFFICIENT_MA = "Not enough data for the moving average."


@dataclass
class DashboardView:
    """Everything the render surface needs for one frame."""

    title: str
    has_data: bool
    chart_title: str = ""
    summary_rows: List[Tuple[str, str]] = field(default_factory=list)
    points: List[Tuple[float, float]] = field(default_factory=list)
    x_bounds: Tuple[float, float] = (0.0, 1.0)
    y_bounds: Tuple[float, float] = (0.0, 1.0)
    x_labels: Tuple[str, str] = ("", "")
    change: Optional[float] = None
    ma_text: str = ""
    error_text: str = ""
    notice: str = ""

    @property
    def info_text(self) -> str:
        return "   ".join(part for part in (self.ma_text, self.error_text) if part)


def axis_bounds(prices: Sequence[float]) -> Tuple[float, float]:
    """
    Y-axis bounds as floor(min) / ceil(max).
    A flat series is widened by at least one on each side so the axis never
    collapses, including prices too large for a step of one to register.
    """
    if not prices:
        raise ValueError("axis_bounds needs at least one price")
    low = min(prices)
    high = max(prices)
    if abs(high - low) < sys.float_info.epsilon:
        pad = max(1.0, abs(high) * sys.float_info.epsilon * 4)
        return low - pad, high + pad
    return float(math.floor(low)), float(math.ceil(high))


def build_dashboard_view(session: Session, ma_window: int = 5, history_days: int = 30) -> DashboardView:
    title = f" Alpha Vantage Terminal - Symbol: {session.symbol} (Q to quit, Enter to change) "
    error_text = f"Error: {session.last_error}" if session.last_error else ""
    series = session.series

    if len(series) == 0:
        return DashboardView(
            title=title,
            has_data=False,
            error_text=error_text,
            notice=NO_DATA_NOTICE,
        )

    closes = series.closes
    ma = moving_average(closes, ma_window)
    if ma is None:
        ma_text = INSUFFICIENT_MA
    else:
        ma_text = f"Moving average of the last {ma_window} closes: {ma:.2f}"

    rows = [("Last Close", f"{series.last_close:.2f}")]
    change = price_change(closes)
    diff = None
    if change is not None:
        diff, pct = change
        rows.append(("Change", f"{diff:+.2f} ({pct:+.2f}%)"))
    rows.append(("As Of", series.last_date))
    rows.append(("Points", str(len(series))))
    if session.updated_at is not None:
        rows.append(("Updated", session.updated_at.strftime("%H:%M:%S")))

    return DashboardView(
        title=title,
        has_data=True,
        chart_title=f"Last {history_days} Daily Closes",
        summary_rows=rows,
        points=[(float(idx), price) for idx, price in enumerate(closes)],
        x_bounds=(0.0, float(max(len(closes), 1))),
        y_bounds=axis_bounds(closes),
        x_labels=(series.first_date, series.last_date),
        change=diff,
        ma_text=ma_text,
        error_text=error_text,
    )
