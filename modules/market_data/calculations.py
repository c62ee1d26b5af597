from __future__ import annotations

from typing import Optional, Sequence, Tuple


def moving_average(prices: Sequence[float], window: int) -> Optional[float]:
    """Unweighted mean of the trailing `window` prices, or None when there are fewer."""
    if window <= 0:
        raise ValueError("window must be positive")
    if len(prices) < window:
        return None
    tail = prices[len(prices) - window:]
    return sum(tail) / window


def price_change(prices: Sequence[float]) -> Optional[Tuple[float, float]]:
    """Absolute and percent change of the last price against the one before it."""
    if len(prices) < 2:
        return None
    prev, last = float(prices[-2]), float(prices[-1])
    diff = last - prev
    pct = (diff / prev) * 100.0 if prev != 0 else 0.0
    return diff, pct
