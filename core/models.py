from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union


NO_DATA_FOUND = "no data found for this symbol"


@dataclass(frozen=True)
class PriceSeries:
    """
    Daily closing prices for one symbol, oldest first.
    Dates are ISO strings and strictly ascending.
    """

    dates: Tuple[str, ...] = ()
    closes: Tuple[float, ...] = ()

    def __post_init__(self):
        if len(self.dates) != len(self.closes):
            raise ValueError("dates and closes must have the same length")
        for prev, cur in zip(self.dates, self.dates[1:]):
            if cur <= prev:
                raise ValueError(f"dates must be strictly ascending ({prev} >= {cur})")

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, float]]) -> "PriceSeries":
        pairs = list(pairs)
        return cls(
            dates=tuple(str(d) for d, _ in pairs),
            closes=tuple(float(c) for _, c in pairs),
        )

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def last_close(self) -> Optional[float]:
        return self.closes[-1] if self.closes else None

    @property
    def first_date(self) -> Optional[str]:
        return self.dates[0] if self.dates else None

    @property
    def last_date(self) -> Optional[str]:
        return self.dates[-1] if self.dates else None


@dataclass(frozen=True)
class FetchSuccess:
    series: PriceSeries


@dataclass(frozen=True)
class FetchEmpty:
    """The request worked but the symbol yielded no usable closes."""


@dataclass(frozen=True)
class FetchFailure:
    reason: str


FetchOutcome = Union[FetchSuccess, FetchEmpty, FetchFailure]


@dataclass
class Session:
    """
    Mutable dashboard state. Owned by the controller, which is its only writer.

    `series` always holds the last successful, non-empty fetch. A failed or
    empty fetch only updates `last_error`.
    """

    symbol: str
    series: PriceSeries = field(default_factory=PriceSeries)
    last_error: Optional[str] = None
    updated_at: Optional[datetime] = None

    def apply_fetch(self, symbol: str, outcome: FetchOutcome) -> bool:
        """
        Applies a fetch outcome for `symbol`.
        Returns True when the displayed series was replaced.
        """
        if isinstance(outcome, FetchSuccess) and len(outcome.series) > 0:
            self.symbol = symbol.strip().upper()
            self.series = outcome.series
            self.last_error = None
            self.updated_at = datetime.now()
            return True
        if isinstance(outcome, FetchFailure):
            self.last_error = outcome.reason
        else:
            self.last_error = NO_DATA_FOUND
        return False
