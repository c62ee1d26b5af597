import logging
import math
from typing import Any

import requests

from core.models import FetchEmpty, FetchFailure, FetchOutcome, FetchSuccess, PriceSeries


logger = logging.getLogger(__name__)

SERIES_KEY = "Time Series (Daily)"
CLOSE_FIELD = "4. close"
# Payload keys Alpha Vantage uses instead of data (bad symbol, rate limit).
NOTICE_KEYS = ("Error Message", "Note", "Information")


class FetchError(Exception):
    kind = "fetch"

    def describe(self) -> str:
        return f"{self.kind}: {self}"


class TransportError(FetchError):
    kind = "transport"


class SchemaError(FetchError):
    kind = "schema"


def parse_daily_closes(payload: Any, days: int) -> PriceSeries:
    """
    Extracts the most recent `days` closing prices from a TIME_SERIES_DAILY payload.

    Dates with a missing or non-numeric close are skipped. Provider notices
    yield an empty series. Anything else that does not look like a daily
    series raises SchemaError.
    """
    if not isinstance(payload, dict):
        raise SchemaError(f"expected a JSON object, got {type(payload).__name__}")

    daily = payload.get(SERIES_KEY)
    if daily is None:
        for key in NOTICE_KEYS:
            if key in payload:
                logger.warning("Alpha Vantage notice (%s): %s", key, payload[key])
                return PriceSeries()
        raise SchemaError(f"missing '{SERIES_KEY}'")
    if not isinstance(daily, dict):
        raise SchemaError(f"'{SERIES_KEY}' is not an object")

    closes = []
    for date, values in daily.items():
        if not isinstance(values, dict):
            continue
        raw = values.get(CLOSE_FIELD)
        if isinstance(raw, bool):
            continue
        try:
            close = float(raw)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(close):
            continue
        closes.append((str(date), close))

    closes.sort(key=lambda item: item[0])
    return PriceSeries.from_pairs(closes[-days:])


class AlphaVantageClient:
    """
    Blocking Alpha Vantage daily-series client.
    One GET per fetch, no retries. Every failure comes back as a FetchOutcome.
    """

    BASE_URL = "https://www.alphavantage.co/query"

    def __init__(self, api_key: str, timeout: float = 10.0, base_url: str = None):
        self.api_key = api_key or ""
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL

        if not self.api_key:
            logger.warning("ALPHA_VANTAGE_API_KEY not set")

    def fetch(self, symbol: str, days: int) -> FetchOutcome:
        if days <= 0:
            raise ValueError("days must be positive")

        sym = symbol.strip().upper()
        logger.info("Fetching %s daily closes for %s", days, sym)
        try:
            payload = self._request(sym)
            series = parse_daily_closes(payload, days)
        except FetchError as exc:
            logger.warning("Fetch failed for %s: %s", sym, exc.describe())
            return FetchFailure(exc.describe())

        if len(series) == 0:
            logger.info("No usable closes for %s", sym)
            return FetchEmpty()

        logger.info("Fetched %d closes for %s (%s .. %s)", len(series), sym, series.first_date, series.last_date)
        return FetchSuccess(series)

    def _request(self, symbol: str) -> Any:
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "apikey": self.api_key,
        }
        try:
            resp = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise TransportError("timeout") from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        if resp.status_code != 200:
            raise TransportError(f"HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(f"undecodable response body ({exc})") from exc
