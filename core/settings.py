import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join("config", "settings.json")
API_KEY_ENV = "ALPHA_VANTAGE_API_KEY"


def default_settings() -> Dict[str, Dict[str, Any]]:
    return {
        "market": {"default_symbol": "AAPL", "history_days": 30, "ma_window": 5},
        "display": {"poll_seconds": 1.5},
        "network": {"timeout": 10},
        "credentials": {"alphavantage_key": ""},
        "system": {"log_level": "INFO", "log_file": os.path.join("logs", "dashboard.log")},
    }


def load_settings(path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Reads settings.json and merges it over the defaults, section by section.
    A missing or unreadable file yields the defaults.
    """
    defaults = default_settings()
    path = path or SETTINGS_PATH
    if not os.path.exists(path):
        return defaults
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring invalid %s (%s)", path, exc)
        return defaults
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return defaults

    merged = {}
    for section, values in defaults.items():
        stored = data.get(section)
        merged[section] = {**values, **stored} if isinstance(stored, dict) else dict(values)
    return merged


def _coerce(value: Any, cast, fallback, minimum=None):
    try:
        result = cast(value)
    except (TypeError, ValueError):
        return fallback
    if minimum is not None and result < minimum:
        return fallback
    return result


@dataclass
class DashboardSettings:
    default_symbol: str = "AAPL"
    history_days: int = 30
    ma_window: int = 5
    poll_seconds: float = 1.5
    timeout: float = 10.0
    api_key: str = ""
    log_level: str = "INFO"
    log_file: str = os.path.join("logs", "dashboard.log")

    @classmethod
    def load(cls, path: Optional[str] = None) -> "DashboardSettings":
        data = load_settings(path)
        base = cls()
        market = data["market"]
        symbol = str(market.get("default_symbol") or base.default_symbol).strip().upper()
        return cls(
            default_symbol=symbol or base.default_symbol,
            history_days=_coerce(market.get("history_days"), int, base.history_days, minimum=1),
            ma_window=_coerce(market.get("ma_window"), int, base.ma_window, minimum=1),
            poll_seconds=_coerce(data["display"].get("poll_seconds"), float, base.poll_seconds, minimum=0.1),
            timeout=_coerce(data["network"].get("timeout"), float, base.timeout, minimum=0.1),
            api_key=os.getenv(API_KEY_ENV) or str(data["credentials"].get("alphavantage_key") or ""),
            log_level=str(data["system"].get("log_level") or base.log_level).upper(),
            log_file=str(data["system"].get("log_file") or base.log_file),
        )
