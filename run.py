import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console

from core.settings import DashboardSettings
from utils.input import TerminalError

console = Console()
logger = logging.getLogger("ticker_terminal")


# --- 1. Environment Loader ---
def load_environment():
    """Loads .env variables (ALPHA_VANTAGE_API_KEY)."""
    load_dotenv()


# --- 2. Logging ---
def configure_logging(level: str, log_file: str) -> None:
    """
    File logging only. The terminal belongs to the dashboard, so nothing is
    written to stdout/stderr by the logging system.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=log_file,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# --- 3. Arguments ---
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Alpha Vantage daily price dashboard for the terminal")
    parser.add_argument("--symbol", type=str, default=None, help="Symbol to load at startup (default from settings)")
    parser.add_argument("--api-key", type=str, default=None, help="Alpha Vantage API key (overrides env and settings)")
    parser.add_argument("--settings", type=str, default=None, help="Path to settings.json (default: config/settings.json)")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default from settings)")
    return parser


def resolve_settings(args: argparse.Namespace) -> DashboardSettings:
    settings = DashboardSettings.load(args.settings)
    if args.symbol and args.symbol.strip():
        settings.default_symbol = args.symbol.strip().upper()
    if args.api_key:
        settings.api_key = args.api_key
    if args.log_level:
        settings.log_level = args.log_level.upper()
    return settings


# --- 4. Main Application Launcher ---
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_environment()
    settings = resolve_settings(args)
    configure_logging(settings.log_level, settings.log_file)

    try:
        from core.app import DashboardApp

        app = DashboardApp(settings)
        return app.run()

    except KeyboardInterrupt:
        console.print("\n>> Goodbye.\n")
        return 0
    except TerminalError as e:
        logger.error("Terminal setup failed: %s", e)
        console.print(f"\n>> TERMINAL ERROR: {e}", style="bold red", markup=False)
        return 1
    except Exception as e:
        logger.exception("Unhandled error")
        console.print(f"\n>> CRITICAL ERROR: {e}", style="bold red", markup=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
