import logging
from typing import Callable, Optional

from rich.console import Console, RenderableType
from rich.live import Live

from core.models import Session
from core.settings import DashboardSettings
from interfaces.dashboard import DashboardRenderer
from modules.market_data.alphavantage_client import AlphaVantageClient
from modules.view_models import DashboardView, build_dashboard_view
from utils.input import InputSafe, KeyReader

logger = logging.getLogger(__name__)

# Results of one key event in Display mode.
STAY = "stay"
PROMPT = "prompt"
QUIT = "quit"

QUIT_KEYS = ("q", "Q")
ENTER_KEYS = ("\r", "\n")


class DashboardApp:
    """
    The Central Controller.
    Owns the Session and alternates between Display mode (live screen, key
    polling) and Prompt mode (line input plus a blocking fetch).
    """

    def __init__(
        self,
        settings: Optional[DashboardSettings] = None,
        client=None,
        console: Optional[Console] = None,
        key_reader_factory: Callable = KeyReader,
        prompt: Optional[Callable[[str], str]] = None,
    ):
        self.settings = settings or DashboardSettings()
        self.console = console or Console()
        self.client = client or AlphaVantageClient(self.settings.api_key, timeout=self.settings.timeout)
        self.renderer = DashboardRenderer(self.console)
        self.session = Session(symbol=self.settings.default_symbol)
        self.running = False
        self._key_reader_factory = key_reader_factory
        self._prompt = prompt or (lambda text: InputSafe.get_string(text, out=self.console))

    def startup(self) -> None:
        """Initial fetch. A failure leaves the series empty and records the error."""
        symbol = self.session.symbol
        with self.console.status(f"[cyan]Fetching {symbol}...[/cyan]"):
            outcome = self.client.fetch(symbol, self.settings.history_days)
        self.session.apply_fetch(symbol, outcome)
        if self.session.last_error:
            logger.warning("Startup fetch for %s did not load data: %s", symbol, self.session.last_error)

    def run(self) -> int:
        """The Main Event Loop. Returns the process exit code."""
        self.startup()
        self.running = True
        while self.running:
            action = self.display()
            if action == PROMPT:
                self.prompt_symbol()
        logger.info("Dashboard closed")
        return 0

    def build_view(self) -> DashboardView:
        return build_dashboard_view(
            self.session,
            ma_window=self.settings.ma_window,
            history_days=self.settings.history_days,
        )

    def render(self) -> RenderableType:
        return self.renderer.render(self.build_view(), width=self.console.width, height=self.console.height)

    def display(self) -> str:
        """
        Display mode. Redraws after every key poll until a key asks to leave.
        Both the key reader and the live screen are released on any exit path.
        """
        with self._key_reader_factory() as keys:
            with Live(self.render(), console=self.console, screen=True, auto_refresh=False) as live:
                while True:
                    action = self.handle_key(keys.poll(self.settings.poll_seconds))
                    if action != STAY:
                        return action
                    live.update(self.render(), refresh=True)

    def handle_key(self, key: Optional[str]) -> str:
        if key is None:
            return STAY
        if key in QUIT_KEYS:
            self.running = False
            return QUIT
        if key in ENTER_KEYS:
            return PROMPT
        return STAY

    def prompt_symbol(self) -> bool:
        """
        Prompt mode. Reads a symbol and applies the fetch result to the session.
        Returns True when a fetch was attempted.
        """
        raw = self._prompt("Enter a new symbol")
        symbol = (raw or "").strip().upper()
        if not symbol:
            logger.info("Empty symbol input, keeping %s", self.session.symbol)
            return False

        with self.console.status(f"[cyan]Fetching {symbol}...[/cyan]"):
            outcome = self.client.fetch(symbol, self.settings.history_days)
        if self.session.apply_fetch(symbol, outcome):
            logger.info("Switched to %s", symbol)
        else:
            logger.info("Kept %s after %s: %s", self.session.symbol, symbol, self.session.last_error)
        return True
