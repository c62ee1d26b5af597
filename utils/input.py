import logging
import os
import sys
import time
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

try:
    import msvcrt
except ImportError:
    msvcrt = None
    import select
    import termios
    import tty

logger = logging.getLogger(__name__)

console = Console()


class TerminalError(RuntimeError):
    """The terminal could not be switched into, or back out of, single-key mode."""


class KeyReader:
    """
    Reads single keypresses with a bounded wait.

    Use as a context manager: on Unix, entering puts stdin into cbreak mode
    and exiting always restores the saved settings. Windows needs no mode
    switch (msvcrt reads keys directly).
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._fd = None
        self._saved = None

    def __enter__(self) -> "KeyReader":
        if msvcrt is not None:
            return self
        try:
            self._fd = self.stream.fileno()
        except (AttributeError, ValueError, OSError) as exc:
            raise TerminalError(f"stdin has no file descriptor ({exc})") from exc
        if not os.isatty(self._fd):
            raise TerminalError("stdin is not a terminal")
        try:
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        except termios.error as exc:
            self._saved = None
            raise TerminalError(f"could not enter cbreak mode ({exc})") from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
        except termios.error as err:
            logger.error("Could not restore terminal settings: %s", err)
            if exc_type is None:
                raise TerminalError(f"could not restore terminal mode ({err})") from err

    def poll(self, timeout: float) -> Optional[str]:
        """Waits up to `timeout` seconds for a key. Returns None when nothing was pressed."""
        if msvcrt is not None:
            deadline = time.time() + max(0.0, timeout)
            while True:
                if msvcrt.kbhit():
                    return msvcrt.getwch()
                if time.time() >= deadline:
                    return None
                time.sleep(0.05)

        ready, _, _ = select.select([self._fd], [], [], max(0.0, timeout))
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if not data:
            return None
        return data.decode("utf-8", errors="ignore") or None


class InputSafe:
    """
    Static utility for line input while the live screen is suspended.
    """

    @staticmethod
    def get_string(prompt_text: str = "", out: Console = None) -> str:
        """Gets a free-form string. Ctrl+C or end of input count as an empty answer."""
        out = out or console
        try:
            return Prompt.ask(f"[cyan]{prompt_text}[/cyan]", console=out, default="", show_default=False)
        except (KeyboardInterrupt, EOFError):
            out.print("\nInput cancelled.")
            return ""
