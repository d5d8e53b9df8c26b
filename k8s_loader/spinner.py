"""
spinner.py
Busy indicator shown while kubectl is working. Purely cosmetic.
"""
import threading
from typing import Optional

from rich.console import Console
from rich.status import Status

# rich's "dots" spinner: ⠋ ⠙ ⠹ ⠸ ⠼ ⠴ ⠦ ⠧ ⠇ ⠏, 80ms per frame.
SPINNER_NAME  = "dots"
SPINNER_SPEED = 0.8  # → one frame every 100ms


class Spinner:
    def __init__(self, console: Console):
        self.console = console
        self.message = ""
        self._status: Optional[Status] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._status is not None

    def start(self, message: str):
        """Start spinning. Does nothing if a spinner is already running."""
        with self._lock:
            if self._status is not None:
                return
            self.message = message
            self._status = Status(
                f"{message}...",
                console=self.console,
                spinner=SPINNER_NAME,
                speed=SPINNER_SPEED,
            )
            self._status.start()

    def stop(self, result: str = "done", only: Optional[str] = None):
        """
        Stop spinning and leave `<message>...<result>.` on the line.
        With `only`, stop just when the running spinner shows that message.
        """
        with self._lock:
            if self._status is None:
                return
            if only is not None and only != self.message:
                return
            self._status.stop()
            self._status = None
            self.console.print(f"{self.message}...{result}.", highlight=False)
