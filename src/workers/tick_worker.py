"""Perpetual ticking thread worker."""

import threading
from collections.abc import Callable

from src.utils.logger import logger


class TickWorker(threading.Thread):
    """Call a tick function once per interval until stopped."""

    def __init__(
        self,
        tick: Callable[[], object],
        interval: float,
        *,
        isDaemon: bool = True,
        name: str = "TickWorker",
    ) -> None:
        """Initialize the worker."""
        super().__init__(name=name, daemon=isDaemon)
        self.tick = tick
        self.interval = interval
        self.stop_event = threading.Event()

    def run(self) -> None:
        """Run the worker."""
        logger.info(f"[{self.name.upper()}]: Ticking every {self.interval}s")
        while not self.stop_event.is_set():
            try:
                self.tick()
            except Exception as e:  # noqa: BLE001
                # A failing tick must never end the thread
                logger.exception(f"[{self.name.upper()}]: Exception during tick: {e}")
            self.stop_event.wait(self.interval)
        logger.info(f"[{self.name.upper()}]: Stopped ticking")

    def stop(self) -> None:
        """Ask the worker to exit after the current tick."""
        self.stop_event.set()
