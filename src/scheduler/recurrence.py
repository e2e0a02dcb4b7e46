"""Explicit state for a feed that is refreshed indefinitely."""

import threading
from dataclasses import dataclass, field

from src.scheduler.queue_entry import FetchCallback, QueueEntry


@dataclass(eq=False)
class RecurringFetch:
    """
    One polling chain for one identifier.

    The scheduler reads this state after every completed cycle and only
    re-submits while ``active`` is set. Cancelling is the single way to end a chain.
    """

    identifier: str
    on_complete: FetchCallback = field(repr=False)
    cooldown: float = 30.0
    active: bool = True
    cycles: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def cancel(self) -> None:
        """Stop re-submitting; any pending entry is discarded instead of fetched."""
        with self._lock:
            self.active = False

    def next_entry(self) -> QueueEntry | None:
        """Build the next background entry for this chain, None once cancelled."""
        with self._lock:
            if not self.active:
                return None
            self.cycles += 1
        return QueueEntry(self.identifier, self.on_complete, priority=False, recurrence=self)
