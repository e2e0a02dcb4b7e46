"""Unit of scheduled work held by the fetch queue."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.config.feed_enums import FetchStatus
from src.feeds.models import ParsedFeed

if TYPE_CHECKING:
    from src.scheduler.recurrence import RecurringFetch

FetchCallback = Callable[[FetchStatus, ParsedFeed | None], None]


@dataclass(eq=False)
class QueueEntry:
    """A fetch target with the callback that receives its outcome."""

    identifier: str
    on_complete: FetchCallback = field(repr=False)
    priority: bool = False
    recurrence: RecurringFetch | None = field(default=None, repr=False)

    @property
    def cancelled(self) -> bool:
        """True if the entry belongs to a recurrence that has been cancelled."""
        return self.recurrence is not None and not self.recurrence.active
