"""Thread-safe ordered queue of fetch entries."""

import threading

from src.scheduler.queue_entry import QueueEntry


class FetchQueue:
    """
    In-memory sequence of queue entries.

    Producers may push from any thread; the scheduler's ticker is the only consumer.
    Every mutation takes the same lock, and the lock is never held by callers
    across a fetch or a callback.
    """

    def __init__(self) -> None:
        """Initialize FetchQueue."""
        self._entries: list[QueueEntry] = []
        self.lock = threading.Lock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def push_front(self, entry: QueueEntry) -> None:
        """Priority insertion, for requests a user is waiting on."""
        with self.lock:
            self._entries.insert(0, entry)

    def push_back(self, entry: QueueEntry) -> None:
        """Background insertion, for routine re-polling."""
        with self.lock:
            self._entries.append(entry)

    def pop_front(self) -> QueueEntry | None:
        """Remove and return the head, or None if the queue is empty."""
        with self.lock:
            if not self._entries:
                return None
            return self._entries.pop(0)

    def move_forward_one(self, entry: QueueEntry) -> None:
        """
        Reinsert a deferred entry directly behind the current head.

        Keeps a rate-limited entry near the front instead of sending it behind
        every background entry that arrived meanwhile.
        """
        with self.lock:
            self._entries.insert(min(1, len(self._entries)), entry)

    def snapshot(self) -> list[QueueEntry]:
        """Return a copy of the current ordering."""
        with self.lock:
            return list(self._entries)


