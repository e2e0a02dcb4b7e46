import threading
from unittest.mock import MagicMock

from src.scheduler.fetch_queue import FetchQueue
from src.scheduler.queue_entry import QueueEntry


def entry(name: str, *, priority: bool = False) -> QueueEntry:
    return QueueEntry(f"https://{name}.com/feed", MagicMock(), priority=priority)


def test_push_front_goes_ahead_of_background_entries():
    """[A, B] + push_front(C) -> [C, A, B]."""
    queue = FetchQueue()
    a, b, c = entry("a"), entry("b"), entry("c", priority=True)
    queue.push_back(a)
    queue.push_back(b)
    queue.push_front(c)
    assert queue.snapshot() == [c, a, b]


def test_pop_front_returns_head_then_none():
    queue = FetchQueue()
    a = entry("a")
    queue.push_back(a)
    assert queue.pop_front() is a
    assert queue.pop_front() is None
    assert len(queue) == 0


def test_move_forward_one_inserts_behind_head():
    queue = FetchQueue()
    a, b, c = entry("a"), entry("b"), entry("c")
    queue.push_back(a)
    queue.push_back(b)
    queue.push_back(c)
    head = queue.pop_front()
    queue.move_forward_one(head)
    assert queue.snapshot() == [b, a, c]


def test_move_forward_one_on_empty_queue():
    """Only entry left: relocation puts it back at the head."""
    queue = FetchQueue()
    a = entry("a")
    queue.move_forward_one(a)
    assert queue.snapshot() == [a]


def test_no_deduplication():
    queue = FetchQueue()
    queue.push_back(entry("a"))
    queue.push_back(entry("a"))
    assert [e.identifier for e in queue.snapshot()] == ["https://a.com/feed"] * 2


def test_concurrent_producers_lose_nothing():
    queue = FetchQueue()

    def produce(prefix: str) -> None:
        for i in range(200):
            queue.push_back(entry(f"{prefix}{i}"))

    threads = [threading.Thread(target=produce, args=(p,)) for p in "abcd"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(queue) == 800  # noqa: PLR2004
