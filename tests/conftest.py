from unittest.mock import MagicMock

import pytest

from src.scheduler.fetch_scheduler import FetchScheduler
from tests.configs.feed_fixture_params import FakeClock, make_feed


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_fetch():
    fetch = MagicMock()
    fetch.side_effect = lambda url: make_feed(url, "first")
    return fetch


@pytest.fixture
def scheduler(fake_fetch, clock):
    """Scheduler driven by hand: no ticker thread, fake clock."""
    sched = FetchScheduler(
        fake_fetch,
        tick_interval=0.5,
        min_host_interval=20.0,
        refresh_cooldown=30.0,
        clock=clock,
        launch_ticker=False,
    )
    sched.start()
    return sched
