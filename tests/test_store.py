import pytest

from conftest import make_source
from pdfcrop import artifacts
from pdfcrop.store import SessionStore


def test_create_and_get():
    store = SessionStore(locale="en")
    session_id, session = store.create()

    assert store.get(session_id) is session
    assert session.locale == "en"
    assert len(store) == 1


def test_ids_are_unique():
    store = SessionStore(max_sessions=100)
    ids = {store.create()[0] for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.asyncio
async def test_remove_releases_artifact():
    store = SessionStore()
    session_id, session = store.create()
    await session.select_file(make_source(3))
    artifact = await session.extract()

    assert store.remove(session_id) is True
    assert store.get(session_id) is None
    assert not artifacts.is_live(artifact.url)
    assert store.remove(session_id) is False


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


async def test_idle_sessions_expire_and_release_artifacts():
    clock = FakeClock()
    store = SessionStore(ttl=60, clock=clock)
    stale_id, stale = store.create()
    await stale.select_file(make_source(2))
    artifact = await stale.extract()

    clock.now = 30
    fresh_id, _ = store.create()
    clock.now = 61

    assert store.get(stale_id) is None
    assert store.get(fresh_id) is not None
    assert len(store) == 1
    assert not artifacts.is_live(artifact.url)
    assert stale.source is None


def test_access_keeps_session_alive():
    clock = FakeClock()
    store = SessionStore(ttl=60, clock=clock)
    session_id, session = store.create()

    for step in range(1, 5):
        clock.now = step * 50
        assert store.get(session_id) is session


def test_capacity_evicts_least_recently_used():
    store = SessionStore(max_sessions=2, ttl=0)
    first_id, first = store.create()
    second_id, _ = store.create()
    store.get(first_id)

    third_id, _ = store.create()

    assert len(store) == 2
    assert store.get(second_id) is None
    assert store.get(first_id) is first
    assert store.get(third_id) is not None


def test_prune_reports_evictions():
    clock = FakeClock()
    store = SessionStore(ttl=10, clock=clock)
    store.create()
    store.create()

    clock.now = 11

    assert store.prune() == 2
    assert len(store) == 0
