import pytest

from app.cache import SnapshotCache


def test_empty_cache_misses(clock):
    cache = SnapshotCache(ttl_seconds=45, clock=clock)
    assert cache.get() is None
    assert cache.has_entry is False
    assert cache.age() is None
    assert cache.expires_at() is None


def test_serves_same_object_until_ttl(clock):
    cache = SnapshotCache(ttl_seconds=45, clock=clock)
    value = object()
    cache.put(value)

    clock.advance(44.999)
    assert cache.get() is value
    assert cache.expires_at() == pytest.approx(1_700_000_045.0)


def test_expires_at_ttl_boundary(clock):
    cache = SnapshotCache(ttl_seconds=45, clock=clock)
    cache.put("snapshot")

    clock.advance(45)
    assert cache.get() is None
    # expired entries are dropped on read
    assert cache.age() is None


def test_put_replaces_previous_entry(clock):
    cache = SnapshotCache(ttl_seconds=10, clock=clock)
    cache.put("old")
    clock.advance(8)
    entry = cache.put("new")

    assert entry.created_at == clock.now
    clock.advance(8)
    assert cache.get() == "new"
    assert cache.age() == 8


def test_clear(clock):
    cache = SnapshotCache(clock=clock)
    cache.put("snapshot")
    cache.clear()
    assert cache.get() is None
