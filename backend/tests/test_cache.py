"""TTLCache: expiry, overwrite, structured keys."""

from conftest import FakeClock

from services.cache import CacheKey, TTLCache


def test_get_returns_none_when_never_set():
    cache = TTLCache(clock=FakeClock())
    assert cache.get(CacheKey("hero-matchups", 1)) is None


def test_value_expires_after_ttl():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    key = CacheKey("hero-matchups", 1)

    cache.set(key, {"counters": []}, ttl_seconds=60)
    clock.advance(59)
    assert cache.get(key) == {"counters": []}

    clock.advance(1)
    assert cache.get(key) is None
    assert len(cache) == 0


def test_set_overwrites_and_resets_expiry():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    key = CacheKey("hero", 1)

    cache.set(key, "old", ttl_seconds=10)
    clock.advance(8)
    cache.set(key, "new", ttl_seconds=10)
    clock.advance(8)

    assert cache.get(key) == "new"


def test_keys_with_same_entity_in_different_namespaces_do_not_collide():
    cache = TTLCache(clock=FakeClock())
    cache.set(CacheKey("hero-matchups", 1), "matchups", ttl_seconds=60)
    cache.set(CacheKey("hero-items", 1), "items", ttl_seconds=60)

    assert cache.get(CacheKey("hero-matchups", 1)) == "matchups"
    assert cache.get(CacheKey("hero-items", 1)) == "items"


def test_equal_keys_share_an_entry():
    cache = TTLCache(clock=FakeClock())
    cache.set(CacheKey("heroes", None, ("axe", None, None)), ["axe"], ttl_seconds=60)

    assert CacheKey("heroes", None, ("axe", None, None)) in cache
    assert CacheKey("heroes", None, ("axe", "Carry", None)) not in cache


def test_falsy_values_are_cached():
    cache = TTLCache(clock=FakeClock())
    key = CacheKey("hero-matchups", 7)
    cache.set(key, [], ttl_seconds=60)

    entry = cache.get_entry(key)
    assert entry is not None
    assert entry.value == []


def test_invalidate_and_clear():
    cache = TTLCache(clock=FakeClock())
    cache.set(CacheKey("item", 1), "a", ttl_seconds=60)
    cache.set(CacheKey("item", 2), "b", ttl_seconds=60)

    cache.invalidate(CacheKey("item", 1))
    assert cache.get(CacheKey("item", 1)) is None
    assert cache.get(CacheKey("item", 2)) == "b"

    cache.clear()
    assert len(cache) == 0


def test_key_str():
    assert str(CacheKey("hero-abilities", "antimage")) == "hero-abilities:antimage"
    assert str(CacheKey("hero-stats")) == "hero-stats"
