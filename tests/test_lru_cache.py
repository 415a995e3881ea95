import pytest

from lspkit.lru_cache import LruCache


def test_rejects_non_positive_size():
    with pytest.raises(ValueError):
        LruCache(0)
    with pytest.raises(ValueError):
        LruCache(-3)


def test_insert_and_try_get():
    cache = LruCache(3)
    cache.insert("a", 1)
    cache.insert("b", 2)
    assert cache.try_get("a") == 1
    assert cache.try_get("b") == 2
    assert cache.try_get("missing") is None
    assert len(cache) == 2


def test_evicts_least_recently_used():
    cache = LruCache(2)
    cache.insert("a", 1)
    cache.insert("b", 2)
    assert cache.try_get("a") == 1
    cache.insert("c", 3)
    assert cache.has("a")
    assert not cache.has("b")
    assert cache.has("c")
    assert len(cache) == 2


def test_get_does_not_refresh_usage():
    cache = LruCache(2)
    cache.insert("a", 1)
    cache.insert("b", 2)
    assert cache.get("a", lambda: 99) == 1
    cache.insert("c", 3)
    assert not cache.has("a")
    assert cache.has("b")


def test_get_calls_allocator_only_when_missing():
    calls = []

    def allocator():
        calls.append(1)
        return "made"

    cache = LruCache(4)
    assert cache.get("k", allocator) == "made"
    assert cache.get("k", allocator) == "made"
    assert len(calls) == 1
    assert "k" in cache


def test_try_take_removes_entry():
    cache = LruCache(2)
    cache.insert("a", 1)
    assert cache.try_take("a") == 1
    assert not cache.has("a")
    assert cache.try_take("a") is None
    assert len(cache) == 0


def test_iterate_values_stops_early():
    cache = LruCache(5)
    for index, key in enumerate("abcd"):
        cache.insert(key, index)
    seen = []

    def visit(value):
        seen.append(value)
        return value < 1

    cache.iterate_values(visit)
    assert seen == [0, 1]
    assert len(cache) == 4
    assert list(cache.values()) == [0, 1, 2, 3]


def test_iterate_values_visits_all_when_true():
    cache = LruCache(5)
    for index, key in enumerate("abc"):
        cache.insert(key, index)
    seen = []
    cache.iterate_values(lambda value: seen.append(value) or True)
    assert seen == [0, 1, 2]
    assert list(cache.values()) == [0, 1, 2]


def test_clear_empties_cache():
    cache = LruCache(2)
    cache.insert("a", 1)
    cache.insert("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert not cache.has("a")
    cache.insert("c", 3)
    assert cache.try_get("c") == 3


def test_size_never_exceeds_maximum():
    cache = LruCache(3)
    for number in range(20):
        cache.insert(number, number)
        assert len(cache) <= cache.max_entries
    assert cache.has(19)
    assert not cache.has(0)