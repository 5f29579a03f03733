"""
Test EnvStore
=============

Ordering, merge semantics and concurrent cursors of the in-memory store.
"""

import threading

import pytest

from envlayer.core.store import EnvStore


@pytest.fixture
def store():
    s = EnvStore()
    s.save({"A": "1", "B": "", "C": "3"})
    return s


def test_lookup_distinguishes_empty_from_found(store):
    assert store.lookup("A") == ("1", True)
    assert store.lookup("B") == ("", False)
    assert store.lookup("MISSING") == ("", False)


def test_exists_ignores_emptiness(store):
    assert store.exists("B")
    assert "A" in store
    assert not store.exists("MISSING")


def test_lookup_is_case_sensitive(store):
    assert store.lookup("a") == ("", False)


def test_save_updates_in_place(store):
    store.save({"A": "2", "D": "4"})

    assert len(store) == 4
    assert store.lookup("A") == ("2", True)
    assert [key for key, _ in store.iterate()] == ["A", "B", "C", "D"]


def test_save_is_idempotent(store):
    before = list(store.iterate())
    store.save({"A": "1", "B": "", "C": "3"})

    assert len(store) == 3
    assert list(store.iterate()) == before


def test_clean_empties_store(store):
    store.clean()

    assert len(store) == 0
    assert store.lookup("A") == ("", False)
    assert not store.exists("B")
    assert list(store.iterate()) == []


def test_cursor_stays_exhausted(store):
    cursor = store.iterate()
    assert list(cursor) == [("A", "1"), ("B", ""), ("C", "3")]

    store.save({"D": "4"})
    with pytest.raises(StopIteration):
        next(cursor)
    with pytest.raises(StopIteration):
        next(cursor)


def test_cursors_are_independent(store):
    first = store.iterate()
    second = store.iterate()

    assert next(first) == ("A", "1")
    assert next(first) == ("B", "")
    assert next(second) == ("A", "1")


def test_cursor_stops_after_concurrent_clean(store):
    cursor = store.iterate()
    assert next(cursor) == ("A", "1")

    store.clean()
    assert list(cursor) == []


def test_shared_cursor_hands_out_each_entry_once():
    store = EnvStore()
    store.save({f"KEY_{i}": str(i) for i in range(500)})
    cursor = store.iterate()
    seen = []
    lock = threading.Lock()

    def drain():
        for entry in cursor:
            with lock:
                seen.append(entry)

    threads = [threading.Thread(target=drain) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 500
    assert {key for key, _ in seen} == {f"KEY_{i}" for i in range(500)}


def test_concurrent_readers_and_writers():
    store = EnvStore()
    errors = []

    def write():
        try:
            for i in range(200):
                store.save({f"K{i % 20}": str(i)})
                if i % 50 == 0:
                    store.clean()
        except Exception as e:  # pragma: no cover - reported below
            errors.append(e)

    def read():
        try:
            for _ in range(200):
                for key, value in store.iterate():
                    assert key.startswith("K")
                store.lookup("K1")
        except Exception as e:  # pragma: no cover - reported below
            errors.append(e)

    threads = [threading.Thread(target=write)] + [threading.Thread(target=read) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
