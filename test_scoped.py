"""
Test ScopedView
===============

Prefix/category key resolution and scoped iteration.
"""

import pytest

from envlayer import Environ, ScopedView


@pytest.fixture
def environ():
    env = Environ()
    env.save({
        "CACHE_DRIVER": "redis",
        "CACHE_DATABASE": "1",
        "CACHE_SCOPE": "app:",
        "CACHE_BOOK_DATABASE": "10",
        "CACHE_BOOK_SCOPE": "app:books:",
        "CACHE_BOOK_EMPTY": "",
        "CACHE_USER_SCOPE": "app:users:",
        "DRIVER": "file",
    })
    return env


def test_category_hit_and_prefix_fallback(environ):
    env = Environ()
    env.save({"CACHE_BOOK_DATABASE": "10", "CACHE_SCOPE": "app:"})
    view = env.signed("CACHE", "BOOK")

    assert view.get_int("DATABASE") == 10
    assert view.get_str("SCOPE") == "app:"


def test_category_wins_over_prefix(environ):
    view = environ.signed("CACHE", "BOOK")

    assert view.get_str("DRIVER") == "redis"
    assert view.get_int("DATABASE") == 10
    assert view.get_str("SCOPE") == "app:books:"


def test_prefix_only_view(environ):
    view = environ.signed("CACHE")

    assert view.get_int("DATABASE") == 1
    assert view.lookup("BOOK_DATABASE") == ("10", True)
    assert view.lookup("MISSING") == ("", False)


def test_empty_prefix_view_reads_bare_keys(environ):
    view = environ.signed("", "")

    assert view.get_str("DRIVER") == "file"


def test_category_without_prefix(environ):
    view = ScopedView(environ.store, "", "CACHE")

    assert view.get_str("DRIVER") == "redis"
    assert view.get_str("NOPE", "x") == "x"


def test_empty_category_value_falls_back(environ):
    view = environ.signed("CACHE", "BOOK")

    assert view.lookup("EMPTY") == ("", False)
    assert view.exists("EMPTY")


def test_exists_falls_back_to_prefix(environ):
    view = environ.signed("CACHE", "BOOK")

    assert view.exists("DRIVER")
    assert not view.exists("MISSING")
    assert not environ.signed("CACHE").exists("BOOK")


def test_iterate_matches_full_scope_only(environ):
    view = environ.signed("CACHE", "BOOK")

    assert list(view.iterate()) == [
        ("DATABASE", "10"),
        ("SCOPE", "app:books:"),
        ("EMPTY", ""),
    ]
    assert view.all() == {"DATABASE": "10", "SCOPE": "app:books:", "EMPTY": ""}


def test_iterate_prefix_scope(environ):
    view = environ.signed("CACHE")

    assert view.map("BOOK_") == {"DATABASE": "10", "SCOPE": "app:books:", "EMPTY": ""}
    assert "DRIVER" in view.all()
    assert "USER_SCOPE" in view.all()


def test_view_sees_later_saves(environ):
    view = environ.signed("CACHE", "USER")
    environ.save({"CACHE_USER_DATABASE": "7"})

    assert view.get_int("DATABASE") == 7


def test_scope_property():
    env = Environ()
    assert env.signed("CACHE", "BOOK").scope == "CACHE_BOOK_"
    assert env.signed("CACHE").scope == "CACHE_"
    assert env.signed("", "BOOK").scope == "BOOK_"
    assert env.signed("", "").scope == ""
