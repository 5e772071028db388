from __future__ import annotations

import pytest

from recency.errors import UnknownActionError
from recency.playground import Action, ActionKind, Playground, parse_action


@pytest.fixture
def pg() -> Playground:
    return Playground(3, [(1, "a"), (2, "b"), (3, "c")])


# ---- 1) Hit/miss counters ----
def test_counts_hits_and_misses(pg: Playground) -> None:
    assert pg.get(1).found
    assert pg.get(1).value == "a"
    assert not pg.get(9).found
    stats = pg.stats()
    assert (stats.hits, stats.misses) == (2, 1)
    assert stats.hit_rate == pytest.approx(2 / 3)


def test_hit_rate_without_lookups(pg: Playground) -> None:
    assert pg.stats().hit_rate == 0.0


def test_none_value_counts_as_hit() -> None:
    pg = Playground(2, [("k", None)])
    lookup = pg.get("k")
    assert lookup.found and lookup.value is None
    assert pg.hits == 1


# ---- 2) Reset rebuilds from initial entries ----
def test_reset_restores_initial(pg: Playground) -> None:
    pg.get(1)
    pg.set(4, "d")
    pg.delete(3)
    pg.get(42)
    pg.reset()
    assert pg.entries() == [(3, "c"), (2, "b"), (1, "a")]
    assert (pg.hits, pg.misses) == (0, 0)


def test_reset_after_clear(pg: Playground) -> None:
    pg.clear()
    assert pg.entries() == []
    pg.reset()
    assert len(pg.entries()) == 3


def test_initial_is_copied() -> None:
    initial = [(1, "a")]
    pg = Playground(2, initial)
    initial.append((2, "b"))
    pg.reset()
    assert pg.entries() == [(1, "a")]


# ---- 3) Parsing ----
@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("get 1", Action(ActionKind.GET, key=1)),
        ("GET foo", Action(ActionKind.GET, key="foo")),
        ("set 4 d", Action(ActionKind.SET, key=4, value="d")),
        ("put k hello world", Action(ActionKind.SET, key="k", value="hello world")),
        ("  delete 2 ", Action(ActionKind.DELETE, key=2)),
        ("del x", Action(ActionKind.DELETE, key="x")),
        ("clear", Action(ActionKind.CLEAR)),
        ("Reset", Action(ActionKind.RESET)),
    ],
)
def test_parse_action(line: str, expected: Action) -> None:
    assert parse_action(line) == expected


@pytest.mark.parametrize("line", ["", "   ", "fetch 1", "get", "get 1 2", "set 1", "clear now"])
def test_parse_action_rejects(line: str) -> None:
    with pytest.raises(UnknownActionError):
        parse_action(line)


# ---- 4) Dispatch ----
def test_apply_scenario(pg: Playground) -> None:
    out = pg.apply(parse_action("get 1"))
    assert out.lookup is not None and out.lookup.found
    assert out.message == "hit 1 -> 'a'"
    assert out.entries == [(1, "a"), (3, "c"), (2, "b")]

    out = pg.apply(parse_action("set 4 d"))
    assert out.entries == [(4, "d"), (1, "a"), (3, "c")]

    out = pg.apply(parse_action("get 2"))
    assert out.message == "miss 2"
    assert out.entries == [(4, "d"), (1, "a"), (3, "c")]
    assert pg.stats().misses == 1


def test_apply_delete_clear_reset(pg: Playground) -> None:
    assert pg.apply(parse_action("delete 2")).entries == [(3, "c"), (1, "a")]
    assert pg.apply(parse_action("clear")).entries == []
    out = pg.apply(parse_action("reset"))
    assert out.message == "reset"
    assert out.entries == [(3, "c"), (2, "b"), (1, "a")]
