"""
Headless state model for the interactive LRU demo.

The front end issues one action per user gesture and re-renders from
entries() afterwards. Hit/miss counting and reset live here, not in the
cache: reset simply throws the cache away and rebuilds it from the
original initial entries.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from structlog.typing import FilteringBoundLogger

from recency.cache import NOT_FOUND, RecencyCache
from recency.errors import UnknownActionError
from recency.logger import get_logger


class ActionKind(StrEnum):
    GET = "GET"
    SET = "SET"
    DELETE = "DELETE"
    CLEAR = "CLEAR"
    RESET = "RESET"


_ALIASES: dict[str, ActionKind] = {
    "get": ActionKind.GET,
    "set": ActionKind.SET,
    "put": ActionKind.SET,
    "delete": ActionKind.DELETE,
    "del": ActionKind.DELETE,
    "clear": ActionKind.CLEAR,
    "reset": ActionKind.RESET,
}

# number of tokens after the verb; SET takes the rest of the line as value
_ARITY: dict[ActionKind, int] = {
    ActionKind.GET: 1,
    ActionKind.SET: 2,
    ActionKind.DELETE: 1,
    ActionKind.CLEAR: 0,
    ActionKind.RESET: 0,
}


@dataclass(slots=True, frozen=True)
class Action:
    kind: ActionKind
    key: Hashable | None = None
    value: Any = None


@dataclass(slots=True, frozen=True)
class Lookup:
    key: Hashable
    found: bool
    value: Any = None


@dataclass(slots=True, frozen=True)
class Stats:
    size: int
    capacity: int
    hits: int
    misses: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


@dataclass(slots=True, frozen=True)
class Outcome:
    action: Action
    message: str
    entries: list[tuple[Hashable, Any]] = field(default_factory=list)
    lookup: Lookup | None = None


def _coerce_key(token: str) -> Hashable:
    """Digits become ints so typed keys match the ones loaded from YAML."""
    try:
        return int(token)
    except ValueError:
        return token


def parse_action(line: str) -> Action:
    """
    Parse one textual command.

    get <key> | set <key> <value...> | delete <key> | clear | reset
    """
    parts = line.strip().split(maxsplit=2)
    if not parts:
        raise UnknownActionError("empty command")

    kind = _ALIASES.get(parts[0].lower())
    if kind is None:
        raise UnknownActionError(f"unknown action: {parts[0]!r}")

    args = parts[1:]
    if len(args) != _ARITY[kind]:
        raise UnknownActionError(
            f"{kind.lower()} expects {_ARITY[kind]} argument(s), got {len(args)}"
        )

    if kind is ActionKind.SET:
        return Action(kind=kind, key=_coerce_key(args[0]), value=args[1])
    if kind in (ActionKind.GET, ActionKind.DELETE):
        return Action(kind=kind, key=_coerce_key(args[0]))
    return Action(kind=kind)


class Playground:
    def __init__(self, capacity: int, initial: Iterable[tuple[Hashable, Any]] = ()) -> None:
        self._capacity = capacity
        self._initial: tuple[tuple[Hashable, Any], ...] = tuple(initial)
        self._cache: RecencyCache[Hashable, Any] = RecencyCache(capacity, self._initial)
        self.hits = 0
        self.misses = 0
        self._log: FilteringBoundLogger = get_logger("playground")

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: Hashable) -> Lookup:
        value = self._cache.get(key)
        if value is NOT_FOUND:
            self.misses += 1
            return Lookup(key=key, found=False)
        self.hits += 1
        return Lookup(key=key, found=True, value=value)

    def set(self, key: Hashable, value: Any) -> None:
        self._cache.set(key, value)

    def delete(self, key: Hashable) -> None:
        self._cache.delete(key)

    def clear(self) -> None:
        self._cache.clear()

    def reset(self) -> None:
        self._cache = RecencyCache(self._capacity, self._initial)
        self.hits = 0
        self.misses = 0
        self._log.info("playground.reset", capacity=self._capacity, initial=len(self._initial))

    def entries(self) -> list[tuple[Hashable, Any]]:
        return self._cache.entries()

    def stats(self) -> Stats:
        return Stats(
            size=len(self._cache), capacity=self._capacity, hits=self.hits, misses=self.misses
        )

    def apply(self, action: Action) -> Outcome:
        lookup: Lookup | None = None
        match action.kind:
            case ActionKind.GET:
                lookup = self.get(action.key)
                message = (
                    f"hit {action.key!r} -> {lookup.value!r}"
                    if lookup.found
                    else f"miss {action.key!r}"
                )
            case ActionKind.SET:
                self.set(action.key, action.value)
                message = f"set {action.key!r} = {action.value!r}"
            case ActionKind.DELETE:
                self.delete(action.key)
                message = f"delete {action.key!r}"
            case ActionKind.CLEAR:
                self.clear()
                message = "clear"
            case ActionKind.RESET:
                self.reset()
                message = "reset"

        return Outcome(action=action, message=message, entries=self.entries(), lookup=lookup)


__all__ = [
    "Action",
    "ActionKind",
    "Lookup",
    "Outcome",
    "Playground",
    "Stats",
    "parse_action",
]
