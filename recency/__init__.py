"""
Public API: a least-recently-used cache and its playground.
"""

from __future__ import annotations

from .cache import NOT_FOUND, NotFound, RecencyCache
from .errors import ConfigError, InvalidCapacityError, UnknownActionError
from .playground import Playground, parse_action


__all__ = [
    "NOT_FOUND",
    "ConfigError",
    "InvalidCapacityError",
    "NotFound",
    "Playground",
    "RecencyCache",
    "UnknownActionError",
    "parse_action",
]
