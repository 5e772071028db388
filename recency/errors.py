from __future__ import annotations


class InvalidCapacityError(ValueError):
    """Raised when a cache is constructed with a capacity that is not an int >= 1."""


class UnknownActionError(ValueError):
    """Raised when a playground command cannot be parsed."""


class ConfigError(RuntimeError):
    """Raised when an environment override holds an unusable value."""


__all__ = ["ConfigError", "InvalidCapacityError", "UnknownActionError"]
