from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


# configure_logging() pins the stream it was called with; undo it between tests
@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
