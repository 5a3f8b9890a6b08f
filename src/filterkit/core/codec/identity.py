"""Identity generators for rule blocks.

The parser never reaches for a process-wide random source on its own; callers
pass a generator (any zero-argument callable returning a string) so parsing
can be made deterministic in tests.
"""
from __future__ import annotations

import itertools
import threading
import uuid
from typing import Callable

IdentityFactory = Callable[[], str]


def uuid_identity() -> str:
    """Default generator: a random UUID4 string."""
    return str(uuid.uuid4())


class CounterIdentityFactory:
    """Deterministic generator yielding ``<prefix><n>`` with increasing ``n``.

    Safe to share between threads.
    """

    def __init__(self, prefix: str = "block-", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}{value}"


__all__ = ["IdentityFactory", "uuid_identity", "CounterIdentityFactory"]
