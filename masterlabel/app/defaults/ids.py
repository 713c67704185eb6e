"""
Element and template id generation.

Ids only need to be unique within one design document. The default
generator combines a wall-clock timestamp with a monotonic counter, which
is unique for the lifetime of the process. Generators are injected into
the factories so tests can make ids deterministic.
"""

from __future__ import annotations

import itertools
import secrets
import threading
import time
from typing import Callable, Protocol


class IdGenerator(Protocol):
    """Produces element ids."""

    def __call__(self) -> str:
        ...


class ElementIdGenerator:
    """
    Timestamp + counter id generator.

    Produces ids of the form ``el_<epoch-millis>_<n>``.
    """

    def __init__(
        self,
        *,
        prefix: str = "el",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._prefix = prefix
        self._clock = clock
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        millis = int(self._clock() * 1000)
        return f"{self._prefix}_{millis}_{n}"


class SequentialIdGenerator:
    """Deterministic ids (``el_1``, ``el_2``, ...) for tests and fixtures."""

    def __init__(self, prefix: str = "el", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self._prefix}_{next(self._counter)}"


default_id_generator = ElementIdGenerator()


def generate_template_id(clock: Callable[[], float] = time.time) -> str:
    """Id for a tenant-created template (``tmpl_<millis>_<random>``)."""
    return f"tmpl_{int(clock() * 1000)}_{secrets.token_hex(3)}"
