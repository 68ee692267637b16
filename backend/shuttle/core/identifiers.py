"""Identifier Strategies — swappable id generators for registries.

Invariants:
    - Every strategy is a zero-argument callable returning str
    - Strategies do not know about registry contents; collision retry is the registry's job
"""

import itertools
import secrets
import string
import threading
import uuid
from typing import Callable

IdGenerator = Callable[[], str]

_BASE36 = string.digits + string.ascii_uppercase


def prefixed_random_ids(prefix: str, length: int = 7) -> IdGenerator:
    """`prefix` + `length` uppercase base-36 chars, e.g. R-4K9QZ0B."""
    def generate() -> str:
        return prefix + "".join(secrets.choice(_BASE36) for _ in range(length))
    return generate


def uuid_ids() -> IdGenerator:
    return lambda: str(uuid.uuid4())


def counter_ids(prefix: str = "", start: int = 1, width: int = 3) -> IdGenerator:
    """Monotonic ids: CAR-001, CAR-002, ..."""
    counter = itertools.count(start)
    lock = threading.Lock()

    def generate() -> str:
        with lock:
            n = next(counter)
        return f"{prefix}{n:0{width}d}"
    return generate


def token_ids() -> IdGenerator:
    """32 hex chars, used for API tokens."""
    return lambda: secrets.token_hex(16)
