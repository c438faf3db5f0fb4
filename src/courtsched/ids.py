"""Match identity factories.

An id factory is any zero-argument callable returning a new string id.
The generator takes one as a parameter so callers can choose between
random ids (default) and reproducible sequential ids.
"""

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def random_ids(prefix: str = "match") -> IdFactory:
    """Ids like 'match-3f9c2a1b7d4e' derived from uuid4."""
    def _next() -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"
    return _next


def sequential_ids(prefix: str = "match", start: int = 1) -> IdFactory:
    """Ids like 'match-1', 'match-2', ... in call order."""
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}-{next(counter)}"
    return _next
