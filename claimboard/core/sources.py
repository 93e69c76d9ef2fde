"""
Injectable Sources

Every source of non-determinism in the core goes through one of these
abstractions so the registry, ledger and service can be driven
deterministically in tests:
- RandomSource: reward amounts and avatar selection
- IdGenerator: participant and claim identities
"""

import itertools
import threading
import uuid
from typing import Iterable, Protocol, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(Protocol):
    def randint(self, low: int, high: int) -> int:
        """Uniform integer from the closed range [low, high]."""
        ...

    def choice(self, options: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        ...


class NumpyRandomSource:
    """
    RandomSource backed by a numpy Generator.

    Passing the same seed reproduces the same sequence of rewards and
    avatars.
    """

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def randint(self, low: int, high: int) -> int:
        # numpy's upper bound is exclusive
        return int(self._rng.integers(low, high + 1))

    def choice(self, options):
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return options[int(self._rng.integers(0, len(options)))]


class FixedRandomSource:
    """
    Deterministic RandomSource that cycles through preset values.

    randint() returns the next value unchanged, so callers can pin a reward
    to an exact amount. choice() uses the same value as an index into the
    options (modulo their length).
    """

    def __init__(self, values: Iterable[int]):
        values = list(values)
        if not values:
            raise ValueError("FixedRandomSource needs at least one value")
        self._values = itertools.cycle(values)

    def randint(self, low: int, high: int) -> int:
        return next(self._values)

    def choice(self, options):
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return options[next(self._values) % len(options)]


class IdGenerator(Protocol):
    def __call__(self) -> str:
        ...


class CounterIdGenerator:
    """Monotonic ids such as 'p1', 'p2', ...; never repeats within a process."""

    def __init__(self, prefix: str = "", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return f"{self.prefix}{next(self._counter)}"


class UuidIdGenerator:
    """Random uuid4 hex ids, optionally prefixed."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}{uuid.uuid4().hex}"
