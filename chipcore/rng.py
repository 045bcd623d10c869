"""Random byte sources for the RND instruction."""

import time
from itertools import cycle
from typing import Iterable, Optional, Protocol

import jax
import jax.numpy as jnp


class RandomByteSource(Protocol):
    """Anything that can hand out uniformly distributed bytes."""

    def next(self) -> int:
        """Return a value in [0, 255]."""
        ...


class PRNGByteSource:
    """Byte source backed by a JAX PRNG key, split on every draw.

    Args:
        seed: Integer seed. Derived from the clock when omitted.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = time.time_ns() & 0x7FFFFFFF
        self.seed = seed
        self._key = jax.random.PRNGKey(seed)

    def next(self) -> int:
        self._key, subkey = jax.random.split(self._key)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))


class SequenceByteSource:
    """Deterministic source that cycles through a fixed list of bytes."""

    def __init__(self, values: Iterable[int]):
        values = list(values)
        if not values:
            raise ValueError("SequenceByteSource needs at least one value")
        for value in values:
            if not 0 <= value <= 0xFF:
                raise ValueError(f"Random byte out of range: {value}")
        self.values = values
        self._values = cycle(values)

    def next(self) -> int:
        return next(self._values)
