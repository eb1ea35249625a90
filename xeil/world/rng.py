"""Centralised seed derivation and deterministic random streams."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np

_MASK32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_GOLDEN_GAMMA = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def hash_string(value: str) -> int:
    """Return the 31-multiplier rolling hash of ``value`` over UTF-16 code units."""

    acc = 0
    for (unit,) in struct.iter_unpack("<H", value.encode("utf-16-le", "surrogatepass")):
        acc = ((acc << 5) - acc + unit) & _MASK32
    if acc & _SIGN_BIT:
        acc -= 1 << 32
    return abs(acc)


class Mulberry32:
    """Sequential PRNG over a single 32-bit state producing floats in ``[0, 1)``."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK32

    @property
    def state(self) -> int:
        return self._state

    def next_raw(self) -> int:
        """Advance the stream and return the raw unsigned 32-bit output."""

        self._state = (self._state + _GOLDEN_GAMMA) & _MASK32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        return t ^ (t >> 13)

    def next(self) -> float:
        return self.next_raw() / _TWO_POW_32

    __call__ = next

    def take(self, count: int) -> np.ndarray:
        """Return ``count`` sequential draws as a float array."""

        if count < 0:
            raise ValueError("count must be non-negative")
        return np.fromiter((self.next() for _ in range(count)), dtype=np.float64, count=count)

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next()


StreamFactory = Callable[[int], Mulberry32]


@dataclass
class WorldRandomness:
    """Derives independent streams for tiles, planets and named bodies."""

    stream_factory: StreamFactory = Mulberry32

    def seed(self, name: str) -> int:
        """Return the seed derived from ``name``."""

        return hash_string(name)

    def stream(self, name: str) -> Mulberry32:
        """Return a fresh stream seeded from ``name``."""

        return self.stream_factory(self.seed(name))

    def tile_stream(self, tile_x: int, tile_y: int) -> Mulberry32:
        return self.stream(f"{tile_x},{tile_y}")

    def planet_seed(self, tile_x: int, tile_y: int, index: int) -> int:
        return self.seed(f"{tile_x},{tile_y},{index}")

    def planet_stream(self, tile_x: int, tile_y: int, index: int) -> Mulberry32:
        return self.stream_factory(self.planet_seed(tile_x, tile_y, index))

    def moon_seed(self, parent_seed: int, index: int) -> int:
        return hash_string(f"{parent_seed}-{index}")


__all__ = ["Mulberry32", "StreamFactory", "WorldRandomness", "hash_string"]
