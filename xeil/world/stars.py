"""Background star fields and their blink scheduling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Iterable, List

import numpy as np

from .config import StarSettings
from .rng import Mulberry32

_DRAWS_PER_STAR = 6


@dataclass(slots=True)
class Star:
    """A single blinking star; only the blink step mutates it."""

    x: float
    y: float
    glyph: str
    brightness: int
    blink_interval: float
    next_blink: float
    origin: Hashable | None = None
    visible: bool = True
    original_brightness: int = 0

    def __post_init__(self) -> None:
        if not self.original_brightness:
            self.original_brightness = self.brightness

    @property
    def opacity(self) -> float:
        return self.brightness / 5

    def blink(self, now: float) -> bool:
        """Toggle visibility when the blink is due; return whether it fired."""

        if now > self.next_blink:
            self.visible = not self.visible
            self.next_blink = now + self.blink_interval
            return True
        return False


def _stars_from_draws(
    xs: np.ndarray,
    ys: np.ndarray,
    draws: np.ndarray,
    *,
    now: float,
    settings: StarSettings,
    origin: Hashable | None,
) -> List[Star]:
    brightness = np.floor(draws[:, 2] * 4).astype(np.int64) + 1
    glyph_is_dot = draws[:, 3] > 0.5
    interval = draws[:, 4] * settings.blink_interval_spread + settings.min_blink_interval
    next_blink = now + draws[:, 5] * interval
    return [
        Star(
            x=float(x),
            y=float(y),
            glyph="." if dot else "*",
            brightness=int(level),
            blink_interval=float(period),
            next_blink=float(due),
            origin=origin,
        )
        for x, y, dot, level, period, due in zip(xs, ys, glyph_is_dot, brightness, interval, next_blink)
    ]


def generate_tile_stars(
    stream: Mulberry32,
    *,
    count: int,
    origin_x: float,
    origin_y: float,
    chunk_size: float,
    now: float,
    settings: StarSettings,
    origin: Hashable | None = None,
) -> List[Star]:
    """Scatter ``count`` stars uniformly across one tile."""

    draws = stream.take(count * _DRAWS_PER_STAR).reshape(count, _DRAWS_PER_STAR)
    xs = origin_x + draws[:, 0] * chunk_size
    ys = origin_y + draws[:, 1] * chunk_size
    return _stars_from_draws(xs, ys, draws, now=now, settings=settings, origin=origin)


def generate_ring_stars(
    stream: Mulberry32,
    *,
    center_x: float,
    center_y: float,
    now: float,
    settings: StarSettings,
    origin: Hashable | None = None,
) -> List[Star]:
    """Scatter the loose ring of stars surrounding a special body."""

    count = settings.special_ring_count
    draws = stream.take(count * _DRAWS_PER_STAR).reshape(count, _DRAWS_PER_STAR)
    angles = draws[:, 0] * math.pi * 2
    distances = draws[:, 1] * settings.special_ring_width + settings.special_ring_inner
    xs = center_x + np.cos(angles) * distances
    ys = center_y + np.sin(angles) * distances
    return _stars_from_draws(xs, ys, draws, now=now, settings=settings, origin=origin)


class StarBlinker:
    """Throttled blink-update step applied to the active star set."""

    def __init__(self, check_interval: float = 100.0) -> None:
        if check_interval <= 0:
            raise ValueError("check_interval must be positive")
        self.check_interval = check_interval
        self._elapsed = 0.0

    def update(self, stars: Iterable[Star], delta: float, now: float) -> int:
        """Advance the timer by ``delta`` ms and blink due stars; return toggles."""

        self._elapsed += delta
        if self._elapsed <= self.check_interval:
            return 0
        self._elapsed = 0.0
        return sum(1 for star in stars if star.blink(now))


__all__ = ["Star", "StarBlinker", "generate_ring_stars", "generate_tile_stars"]
