"""Registry of fixed world locations bound to hand-authored bodies."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, Sequence, Tuple

from .config import SpecialLocation
from .rng import hash_string


class SpecialBodyRegistry:
    """Looks up the special locations that bypass density-based generation."""

    def __init__(self, locations: Iterable[SpecialLocation] | None = None) -> None:
        if locations is None:
            locations = (
                SpecialLocation(name="Mao", x=1000, y=69),
                SpecialLocation(name="Mo", x=1050, y=69),
            )
        self._locations: tuple[SpecialLocation, ...] = tuple(locations)
        self._by_name = {location.name.lower(): location for location in self._locations}
        if len(self._by_name) != len(self._locations):
            raise ValueError("special location names must be unique")

    @property
    def locations(self) -> Sequence[SpecialLocation]:
        return self._locations

    def __iter__(self) -> Iterator[SpecialLocation]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def get(self, name: str) -> SpecialLocation | None:
        return self._by_name.get(name.lower())

    def near(self, x: float, y: float, radius: float) -> Iterator[SpecialLocation]:
        """Yield locations within ``radius`` of ``(x, y)`` on both axes, in order."""

        for location in self._locations:
            if abs(x - location.x) < radius and abs(y - location.y) < radius:
                yield location

    def by_coordinates(self, x: float, y: float) -> SpecialLocation | None:
        """Return the location whose integral coordinates match ``(x, y)``."""

        key = (math.trunc(x), math.trunc(y))
        for location in self._locations:
            if (math.trunc(location.x), math.trunc(location.y)) == key:
                return location
        return None

    def coordinate_names(self) -> Dict[Tuple[int, int], str]:
        """Map the integral coordinates of each location to its name."""

        return {
            (math.trunc(location.x), math.trunc(location.y)): location.name
            for location in self._locations
        }

    @staticmethod
    def seed_for(location: SpecialLocation) -> int:
        return hash_string(location.name)


__all__ = ["SpecialBodyRegistry"]
