"""Planet and moon records and the factory that builds them from seeds."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Hashable, List

from loguru import logger

from .config import BodySizeSettings
from .patterns import Pattern, PatternSynthesizer
from .rng import Mulberry32, WorldRandomness, hash_string

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .scan import ScanKey, ScanRecord

DISTINGUISHED_NAMES = frozenset({"mao", "mo"})


def is_distinguished(name: str | None) -> bool:
    """Return whether ``name`` is one of the hand-authored bodies (any case)."""

    return bool(name) and name.lower() in DISTINGUISHED_NAMES


class MoonPolicy(str, Enum):
    """How a planet decides whether it has moons."""

    ROLL = "roll"
    ROLL_FORCED = "roll_forced"
    ALWAYS = "always"


@dataclass(eq=False, kw_only=True)
class Body:
    """Common fields of planets and moons."""

    identifier: str
    seed: int
    size: int
    pattern: Pattern
    scan_cache: tuple[ScanKey, ScanRecord] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def is_moon(self) -> bool:
        return False

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass(eq=False, kw_only=True)
class Moon(Body):
    """A moon orbiting its owning planet."""

    orbit_radius: float
    orbit_phase: float
    orbit_inclination: float

    @property
    def is_moon(self) -> bool:
        return True


@dataclass(eq=False, kw_only=True)
class Planet(Body):
    """A planet placed in world space, owning zero or more moons."""

    x: float
    y: float
    moons: List[Moon] = field(default_factory=list)
    name: str | None = None
    origin: Hashable | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "texture": self.pattern.texture.value,
            "rings": self.pattern.has_rings,
            "gas_giant": self.pattern.is_gas_giant,
            "moons": [moon.identifier for moon in self.moons],
        }


class BodyFactory:
    """Builds planets and moons, each from its own independent stream."""

    def __init__(
        self,
        sizes: BodySizeSettings | None = None,
        *,
        synthesizer: PatternSynthesizer | None = None,
        randomness: WorldRandomness | None = None,
    ) -> None:
        self.sizes = sizes or BodySizeSettings()
        self.synthesizer = synthesizer or PatternSynthesizer()
        self.randomness = randomness or WorldRandomness()

    @staticmethod
    def _draw_size(stream: Mulberry32, minimum: int, maximum: int) -> int:
        return math.floor(stream.next() * (maximum - minimum)) + minimum

    def make_planet(
        self,
        seed: int,
        *,
        identifier: str,
        x: float = 0.0,
        y: float = 0.0,
        stream: Mulberry32 | None = None,
        name: str | None = None,
        moon_policy: MoonPolicy = MoonPolicy.ROLL,
        moon_prefix: str | None = None,
        origin: Hashable | None = None,
        phase: float = 0.0,
    ) -> Planet:
        """Build a planet from ``seed``.

        ``stream`` may be supplied when the caller already consumed draws from
        the planet's stream (tile planets draw their position first).  Moon
        decisions are taken before the planet pattern, so the pattern depends
        on how many draws the moon decision consumed.
        """

        stream = stream or self.randomness.stream_factory(seed)
        sizes = self.sizes
        size = self._draw_size(stream, sizes.planet_min, sizes.planet_max)

        if moon_policy is MoonPolicy.ALWAYS:
            has_moons = True
        else:
            has_moons = stream.next() > 0.5
            if moon_policy is MoonPolicy.ROLL_FORCED and is_distinguished(name):
                has_moons = True

        moons: List[Moon] = []
        if has_moons:
            moon_identity = name if is_distinguished(name) else None
            prefix = moon_prefix or f"moon-{identifier}"
            for index in range(math.floor(stream.next() * sizes.max_moons) + 1):
                moons.append(
                    self.make_moon(
                        self.randomness.moon_seed(seed, index),
                        parent_size=size,
                        identifier=f"{prefix}-{index}",
                        identity=moon_identity,
                        phase=phase,
                    )
                )

        pattern = self.synthesizer.synthesize(
            size, stream=stream, is_moon=False, identity=name, phase=phase
        )
        return Planet(
            identifier=identifier,
            seed=seed,
            size=size,
            pattern=pattern,
            x=x,
            y=y,
            moons=moons,
            name=name,
            origin=origin,
        )

    def make_moon(
        self,
        seed: int,
        *,
        parent_size: int,
        identifier: str,
        identity: str | None = None,
        phase: float = 0.0,
    ) -> Moon:
        stream = self.randomness.stream_factory(seed)
        sizes = self.sizes
        size = self._draw_size(stream, sizes.moon_min, sizes.moon_max)
        orbit_radius = parent_size / 2 + size + stream.next() * sizes.moon_orbit_jitter
        orbit_phase = stream.next() * math.pi * 2
        orbit_inclination = (stream.next() - 0.5) * math.pi / 3
        pattern = self.synthesizer.synthesize(
            size, stream=stream, is_moon=True, identity=identity, phase=phase
        )
        return Moon(
            identifier=identifier,
            seed=seed,
            size=size,
            pattern=pattern,
            orbit_radius=orbit_radius,
            orbit_phase=orbit_phase,
            orbit_inclination=orbit_inclination,
        )

    def make_body(
        self,
        seed_or_name: int | str,
        *,
        is_moon: bool = False,
        identity: str | None = None,
    ) -> Body:
        """Build a free-standing body from a numeric seed or a name.

        Names seed through :func:`hash_string` and double as the identity
        override unless one is given explicitly.
        """

        if isinstance(seed_or_name, str):
            if not seed_or_name.strip():
                raise ValueError("name cannot be blank")
            seed = hash_string(seed_or_name)
            identity = identity or seed_or_name
            identifier = f"{'moon' if is_moon else 'planet'}-{seed_or_name}"
        else:
            seed = int(seed_or_name)
            identifier = f"{'moon' if is_moon else 'planet'}-{seed}"
        logger.debug("building free-standing {} from seed {}", identifier, seed)
        if is_moon:
            return self.make_moon(seed, parent_size=0, identifier=identifier, identity=identity)
        return self.make_planet(
            seed,
            identifier=identifier,
            name=identity,
            moon_policy=MoonPolicy.ROLL_FORCED,
            moon_prefix=f"moon-specific-{identity}" if identity else None,
        )


__all__ = [
    "Body",
    "BodyFactory",
    "DISTINGUISHED_NAMES",
    "Moon",
    "MoonPolicy",
    "Planet",
    "is_distinguished",
]
