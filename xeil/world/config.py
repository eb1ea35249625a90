"""Validated configuration models for universe generation."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .rng import WorldRandomness


class RevisitPolicy(str, Enum):
    """What happens to a tile once its content has left the active window."""

    EMPTY = "empty"
    REGENERATE = "regenerate"


def format_coordinate(value: float) -> str:
    """Spell ``value`` with its shortest round-tripping digits.

    Integral values lose their fraction and magnitudes outside
    ``[1e-6, 1e21)`` switch to exponent form, e.g. ``1e-7`` and ``1e+21``.
    """

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    count = len(digits)
    point = exponent + count
    if count <= point <= 21:
        body = digits + "0" * (point - count)
    elif 0 < point <= 21:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{point - 1:+d}"
    return sign + body


class WorldMapSettings(BaseModel):
    """Spatial partitioning and density parameters."""

    model_config = ConfigDict(extra="forbid")

    chunk_size: int = Field(default=1000, ge=1)
    star_density: float = Field(default=0.005, ge=0.0)
    planet_density: float = Field(default=0.00004, ge=0.0)
    render_distance_chunks: float = Field(default=2.0, gt=0.0)
    special_radius_chunks: float = Field(default=2.0, ge=0.0)
    revisit_policy: RevisitPolicy = Field(default=RevisitPolicy.EMPTY)

    @property
    def render_distance(self) -> float:
        """Maximum per-axis offset at which entities stay active."""

        return self.chunk_size * self.render_distance_chunks

    @property
    def special_radius(self) -> float:
        """Per-axis distance at which special locations are generated."""

        return self.chunk_size * self.special_radius_chunks

    @property
    def stars_per_chunk(self) -> int:
        return math.ceil(self.chunk_size * self.chunk_size * self.star_density)

    @property
    def planets_per_chunk(self) -> int:
        return math.ceil(self.chunk_size * self.chunk_size * self.planet_density)


class BodySizeSettings(BaseModel):
    """Grid diameters of generated bodies; maxima are exclusive."""

    model_config = ConfigDict(extra="forbid")

    planet_min: int = Field(default=15, ge=1)
    planet_max: int = Field(default=22, ge=1)
    moon_min: int = Field(default=2, ge=1)
    moon_max: int = Field(default=10, ge=1)
    max_moons: int = Field(default=6, ge=1)
    moon_orbit_jitter: float = Field(default=20.0, ge=0.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "BodySizeSettings":
        if self.planet_min >= self.planet_max:
            raise ValueError("planet_min must be smaller than planet_max")
        if self.moon_min >= self.moon_max:
            raise ValueError("moon_min must be smaller than moon_max")
        return self


class StarSettings(BaseModel):
    """Star field and blink scheduling parameters (milliseconds)."""

    model_config = ConfigDict(extra="forbid")

    blink_check_interval: float = Field(default=100.0, gt=0.0)
    min_blink_interval: float = Field(default=2000.0, ge=0.0)
    blink_interval_spread: float = Field(default=5000.0, ge=0.0)
    special_ring_count: int = Field(default=50, ge=0)
    special_ring_inner: float = Field(default=50.0, ge=0.0)
    special_ring_width: float = Field(default=100.0, ge=0.0)


class SpecialLocation(BaseModel):
    """A fixed world position that always resolves to the same named body."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    x: float
    y: float

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("special location name cannot be blank")
        return stripped

    @property
    def key(self) -> str:
        return f"{format_coordinate(self.x)},{format_coordinate(self.y)}"


def _default_specials() -> list[SpecialLocation]:
    return [
        SpecialLocation(name="Mao", x=1000, y=69),
        SpecialLocation(name="Mo", x=1050, y=69),
    ]


class UniverseConfig(BaseModel):
    """Top-level configuration payload describing a universe."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Xeil")
    description: str | None = Field(default=None)
    map: WorldMapSettings = Field(default_factory=WorldMapSettings)
    bodies: BodySizeSettings = Field(default_factory=BodySizeSettings)
    stars: StarSettings = Field(default_factory=StarSettings)
    specials: list[SpecialLocation] = Field(default_factory=_default_specials)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _ensure_metadata_mapping(cls, value: object) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise TypeError("metadata must be a mapping")
        return {str(key): item for key, item in value.items()}

    @field_validator("specials")
    @classmethod
    def _unique_specials(cls, value: list[SpecialLocation]) -> list[SpecialLocation]:
        names = [location.name.lower() for location in value]
        if len(names) != len(set(names)):
            raise ValueError("special location names must be unique")
        return value

    def randomness_factory(self) -> WorldRandomness:
        """Return a new :class:`~xeil.world.rng.WorldRandomness` instance."""

        from .rng import WorldRandomness

        return WorldRandomness()


__all__ = [
    "BodySizeSettings",
    "RevisitPolicy",
    "SpecialLocation",
    "StarSettings",
    "UniverseConfig",
    "WorldMapSettings",
    "format_coordinate",
]
