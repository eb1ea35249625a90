from __future__ import annotations

import pytest

from xeil.world.bodies import BodyFactory, Moon, MoonPolicy, Planet, is_distinguished
from xeil.world.config import BodySizeSettings
from xeil.world.rng import hash_string


def test_planet_generation_is_reproducible() -> None:
    factory = BodyFactory()
    first = factory.make_planet(123456, identifier="planet-a")
    second = factory.make_planet(123456, identifier="planet-a")

    assert first.size == second.size
    assert first.pattern == second.pattern
    assert [moon.identifier for moon in first.moons] == [moon.identifier for moon in second.moons]
    assert [moon.orbit_radius for moon in first.moons] == [moon.orbit_radius for moon in second.moons]


def test_generated_sizes_and_moons_respect_configured_ranges() -> None:
    sizes = BodySizeSettings()
    factory = BodyFactory(sizes)
    for seed in range(60):
        planet = factory.make_planet(seed, identifier=f"planet-{seed}")
        assert sizes.planet_min <= planet.size < sizes.planet_max
        assert len(planet.moons) <= sizes.max_moons
        for moon in planet.moons:
            assert isinstance(moon, Moon)
            assert moon.is_moon
            assert sizes.moon_min <= moon.size < sizes.moon_max
            assert moon.orbit_radius >= planet.size / 2 + moon.size
            assert moon.orbit_radius < planet.size / 2 + moon.size + sizes.moon_orbit_jitter


def test_moon_identifiers_use_prefix_and_index() -> None:
    planet = BodyFactory().make_planet(
        hash_string("Mao"),
        identifier="planet-Mao",
        name="Mao",
        moon_policy=MoonPolicy.ALWAYS,
        moon_prefix="moon-special-Mao",
    )
    assert planet.moons
    assert [moon.identifier for moon in planet.moons] == [
        f"moon-special-Mao-{index}" for index in range(len(planet.moons))
    ]
    assert planet.moons[0].seed == hash_string(f"{planet.seed}-0")


def test_moons_are_independent_of_the_planet_stream() -> None:
    factory = BodyFactory()
    moon = factory.make_moon(hash_string("42-0"), parent_size=20, identifier="moon-x-0")
    again = factory.make_moon(hash_string("42-0"), parent_size=20, identifier="moon-x-0")
    assert moon.pattern == again.pattern
    assert moon.orbit_phase == again.orbit_phase


def test_roll_forced_always_gives_distinguished_bodies_moons() -> None:
    factory = BodyFactory()
    for name in ("Mao", "mo", "MO"):
        planet = factory.make_body(name)
        assert isinstance(planet, Planet)
        assert planet.moons, name
        assert planet.moons[0].identifier == f"moon-specific-{name}-0"


def test_make_body_from_name_carries_identity() -> None:
    planet = BodyFactory().make_body("Mo")
    assert isinstance(planet, Planet)
    assert planet.name == "Mo"
    assert planet.seed == hash_string("Mo")
    assert planet.pattern.has_rings
    assert planet.pattern.ring_tilt == pytest.approx(0.4)


def test_make_body_accepts_numeric_seeds_and_moons() -> None:
    factory = BodyFactory()
    planet = factory.make_body(77)
    moon = factory.make_body(77, is_moon=True)
    assert planet.identifier == "planet-77"
    assert moon.identifier == "moon-77"
    assert moon.is_moon and not planet.is_moon


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_names_are_rejected(name: str) -> None:
    with pytest.raises(ValueError):
        BodyFactory().make_body(name)


def test_distinguished_names_ignore_case() -> None:
    assert is_distinguished("MAO")
    assert is_distinguished("mo")
    assert not is_distinguished("Moo")
    assert not is_distinguished(None)


def test_planet_to_dict_lists_moons() -> None:
    planet = BodyFactory().make_body("Mao")
    payload = planet.to_dict()
    assert payload["name"] == "Mao"
    assert payload["moons"] == [moon.identifier for moon in planet.moons]
