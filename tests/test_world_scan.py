from __future__ import annotations

import re

import pytest

from xeil.world.bodies import BodyFactory
from xeil.world.rng import hash_string
from xeil.world.scan import (
    MAO_SPECIES,
    MOON_NAMES,
    NO_SPECIES,
    PLANET_NAMES,
    ScanDataGenerator,
    coordinate_name,
    scan_data,
    scan_key,
    scan_system,
)

_POOLED = re.compile(r"^(?P<base> ?[A-Za-z]+)-(?P<number>\d+)$")


def test_mao_always_has_life_and_its_own_species() -> None:
    generator = ScanDataGenerator()
    for seed in (hash_string("Mao"), 1, 2, 3, 99999):
        record = generator.generate(seed, identity="Mao")
        assert record.identity == "Mao"
        assert record.has_life
        assert record.population > 0
        assert record.species == MAO_SPECIES


def test_lifeless_mo_keeps_its_drawn_population() -> None:
    record = ScanDataGenerator().generate(2, identity="Mo")
    assert not record.has_life
    assert record.population == 2_706_222_534
    assert record.species == NO_SPECIES
    assert record.temperature == -17
    display = record.display()
    assert display["population"] == "2,706,222,534"
    assert display["age"] == "10.33 billion years"
    assert display["day_length"] == "18.2 hours"
    assert display["year_length"] == "119 days"


def test_mo_temperature_ignores_the_override_climate() -> None:
    record = ScanDataGenerator().generate(2498, identity="Mo")
    assert record.population == 1_893_587_966
    assert record.temperature == 74
    display = record.display()
    assert display["age"] == "6.86 billion years"
    assert display["day_length"] == "93.0 hours"
    assert display["year_length"] == "736 days"


def test_tile_planet_scan_is_reproducible() -> None:
    record = ScanDataGenerator().generate(hash_string("planet-0-0-0"))
    assert record.identity == "Aelon-987"
    assert not record.has_life
    assert record.population == 0
    assert record.temperature == -44
    display = record.display()
    assert display["age"] == "5.92 billion years"
    assert display["day_length"] == "101.9 hours"
    assert display["year_length"] == "607 days"


def test_pooled_planet_names_keep_their_leading_space() -> None:
    assert " Lilith" in PLANET_NAMES and " Lumine" in PLANET_NAMES
    identities = {ScanDataGenerator().generate(seed).identity for seed in range(400)}
    assert all(_POOLED.match(identity) for identity in identities)


def test_lifeless_bodies_report_no_species() -> None:
    generator = ScanDataGenerator()
    for seed in range(200):
        record = generator.generate(seed)
        if not record.has_life:
            assert record.population == 0
            assert record.species == NO_SPECIES


def test_pooled_names_come_from_the_name_tables() -> None:
    generator = ScanDataGenerator()
    planet = _POOLED.match(generator.generate(4242).identity)
    moon = _POOLED.match(generator.generate(4242, is_moon=True).identity)
    assert planet and planet["base"] in PLANET_NAMES and int(planet["number"]) < 999
    assert moon and moon["base"] in MOON_NAMES and int(moon["number"]) < 9


def test_scan_generation_is_deterministic() -> None:
    generator = ScanDataGenerator()
    assert generator.generate(31337, is_moon=True) == generator.generate(31337, is_moon=True)


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("coord-1000-69", "Mao"),
        ("coord-1050-69", "Mo"),
        ("coord-1050.75-69.2", "Mo"),
        ("coord-12-34", None),
        ("coord-abc", None),
    ],
)
def test_coordinate_names(hint: str, expected: str | None) -> None:
    assert coordinate_name(hint) == expected


def test_coordinate_hints_resolve_through_the_generator() -> None:
    generator = ScanDataGenerator({(5, 6): "Custom"})
    assert generator.generate(1, identity="coord-5-6").identity == "Custom"
    fallback = generator.generate(1, identity="coord-1000-69").identity
    assert _POOLED.match(fallback)


def test_scan_data_is_cached_until_the_key_changes() -> None:
    planet = BodyFactory().make_planet(555, identifier="planet-0-0-1")
    assert scan_key(planet) == (hash_string("planet-0-0-1"), None)

    first = scan_data(planet)
    assert scan_data(planet) is first

    planet.name = "Mao"
    renamed = scan_data(planet)
    assert renamed is not first
    assert renamed.identity == "Mao"


def test_scan_system_covers_planet_and_moons() -> None:
    planet = BodyFactory().make_body("Mao")
    records = scan_system(planet)
    assert set(records) == {planet.identifier, *(moon.identifier for moon in planet.moons)}
    assert all(records[moon.identifier].is_moon for moon in planet.moons)


def test_display_formats_readings() -> None:
    record = ScanDataGenerator().generate(hash_string("Mao"), identity="Mao")
    display = record.display()
    assert display["life_form"] == "Yes"
    assert display["temperature"].endswith("°C")
    assert display["age"].endswith("billion years")
