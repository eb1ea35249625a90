from __future__ import annotations

import numpy as np
import pytest

from xeil.world.rng import Mulberry32, WorldRandomness, hash_string


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", 0),
        ("a", 97),
        ("Mo", 2498),
        ("Mao", 77115),
        ("0,0", 47540),
        ("3,-2", 1563070),
        ("0,0,0", 45687352),
        ("hello world", 1794106052),
        ("planet-0-0-0", 1222866367),
    ],
)
def test_hash_string_matches_known_values(value: str, expected: int) -> None:
    assert hash_string(value) == expected


def test_hash_string_accepts_lone_surrogates() -> None:
    assert hash_string("\ud83d") == 55357
    assert hash_string("\U0001f600") == 1772899


def test_hash_string_is_never_negative() -> None:
    for value in ("zzzzzzzzzzzzzzzz", "the quick brown fox", "Xylos-998", "ünïcødé"):
        assert hash_string(value) >= 0


@pytest.mark.parametrize(
    ("seed", "expected"),
    [
        (0, [4269495834, 2930091563, 4124538179]),
        (42, [65940902, 1526494424, 2749521998]),
    ],
)
def test_mulberry32_golden_sequence(seed: int, expected: list[int]) -> None:
    stream = Mulberry32(seed)
    assert [stream.next_raw() for _ in expected] == expected

    floats = Mulberry32(seed)
    assert [floats.next() for _ in expected] == [value / 2**32 for value in expected]


def test_mulberry32_draws_stay_in_unit_interval() -> None:
    draws = Mulberry32(1234).take(2000)
    assert draws.shape == (2000,)
    assert float(draws.min()) >= 0.0
    assert float(draws.max()) < 1.0


def test_take_matches_sequential_draws() -> None:
    sequential = Mulberry32(7)
    expected = [sequential.next() for _ in range(12)]
    assert np.array_equal(Mulberry32(7).take(12), np.array(expected))
    with pytest.raises(ValueError):
        Mulberry32(7).take(-1)


def test_world_randomness_derives_named_seeds() -> None:
    randomness = WorldRandomness()
    assert randomness.seed("Mao") == hash_string("Mao")
    assert randomness.planet_seed(0, 0, 0) == hash_string("0,0,0")
    assert randomness.moon_seed(77115, 2) == hash_string("77115-2")
    assert randomness.tile_stream(3, -2).state == hash_string("3,-2")
    assert randomness.stream("a").next() == Mulberry32(97).next()
    assert randomness.planet_stream(0, 0, 0).state == hash_string("0,0,0")
