from __future__ import annotations

import json
from pathlib import Path

import pytest

from xeil.__main__ import main
from xeil.config_store import save_universe_config
from xeil.world.config import UniverseConfig, WorldMapSettings


@pytest.fixture
def small_config(tmp_path: Path) -> Path:
    config = UniverseConfig(
        map=WorldMapSettings(chunk_size=64, star_density=2**-9, planet_density=2**-11)
    )
    return save_universe_config(config, tmp_path / "universe.json")


def test_named_destination_is_rendered(small_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["Mao", "--config", str(small_config), "--moons"]) == 0
    output = capsys.readouterr().out
    assert "Mao" in output
    assert "moon-specific-Mao-0" in output
    assert "planets and" in output


def test_coordinate_destination_is_rendered(
    small_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["--at", "1000", "69", "--config", str(small_config)]) == 0
    assert "coord-1000-69" in capsys.readouterr().out


def test_missing_destination_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_blank_name_reports_an_error(small_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["   ", "--config", str(small_config)]) == 2
    assert "error" in capsys.readouterr().out


def test_json_output_carries_planet_and_scan_records(
    small_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["Mo", "--config", str(small_config), "--moons", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["planet"]["identifier"] == "planet-Mo"
    assert payload["planet"]["name"] == "Mo"
    assert payload["scan"]["identity"] == "Mo"
    assert payload["scan"]["is_moon"] is False
    assert set(payload["moons"]) == set(payload["planet"]["moons"])
    assert all(record["is_moon"] for record in payload["moons"].values())
