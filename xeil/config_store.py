"""Loading and saving of the universe configuration.

The configuration lives in the per-user configuration directory reported by
``platformdirs.user_config_dir``, falling back to a relative ``./config``
folder if that directory cannot be created.  Writes go through a temporary
file in the same directory which then replaces the target, so a crash never
leaves a half-written file behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from loguru import logger
from platformdirs import user_config_dir
from pydantic import ValidationError

from .world.config import UniverseConfig

CONFIG_FILENAME = "universe.json"


def _compute_config_path() -> Path:
    """Return the path used to persist the universe configuration."""

    try:
        base = Path(user_config_dir("xeil"))
        base.mkdir(parents=True, exist_ok=True)
        return base / CONFIG_FILENAME
    except OSError:
        fallback_dir = Path("config")
        fallback_dir.mkdir(parents=True, exist_ok=True)
        return fallback_dir / CONFIG_FILENAME


CONFIG_PATH: Path = _compute_config_path()


def load_universe_config(path: Path | None = None) -> UniverseConfig:
    """Load the configuration at ``path``, or defaults when none is stored.

    A file that cannot be parsed or validated is reported and ignored, so
    a damaged file never prevents the universe from being generated.
    """

    path = path or CONFIG_PATH
    if not path.exists():
        return UniverseConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return UniverseConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError, TypeError) as exc:
        logger.warning("ignoring unreadable configuration at {}: {}", path, exc)
        return UniverseConfig()


def save_universe_config(config: UniverseConfig, path: Path | None = None) -> Path:
    """Atomically write ``config`` to ``path`` and return the path written."""

    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(config.model_dump(mode="json"), indent=2)
    handle = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=path.name, suffix=".tmp", delete=False
    )
    try:
        with handle:
            handle.write(payload)
        os.replace(handle.name, path)
    except OSError:
        Path(handle.name).unlink(missing_ok=True)
        raise
    logger.debug("saved universe configuration to {}", path)
    return path


__all__ = ["CONFIG_PATH", "load_universe_config", "save_universe_config"]
