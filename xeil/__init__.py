"""Procedural, seed-deterministic universe of planets, moons and stars."""

from __future__ import annotations

from loguru import logger

__version__ = "0.1.0"

# Library logging stays silent until an application opts in.
logger.disable("xeil")

__all__ = ["__version__"]
