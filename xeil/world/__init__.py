"""Universe generation domain models and utilities."""

from .bodies import Body, BodyFactory, Moon, MoonPolicy, Planet, is_distinguished
from .config import (
    BodySizeSettings,
    RevisitPolicy,
    SpecialLocation,
    StarSettings,
    UniverseConfig,
    WorldMapSettings,
)
from .map import ActiveSet, ChunkManager, Destination, TileKey
from .patterns import Pattern, PatternSynthesizer, Texture
from .rng import Mulberry32, WorldRandomness, hash_string
from .scan import ScanDataGenerator, ScanRecord, scan_data, scan_system
from .specials import SpecialBodyRegistry
from .stars import Star, StarBlinker

__all__ = [
    "ActiveSet",
    "Body",
    "BodyFactory",
    "BodySizeSettings",
    "ChunkManager",
    "Destination",
    "is_distinguished",
    "hash_string",
    "Moon",
    "MoonPolicy",
    "Mulberry32",
    "Pattern",
    "PatternSynthesizer",
    "Planet",
    "RevisitPolicy",
    "ScanDataGenerator",
    "ScanRecord",
    "scan_data",
    "scan_system",
    "SpecialBodyRegistry",
    "SpecialLocation",
    "Star",
    "StarBlinker",
    "StarSettings",
    "Texture",
    "TileKey",
    "UniverseConfig",
    "WorldMapSettings",
    "WorldRandomness",
]
