"""Descriptive scan records (life, population, climate) for planets and moons."""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Tuple

from .bodies import Body, Planet
from .palette import Draw
from .rng import Mulberry32, hash_string

ScanKey = Tuple[int, str | None]

PLANET_NAMES: Tuple[str, ...] = (
    "Xylos", "Aelon", "Veridian", "Obsidian", "Celestia", "Aethel", "Solara",
    "Lunara", "Titanus", "Zephyr", "Astra", "Mo", "Orion", "Lyra", " Lilith",
    "Nebula", "Terra", "Yeawn", " Xavier", "Xia", " Caleb", "Sylus", " Zayne",
    "Rafayel", "Mao", "Calypso", "Aether", " Lumine",
)

MOON_NAMES: Tuple[str, ...] = (
    "Lune", "Paimon", "Mo", "Mao", "Tsuko", "Io", "Callisto", "Triton", "Elxi",
    "Oberon", "Hae", "Elxi", "Umbriel", "Xue", "Ariel", "Rhea", "Iapetus", "Daiso",
)

CATEGORIES: Tuple[str, ...] = ("Flora", "Fauna", "Fungi", "Microbial", "Sentient")

SUB_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "Flora": (
        "Photosynthetic", "Chemosynthetic", "Carnivorous", "Arboreal", "Aquatic",
        "Crystalline", "Bioluminescent", "Parasitic", "Symbiotic", "Epiphytic",
    ),
    "Fauna": (
        "Mammalian", "Reptilian", "Avian", "Insectoid", "Aquatic", "Amphibious",
        "Arachnid", "Cephalopod", "Exoskeletal", "Endoskeletal", "Flying",
        "Burrowing", "Gliding", "Bioluminescent",
    ),
    "Fungi": (
        "Mycorrhizal", "Saprophytic", "Parasitic", "Symbiotic", "Bioluminescent",
        "Carnivorous", "Spore-based", "Hyphal", "Yeast-based",
    ),
    "Microbial": (
        "Bacterial", "Viral", "Archaeal", "Protist", "Nanobiotic", "Plasmid-based",
        "Extremophilic", "Photosynthetic", "Chemosynthetic",
    ),
    "Sentient": (
        "Bipedal", "Quadrupedal", "Avianoid", "Aquatic-Intelligent", "Arboreal",
        "Subterranean", "Aerial", "Hive-mind", "Telepathic", "Technological",
    ),
}

DESCRIPTORS: Tuple[str, ...] = (
    "Bio-luminescent", "Cryo-tolerant", "Hydrophilic", "Xenomorphic", "Symbiotic",
    "Silicate-based", "Carbon-based", "Silicon-based", "Metallic", "Crystalline",
    "Photosynthetic", "Chemosynthetic", "Radiotrophic", "Thermophilic", "Psychrophilic",
    "Acidophilic", "Alkaliphilic", "Halophilic", "Barophilic", "Electrogenic",
    "Magnetic", "Gaseous", "Plasmic", "Chitinous", "Exo-skeletal",
    "Endo-skeletal", "Amorphous", "Modular", "Colonial", "Hive-minded",
    "Telepathic", "Psionic", "Energy-based", "Phase-shifting", "Dimensional",
    "Quantum-entangled", "Time-perceptive", "Gravity-resistant", "Anti-matter", "Dark-matter",
)

PREFIXES: Tuple[str, ...] = (
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta",
    "Iota", "Kappa", "Lambda", "Mu", "Nu", "Xi", "Omicron", "Pi", "Rho",
    "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega", "Nova", "Quasar",
    "Pulsar", "Nebula", "Galaxy", "Cosmo", "Astro", "Stellar", "Lunar", "Solar",
    "Void", "Ether", "Aether", "Quantum", "Chrono", "Hyper", "Ultra", "Mega",
    "Giga", "Tera", "Peta", "Exa", "Zetta", "Yotta",
)

SUFFIXES: Tuple[str, ...] = (
    "phage", "vore", "morph", "pod", "nid", "form", "oid", "ite", "ling",
    "spore", "cell", "zyme", "plasm", "cyte", "phyll", "root", "stem",
    "leaf", "flower", "spike", "scale", "shell", "wing", "eye", "mouth",
    "limb", "tentacle", "flagella", "cillia", "spine", "fang", "claw",
    "talon", "hoof", "paw", "fin", "gill", "antenna", "sensor", "node",
)

MAO_SPECIES = "Aesthetiflora (6th Dimensional Being)"
NO_SPECIES = "None"

COORDINATE_NAMES: Dict[Tuple[int, int], str] = {
    (1000, 69): "Mao",
    (1050, 69): "Mo",
}

_COORD_PREFIX = "coord-"
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _pick(table: Tuple[str, ...], draw: Draw) -> str:
    return table[math.floor(draw() * len(table))]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def coordinate_name(
    hint: str, names: Mapping[Tuple[int, int], str] = COORDINATE_NAMES
) -> str | None:
    """Resolve ``coord-X-Y`` hints that land on a fixed coordinate override."""

    parts = hint[len(_COORD_PREFIX):].split("-")
    if len(parts) < 2:
        return None
    x, y = _leading_int(parts[0]), _leading_int(parts[1])
    if x is None or y is None:
        return None
    return names.get((x, y))


def generate_species(draw: Draw, name: str | None = None) -> str:
    """Compose a species name from the word tables."""

    if name and name.lower() == "mao":
        return MAO_SPECIES
    category = _pick(CATEGORIES, draw)
    sub_category = _pick(SUB_CATEGORIES[category], draw)
    descriptor = _pick(DESCRIPTORS, draw)
    prefix = _pick(PREFIXES, draw)
    suffix = _pick(SUFFIXES, draw)
    if draw() > 0.7:
        return f"{prefix}-{sub_category} {descriptor} {suffix}"
    return f"{descriptor} {sub_category} {category}"


@dataclass(frozen=True)
class ScanRecord:
    """Descriptive attributes reported when a body is scanned."""

    identity: str
    has_life: bool
    population: int
    temperature: int
    age: float
    day_length: float
    year_length: float
    species: str
    is_moon: bool = False

    def display(self) -> Dict[str, str]:
        """Return the human-readable strings shown on a scan panel."""

        return {
            "name": self.identity,
            "life_form": "Yes" if self.has_life else "No",
            "species": self.species,
            "population": f"{self.population:,}",
            "temperature": f"{self.temperature}°C",
            "age": f"{self.age:.2f} billion years",
            "day_length": f"{self.day_length:.1f} hours",
            "year_length": f"{self.year_length:.0f} days",
        }

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class ScanDataGenerator:
    """Derives :class:`ScanRecord` values from a seed and identity hint."""

    LIFE_THRESHOLD = 0.65
    MAX_POPULATION = 10_000_000_000

    def __init__(self, coordinate_names: Mapping[Tuple[int, int], str] | None = None) -> None:
        self.coordinate_names = dict(COORDINATE_NAMES if coordinate_names is None else coordinate_names)

    def generate(self, seed: int, *, is_moon: bool = False, identity: str | None = None) -> ScanRecord:
        draw: Draw = Mulberry32(seed).next

        has_life = draw() > self.LIFE_THRESHOLD
        population = math.floor(draw() * self.MAX_POPULATION) if has_life else 0

        temp_base = -100 + draw() * 200
        if is_moon:
            temp_base += (draw() - 0.5) * 50
        temp_variation = draw() * 50 - 25
        temperature = _round_half_up(temp_base + temp_variation)

        age = draw() * 10 + 1
        day_length = draw() * 100 + 5
        year_length = draw() * 1000 + 50

        name = self._resolve_name(draw, is_moon=is_moon, identity=identity)

        # The override climate draws are consumed but the reported temperature
        # is already fixed.
        key = name.lower()
        if key == "mao":
            has_life = True
            if population == 0:
                population = math.floor(draw() * 5_000_000_000) + 100_000_000
            draw()
        elif key == "mo":
            has_life = draw() > 0.3
            if has_life and population == 0:
                population = math.floor(draw() * 3_000_000_000) + 50_000_000
            draw()

        species = generate_species(draw, name) if has_life else NO_SPECIES
        return ScanRecord(
            identity=name,
            has_life=has_life,
            population=population,
            temperature=temperature,
            age=age,
            day_length=day_length,
            year_length=year_length,
            species=species,
            is_moon=is_moon,
        )

    @staticmethod
    def _pooled_name(draw: Draw, *, is_moon: bool) -> str:
        if is_moon:
            return f"{_pick(MOON_NAMES, draw)}-{math.floor(draw() * 9)}"
        return f"{_pick(PLANET_NAMES, draw)}-{math.floor(draw() * 999)}"

    def _resolve_name(self, draw: Draw, *, is_moon: bool, identity: str | None) -> str:
        if identity and identity.startswith(_COORD_PREFIX):
            fixed = coordinate_name(identity, self.coordinate_names)
            if fixed is not None:
                return fixed
            return self._pooled_name(draw, is_moon=is_moon)
        if identity:
            return identity
        return self._pooled_name(draw, is_moon=is_moon)


def scan_key(body: Body) -> ScanKey:
    """Return the (seed, identity hint) pair a body's scan record derives from."""

    if isinstance(body, Planet) and body.name:
        return hash_string(body.name), body.name
    return hash_string(body.identifier), None


def scan_data(body: Body, generator: ScanDataGenerator | None = None) -> ScanRecord:
    """Return the cached scan record of ``body``, regenerating on key changes."""

    key = scan_key(body)
    cached = body.scan_cache
    if cached is not None and cached[0] == key:
        return cached[1]
    seed, identity = key
    record = (generator or ScanDataGenerator()).generate(seed, is_moon=body.is_moon, identity=identity)
    body.scan_cache = (key, record)
    return record


def scan_system(
    planet: Planet, generator: ScanDataGenerator | None = None
) -> Mapping[str, ScanRecord]:
    """Scan a planet and all of its moons, keyed by body identifier."""

    records = {planet.identifier: scan_data(planet, generator)}
    for moon in planet.moons:
        records[moon.identifier] = scan_data(moon, generator)
    return records


__all__ = [
    "COORDINATE_NAMES",
    "MAO_SPECIES",
    "MOON_NAMES",
    "PLANET_NAMES",
    "ScanDataGenerator",
    "ScanKey",
    "ScanRecord",
    "coordinate_name",
    "generate_species",
    "scan_data",
    "scan_key",
    "scan_system",
]
