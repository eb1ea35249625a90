"""Rendering helpers turning generated bodies into Rich renderables."""

from __future__ import annotations

import math
from typing import Tuple

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ..world.bodies import Moon, Planet
from ..world.patterns import Pattern
from ..world.scan import ScanRecord
from ..world.stars import Star

ORBIT_SPEED = 0.0005


def rich_color(color: str) -> str:
    """Expand shorthand ``#rgb`` colours, which Rich cannot parse."""

    if len(color) == 4 and color.startswith("#"):
        return "#" + "".join(channel * 2 for channel in color[1:])
    return color.lower()


def pattern_text(pattern: Pattern) -> Text:
    """Return the pattern grid as styled text, one line per row."""

    text = Text()
    for index, row in enumerate(pattern.rows):
        if index:
            text.append("\n")
        for cell in row:
            if cell is None:
                text.append(" ")
            else:
                text.append(cell.glyph, style=rich_color(cell.color))
    return text


def moon_offset(moon: Moon, now_ms: float, orbit_speed: float = ORBIT_SPEED) -> Tuple[float, float]:
    """Offset of ``moon`` from its planet at ``now_ms``, foreshortened by inclination."""

    angle = moon.orbit_phase + now_ms * orbit_speed
    dx = moon.orbit_radius * math.cos(angle) * math.cos(moon.orbit_inclination)
    dy = moon.orbit_radius * math.sin(angle)
    return dx, dy


def star_style(star: Star) -> Style:
    """Style for a star glyph; hidden stars render invisible."""

    if not star.visible:
        return Style(color="black")
    level = round(255 * min(max(star.opacity, 0.0), 1.0))
    return Style(color=f"#{level:02x}{level:02x}{level:02x}", dim=star.opacity < 0.5)


def scan_table(record: ScanRecord, *, moons: int | None = None) -> Table:
    """Build the scan summary for one body.

    Day and year length are planet-only readings; ``moons`` adds a moon
    count row when given.
    """

    values = record.display()
    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Code", values["name"])
    table.add_row("Life form", values["life_form"])
    table.add_row("Species", values["species"])
    table.add_row("Population", values["population"])
    table.add_row("Temperature", values["temperature"])
    table.add_row("Age", values["age"])
    if not record.is_moon:
        table.add_row("Day length", values["day_length"])
        table.add_row("Year length", values["year_length"])
    if moons is not None:
        table.add_row("Moons", str(moons))
    return table


def planet_panel(planet: Planet, record: ScanRecord) -> RenderableType:
    """Planet picture above its scan table, framed in a panel."""

    body = Group(pattern_text(planet.pattern), Text(), scan_table(record, moons=len(planet.moons)))
    title = planet.name or planet.identifier
    return Panel(body, title=title, border_style="cyan", expand=False)


__all__ = [
    "ORBIT_SPEED",
    "moon_offset",
    "pattern_text",
    "planet_panel",
    "rich_color",
    "scan_table",
    "star_style",
]
