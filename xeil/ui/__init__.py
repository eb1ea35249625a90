"""Rich-based presentation helpers for generated bodies."""

from .render import moon_offset, pattern_text, planet_panel, scan_table, star_style

__all__ = ["moon_offset", "pattern_text", "planet_panel", "scan_table", "star_style"]
