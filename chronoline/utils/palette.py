"""Marker colours per tradition.

`resolve_style` is total: any key, known or not, yields a `MarkerStyle`.
Lookup walks the given keys in order (typically entity id, then category) and
falls back to the neutral grey record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class MarkerStyle:
    primary: RGB
    secondary: RGB
    accent: RGB
    bg: RGB
    border: RGB


TRADITION_STYLES: Dict[str, MarkerStyle] = {
    "watts": MarkerStyle((139, 92, 246), (167, 139, 250), (124, 58, 237), (243, 232, 255), (221, 214, 254)),
    "absurdism": MarkerStyle((100, 116, 139), (148, 163, 184), (71, 85, 105), (248, 250, 252), (226, 232, 240)),
    "buddhism": MarkerStyle((16, 185, 129), (52, 211, 153), (5, 150, 105), (209, 250, 229), (167, 243, 208)),
    "christianity": MarkerStyle((59, 130, 246), (96, 165, 250), (37, 99, 235), (239, 246, 255), (191, 219, 254)),
    "daoism": MarkerStyle((34, 197, 94), (74, 222, 128), (22, 163, 74), (220, 252, 231), (187, 247, 208)),
    "hinduism": MarkerStyle((249, 115, 22), (251, 146, 60), (234, 88, 12), (255, 247, 237), (254, 215, 170)),
    "islam": MarkerStyle((6, 182, 212), (34, 211, 238), (8, 145, 178), (236, 254, 255), (165, 243, 252)),
    "judaism": MarkerStyle((99, 102, 241), (129, 140, 248), (79, 70, 229), (238, 242, 255), (199, 210, 254)),
    "indigenous": MarkerStyle((180, 83, 9), (217, 119, 6), (146, 64, 14), (255, 251, 235), (253, 230, 138)),
    "stoicism": MarkerStyle((107, 114, 128), (156, 163, 175), (75, 85, 99), (249, 250, 251), (229, 231, 235)),
    "confucianism": MarkerStyle((239, 68, 68), (248, 113, 113), (220, 38, 38), (254, 242, 242), (254, 202, 202)),
    "existentialism": MarkerStyle((84, 56, 202), (109, 99, 234), (76, 29, 149), (237, 233, 254), (196, 181, 253)),
}

# catalogue ids spelled differently from the style table
ALIASES: Dict[str, str] = {"taoism": "daoism"}

DEFAULT_STYLE = TRADITION_STYLES["stoicism"]


def lookup_style(key: Optional[str]) -> Optional[MarkerStyle]:
    if not key:
        return None
    key = key.lower()
    return TRADITION_STYLES.get(ALIASES.get(key, key))


def resolve_style(*keys: Optional[str]) -> MarkerStyle:
    """First style matching any of ``keys``, else the default."""
    for key in keys:
        style = lookup_style(key)
        if style is not None:
            return style
    return DEFAULT_STYLE


__all__ = ["ALIASES", "DEFAULT_STYLE", "MarkerStyle", "TRADITION_STYLES", "lookup_style", "resolve_style"]
