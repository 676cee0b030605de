"""Coarse positional labels for a selection within its container.

Each axis is split into equal thirds and the rectangle's origin (not its
centre or extent) is classified with strict comparisons, so a point exactly
on a one-third boundary falls into the middle band.
"""

from __future__ import annotations

import math

from vanish.engine.state import Rect, Size


def horizontal_zone(x: float, width: float) -> str:
    if x < width / 3:
        return "left"
    if x > width * 2 / 3:
        return "right"
    return "center"


def vertical_zone(y: float, height: float) -> str:
    if y < height / 3:
        return "top"
    if y > height * 2 / 3:
        return "bottom"
    return "middle"


def location_label(rect: Rect, container: Size) -> str:
    """E.g. ``"top right"`` or ``"middle center"``."""
    return f"{vertical_zone(rect.y, container.height)} {horizontal_zone(rect.x, container.width)}"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
