"""Selection geometry: drag gestures and corner presets.

All coordinates are container pixels relative to its top-left corner. A drag
is never clamped to the image bounds.
"""

from __future__ import annotations

from typing import Literal

from vanish.engine.state import Point, Rect, Size

Corner = Literal["tl", "tr", "bl", "br"]

CORNERS: tuple[Corner, ...] = ("tl", "tr", "bl", "br")

PRESET_BOX_SIZE = 100
PRESET_MARGIN = 20

# Narrower selections cannot be processed.
MIN_SELECTION_WIDTH = 5


def start_rect(origin: Point) -> Rect:
    """Zero-size rectangle opened by pointer-down."""
    return Rect(x=origin.x, y=origin.y, width=0.0, height=0.0)


def drag_rect(origin: Point, current: Point) -> Rect:
    """Normalized bounding box between the drag origin and the pointer."""
    dx = current.x - origin.x
    dy = current.y - origin.y
    return Rect(
        x=current.x if dx < 0 else origin.x,
        y=current.y if dy < 0 else origin.y,
        width=abs(dx),
        height=abs(dy),
    )


def preset_rect(corner: Corner, container: Size) -> Rect:
    """Fixed 100x100 box inset from the given corner of the container."""
    far_x = container.width - PRESET_BOX_SIZE - PRESET_MARGIN
    far_y = container.height - PRESET_BOX_SIZE - PRESET_MARGIN
    if corner == "tl":
        x, y = PRESET_MARGIN, PRESET_MARGIN
    elif corner == "tr":
        x, y = far_x, PRESET_MARGIN
    elif corner == "bl":
        x, y = PRESET_MARGIN, far_y
    elif corner == "br":
        x, y = far_x, far_y
    else:
        raise ValueError(f"Unknown corner: {corner!r}")
    return Rect(x=float(x), y=float(y), width=float(PRESET_BOX_SIZE), height=float(PRESET_BOX_SIZE))


def is_usable(rect: Rect | None) -> bool:
    return rect is not None and rect.width >= MIN_SELECTION_WIDTH
