"""Instruction template sent alongside the image to the inpainting model."""

from __future__ import annotations

from vanish.engine.region import location_label, round_half_up
from vanish.engine.state import Rect, Size

_REMOVE_TEMPLATE = """This image has an AI watermark or logo located in the {location} area (around {x}, {y}).
Please remove only this identifier and fill the area perfectly to match the background texture and content.
Keep every other pixel of the image exactly the same. Do not regenerate the whole image, only heal the specified area."""


def build_instruction(selection: Rect, container: Size) -> str:
    """Natural-language removal instruction for a selection.

    Only the coarse location and the rounded origin are communicated; the
    selection's size never reaches the model.
    """
    return _REMOVE_TEMPLATE.format(
        location=location_label(selection, container),
        x=round_half_up(selection.x),
        y=round_half_up(selection.y),
    )
