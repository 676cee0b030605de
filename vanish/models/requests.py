"""API request models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ContainerRequest(BaseModel):
    width: float = Field(..., gt=0, description="Displayed image container width (px)")
    height: float = Field(..., gt=0, description="Displayed image container height (px)")


class PointerRequest(BaseModel):
    kind: Literal["down", "move", "up", "leave"] = Field(..., description="Pointer event type")
    x: float = Field(0.0, description="Pointer x, relative to the container's left edge")
    y: float = Field(0.0, description="Pointer y, relative to the container's top edge")
    container: ContainerRequest | None = Field(
        default=None,
        description="Optional container size at the time of the event",
    )


class PresetCorner(str, Enum):
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"
