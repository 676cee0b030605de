"""Persisted history entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HistoryEntry(BaseModel):
    """One original/processed pair, stored with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Random base-36 identifier")
    original_image: str = Field(..., description="Encoded original image (data URI)")
    processed_image: str = Field(..., description="Encoded inpainted image (data URI)")
    timestamp: int = Field(..., description="Creation time, epoch milliseconds")
