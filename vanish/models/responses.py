"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vanish import __version__
from vanish.engine.session import can_process
from vanish.engine.state import SessionState, View
from vanish.models.history import HistoryEntry


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    model: str = ""


class RectModel(BaseModel):
    x: float
    y: float
    width: float
    height: float


class SizeModel(BaseModel):
    width: float
    height: float


class HistoryResponse(BaseModel):
    entries: list[HistoryEntry] = Field(default_factory=list)


class SessionResponse(BaseModel):
    """View model for the presentation shell."""

    id: str
    view: View
    status: str
    original_image: str | None = None
    processed_image: str | None = None
    selection: RectModel | None = None
    container: SizeModel | None = None
    dragging: bool = False
    can_process: bool = False
    busy: bool = False
    error: str | None = None
    show_history: bool = False
    history: list[HistoryEntry] = Field(default_factory=list)

    @classmethod
    def from_state(cls, session_id: str, state: SessionState) -> SessionResponse:
        sel = state.selection
        box = state.container
        return cls(
            id=session_id,
            view=state.view,
            status=state.status.value,
            original_image=state.original_image,
            processed_image=state.processed_image,
            selection=RectModel(x=sel.x, y=sel.y, width=sel.width, height=sel.height) if sel else None,
            container=SizeModel(width=box.width, height=box.height) if box else None,
            dragging=state.dragging,
            can_process=can_process(state),
            busy=state.busy,
            error=state.error,
            show_history=state.view == View.NO_IMAGE and bool(state.history),
            history=list(state.history),
        )
