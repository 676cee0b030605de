"""SessionState — the single immutable state object for one editing session.

Every change goes through ``vanish.engine.session.reduce``; nothing mutates a
state in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from vanish.models.history import HistoryEntry


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class View(str, Enum):
    """Which screen the presentation shell should render."""

    NO_IMAGE = "no_image"
    EDITING = "editing"
    PROCESSING = "processing"
    RESULT = "result"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned selection; origin is always the visual top-left corner."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class SessionState:
    view: View = View.NO_IMAGE
    status: ProcessingStatus = ProcessingStatus.IDLE
    # Encoded images (data URIs)
    original_image: str | None = None
    processed_image: str | None = None
    # Displayed container dimensions, reported by the shell
    container: Size | None = None
    # Committed (or in-progress) selection
    selection: Rect | None = None
    # Set while a drag gesture is active
    drag_origin: Point | None = None
    error: str | None = None
    # Bumped by every ProcessingStarted; identifies the request in flight
    request: int = 0
    # Most-recent first, capped
    history: tuple[HistoryEntry, ...] = ()

    @property
    def dragging(self) -> bool:
        return self.drag_origin is not None

    @property
    def busy(self) -> bool:
        return self.status == ProcessingStatus.PROCESSING
