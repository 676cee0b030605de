"""Session reducer — the only place a SessionState changes.

    NO_IMAGE -> EDITING -> PROCESSING -> RESULT
                   ^            |
                   +-- error ---+

Gestures that arrive in the wrong state are ignored (the shell would have
disabled them); commands that are not valid raise ``TransitionError``.
Reset is valid everywhere, including mid-request.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from vanish.engine import selection as geometry
from vanish.engine.state import Point, ProcessingStatus, SessionState, Size, View
from vanish.history.store import prepend_capped
from vanish.models.history import HistoryEntry


class TransitionError(Exception):
    """Command not allowed in the current session state."""


# --- Actions -----------------------------------------------------------------


@dataclass(frozen=True)
class UploadStarted:
    pass


@dataclass(frozen=True)
class ImageLoaded:
    image: str


@dataclass(frozen=True)
class UploadFailed:
    message: str


@dataclass(frozen=True)
class ContainerResized:
    size: Size


@dataclass(frozen=True)
class PointerDown:
    point: Point


@dataclass(frozen=True)
class PointerMove:
    point: Point


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class PresetChosen:
    corner: geometry.Corner


@dataclass(frozen=True)
class ProcessingStarted:
    pass


@dataclass(frozen=True)
class ProcessingSucceeded:
    entry: HistoryEntry


@dataclass(frozen=True)
class ProcessingFailed:
    message: str


@dataclass(frozen=True)
class TryAgain:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class HistoryOpened:
    entry: HistoryEntry


@dataclass(frozen=True)
class HistoryReplaced:
    """Sync with the persisted history (e.g. after another session wrote it)."""

    entries: tuple[HistoryEntry, ...]


Action = Union[
    UploadStarted,
    ImageLoaded,
    UploadFailed,
    ContainerResized,
    PointerDown,
    PointerMove,
    PointerUp,
    PointerLeave,
    PresetChosen,
    ProcessingStarted,
    ProcessingSucceeded,
    ProcessingFailed,
    TryAgain,
    Reset,
    HistoryOpened,
    HistoryReplaced,
]


def initial_state(history: tuple[HistoryEntry, ...] = ()) -> SessionState:
    return SessionState(history=tuple(history))


def can_process(state: SessionState) -> bool:
    return (
        state.view == View.EDITING
        and not state.busy
        and state.container is not None
        and geometry.is_usable(state.selection)
    )


def _accepts_gestures(state: SessionState) -> bool:
    return state.view == View.EDITING and not state.busy


def reduce(state: SessionState, action: Action) -> SessionState:
    """Apply one action and return the next state."""
    if isinstance(action, UploadStarted):
        if state.busy:
            raise TransitionError("Cannot upload while processing")
        return replace(state, status=ProcessingStatus.UPLOADING, error=None)

    if isinstance(action, ImageLoaded):
        if state.busy:
            raise TransitionError("Cannot upload while processing")
        return replace(
            state,
            view=View.EDITING,
            status=ProcessingStatus.IDLE,
            original_image=action.image,
            processed_image=None,
            selection=None,
            drag_origin=None,
            error=None,
        )

    if isinstance(action, UploadFailed):
        # View unchanged; whatever was on screen stays usable
        return replace(state, status=ProcessingStatus.ERROR, error=action.message)

    if isinstance(action, ContainerResized):
        return replace(state, container=action.size)

    if isinstance(action, PointerDown):
        if not _accepts_gestures(state):
            return state
        return replace(
            state,
            drag_origin=action.point,
            selection=geometry.start_rect(action.point),
        )

    if isinstance(action, PointerMove):
        if not _accepts_gestures(state) or state.drag_origin is None:
            return state
        return replace(state, selection=geometry.drag_rect(state.drag_origin, action.point))

    if isinstance(action, (PointerUp, PointerLeave)):
        if state.drag_origin is None:
            return state
        return replace(state, drag_origin=None)

    if isinstance(action, PresetChosen):
        if not _accepts_gestures(state):
            return state
        if state.container is None:
            raise TransitionError("Container size is unknown; report it before choosing a preset")
        return replace(
            state,
            selection=geometry.preset_rect(action.corner, state.container),
            drag_origin=None,
        )

    if isinstance(action, ProcessingStarted):
        if state.busy:
            raise TransitionError("A request is already in flight")
        if not can_process(state):
            raise TransitionError("Select a region at least %d pixels wide first" % geometry.MIN_SELECTION_WIDTH)
        return replace(
            state,
            view=View.PROCESSING,
            status=ProcessingStatus.PROCESSING,
            drag_origin=None,
            error=None,
            request=state.request + 1,
        )

    if isinstance(action, ProcessingSucceeded):
        if not state.busy:
            raise TransitionError("No request in flight")
        return replace(
            state,
            view=View.RESULT,
            status=ProcessingStatus.COMPLETED,
            processed_image=action.entry.processed_image,
            history=prepend_capped(state.history, action.entry),
        )

    if isinstance(action, ProcessingFailed):
        if not state.busy:
            raise TransitionError("No request in flight")
        return replace(
            state,
            view=View.EDITING,
            status=ProcessingStatus.ERROR,
            error=action.message,
        )

    if isinstance(action, TryAgain):
        if state.view != View.RESULT:
            raise TransitionError("Nothing to try again")
        return replace(
            state,
            view=View.EDITING,
            status=ProcessingStatus.IDLE,
            processed_image=None,
            selection=None,
            drag_origin=None,
            error=None,
        )

    if isinstance(action, Reset):
        # Allowed mid-request: the counter survives so a late outcome is stale
        return replace(initial_state(state.history), request=state.request)

    if isinstance(action, HistoryOpened):
        if state.busy:
            raise TransitionError("Cannot open history while processing")
        return replace(
            state,
            view=View.RESULT,
            status=ProcessingStatus.COMPLETED,
            original_image=action.entry.original_image,
            processed_image=action.entry.processed_image,
            selection=None,
            drag_origin=None,
            error=None,
        )

    if isinstance(action, HistoryReplaced):
        return replace(state, history=tuple(action.entries))

    raise TypeError(f"Unknown action: {action!r}")
