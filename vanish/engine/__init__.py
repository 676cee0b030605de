"""Vanish editing-session engine."""

from vanish.engine.session import TransitionError, initial_state, reduce
from vanish.engine.state import Point, ProcessingStatus, Rect, SessionState, Size, View
from vanish.engine.workflow import EditingSession, SessionRegistry

__all__ = [
    "EditingSession",
    "Point",
    "ProcessingStatus",
    "Rect",
    "SessionRegistry",
    "SessionState",
    "Size",
    "TransitionError",
    "View",
    "initial_state",
    "reduce",
]
