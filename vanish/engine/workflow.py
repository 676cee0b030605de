"""EditingSession — runs the side effects around the session reducer.

The reducer stays pure; this class reads uploads, calls the inpainter,
persists history and saves downloads, dispatching actions as it goes.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from vanish.engine.session import (
    Action,
    HistoryReplaced,
    ImageLoaded,
    ProcessingFailed,
    ProcessingStarted,
    ProcessingSucceeded,
    TransitionError,
    UploadFailed,
    UploadStarted,
    initial_state,
    reduce,
)
from vanish.engine.state import SessionState, View
from vanish.history.store import HistoryStore, make_entry, now_ms
from vanish.llm.client import Inpainter, InpaintingError, remove_watermark
from vanish.utils.files import FileSaver, ImageSource, save_encoded

logger = logging.getLogger(__name__)

_GENERIC_FAILURE = "Failed to process image. Please try again."


class EditingSession:
    def __init__(
        self,
        history: HistoryStore,
        session_id: str | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex
        self.history = history
        self.clock = clock
        self.state: SessionState = initial_state(history.entries())

    def dispatch(self, action: Action) -> SessionState:
        self.state = reduce(self.state, action)
        return self.state

    async def upload(self, source: ImageSource) -> SessionState:
        self.dispatch(UploadStarted())
        try:
            image = await source.read()
        except Exception as e:
            logger.warning("Session %s: upload failed: %s", self.id, e)
            self.dispatch(UploadFailed(message=f"Could not read the image: {e}"))
            raise
        logger.info("Session %s: image loaded (%d chars)", self.id, len(image))
        return self.dispatch(ImageLoaded(image=image))

    def _is_current(self, request: int) -> bool:
        return self.state.busy and self.state.request == request

    async def process(self, inpainter: Inpainter) -> SessionState:
        """Send the current selection off for inpainting.

        Failures leave the session editable with the error message set.
        If the session was reset while the request ran, its outcome is
        dropped; a late success is still recorded in history.
        """
        state = self.dispatch(ProcessingStarted())
        request = state.request

        try:
            result = await remove_watermark(
                inpainter,
                state.original_image,
                state.selection,
                state.container,
            )
        except InpaintingError as e:
            logger.warning("Session %s: processing failed: %s", self.id, e)
            if not self._is_current(request):
                return self.state
            return self.dispatch(ProcessingFailed(message=str(e) or _GENERIC_FAILURE))
        except Exception:
            # Unexpected bug: unblock the session, then let it propagate.
            if self._is_current(request):
                self.dispatch(ProcessingFailed(message=_GENERIC_FAILURE))
            raise

        entry = make_entry(state.original_image, result, timestamp=self.clock())
        stored = self.history.append(entry)
        if not self._is_current(request):
            logger.info("Session %s: request %d finished after reset, result not shown", self.id, request)
            return self.dispatch(HistoryReplaced(entries=stored))

        self.dispatch(ProcessingSucceeded(entry=entry))
        logger.info("Session %s: processing completed (entry %s)", self.id, entry.id)
        return self.dispatch(HistoryReplaced(entries=stored))

    def download(self, saver: FileSaver) -> object:
        """Save the processed image; does not change the session state."""
        if self.state.view != View.RESULT or self.state.processed_image is None:
            raise TransitionError("No processed image to download")
        return save_encoded(saver, self.state.processed_image, self.clock())


class SessionRegistry:
    """In-memory sessions keyed by id."""

    def __init__(self) -> None:
        self._sessions: dict[str, EditingSession] = {}

    def create(self, history: HistoryStore) -> EditingSession:
        session = EditingSession(history)
        self._sessions[session.id] = session
        logger.debug("Created session %s", session.id)
        return session

    def get(self, session_id: str) -> EditingSession | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
