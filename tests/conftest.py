"""Shared test fixtures."""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from vanish.engine.workflow import SessionRegistry
from vanish.history.kv import MemoryKeyValueStore
from vanish.history.store import HistoryStore
from vanish.llm.client import InpaintingError


# Bytes are never decoded as pixels, so any payload will do.
ORIGINAL_BYTES = b"\x89PNG\r\n\x1a\noriginal-image"
RESULT_BYTES = b"\x89PNG\r\n\x1a\ninpainted-image"

ORIGINAL_URI = "data:image/png;base64," + base64.b64encode(ORIGINAL_BYTES).decode()
RESULT_URI = "data:image/png;base64," + base64.b64encode(RESULT_BYTES).decode()


class StubInpainter:
    """Records calls; returns a canned image or raises a canned error."""

    def __init__(self, result: str = RESULT_URI, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def inpaint(self, image: str, instruction: str) -> str:
        self.calls.append((image, instruction))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def stub_inpainter() -> StubInpainter:
    return StubInpainter()


@pytest.fixture
def failing_inpainter() -> StubInpainter:
    return StubInpainter(error=InpaintingError("No image was returned by the AI."))


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def history_store(kv: MemoryKeyValueStore) -> HistoryStore:
    return HistoryStore(kv)


@pytest.fixture
def api(stub_inpainter: StubInpainter, history_store: HistoryStore):
    """TestClient with the inpainter, history and session registry swapped out."""
    from vanish.dependencies import get_history_store, get_inpainter, get_session_registry
    from vanish.main import app

    registry = SessionRegistry()
    app.dependency_overrides[get_inpainter] = lambda: stub_inpainter
    app.dependency_overrides[get_history_store] = lambda: history_store
    app.dependency_overrides[get_session_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
