"""FastAPI dependency injection."""

from __future__ import annotations

from vanish.config import settings
from vanish.engine.workflow import SessionRegistry
from vanish.history.kv import JsonFileKeyValueStore
from vanish.history.store import HistoryStore
from vanish.llm.client import GeminiInpainter, Inpainter

# Singletons
_history: HistoryStore | None = None
_registry: SessionRegistry | None = None
_inpainter: Inpainter | None = None


def get_settings():
    return settings


def get_history_store() -> HistoryStore:
    """Get or create the global HistoryStore (read from disk on first use)."""
    global _history
    if _history is None:
        _history = HistoryStore(JsonFileKeyValueStore(settings.storage_file))
    return _history


def get_session_registry() -> SessionRegistry:
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


def get_inpainter() -> Inpainter:
    """Get or create the global GeminiInpainter (one SDK client per process)."""
    global _inpainter
    if _inpainter is None:
        _inpainter = GeminiInpainter(api_key=settings.gemini_api_key, model=settings.inpaint_model)
    return _inpainter
