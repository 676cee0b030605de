"""GET /api/history — recent removals gallery."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from vanish.dependencies import get_history_store
from vanish.history.store import HistoryStore
from vanish.models.responses import HistoryResponse

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
async def list_history(store: HistoryStore = Depends(get_history_store)) -> HistoryResponse:
    return HistoryResponse(entries=list(store.entries()))
