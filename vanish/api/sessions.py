"""/api/sessions/* — the editing flow: upload, select, process, review."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from vanish.dependencies import get_history_store, get_inpainter, get_session_registry
from vanish.engine.session import (
    ContainerResized,
    HistoryOpened,
    HistoryReplaced,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    PresetChosen,
    Reset,
    TransitionError,
    TryAgain,
)
from vanish.engine.state import Point, Size
from vanish.engine.workflow import EditingSession, SessionRegistry
from vanish.history.store import HistoryStore
from vanish.llm.client import Inpainter
from vanish.models.requests import ContainerRequest, PointerRequest, PresetCorner
from vanish.models.responses import SessionResponse
from vanish.utils.files import BytesSource, MemorySaver

router = APIRouter(prefix="/sessions")


def _session(session_id: str, registry: SessionRegistry) -> EditingSession:
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return session


def _view(session: EditingSession) -> SessionResponse:
    return SessionResponse.from_state(session.id, session.state)


def _conflict(e: TransitionError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(e))


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    registry: SessionRegistry = Depends(get_session_registry),
    store: HistoryStore = Depends(get_history_store),
) -> SessionResponse:
    return _view(registry.create(store))


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    return _view(_session(session_id, registry))


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return Response(status_code=204)


@router.post("/{session_id}/upload", response_model=SessionResponse)
async def upload(
    session_id: str,
    file: UploadFile = File(...),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session(session_id, registry)
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=415, detail="Please upload an image file")
    data = await file.read()
    try:
        await session.upload(BytesSource(data=data, media_type=file.content_type))
    except TransitionError as e:
        raise _conflict(e) from e
    return _view(session)


@router.post("/{session_id}/container", response_model=SessionResponse)
async def set_container(
    session_id: str,
    req: ContainerRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session(session_id, registry)
    session.dispatch(ContainerResized(size=Size(width=req.width, height=req.height)))
    return _view(session)


@router.post("/{session_id}/pointer", response_model=SessionResponse)
async def pointer(
    session_id: str,
    req: PointerRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session(session_id, registry)
    if req.container is not None:
        session.dispatch(ContainerResized(size=Size(width=req.container.width, height=req.container.height)))

    point = Point(x=req.x, y=req.y)
    if req.kind == "down":
        session.dispatch(PointerDown(point=point))
    elif req.kind == "move":
        session.dispatch(PointerMove(point=point))
    elif req.kind == "up":
        session.dispatch(PointerUp())
    else:
        session.dispatch(PointerLeave())
    return _view(session)


@router.post("/{session_id}/preset/{corner}", response_model=SessionResponse)
async def preset(
    session_id: str,
    corner: PresetCorner,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session(session_id, registry)
    try:
        session.dispatch(PresetChosen(corner=corner.value))
    except TransitionError as e:
        raise _conflict(e) from e
    return _view(session)


@router.post("/{session_id}/process", response_model=SessionResponse)
async def process(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    inpainter: Inpainter = Depends(get_inpainter),
) -> SessionResponse:
    session = _session(session_id, registry)
    try:
        await session.process(inpainter)
    except TransitionError as e:
        raise _conflict(e) from e
    return _view(session)


@router.post("/{session_id}/try-again", response_model=SessionResponse)
async def try_again(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session(session_id, registry)
    try:
        session.dispatch(TryAgain())
    except TransitionError as e:
        raise _conflict(e) from e
    return _view(session)


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    store: HistoryStore = Depends(get_history_store),
) -> SessionResponse:
    session = _session(session_id, registry)
    session.dispatch(Reset())
    # Pick up entries other sessions recorded meanwhile
    session.dispatch(HistoryReplaced(entries=store.entries()))
    return _view(session)


@router.post("/{session_id}/history/{entry_id}", response_model=SessionResponse)
async def open_history_entry(
    session_id: str,
    entry_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    store: HistoryStore = Depends(get_history_store),
) -> SessionResponse:
    session = _session(session_id, registry)
    entry = store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown history entry {entry_id}")
    try:
        session.dispatch(HistoryOpened(entry=entry))
    except TransitionError as e:
        raise _conflict(e) from e
    return _view(session)


@router.get("/{session_id}/download")
async def download(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    session = _session(session_id, registry)
    saver = MemorySaver()
    try:
        saved = session.download(saver)
    except TransitionError as e:
        raise _conflict(e) from e
    return Response(
        content=saved.data,
        media_type=saved.media_type,
        headers={"Content-Disposition": f'attachment; filename="{saved.filename}"'},
    )
