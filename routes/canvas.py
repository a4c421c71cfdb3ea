"""
Canvas session routes: submit prompts, read history and the console
"""
from fastapi import APIRouter, HTTPException, status, Depends, Query
from fastapi.responses import JSONResponse
from typing import List, Optional
import logging

from models.canvas import (
    CanvasSubmitRequest,
    CanvasSubmitResponse,
    ConsoleKind,
    ConsoleMessage,
    GenerationResultView,
    HistoryEntry,
)
from routes.dependencies import check_rate_limit, get_generation_service
from services.canvas_session import CanvasSession, CanvasSessionRegistry, get_canvas_sessions
from services.generation_service import UIGenerationService
from services.sandbox_renderer import SandboxRenderer, get_sandbox_renderer

router = APIRouter(prefix="/api/canvas", tags=["Canvas"])
logger = logging.getLogger(__name__)


def _get_session_or_404(session_id: str, registry: CanvasSessionRegistry) -> CanvasSession:
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Canvas session not found"
        )
    return session


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(registry: CanvasSessionRegistry = Depends(get_canvas_sessions)):
    """Start a new canvas session"""
    session = registry.create()
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"id": session.id, "created_at": session.created_at.isoformat()}
    )


@router.post("/sessions/{session_id}/submit", response_model=CanvasSubmitResponse)
async def submit_prompt(
    session_id: str,
    request: CanvasSubmitRequest,
    registry: CanvasSessionRegistry = Depends(get_canvas_sessions),
    service: UIGenerationService = Depends(get_generation_service),
    renderer: SandboxRenderer = Depends(get_sandbox_renderer),
    _: None = Depends(check_rate_limit)
):
    """
    Submit a prompt from the canvas. An empty prompt is answered with a
    warning in the console and no result.
    """
    session = _get_session_or_404(session_id, registry)

    try:
        result, outcome = await session.submit(
            request.prompt,
            service,
            renderer if request.render else None,
        )
    except Exception as e:
        logger.error(f"Canvas submit failed for session {session_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process prompt"
        )

    result_view = None
    if result is not None:
        result_view = GenerationResultView(
            source_text=result.source_text,
            preview_id=result.preview_id,
            label=result.label,
            render_state=outcome.state.value if outcome else None,
        )

    return CanvasSubmitResponse(
        result=result_view,
        history=session.history,
        console=session.console(),
    )


@router.get("/sessions/{session_id}/history", response_model=List[HistoryEntry])
async def get_history(session_id: str, registry: CanvasSessionRegistry = Depends(get_canvas_sessions)):
    """Prompt history, most recent first"""
    return _get_session_or_404(session_id, registry).history


@router.get("/sessions/{session_id}/console", response_model=List[ConsoleMessage])
async def get_console(
    session_id: str,
    kind: Optional[ConsoleKind] = Query(default=None, description="Only messages of this kind"),
    registry: CanvasSessionRegistry = Depends(get_canvas_sessions)
):
    """Console messages, oldest first"""
    return _get_session_or_404(session_id, registry).console(kind)


@router.delete("/sessions/{session_id}/console")
async def clear_console(session_id: str, registry: CanvasSessionRegistry = Depends(get_canvas_sessions)):
    """Clear the session console"""
    _get_session_or_404(session_id, registry).clear_console()
    return {"cleared": True}


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str, registry: CanvasSessionRegistry = Depends(get_canvas_sessions)):
    """End a canvas session, discarding its history and console"""
    if not registry.remove(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Canvas session not found"
        )
    return {"deleted": True, "id": session_id}
