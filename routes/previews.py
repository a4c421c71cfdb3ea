"""
Preview routes: stored records, the shareable preview page, the raw sandbox
document and rendered snapshots
"""
from fastapi import APIRouter, HTTPException, status, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse, Response
import logging

from models.generation import PreviewRecord
from routes.dependencies import check_rate_limit
from services.export_service import ExportService
from services.preview_page import render_missing_page, render_preview_page
from services.preview_store import PreviewStore, get_preview_store
from services.render_pipeline import RenderCycle
from services.sandbox_document import build_sandbox_document
from services.sandbox_renderer import SandboxRenderer, get_sandbox_renderer

router = APIRouter(tags=["Previews"])
logger = logging.getLogger(__name__)


async def _get_record_or_404(preview_id: str, store: PreviewStore) -> PreviewRecord:
    record = await store.read(preview_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Preview not found"
        )
    return record


@router.get("/api/previews/{preview_id}", response_model=PreviewRecord)
async def get_preview(preview_id: str, store: PreviewStore = Depends(get_preview_store)):
    """Get a stored preview by ID"""
    return await _get_record_or_404(preview_id, store)


@router.delete("/api/previews/{preview_id}")
async def delete_preview(preview_id: str, store: PreviewStore = Depends(get_preview_store)):
    """Delete a stored preview"""
    deleted = await store.delete(preview_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Preview not found"
        )
    return {"deleted": True, "id": preview_id}


@router.get("/preview/{preview_id}", response_class=HTMLResponse)
async def preview_page(preview_id: str, store: PreviewStore = Depends(get_preview_store)):
    """Shareable preview page with Preview and Code tabs"""
    record = await store.read(preview_id)
    if record is None:
        return HTMLResponse(content=render_missing_page(), status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(content=render_preview_page(record))


@router.get("/api/previews/{preview_id}/sandbox", response_class=HTMLResponse)
async def sandbox_document(preview_id: str, store: PreviewStore = Depends(get_preview_store)):
    """The self-contained sandbox document for a stored preview"""
    record = await _get_record_or_404(preview_id, store)
    return HTMLResponse(content=build_sandbox_document(record.source_text))


@router.get("/api/previews/{preview_id}/snapshot")
async def preview_snapshot(
    preview_id: str,
    format: str = Query(default="png", description="Image format: png, jpg or webp"),
    store: PreviewStore = Depends(get_preview_store),
    renderer: SandboxRenderer = Depends(get_sandbox_renderer),
    _: None = Depends(check_rate_limit)
):
    """
    Render a stored preview in the sandbox and return a screenshot.
    A component that fails to mount yields 422 with the render outcome.
    """
    export_service = ExportService()
    if not export_service.is_supported(format):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported format: {format}"
        )

    record = await _get_record_or_404(preview_id, store)

    try:
        outcome = await RenderCycle(renderer).run(record.source_text, screenshot=True)
        if not outcome.mounted or outcome.screenshot is None:
            if outcome.mounted:
                logger.warning(f"Snapshot of {preview_id}: component mounted but no screenshot was captured")
            else:
                logger.warning(f"Snapshot of {preview_id} {outcome.state.value}: {outcome.error_message}")
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content=jsonable_encoder(outcome)
            )

        image_bytes = await export_service.convert_image(outcome.screenshot, format)
        filename = f"{outcome.component_name}{export_service.get_file_extension(format)}"
        return Response(
            content=image_bytes,
            media_type=export_service.get_content_type(format),
            headers={"Content-Disposition": f'inline; filename="{filename}"'}
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating snapshot for {preview_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create snapshot"
        )
