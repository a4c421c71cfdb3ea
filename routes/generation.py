"""
Generation routes: prompt to stored component, and the API diagnostic
"""
from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import logging

from models.generation import GenerationRequest, GenerationResult
from routes.dependencies import check_rate_limit, get_generation_service
from services.generation_client import GenerationClient, get_generation_client
from services.generation_service import UIGenerationService, run_diagnostic
from services.preview_store import PreviewStoreError

router = APIRouter(prefix="/api", tags=["Generation"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerationResult, status_code=status.HTTP_201_CREATED)
async def generate_component(
    request: GenerationRequest,
    service: UIGenerationService = Depends(get_generation_service),
    _: None = Depends(check_rate_limit)
):
    """
    Generate a UI component from a natural-language description and store it
    as a preview. Model failures produce the fallback component, not an error.
    """
    try:
        result = await service.generate(request.prompt)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=jsonable_encoder(result)
        )

    except PreviewStoreError as e:
        logger.error(f"Preview store unavailable: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Preview storage is unavailable. Please try again later."
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during generation: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during generation."
        )


@router.get("/test-api")
async def test_api(client: GenerationClient = Depends(get_generation_client)):
    """
    Send a fixed trivial prompt to the model to check the credential and
    connectivity.
    """
    result = await run_diagnostic(client)
    status_code = status.HTTP_200_OK if result.success else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(exclude_none=True)
    )
