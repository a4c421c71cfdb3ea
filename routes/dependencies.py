"""
Shared FastAPI dependencies: service wiring and rate limiting
"""
from fastapi import Depends, HTTPException, Request, status
from typing import Dict
from collections import defaultdict
from datetime import datetime, timedelta
import logging

from config import settings
from services.generation_client import GenerationClient, get_generation_client
from services.generation_service import UIGenerationService
from services.preview_store import PreviewStore, get_preview_store

logger = logging.getLogger(__name__)

# Simple in-memory rate limiter storage
rate_limiter_storage: Dict[str, list] = defaultdict(list)


async def check_rate_limit(request: Request):
    """Simple IP-based rate limiting."""
    if settings.RATE_LIMIT_REQUESTS <= 0:
        return

    client_ip = request.client.host if request.client else "unknown"
    current_time = datetime.now()

    logger.debug(f"Rate limit check for IP: {client_ip}")

    # Clean old requests outside the window
    rate_limiter_storage[client_ip] = [
        req_time for req_time in rate_limiter_storage[client_ip]
        if current_time - req_time < timedelta(seconds=settings.RATE_LIMIT_WINDOW)
    ]

    if len(rate_limiter_storage[client_ip]) >= settings.RATE_LIMIT_REQUESTS:
        logger.warning(f"Rate limit exceeded for IP: {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {settings.RATE_LIMIT_REQUESTS} requests per {settings.RATE_LIMIT_WINDOW} seconds.",
            headers={"Retry-After": str(settings.RATE_LIMIT_WINDOW)}
        )

    rate_limiter_storage[client_ip].append(current_time)
    logger.debug(f"Current request count for {client_ip}: {len(rate_limiter_storage[client_ip])}")


def get_generation_service(
    client: GenerationClient = Depends(get_generation_client),
    store: PreviewStore = Depends(get_preview_store),
) -> UIGenerationService:
    return UIGenerationService(client, store)
