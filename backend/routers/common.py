"""Shared helpers for the API routers."""
import asyncio
import logging
from functools import partial

from fastapi import HTTPException

from exceptions import (
    GenerationError,
    NotFoundError,
    ParseError,
    PersistenceError,
    PitchInterviewError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def run_blocking(fn, *args, **kwargs):
    """Run a blocking store or model call on the default executor."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, partial(fn, *args, **kwargs))


def to_http_exception(e: PitchInterviewError) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (GenerationError, ParseError)):
        return HTTPException(status_code=502, detail=f"AI generation failed: {e}")
    if isinstance(e, PersistenceError):
        return HTTPException(status_code=500, detail=f"Database error: {e}")
    return HTTPException(status_code=500, detail=str(e))
