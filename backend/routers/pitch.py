"""Pitch API: interview question generation."""
import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from exceptions import PitchInterviewError
from routers.common import run_blocking, to_http_exception
from services.question_generator import generate_questions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pitch", tags=["pitch"])


class GenerateQuestionsRequest(BaseModel):
    pitch: Any = ""


@router.post("/generate-questions")
async def generate_questions_endpoint(body: GenerateQuestionsRequest):
    try:
        questions = await run_blocking(generate_questions, body.pitch)
    except PitchInterviewError as e:
        logger.exception("Error generating questions")
        raise to_http_exception(e)
    return {"questions": questions}
