"""Question generation: turns a business pitch into a fixed-size interview question set."""
import json
import logging
import re
from typing import Any

from config import settings
from exceptions import ParseError, ValidationError
from prompts import QUESTION_GENERATION_SYSTEM, QUESTION_GENERATION_USER
from services.openai_service import generate_json

logger = logging.getLogger(__name__)


def _load_lenient(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        match = re.search(r"\[.*\]", raw, re.DOTALL)
        if not match:
            raise ParseError("Could not parse question response as JSON", raw_output=raw)
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ParseError("Could not parse question response as JSON", raw_output=raw) from e


def extract_questions(raw: str, expected: int) -> list[str]:
    parsed = _load_lenient(raw)

    if isinstance(parsed, list):
        questions = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("questions"), list):
        questions = parsed["questions"]
    elif isinstance(parsed, dict):
        questions = next((v for v in parsed.values() if isinstance(v, list)), None)
        if questions is None:
            raise ParseError("Could not find questions array in response", raw_output=raw)
    else:
        raise ParseError("Question response is neither an object nor an array", raw_output=raw)

    if len(questions) != expected:
        raise ValidationError(f"Expected exactly {expected} questions, but got {len(questions)}")

    cleaned = []
    for i, q in enumerate(questions):
        if not isinstance(q, str):
            raise ValidationError(f"Question {i + 1} is not a string: {type(q).__name__}")
        if q.strip():
            cleaned.append(q.strip())

    if len(cleaned) != expected:
        raise ValidationError(
            f"Expected exactly {expected} valid questions, but got {len(cleaned)} after cleaning"
        )
    return cleaned


def generate_questions(pitch: Any) -> list[str]:
    if not isinstance(pitch, str) or not pitch.strip():
        raise ValidationError("Business pitch is required and must be a non-empty string")

    count = settings.question_count
    logger.info("Generating %d questions for pitch: %s", count, pitch[:60])
    raw = generate_json(
        QUESTION_GENERATION_SYSTEM.format(count=count),
        QUESTION_GENERATION_USER.format(count=count, pitch=pitch.strip()),
        max_tokens=1000,
        temperature=settings.question_temperature,
        model=settings.openai_question_model,
    )
    return extract_questions(raw, count)
