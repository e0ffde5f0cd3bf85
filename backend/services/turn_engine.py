"""Turn engine: decides the interviewer's next utterance from transcript, pitch and question set.

Progress through the predefined questions is not stored anywhere. It is read
back out of the transcript: a question counts as asked once the first
``QUESTION_PREFIX_LENGTH`` characters of its text (case-insensitive) appear in
any message. The highest matching question wins, so asking strictly in order
keeps the detection consistent even when the user quotes an earlier question.
"""
import logging
from typing import Sequence

from config import settings
from exceptions import ValidationError
from prompts import (
    CURRENT_STATUS_EXHAUSTED,
    CURRENT_STATUS_NEXT_QUESTION,
    INTERVIEWER_CONTINUE_TEMPLATE,
    INTERVIEWER_OPENING_TEMPLATE,
    INTERVIEWER_SYSTEM_TEMPLATE,
    SPEAKER_LABELS,
)
from services.openai_service import generate_text
from services.stores import Message, Question

logger = logging.getLogger(__name__)

QUESTION_PREFIX_LENGTH = 20


def _question_prefix(question: Question) -> str:
    return question.text.lower()[:QUESTION_PREFIX_LENGTH]


def conversation_text(transcript: Sequence[Message]) -> str:
    return "\n".join(m.text for m in transcript)


def detect_last_asked_index(transcript: Sequence[Message], questions: Sequence[Question]) -> int:
    """Return the 0-based index of the furthest question already asked, or -1."""
    haystack = conversation_text(transcript).lower()
    if not haystack:
        return -1
    for idx in range(len(questions) - 1, -1, -1):
        prefix = _question_prefix(questions[idx])
        if prefix and prefix in haystack:
            return idx
    return -1


def select_target_question(transcript: Sequence[Message], questions: Sequence[Question]) -> Question | None:
    """The next predefined question to surface, or None once all have been asked."""
    next_idx = detect_last_asked_index(transcript, questions) + 1
    if next_idx < len(questions):
        return questions[next_idx]
    return None


def build_system_prompt(pitch: str, questions: Sequence[Question], target: Question | None) -> str:
    question_list = "\n".join(f"{i + 1}. {q.text}" for i, q in enumerate(questions))
    if target is not None:
        current_status = CURRENT_STATUS_NEXT_QUESTION.format(
            number=questions.index(target) + 1,
            question=target.text,
        )
    else:
        current_status = CURRENT_STATUS_EXHAUSTED
    return INTERVIEWER_SYSTEM_TEMPLATE.format(
        pitch=pitch,
        question_list=question_list,
        current_status=current_status,
    )


def render_transcript(transcript: Sequence[Message]) -> str:
    return "\n".join(f"{SPEAKER_LABELS[m.speaker.value]}: {m.text}" for m in transcript)


def build_user_prompt(transcript: Sequence[Message], questions: Sequence[Question]) -> str:
    if not transcript:
        return INTERVIEWER_OPENING_TEMPLATE.format(question=questions[0].text)
    return INTERVIEWER_CONTINUE_TEMPLATE.format(conversation=render_transcript(transcript))


def next_utterance(transcript: Sequence[Message], pitch: str, questions: Sequence[Question]) -> str:
    """
    Produce exactly one interviewer utterance for the current state of the conversation.

    Raises ValidationError for an empty pitch or question set and GenerationError when
    the language model fails or replies with nothing. Nothing is persisted here.
    """
    if not pitch or not pitch.strip():
        raise ValidationError("Business pitch is required")
    if not questions:
        raise ValidationError("At least one question is required")

    ordered = sorted(questions, key=lambda q: q.position)
    target = select_target_question(transcript, ordered)
    logger.info(
        "Turn over %d messages: target=%s",
        len(transcript),
        f"Q{ordered.index(target) + 1}" if target else "follow-up mode",
    )

    return generate_text(
        build_system_prompt(pitch, ordered, target),
        build_user_prompt(transcript, ordered),
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
    )
