"""Interview service: company setup, customer sessions, and turn execution over the stores."""
import logging
import re
from dataclasses import dataclass
from typing import Any

from exceptions import PersistenceError, ValidationError
from services.stores import Message, Question, Speaker, Stores
from services.turn_engine import next_utterance

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class SessionState:
    pitch: str
    questions: list[Question]
    messages: list[Message]
    initial_message: str | None


@dataclass(frozen=True)
class TurnResult:
    bot_response: str
    user_message_order: int
    bot_message_order: int


def _require_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required and must be a non-empty string")
    return value.strip()


# ── Company + question set ──────────────────────────────────────────────

def create_company_with_questions(
    stores: Stores,
    name: str,
    email: str,
    pitch: str,
    questions: list[Any],
) -> str:
    """
    Persist a company pitch and its ordered question set.

    Questions are stored with positions 1..N in input order. If the question
    insert fails, the company row is deleted again before the error is raised;
    a failed delete leaves an orphaned company, which is logged and the original
    error still propagates.
    """
    name = _require_text(name, "Name")
    email = _require_text(email, "Email")
    pitch = _require_text(pitch, "Business pitch")
    if not isinstance(questions, list) or not questions:
        raise ValidationError("Questions array is required and must contain at least one question")
    cleaned = []
    for i, q in enumerate(questions):
        if not isinstance(q, str):
            raise ValidationError(f"Question {i + 1} is not a string: {type(q).__name__}")
        if not q.strip():
            raise ValidationError(f"Question {i + 1} is empty")
        cleaned.append(q.strip())

    company_id = stores.companies.create(name, email, pitch)
    try:
        stores.questions.create(company_id, cleaned)
    except PersistenceError:
        logger.warning("Question insert failed for company %s, removing company", company_id)
        try:
            stores.companies.delete(company_id)
        except PersistenceError:
            logger.error("Compensating delete failed; company %s left without questions", company_id)
        raise

    logger.info("Company %s saved with %d questions", company_id, len(cleaned))
    return company_id


def list_companies(stores: Stores) -> list[dict]:
    return stores.companies.list()


def get_company_data(stores: Stores, company_id: str) -> tuple[str, list[Question]]:
    company = stores.companies.read(company_id)
    return company.pitch, stores.questions.read_all(company_id)


# ── Customers ───────────────────────────────────────────────────────────

def create_customer(stores: Stores, name: str, email: str, company_id: str) -> str:
    name = _require_text(name, "Name")
    email = _require_text(email, "Email")
    company_id = _require_text(company_id, "Company ID")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address")

    stores.companies.read(company_id)
    customer_id = stores.customers.create(name, email, company_id)
    logger.info("Customer %s created for company %s", customer_id, company_id)
    return customer_id


def get_customer_company_id(stores: Stores, customer_id: str) -> str:
    return stores.customers.read(customer_id).company_id


def get_messages(stores: Stores, customer_id: str) -> list[Message]:
    return stores.transcripts.read_all(customer_id)


# ── Interview ───────────────────────────────────────────────────────────

def initialize_session(stores: Stores, customer_id: str) -> SessionState:
    """Load a customer's session; generate and store the opening line only if the transcript is empty."""
    customer_id = _require_text(customer_id, "Customer ID")
    company_id = get_customer_company_id(stores, customer_id)
    pitch, questions = get_company_data(stores, company_id)
    messages = stores.transcripts.read_all(customer_id)

    if messages:
        logger.info("Resuming session for %s with %d messages", customer_id, len(messages))
        return SessionState(pitch=pitch, questions=questions, messages=messages, initial_message=None)

    opener = next_utterance([], pitch, questions)
    order = stores.transcripts.append(customer_id, opener, Speaker.BOT)
    logger.info("Session opened for %s (order %d)", customer_id, order)
    return SessionState(
        pitch=pitch,
        questions=questions,
        messages=[Message(order=order, text=opener, speaker=Speaker.BOT)],
        initial_message=opener,
    )


def execute_turn(stores: Stores, customer_id: str, message: Any) -> TurnResult:
    """
    Record one user reply and the interviewer's answer to it.

    The user message is stored before generation, so a GenerationError leaves it
    as the last transcript entry with no bot reply after it.
    """
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Message is required and must be a non-empty string")
    customer_id = _require_text(customer_id, "Customer ID")
    text = message.strip()

    company_id = get_customer_company_id(stores, customer_id)
    pitch, questions = get_company_data(stores, company_id)
    existing = stores.transcripts.read_all(customer_id)

    user_order = stores.transcripts.append(customer_id, text, Speaker.USER)
    with_user = existing + [Message(order=user_order, text=text, speaker=Speaker.USER)]

    reply = next_utterance(with_user, pitch, questions)

    bot_order = stores.transcripts.append(customer_id, reply, Speaker.BOT)
    logger.info("Turn for %s: user=%d bot=%d", customer_id, user_order, bot_order)
    return TurnResult(bot_response=reply, user_message_order=user_order, bot_message_order=bot_order)
