"""Stores for companies, question sets, customers and per-customer transcripts."""
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from exceptions import NotFoundError, PersistenceError
from services.database import (
    CompanyRecord,
    CustomerRecord,
    MessageRecord,
    QuestionRecord,
    create_session_factory,
)

logger = logging.getLogger(__name__)


class Speaker(str, Enum):
    BOT = "bot"
    USER = "user"


@dataclass(frozen=True)
class Question:
    position: int
    text: str

    def to_dict(self) -> dict:
        return {"id": self.position, "question": self.text}


@dataclass(frozen=True)
class Message:
    order: int
    text: str
    speaker: Speaker

    def to_dict(self) -> dict:
        return {"order": self.order, "message": self.text, "speaker": self.speaker.value}


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    email: str
    pitch: str


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    email: str
    company_id: str


@contextmanager
def _session_scope(factory: sessionmaker, action: str) -> Iterator[Session]:
    """Commit on success, roll back and raise PersistenceError on database failure."""
    session = factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Database error while trying to %s: %s", action, e)
        raise PersistenceError(f"Failed to {action}: {e}") from e
    finally:
        session.close()


class CompanyStore:
    def __init__(self, factory: sessionmaker):
        self._factory = factory

    def create(self, name: str, email: str, pitch: str) -> str:
        company_id = str(uuid.uuid4())
        with _session_scope(self._factory, "insert company") as session:
            session.add(CompanyRecord(id=company_id, name=name, email=email, business_pitch=pitch))
        return company_id

    def read(self, company_id: str) -> Company:
        with _session_scope(self._factory, "get company") as session:
            record = session.get(CompanyRecord, company_id)
            if record is None:
                raise NotFoundError("Company", company_id)
            return Company(
                id=record.id,
                name=record.name,
                email=record.email,
                pitch=record.business_pitch,
            )

    def list(self) -> list[dict]:
        with _session_scope(self._factory, "list companies") as session:
            rows = session.execute(
                select(CompanyRecord.id, CompanyRecord.name).order_by(CompanyRecord.name)
            ).all()
        return [{"id": row.id, "name": row.name} for row in rows]

    def delete(self, company_id: str) -> None:
        with _session_scope(self._factory, "delete company") as session:
            session.execute(delete(CompanyRecord).where(CompanyRecord.id == company_id))


class QuestionStore:
    def __init__(self, factory: sessionmaker):
        self._factory = factory

    def create(self, company_id: str, texts: list[str]) -> list[Question]:
        """Insert the whole set in one transaction with positions 1..N."""
        questions = [Question(position=i + 1, text=text) for i, text in enumerate(texts)]
        with _session_scope(self._factory, "insert questions") as session:
            session.add_all([
                QuestionRecord(company_id=company_id, position=q.position, question=q.text)
                for q in questions
            ])
        return questions

    def read_all(self, company_id: str) -> list[Question]:
        with _session_scope(self._factory, "get questions") as session:
            rows = session.scalars(
                select(QuestionRecord)
                .where(QuestionRecord.company_id == company_id)
                .order_by(QuestionRecord.position)
            ).all()
            return [Question(position=r.position, text=r.question) for r in rows]


class CustomerStore:
    def __init__(self, factory: sessionmaker):
        self._factory = factory

    def create(self, name: str, email: str, company_id: str) -> str:
        customer_id = str(uuid.uuid4())
        with _session_scope(self._factory, "create customer") as session:
            session.add(CustomerRecord(id=customer_id, name=name, email=email, company_id=company_id))
        return customer_id

    def read(self, customer_id: str) -> Customer:
        with _session_scope(self._factory, "get customer") as session:
            record = session.get(CustomerRecord, customer_id)
            if record is None:
                raise NotFoundError("Customer", customer_id)
            return Customer(
                id=record.id,
                name=record.name,
                email=record.email,
                company_id=record.company_id,
            )

    def list_for_company(self, company_id: str) -> list[Customer]:
        with _session_scope(self._factory, "get customers") as session:
            rows = session.scalars(
                select(CustomerRecord)
                .where(CustomerRecord.company_id == company_id)
                .order_by(CustomerRecord.created_at, CustomerRecord.id)
            ).all()
            return [
                Customer(id=r.id, name=r.name, email=r.email, company_id=r.company_id)
                for r in rows
            ]


class TranscriptStore:
    """Append-only ordered log of messages per customer."""

    def __init__(self, factory: sessionmaker):
        self._factory = factory

    @staticmethod
    def _next_order(session: Session, customer_id: str) -> int:
        current = session.scalar(
            select(func.max(MessageRecord.order)).where(MessageRecord.customer_id == customer_id)
        )
        return (current or 0) + 1

    def next_order(self, customer_id: str) -> int:
        with _session_scope(self._factory, "get message order") as session:
            return self._next_order(session, customer_id)

    def append(self, customer_id: str, text: str, speaker: Speaker) -> int:
        with _session_scope(self._factory, "save message") as session:
            order = self._next_order(session, customer_id)
            session.add(MessageRecord(
                customer_id=customer_id,
                order=order,
                speaker=Speaker(speaker).value,
                message=text,
            ))
        return order

    def read_all(self, customer_id: str) -> list[Message]:
        with _session_scope(self._factory, "get messages") as session:
            rows = session.scalars(
                select(MessageRecord)
                .where(MessageRecord.customer_id == customer_id)
                .order_by(MessageRecord.order)
            ).all()
            return [Message(order=r.order, text=r.message, speaker=Speaker(r.speaker)) for r in rows]


@dataclass
class Stores:
    companies: CompanyStore
    questions: QuestionStore
    customers: CustomerStore
    transcripts: TranscriptStore
    factory: sessionmaker = field(repr=False, default=None)

    @classmethod
    def from_url(cls, database_url: str) -> "Stores":
        factory = create_session_factory(database_url)
        return cls(
            companies=CompanyStore(factory),
            questions=QuestionStore(factory),
            customers=CustomerStore(factory),
            transcripts=TranscriptStore(factory),
            factory=factory,
        )


_stores = None


def get_stores() -> Stores:
    global _stores
    if _stores is not None:
        return _stores
    try:
        _stores = Stores.from_url(settings.database_url)
    except SQLAlchemyError as e:
        raise PersistenceError(f"Database initialisation failed: {e}") from e
    return _stores
