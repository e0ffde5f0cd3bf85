"""SQLAlchemy tables and session factory for companies, questions, customers and messages."""
import logging
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompanyRecord(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False)
    business_pitch = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class QuestionRecord(Base):
    __tablename__ = "questions"

    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True)
    # 1-based asking order
    position = Column(Integer, primary_key=True)
    question = Column(Text, nullable=False)


class CustomerRecord(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class MessageRecord(Base):
    __tablename__ = "messages"

    customer_id = Column(String(36), ForeignKey("customers.id"), primary_key=True)
    # Composite key with customer_id: a duplicate order fails the insert.
    order = Column("order", Integer, primary_key=True)
    speaker = Column(String(8), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


def create_session_factory(database_url: str) -> sessionmaker:
    """Build an engine for ``database_url``, create missing tables and return a session factory."""
    kwargs = {}
    if database_url.startswith("sqlite"):
        # Routers run store calls on executor threads.
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    Base.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(bind=engine, expire_on_commit=False)
