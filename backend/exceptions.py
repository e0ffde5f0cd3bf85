"""
Exception hierarchy for the pitch interview backend.

Every error raised by the services derives from PitchInterviewError so the
routers can map whole categories onto HTTP status codes:

- ValidationError: malformed or missing input, raised before any side effect
- GenerationError: the language model returned nothing usable or failed
- ParseError: the language model output could not be read as the expected shape
- PersistenceError: the database rejected a read or a write
- NotFoundError: a referenced company or customer does not exist
"""

from __future__ import annotations

from typing import Optional


class PitchInterviewError(Exception):
    """Base exception for all pitch interview errors."""

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(PitchInterviewError):
    """Raised when required input is missing or has the wrong shape."""


class GenerationError(PitchInterviewError):
    """
    Raised when the text-generation capability fails.

    Covers transport errors, timeouts, API errors and empty replies. Never
    retried internally; the caller decides whether to run the turn again.
    """


class ParseError(PitchInterviewError):
    """Raised when structured model output cannot be interpreted."""

    def __init__(
        self,
        message: str,
        *,
        raw_output: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.raw_output = raw_output


class PersistenceError(PitchInterviewError):
    """Raised when the store layer fails a read or write."""


class NotFoundError(PersistenceError):
    """Raised when a company or customer id does not resolve to a record."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id
