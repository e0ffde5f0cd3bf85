"""Shared fixtures: in-memory stores and a seeded company."""

from __future__ import annotations

import pytest

from services.interview_service import create_company_with_questions, create_customer
from services.stores import Stores

CARPOOL_QUESTION = "Would you use a carpool app?"

PITCH = "A carpool app that matches commuters from the same neighbourhood."

QUESTIONS = [
    "On a scale of 1-10, how likely are you to try a neighbourhood carpool app?",
    "What would you expect to pay per month for guaranteed commute matches?",
    "How do you currently get to work on a typical weekday?",
    "What worries you most about sharing a ride with a neighbour?",
]


@pytest.fixture
def stores():
    """Fresh in-memory database per test."""
    return Stores.from_url("sqlite://")


@pytest.fixture
def company_id(stores):
    return create_company_with_questions(stores, "RideTogether", "founder@ride.io", PITCH, QUESTIONS)


@pytest.fixture
def customer_id(stores, company_id):
    return create_customer(stores, "Ann", "ann@example.com", company_id)


@pytest.fixture
def carpool_customer_id(stores):
    """Customer of a company with the single carpool question."""
    cid = create_company_with_questions(
        stores, "Carpoolr", "hi@carpoolr.com", PITCH, [CARPOOL_QUESTION],
    )
    return create_customer(stores, "Ben", "ben@example.com", cid)
