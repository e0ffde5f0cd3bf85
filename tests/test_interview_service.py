"""
Tests for the interview service.

Covers:
- Company + question set creation, validation and compensation
- Customer creation
- Session initialization (seed turn, idempotent resume)
- Turn execution (dense ordering, durability on generation failure)
- End-to-end single-question interview
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from exceptions import GenerationError, NotFoundError, PersistenceError, ValidationError
from prompts import CURRENT_STATUS_EXHAUSTED
from services.interview_service import (
    create_company_with_questions,
    create_customer,
    execute_turn,
    get_company_data,
    initialize_session,
)
from services.stores import Speaker

from conftest import CARPOOL_QUESTION, PITCH, QUESTIONS


# ---------------------------------------------------------------------------
# Company + question set
# ---------------------------------------------------------------------------

class TestCompanyCreation:

    def test_questions_get_dense_positions(self, stores, company_id):
        pitch, questions = get_company_data(stores, company_id)
        assert pitch == PITCH
        assert [q.position for q in questions] == [1, 2, 3, 4]
        assert [q.text for q in questions] == QUESTIONS

    def test_inputs_are_trimmed(self, stores):
        cid = create_company_with_questions(stores, "  Acme ", " a@acme.io ", " Pitch ", ["  Q1?  "])
        company = stores.companies.read(cid)
        assert (company.name, company.email, company.pitch) == ("Acme", "a@acme.io", "Pitch")
        assert stores.questions.read_all(cid)[0].text == "Q1?"

    @pytest.mark.parametrize("questions", [[], None, ["ok", 3], ["ok", "   "], "not a list"])
    def test_invalid_questions_rejected_without_side_effects(self, stores, questions):
        with pytest.raises(ValidationError):
            create_company_with_questions(stores, "Acme", "a@acme.io", "Pitch", questions)
        assert stores.companies.list() == []

    @pytest.mark.parametrize("field", ["name", "email", "pitch"])
    def test_missing_company_field_rejected(self, stores, field):
        values = {"name": "Acme", "email": "a@acme.io", "pitch": "Pitch"}
        values[field] = "  "
        with pytest.raises(ValidationError):
            create_company_with_questions(stores, questions=["Q?"], **values)

    def test_question_failure_deletes_company(self, stores):
        with patch.object(stores.questions, "create", side_effect=PersistenceError("insert failed")):
            with pytest.raises(PersistenceError, match="insert failed"):
                create_company_with_questions(stores, "Acme", "a@acme.io", "Pitch", ["Q?"])
        assert stores.companies.list() == []

    def test_failed_compensation_still_surfaces_original_error(self, stores):
        with patch.object(stores.questions, "create", side_effect=PersistenceError("insert failed")), \
                patch.object(stores.companies, "delete", side_effect=PersistenceError("delete failed")):
            with pytest.raises(PersistenceError, match="insert failed"):
                create_company_with_questions(stores, "Acme", "a@acme.io", "Pitch", ["Q?"])
        # Orphaned pitch is the accepted degraded state.
        assert [c["name"] for c in stores.companies.list()] == ["Acme"]


class TestCustomerCreation:

    def test_creates_customer_under_company(self, stores, company_id):
        cid = create_customer(stores, " Cara ", " cara@example.com ", company_id)
        customer = stores.customers.read(cid)
        assert (customer.name, customer.email, customer.company_id) == ("Cara", "cara@example.com", company_id)

    @pytest.mark.parametrize("email", ["nope", "a@b", "a b@c.d", ""])
    def test_invalid_email_rejected(self, stores, company_id, email):
        with pytest.raises(ValidationError):
            create_customer(stores, "Cara", email, company_id)

    def test_unknown_company(self, stores):
        with pytest.raises(NotFoundError):
            create_customer(stores, "Cara", "cara@example.com", "missing")


# ---------------------------------------------------------------------------
# Session initialization
# ---------------------------------------------------------------------------

class TestInitializeSession:

    def test_empty_transcript_generates_opener_at_order_one(self, stores, customer_id):
        with patch("services.turn_engine.generate_text", return_value="Hi, I'm Alex.") as gen:
            state = initialize_session(stores, customer_id)

        gen.assert_called_once()
        assert state.initial_message == "Hi, I'm Alex."
        assert [(m.order, m.speaker) for m in state.messages] == [(1, Speaker.BOT)]
        assert state.pitch == PITCH
        assert len(state.questions) == len(QUESTIONS)

    def test_resume_is_idempotent(self, stores, customer_id):
        with patch("services.turn_engine.generate_text", return_value="Hi, I'm Alex.") as gen:
            first = initialize_session(stores, customer_id)
            second = initialize_session(stores, customer_id)

        assert gen.call_count == 1
        assert second.initial_message is None
        assert second.messages == first.messages
        assert [m.order for m in stores.transcripts.read_all(customer_id)] == [1]

    def test_unknown_customer(self, stores):
        with pytest.raises(NotFoundError):
            initialize_session(stores, "nobody")

    def test_failed_opener_stores_nothing(self, stores, customer_id):
        with patch("services.turn_engine.generate_text", side_effect=GenerationError("down")):
            with pytest.raises(GenerationError):
                initialize_session(stores, customer_id)
        assert stores.transcripts.read_all(customer_id) == []


# ---------------------------------------------------------------------------
# Turn execution
# ---------------------------------------------------------------------------

class TestExecuteTurn:

    def test_orders_stay_dense_and_alternate(self, stores, customer_id):
        replies = iter(["Opener", "Reply 1", "Reply 2", "Reply 3"])
        with patch("services.turn_engine.generate_text", side_effect=lambda *a, **k: next(replies)):
            initialize_session(stores, customer_id)
            results = [execute_turn(stores, customer_id, f"answer {i}") for i in range(3)]

        assert [(r.user_message_order, r.bot_message_order) for r in results] == [(2, 3), (4, 5), (6, 7)]
        transcript = stores.transcripts.read_all(customer_id)
        assert [m.order for m in transcript] == list(range(1, 8))
        assert [m.speaker for m in transcript] == [
            Speaker.BOT if m.order % 2 else Speaker.USER for m in transcript
        ]
        assert results[-1].bot_response == "Reply 3"

    def test_engine_sees_new_user_message_once(self, stores, customer_id):
        with patch("services.turn_engine.generate_text", return_value="Opener"):
            initialize_session(stores, customer_id)
        with patch("services.turn_engine.generate_text", return_value="Why?") as gen:
            execute_turn(stores, customer_id, "  I drive alone  ")

        user_prompt = gen.call_args.args[1]
        assert user_prompt.count("User: I drive alone") == 1
        assert stores.transcripts.read_all(customer_id)[1].text == "I drive alone"

    @pytest.mark.parametrize("message", ["", "   ", None, 42])
    def test_empty_message_rejected_without_side_effects(self, stores, customer_id, message):
        with patch("services.turn_engine.generate_text") as gen:
            with pytest.raises(ValidationError):
                execute_turn(stores, customer_id, message)
        gen.assert_not_called()
        assert stores.transcripts.read_all(customer_id) == []

    def test_user_message_survives_generation_failure(self, stores, customer_id):
        with patch("services.turn_engine.generate_text", return_value="Opener"):
            initialize_session(stores, customer_id)
        with patch("services.turn_engine.generate_text", side_effect=GenerationError("timeout")):
            with pytest.raises(GenerationError):
                execute_turn(stores, customer_id, "My answer")

        transcript = stores.transcripts.read_all(customer_id)
        assert [m.order for m in transcript] == [1, 2]
        assert transcript[-1].text == "My answer"
        assert transcript[-1].speaker == Speaker.USER

    def test_unknown_customer_rejected_before_append(self, stores):
        with pytest.raises(NotFoundError):
            execute_turn(stores, "nobody", "hello")


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------

def test_single_question_interview(stores, carpool_customer_id):
    with patch(
        "services.turn_engine.generate_text",
        return_value="Hi, I'm Alex. Would you use a carpool app to get to work?",
    ) as gen:
        state = initialize_session(stores, carpool_customer_id)
    assert state.initial_message
    assert CARPOOL_QUESTION in gen.call_args.args[1]

    with patch(
        "services.turn_engine.generate_text",
        return_value="Great! What makes it sound useful to you?",
    ) as gen:
        result = execute_turn(stores, carpool_customer_id, "Yes, sounds useful")

    assert CURRENT_STATUS_EXHAUSTED in gen.call_args.args[0]
    assert (result.user_message_order, result.bot_message_order) == (2, 3)
    assert result.bot_response
    assert stores.transcripts.read_all(carpool_customer_id)[2].text == result.bot_response
