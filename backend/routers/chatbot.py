"""Chatbot API: customer creation, session start/resume, and message turns."""
import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from exceptions import PitchInterviewError
from routers.common import run_blocking, to_http_exception
from services.interview_service import (
    create_customer,
    execute_turn,
    get_company_data,
    get_customer_company_id,
    get_messages,
    initialize_session,
)
from services.stores import get_stores

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])


class CreateCustomerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Any = ""
    email: Any = ""
    company_id: Any = Field("", alias="companyId")


class CustomerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_id: Any = Field("", alias="customerId")


class MessageRequest(CustomerRequest):
    message: Any = ""


@router.post("/create-customer")
async def create_customer_endpoint(body: CreateCustomerRequest):
    try:
        customer_id = await run_blocking(
            create_customer, get_stores(), body.name, body.email, body.company_id,
        )
    except PitchInterviewError as e:
        logger.exception("Error creating customer")
        raise to_http_exception(e)
    return {"customerId": customer_id}


@router.get("/company-data")
async def company_data(companyId: str = "", customerId: str = ""):
    try:
        stores = get_stores()
        target = companyId
        if not target and customerId:
            target = await run_blocking(get_customer_company_id, stores, customerId)
        if not target:
            raise HTTPException(status_code=400, detail="Company ID or Customer ID is required")
        pitch, questions = await run_blocking(get_company_data, stores, target)
    except PitchInterviewError as e:
        logger.exception("Error getting company data")
        raise to_http_exception(e)
    return {"pitch": pitch, "questions": [q.to_dict() for q in questions]}


@router.get("/messages/{customer_id}")
async def messages(customer_id: str):
    try:
        transcript = await run_blocking(get_messages, get_stores(), customer_id)
    except PitchInterviewError as e:
        logger.exception("Error getting messages")
        raise to_http_exception(e)
    return {"messages": [m.to_dict() for m in transcript]}


@router.post("/initiate")
async def initiate(body: CustomerRequest):
    try:
        state = await run_blocking(initialize_session, get_stores(), body.customer_id)
    except PitchInterviewError as e:
        logger.exception("Error initiating chat")
        raise to_http_exception(e)
    return {
        "pitch": state.pitch,
        "questions": [q.to_dict() for q in state.questions],
        "messages": [m.to_dict() for m in state.messages],
        "initialMessage": state.initial_message,
    }


@router.post("/message")
async def message(body: MessageRequest):
    try:
        result = await run_blocking(execute_turn, get_stores(), body.customer_id, body.message)
    except PitchInterviewError as e:
        logger.exception("Error processing message")
        raise to_http_exception(e)
    return {
        "botResponse": result.bot_response,
        "userMessageOrder": result.user_message_order,
        "botMessageOrder": result.bot_message_order,
    }
