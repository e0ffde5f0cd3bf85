"""Company API: save a pitch with its question set, list companies."""
import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from exceptions import PitchInterviewError
from routers.common import run_blocking, to_http_exception
from services.interview_service import create_company_with_questions, list_companies
from services.stores import get_stores

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/company", tags=["company"])


class SaveCompanyRequest(BaseModel):
    name: Any = ""
    email: Any = ""
    pitch: Any = ""
    questions: Any = None


@router.post("/save")
async def save_company(body: SaveCompanyRequest):
    try:
        company_id = await run_blocking(
            create_company_with_questions,
            get_stores(),
            body.name,
            body.email,
            body.pitch,
            body.questions,
        )
    except PitchInterviewError as e:
        logger.exception("Error saving company data")
        raise to_http_exception(e)
    return {"companyId": company_id, "success": True}


@router.get("/list")
async def list_companies_endpoint():
    try:
        companies = await run_blocking(list_companies, get_stores())
    except PitchInterviewError as e:
        logger.exception("Error listing companies")
        raise to_http_exception(e)
    return {"companies": companies}
