"""Analytics API: aggregate insights over all interviews of a company."""
import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from exceptions import PitchInterviewError
from routers.common import run_blocking, to_http_exception
from services.insights import analyze_company
from services.stores import get_stores

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/analytics", tags=["analytics"])


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_id: Any = Field("", alias="companyId")


@router.post("/analyze")
async def analyze(body: AnalyzeRequest):
    if not isinstance(body.company_id, str) or not body.company_id.strip():
        raise HTTPException(status_code=400, detail="Company ID is required")
    try:
        report = await run_blocking(analyze_company, get_stores(), body.company_id.strip())
    except PitchInterviewError as e:
        logger.exception("Error analyzing conversations")
        raise to_http_exception(e)
    return report.model_dump(by_alias=True)
