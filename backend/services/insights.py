"""Insight aggregation across all customer interviews for a company."""
import json
import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from config import settings
from exceptions import ParseError
from prompts import INSIGHTS_SYSTEM_TEMPLATE, INSIGHTS_USER_TEMPLATE, NO_INTERVIEWS_INSIGHT
from services.openai_service import generate_json
from services.stores import Stores

logger = logging.getLogger(__name__)

INSIGHT_FIELDS = ("generalInsights", "positives", "negatives", "pivotSuggestions")


class Insights(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    general_insights: list[str] = Field(default_factory=list, alias="generalInsights")
    positives: list[str] = Field(default_factory=list)
    negatives: list[str] = Field(default_factory=list)
    pivot_suggestions: list[str] = Field(default_factory=list, alias="pivotSuggestions")


class InsightReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_count: int = Field(alias="customerCount")
    insights: Insights


@dataclass(frozen=True)
class Conversation:
    customer_name: str
    customer_email: str
    text: str


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def parse_insights(raw: str) -> Insights:
    """Read the model's JSON; absent or malformed fields become empty lists."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError("Could not parse insight response as JSON", raw_output=raw) from e
    if not isinstance(data, dict):
        raise ParseError("Insight response is not a JSON object", raw_output=raw)
    return Insights(**{key: _string_list(data.get(key)) for key in INSIGHT_FIELDS})


def format_conversations(conversations: list[Conversation]) -> str:
    return "\n---\n\n".join(
        f"Conversation {i + 1} (Customer: {c.customer_name}):\n{c.text}\n"
        for i, c in enumerate(conversations)
    )


def analyze_conversations(pitch: str, conversations: list[Conversation]) -> InsightReport:
    if not conversations:
        return InsightReport(
            customer_count=0,
            insights=Insights(general_insights=[NO_INTERVIEWS_INSIGHT]),
        )

    logger.info("Analyzing %d conversations", len(conversations))
    raw = generate_json(
        INSIGHTS_SYSTEM_TEMPLATE.format(pitch=pitch),
        INSIGHTS_USER_TEMPLATE.format(conversations=format_conversations(conversations)),
        max_tokens=settings.insights_max_tokens,
        temperature=settings.insights_temperature,
        model=settings.openai_insights_model,
    )
    return InsightReport(customer_count=len(conversations), insights=parse_insights(raw))


def collect_conversations(stores: Stores, company_id: str) -> tuple[str, list[Conversation]]:
    """Load the company pitch and one conversation per customer, messages joined in order."""
    company = stores.companies.read(company_id)
    conversations = []
    for customer in stores.customers.list_for_company(company_id):
        messages = stores.transcripts.read_all(customer.id)
        conversations.append(Conversation(
            customer_name=customer.name,
            customer_email=customer.email,
            text="\n".join(m.text for m in messages),
        ))
    return company.pitch, conversations


def analyze_company(stores: Stores, company_id: str) -> InsightReport:
    pitch, conversations = collect_conversations(stores, company_id)
    return analyze_conversations(pitch, conversations)
