"""OpenAI service: free-text chat generation and JSON-mode structured generation."""
import logging
import re

import httpx
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from openai import OpenAI

from config import settings
from exceptions import GenerationError

logger = logging.getLogger(__name__)

_client = None


def get_client() -> OpenAI:
    global _client
    if _client is not None:
        return _client
    key = settings.api_key
    if not key:
        raise RuntimeError(
            "OPENAI_API_KEY is not set. "
            "Please add it to backend/.env"
        )
    _client = OpenAI(
        api_key=key,
        timeout=httpx.Timeout(settings.generation_timeout_seconds),
        max_retries=0,
    )
    logger.info("OpenAI client initialized (key ending …%s)", key[-4:])
    return _client


def _chat_model(max_tokens: int, temperature: float) -> ChatOpenAI:
    key = settings.api_key
    if not key:
        raise RuntimeError("OPENAI_API_KEY is not set. Please add it to backend/.env")
    return ChatOpenAI(
        model=settings.openai_chat_model,
        api_key=key,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=settings.generation_timeout_seconds,
        max_retries=0,
    )


def clean_json(text: str) -> str:
    text = text.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text)
    text = re.sub(r"\s*```$", "", text)
    return text.strip()


def generate_text(system_prompt: str, user_prompt: str, max_tokens: int, temperature: float) -> str:
    """Single free-text completion. Returns the trimmed reply or raises GenerationError."""
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt),
    ]
    try:
        llm = _chat_model(max_tokens, temperature)
        result = llm.invoke(messages)
    except Exception as e:
        logger.exception("Chat generation failed")
        raise GenerationError(f"Text generation failed: {e}") from e

    content = result.content if isinstance(result.content, str) else ""
    text = content.strip()
    if not text:
        raise GenerationError("No response from the language model")
    logger.info("Generated %d chars: %s", len(text), text[:60])
    return text


def generate_json(
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    temperature: float,
    model: str | None = None,
) -> str:
    """JSON-mode completion. Returns the raw JSON text with any code fences removed."""
    try:
        client = get_client()
        resp = client.chat.completions.create(
            model=model or settings.openai_insights_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except Exception as e:
        logger.exception("JSON generation failed")
        raise GenerationError(f"Structured generation failed: {e}") from e

    content = ""
    if resp.choices:
        content = resp.choices[0].message.content or ""
    text = clean_json(content)
    if not text:
        raise GenerationError("No response from the language model")
    return text
