"""Pitch Interviewer — FastAPI backend."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings, ENV_PATH
from routers import analytics, chatbot, company, pitch
from services.stores import get_stores

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pitch Interviewer API",
    description="Pitch validation through AI-led customer interviews and aggregated insights.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pitch.router)
app.include_router(company.router)
app.include_router(chatbot.router)
app.include_router(analytics.router)


@app.on_event("startup")
def startup_diagnostics():
    logger.info("=" * 50)
    logger.info("Pitch Interviewer starting up")
    logger.info("Env file path: %s", ENV_PATH)
    logger.info("Env file exists: %s", ENV_PATH.exists())
    key = settings.api_key
    if key:
        logger.info("OPENAI_API_KEY loaded: YES (…%s)", key[-4:])
    else:
        logger.warning("OPENAI_API_KEY loaded: NO — AI features will NOT work!")
        logger.warning("Set OPENAI_API_KEY in %s", ENV_PATH)
    logger.info("Models: chat=%s, insights=%s, questions=%s (timeout %.0fs)",
                settings.openai_chat_model, settings.openai_insights_model,
                settings.openai_question_model, settings.generation_timeout_seconds)
    get_stores()
    logger.info("=" * 50)


@app.get("/")
def root():
    return {"app": "Pitch Interviewer", "status": "ok"}


@app.get("/api/health")
def health():
    return {
        "status": "healthy",
        "api_key_configured": bool(settings.api_key),
        "env_path": str(ENV_PATH),
    }
