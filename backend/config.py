"""Application configuration from environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings

BACKEND_DIR = Path(__file__).resolve().parent
ENV_PATH = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    openai_api_key: str = ""
    openai_chat_model: str = "gpt-4o-mini"
    openai_insights_model: str = "gpt-4o-mini"
    openai_question_model: str = "gpt-4o-mini"

    chat_temperature: float = 0.8
    chat_max_tokens: int = 200
    insights_temperature: float = 0.7
    insights_max_tokens: int = 1500
    question_temperature: float = 0.7
    question_count: int = 7
    generation_timeout_seconds: float = 30.0

    database_url: str = f"sqlite:///{BACKEND_DIR / 'pitch_interviews.db'}"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    class Config:
        env_file = str(ENV_PATH)
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def api_key(self) -> str:
        return self.openai_api_key.strip().strip('"').strip("'")


settings = Settings()
