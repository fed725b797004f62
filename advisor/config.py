"""Advisor configuration — upstream credentials, pipeline choice and service knobs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "ADVISOR_"}

    # Generation service
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout_seconds: float = 30.0

    # Pipeline: "single_pass" or "two_pass"
    pipeline: str = "single_pass"
    event_name: str = "Kala Pola"

    # Chat service
    history_limit: int = 200
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8100


settings = Settings()
