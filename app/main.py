"""Incident Advisor — FastAPI service entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from advisor.analysis.engine import AnalysisEngine
from advisor.config import Settings, settings
from advisor.factory import build_client, build_engine
from advisor.knowledge.matrix import default_knowledge_base
from app.history import ChatHistory
from app.middleware import MetricsMiddleware
from app.routers import chat, health
from app.telemetry.logging import setup_logging

logger = logging.getLogger("app")


def create_app(config: Settings | None = None, engine: AnalysisEngine | None = None) -> FastAPI:
    """Build the service. Passing ``engine`` skips the Gemini wiring (used by tests)."""
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config.log_level)
        logger.info("Initializing Incident Advisor...")

        client = None
        if engine is None:
            kb = default_knowledge_base()
            client = build_client(config)
            app.state.engine = build_engine(config, kb, client)
            app.state.credential_configured = client.configured
        else:
            app.state.engine = engine
            app.state.credential_configured = bool(config.gemini_api_key)

        if not app.state.credential_configured:
            logger.warning("ADVISOR_GEMINI_API_KEY is not set; analyses will fail until it is configured")

        app.state.history = ChatHistory(limit=config.history_limit)
        logger.info(
            "Incident Advisor ready: pipeline=%s model=%s",
            app.state.engine.pipeline, config.gemini_model,
        )

        yield

        if client is not None:
            await client.close()
        logger.info("Incident Advisor shut down")

    app = FastAPI(
        title="Incident Advisor",
        description="Likelihood x Impact incident classification and response advice",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(MetricsMiddleware)
    app.include_router(health.router)
    app.include_router(chat.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
