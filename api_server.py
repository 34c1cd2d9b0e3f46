from __future__ import annotations  # FastAPI server exposing the coding interview API

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from config.settings import settings
from services.interview import InterviewServices


logger = logging.getLogger(__name__)


def create_app(services: Optional[InterviewServices] = None) -> FastAPI:
    """Build the application; ``services`` defaults to the configured stack."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "services", None) is None:
            logger.info("Initializing interview services db=%s", settings.DB_PATH)
            app.state.services = InterviewServices.from_settings(settings)
        yield

    app = FastAPI(title="Coding Interview API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.services = services
    app.include_router(router)
    return app


app = create_app()
