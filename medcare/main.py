# medcare/main.py
import logging
from typing import Optional

from fastapi import FastAPI

from medcare.api.exception_handlers import register_exception_handlers
from medcare.api.router import api_router
from medcare.core.config import settings
from medcare.core.context import HospitalContext, build_context


def create_app(context: Optional[HospitalContext] = None) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.context = context if context is not None else build_context()

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Health
    @app.get("/")
    def root():
        return {"message": f"{settings.PROJECT_NAME} API running", "version": "v1"}

    return app
