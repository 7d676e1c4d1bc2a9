"""FastAPI application factory."""
from __future__ import annotations

from typing import List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from productiviflow import __version__
from productiviflow.api.v1 import api_router
from productiviflow.config import settings
from productiviflow.utils.exceptions import ProductiviFlowException, handle_domain_error


tags_metadata: List[dict[str, str]] = [
    {"name": "auth", "description": "Register users and issue authentication tokens."},
    {"name": "users", "description": "Read and edit the current user's profile."},
    {"name": "sections", "description": "Organize tasks into sections and subsections."},
    {"name": "tasks", "description": "Create, schedule and complete tasks."},
    {"name": "achievements", "description": "Browse the achievement catalog."},
    {"name": "stats", "description": "Dashboard counters and weekly heatmap."},
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Gamified task manager with points, streaks and achievements.",
        version=__version__,
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": exc.errors(), "message": "Validation failed"}),
        )

    @app.exception_handler(ProductiviFlowException)
    async def domain_exception_handler(
        request: Request, exc: ProductiviFlowException
    ) -> JSONResponse:
        return handle_domain_error(request, exc)

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
