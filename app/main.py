# app/main.py
# FastAPI application: landing page with the map, JSON API, health check.

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from contextlib import asynccontextmanager
from typing import Optional
import os
import uuid

import structlog

# Local imports
from app.core.config import settings, default_center
from app.logging import configure_logging
from app.api.routes import router as api_router
from app.middleware.logging import RequestLoggingMiddleware
from app.services.ai_client import GeminiTextClient, TextCompletionClient
from app.services.geocoding import CoordinateResolver
from app.services.i18n import get_translations
from app.services.poi_service import POIService
from app.services.search_service import SearchSession

configure_logging()
logger = structlog.get_logger(__name__)

# Resolve static and templates directories relative to this file
static_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "static"))
templates_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "templates"))
templates = Jinja2Templates(directory=templates_dir)


def build_search_session(client: TextCompletionClient) -> SearchSession:
    return SearchSession(
        resolver=CoordinateResolver(client),
        poi_service=POIService(client),
        fallback_center=default_center(),
    )


def create_app(completion_client: Optional[TextCompletionClient] = None) -> FastAPI:
    """Build the application.

    ``completion_client`` replaces the Gemini client (tests pass a fake one).
    Without it the Gemini client is built from settings at startup; if no key
    is configured the app still serves the page, but the search API answers 503.
    """

    # --- Application Lifecycle Management ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("application_startup", version=settings.VERSION, env=settings.ENV)
        client = completion_client
        if client is None:
            try:
                client = GeminiTextClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
            except ValueError as e:
                logger.error("gemini_client_unavailable", error=str(e))

        app.state.search_session = build_search_session(client) if client is not None else None

        yield

        logger.info("application_shutdown")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.BRIEF_DESCRIPTION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # --- Static Files ---
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # --- API Routes ---
    app.include_router(api_router, prefix="/api")

    # --- Root Endpoint (Map Page) ---
    @app.get("/", response_class=HTMLResponse)
    async def root(request: Request, lang: str = settings.DEFAULT_LANG):
        center = default_center()
        context = {
            "t": get_translations(lang),
            "lang": lang,
            "default_center": center.model_dump(),
            "poi_count": settings.POI_COUNT,
        }
        return templates.TemplateResponse(request, "index.html", context)

    # --- Health Check Endpoint ---
    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check(request: Request):
        return {
            "status": "ok",
            "ai_configured": getattr(request.app.state, "search_session", None) is not None,
        }

    # --- Global Exception Handler (for unhandled errors) ---
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error_id = str(uuid.uuid4())
        logger.error("unhandled_exception", error_id=error_id, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": {
                    "error": "INTERNAL_SERVER_ERROR",
                    "detail": "An unexpected error occurred. Please report this error ID.",
                    "error_id": error_id
                }
            }
        )

    return app


app = create_app()
