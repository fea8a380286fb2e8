"""
FastAPI application entry point for the Florte backend.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from backend.config import Settings, get_settings
from backend.exception_handlers import setup_exception_handlers
from backend.routes import router

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Florte Backend (FastAPI)", version="0.1.0")
    # Error handling first: later middleware wraps earlier, so CORS stays outermost.
    setup_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_headers=CORS_ALLOW_HEADERS,
        allow_methods=CORS_ALLOW_METHODS,
    )
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


def main() -> None:
    """Runs the API with uvicorn; logging is configured here, not on import."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
