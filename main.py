import logging
import os

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import settings
from errors import ConfigurationError, StoreError
from routers import admin, properties
from utils.logging import setup_logging

setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Property Listings")

    # Admin sessions, keyed by session id
    app.state.admin_sessions = {}

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(properties.router)
    app.include_router(admin.router)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=502, content={"error": "Property store unavailable"})

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error("Configuration error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # 404 fallback for unknown routes
    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return await http_exception_handler(request, exc)

    return app


app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", settings.port))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
