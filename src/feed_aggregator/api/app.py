"""FastAPI application exposing the registry and the aggregated feed."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from .routes import router
from ..config.settings import settings
from ..errors import FeedAggregatorError
from ..pipeline.aggregator import FeedAggregator
from ..storage.registry import FeedRegistry

logger = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message}
    )


def create_app(
    registry: FeedRegistry = None,
    aggregator: FeedAggregator = None,
) -> FastAPI:
    """Build the application around a registry and an aggregator."""
    app = FastAPI(
        title="Feed Aggregator",
        description="Merges categorized RSS feeds into one sorted list",
        version="0.1.0",
    )

    app.state.registry = registry or FeedRegistry()
    app.state.aggregator = aggregator or FeedAggregator(registry=app.state.registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FeedAggregatorError)
    async def handle_aggregator_error(request: Request, exc: FeedAggregatorError):
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=str(exc))
        return error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        return error_response(400, "Request body must be a JSON object with the required fields")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("request_failed", path=request.url.path, error=str(exc))
        return error_response(500, str(exc))

    app.include_router(router, prefix="/api")
    return app
