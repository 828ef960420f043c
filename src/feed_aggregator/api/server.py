"""Process entry point: configure logging and serve the API with uvicorn."""

import os

import structlog
import uvicorn
from dotenv import load_dotenv

from .app import create_app
from ..config.logging_config import configure_logging
from ..config.settings import settings

logger = structlog.get_logger()


def resolve_port() -> int:
    """The plain PORT variable wins over FEED_AGG_PORT."""
    return int(os.environ.get("PORT", settings.port))


def main():
    load_dotenv()
    configure_logging(settings.log_level)

    host = settings.bind_host
    port = resolve_port()
    base_url = settings.public_url or f"http://localhost:{port}"

    app = create_app()

    logger.info("server_starting", url=base_url, host=host, port=port)
    logger.info("feeds_endpoint", url=f"{base_url}/api/feeds")
    logger.info("health_endpoint", url=f"{base_url}/api/health")
    if not settings.is_production:
        logger.info(
            "registry_location",
            path=str(app.state.registry.path),
            hint="POST /api/feeds to subscribe to a feed"
        )

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
