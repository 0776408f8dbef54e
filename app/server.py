"""Process entry point.

Run with:
    python -m app.server
"""
import logging
import sys

from pydantic import ValidationError

logger = logging.getLogger(__name__)


def main() -> None:
    """Validate configuration, then serve the API with uvicorn."""
    logging.basicConfig(level=logging.INFO)

    try:
        from app.core.config import get_settings

        settings = get_settings()
    except ValidationError as exc:
        # Most often DATABASE_URL is not set
        logger.critical(f"Invalid configuration, refusing to start: {exc}")
        sys.exit(1)

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
