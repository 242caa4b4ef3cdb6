"""
Main application entry point.
"""

from jobinsight.api.app import create_app
from jobinsight.config.logging import get_logger
from jobinsight.config.settings import settings

logger = get_logger(__name__)

app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Starting analytics server", port=settings.API_PORT)

    uvicorn.run(
        "jobinsight.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
