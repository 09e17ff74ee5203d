"""
Main application entry point.
"""

from job_allocation.api.app import create_app
from job_allocation.config.logging import configure_logging, get_logger
from job_allocation.config.settings import settings

configure_logging()
logger = get_logger(__name__)

# Create the main app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Job Allocation Engine server")

    uvicorn.run(
        "job_allocation.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
