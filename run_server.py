import os

import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_unconfigured() -> None:
    """
    Log a clear warning when no OpenWeatherMap key is set. The server still
    starts; API calls answer 500 until OWM_API_KEY (or ECOWATCH_OWM_API_KEY)
    is provided.
    """
    if not settings.owm_api_key:
        logger.warning("OWM_API_KEY is not set; environment endpoints will return 500 until it is configured.")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="ecowatch")
    warn_if_unconfigured()

    port = int(os.getenv("PORT", 8080))
    logger.info(f"EcoWatch backend listening on port {port}")
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
    )
