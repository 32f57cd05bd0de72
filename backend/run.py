"""Run the backend server locally."""
import logging

import uvicorn

from vidtube.core.config import settings
from vidtube.core.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("vidtube.run")

if __name__ == "__main__":
    if not settings.supabase_url:
        logger.warning("SUPABASE_URL not set - authentication will reject every token")
    if not settings.supabase_anon_key:
        logger.warning("SUPABASE_ANON_KEY not set")

    uvicorn.run(
        "vidtube.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
