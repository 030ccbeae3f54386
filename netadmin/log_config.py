import logging

from netadmin.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging() -> None:
    """Root logging at ``settings.log_level``; a no-op when handlers already exist."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
