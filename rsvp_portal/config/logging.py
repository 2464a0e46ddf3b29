import logging
import sys
from logging import StreamHandler

from rsvp_portal.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# httpx logs every webhook request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stdout)],
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # SQL echo is controlled by LOG_DB, not by the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_db else logging.WARNING
    )
