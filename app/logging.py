import logging
import sys
import structlog
from app.core.config import settings

def configure_logging(level: int = logging.INFO):
    """
    Routes stdlib logging through structlog. Development gets the console
    renderer; every other ENV gets one JSON object per line.
    """
    is_local = settings.ENV.lower() == "development"

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_local:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        # exceptions become structured dicts instead of a rendered string
        shared_processors.append(structlog.processors.dict_tracebacks)
        # non-ASCII text is written as-is
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)

    structlog.configure(
        processors=shared_processors + [renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # uvicorn installs its own handlers; let its records reach the root logger instead
    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        logger = logging.getLogger(_log)
        logger.handlers = []
        logger.propagate = True
