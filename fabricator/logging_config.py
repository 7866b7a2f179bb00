# fabricator/logging_config.py
import logging
import structlog
from typing import Union
import sys

# Chatty third-party loggers kept at WARNING unless we run at DEBUG
QUIET_LOGGERS = ("httpx", "httpcore")


def _to_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, str):
        return getattr(logging, log_level.upper())
    return log_level


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


class DuplicateFilter(logging.Filter):
    """Drops records already emitted once; uvicorn's reloader imports the app twice."""

    def __init__(self):
        super().__init__()
        self.logged = set()

    def filter(self, record):
        log_key = (record.name, record.levelno, record.msg)
        if log_key in self.logged:
            return False
        self.logged.add(log_key)
        return True


def setup_logging(log_level: Union[int, str] = logging.INFO, json_logs: bool = False):
    """Set up structured logging for the application.

    This is the only place the root logger gets a handler. structlog events
    and plain stdlib records (litestar, uvicorn, httpx) go through the same
    ProcessorFormatter, so a request's ``endpoint`` context shows up on every
    line it produces.

    Args:
        log_level: Level name or number applied to structlog and the root logger
        json_logs: Render JSON lines instead of the colored console format
    """
    log_level = _to_level(log_level)

    shared_processors = [
        # endpoint and fields bound by the catch-all handler
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper("iso"),
    ]

    structlog.configure(
        processors=shared_processors + [_renderer(json_logs)],
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Filter logs according to level *before* processing
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_renderer(json_logs),
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)
    handler.addFilter(DuplicateFilter())

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in logging.root.manager.loggerDict:
        if name != "root":
            logging.getLogger(name).handlers = []
            logging.getLogger(name).propagate = True
            logging.getLogger(name).setLevel(log_level)

    if log_level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def get_uvicorn_log_config(log_level: Union[int, str] = logging.INFO):
    """Uvicorn logging config that swaps its handlers for a NullHandler and
    lets every record propagate to the handler installed by setup_logging.
    """
    log_level_name = logging.getLevelName(_to_level(log_level))

    loggers = {
        name: {"handlers": ["null"], "level": log_level_name, "propagate": True}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {},
        "handlers": {"null": {"class": "logging.NullHandler"}},
        "loggers": loggers,
    }
