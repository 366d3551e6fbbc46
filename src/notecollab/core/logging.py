"""
Logging configuration for the NoteCollab backend.
"""
import json
import logging
import logging.config
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config import get_settings

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message", "asctime",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy: the same record also reaches the file handlers
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{self.BOLD}{record.levelname}{self.RESET}"
        colored.name = f"\033[90m{record.name}{self.RESET}"
        return super().format(colored)


def get_log_level(level_str: Optional[str] = None) -> int:
    """Get log level from string or settings."""
    level_str = level_str or get_settings().log_level
    level = logging.getLevelName(level_str.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Install handlers and formatters for the app, uvicorn and SQLAlchemy."""
    settings = get_settings()

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JSONFormatter,
            },
            "colored": {
                "()": ColoredFormatter,
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "file": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)-28s | %(funcName)-20s:%(lineno)-4d | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "colored" if settings.debug else "json",
                "stream": sys.stdout,
                "level": get_log_level(),
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_dir / "notecollab.log"),
                "maxBytes": 10_000_000,  # 10MB
                "backupCount": 5,
                "formatter": "file",
                "level": "DEBUG",
            },
            "error_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_dir / "error.log"),
                "maxBytes": 10_000_000,
                "backupCount": 5,
                "formatter": "json",
                "level": "ERROR",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "file"],
                "level": "INFO",
            },
            "notecollab": {
                "handlers": ["console", "file", "error_file"],
                "level": "DEBUG",
                "propagate": False,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "sqlalchemy": {
                "handlers": ["file"],
                "level": "WARNING",
                "propagate": False,
            },
            "alembic": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)

    logger = logging.getLogger("notecollab.logging")
    logger.info(
        "Logging system initialized",
        extra={
            "log_level": settings.log_level,
            "debug": settings.debug,
            "environment": settings.environment,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``notecollab`` namespace."""
    return logging.getLogger(f"notecollab.{name}")


def _header(scope, name: bytes) -> str:
    return next((v.decode() for k, v in scope.get("headers", []) if k == name), "unknown")


class LoggingMiddleware:
    """ASGI middleware logging HTTP timing and websocket handshakes."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] == "websocket":
            self.logger.info(
                "WebSocket connection",
                extra={
                    "path": scope["path"],
                    "client_ip": scope["client"][0] if scope.get("client") else "unknown",
                },
            )
            await self.app(scope, receive, send)
            return

        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request_id = id(scope)

        self.logger.info(
            "HTTP Request",
            extra={
                "request_id": request_id,
                "method": scope["method"],
                "path": scope["path"],
                "query_string": scope.get("query_string", b"").decode(),
                "client_ip": scope["client"][0] if scope.get("client") else "unknown",
                "user_agent": _header(scope, b"user-agent"),
            },
        )

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                self.logger.info(
                    "HTTP Response",
                    extra={
                        "request_id": request_id,
                        "status_code": message.get("status", 0),
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                        "method": scope["method"],
                        "path": scope["path"],
                    },
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error(
                "HTTP Request Failed",
                extra={
                    "request_id": request_id,
                    "method": scope["method"],
                    "path": scope["path"],
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                },
            )
            raise
