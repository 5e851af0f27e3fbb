import logging
import sys
from typing import Any

from loguru import logger

from vbrstatus.config import get_settings


class InterceptHandler(logging.Handler):
    """Intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _format_extra(record: dict[str, Any]) -> str:
    """Render bound context after the message."""
    extra = {k: v for k, v in record["extra"].items() if k != "name"}
    record["extra"]["context"] = " ".join(f"{k}={v}" for k, v in extra.items())
    return (
        "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | "
        "{message} {extra[context]}\n{exception}"
    )


def setup_logging(debug: bool | None = None) -> None:
    """Configure loguru for the application.

    Everything goes to stderr: stdout is reserved for the payload read by Zabbix.
    """
    if debug is None:
        debug = get_settings().debug

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format=_format_extra,
        backtrace=debug,
        diagnose=debug,
    )

    # Intercept stdlib logging (sqlalchemy, pyodbc)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ["sqlalchemy.engine", "sqlalchemy.pool"]:
        logging.getLogger(name).handlers = [InterceptHandler()]


def get_logger(name: str) -> Any:
    """Get a logger bound to a name."""
    return logger.bind(name=name)
