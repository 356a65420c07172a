import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from student_records.config.settings import settings
from student_records.utils.context import get_request_id

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_LOGGING_CONFIG = {
    "log_dir": "logs",
    "filename": "student-records.log",
    "level": "info",
    "rotation": "20 MB",
    "retention": "7 days",
    "console_format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | {message}",
    "file_format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | {name}:{function}:{line} - {message}",
    "use_json_logs": False,
}


class InterceptHandler(logging.Handler):
    """Forward standard library log records (uvicorn, fastapi) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(request_id=get_request_id() or "app").opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def load_logging_config(config_path: Path, environment: str = "logger") -> Dict[str, Any]:
    """
    Read one section of the JSON logging config.

    The ``environment`` section wins, then ``logger``. Keys a section leaves out
    and a missing file both fall back to ``DEFAULT_LOGGING_CONFIG``.
    """
    if not config_path.exists():
        return dict(DEFAULT_LOGGING_CONFIG)

    with open(config_path) as config_file:
        sections = json.load(config_file)
    section = sections.get(environment, sections.get("logger", {}))
    return {**DEFAULT_LOGGING_CONFIG, **section}


def file_sink_options(logging_config: Dict[str, Any]) -> Dict[str, Any]:
    options = {
        "rotation": logging_config["rotation"],
        "retention": logging_config["retention"],
        "enqueue": True,
        "backtrace": True,
        "colorize": False,
    }
    if logging_config.get("use_json_logs"):
        options["serialize"] = True
    else:
        options["format"] = logging_config["file_format"]
    return options


class CustomizeLogger:
    @classmethod
    def make_logger(cls, config_path: Path, environment: str = "logger"):
        logging_config = load_logging_config(config_path, environment)
        level = (settings.LOG_LEVEL or logging_config["level"]).upper()
        log_file = (
            Path(logging_config["log_dir"])
            / f"{date.today().strftime('%Y-%m-%d')}-{logging_config['filename']}"
        )

        logger.remove()
        # Unbound loggers still need a request_id for the format strings
        logger.configure(extra={"request_id": "app"})
        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            level=level,
            format=logging_config["console_format"],
            colorize=True,
        )
        logger.add(str(log_file), level=level, **file_sink_options(logging_config))

        cls._setup_intercept_handlers()
        return logger

    @staticmethod
    def _setup_intercept_handlers():
        logging.basicConfig(handlers=[InterceptHandler()], level=0)

        for log_name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
            logging.getLogger(log_name).handlers = [InterceptHandler()]


def _resolve_config_path(path: str) -> Path:
    config_path = Path(path)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = PROJECT_ROOT / config_path
    return config_path


environment = (
    "production"
    if os.getenv("ENVIRONMENT", settings.ENVIRONMENT) == "production"
    else "logger"
)
custom_logger = CustomizeLogger.make_logger(
    _resolve_config_path(settings.LOG_CONFIG_PATH), environment
)


def get_logger():
    """Get the custom logger instance with request ID binding."""
    request_id = get_request_id() or "app"
    return custom_logger.bind(request_id=request_id)
