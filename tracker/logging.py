import logging
import os
import structlog
import sys
from pathlib import Path
from dotenv import load_dotenv

# Loggers that get chatty at INFO: the poll job fires every few seconds and
# matplotlib reports font cache lookups.
_QUIET = ("apscheduler", "matplotlib")

def setup_logging(level: str | None = None, json_logs: bool | None = None):
    """Route structlog through stdlib logging.

    JSON lines by default (service use); scripts pass ``json_logs=False`` for
    the console renderer. ``LOG_LEVEL``, ``LOG_JSON`` and ``LOG_ERROR_FILE``
    come from the environment or ``.env``.
    """
    load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if json_logs is None:
        json_logs = os.getenv("LOG_JSON", "1").strip().lower() not in ("0", "false", "no")
    error_log_path = os.getenv("LOG_ERROR_FILE", "").strip()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    formatter = logging.Formatter("%(message)s")
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if error_log_path:
        Path(error_log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(error_log_path)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
    for name in _QUIET:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(log_level)
