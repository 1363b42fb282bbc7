import logging
import os
import sys
import threading
from typing import Optional

import structlog
from dynaconf import Dynaconf

# Process settings: awsprovider_settings.json and AWSPROVIDER_* environment variables
settings = Dynaconf(
    settings_files=["awsprovider_settings.json"],
    envvar_prefix="AWSPROVIDER",
    load_dotenv=True,
)

_configured = False
_configure_lock = threading.Lock()


def setup_logging(
    log_dir: Optional[str] = None,
    log_filename: Optional[str] = None,
    log_level: Optional[str] = None,
    log_destination: Optional[str] = None,
    force: bool = False,
):
    """
    Set up structured logging for the provider using structlog.

    The provider runs as a plugin whose stdout may belong to the host runtime,
    so logs go to stderr unless a file destination is configured.

    :param log_dir: Directory where the log file will be stored.
    :param log_filename: Name of the log file.
    :param log_level: Logging level (e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :param log_destination: Where to send logs ("file", "stderr", or "both").
    :param force: Reconfigure even if logging was already set up.
    :return: Configured structlog logger instance.
    """
    global _configured

    with _configure_lock:
        if _configured and not force:
            return structlog.get_logger("awsprovider")

        log_level = log_level or settings.get("LOG_LEVEL", "INFO")
        log_destination = log_destination or settings.get("LOG_DESTINATION", "stderr")
        log_dir = log_dir or settings.get("LOG_DIR", os.path.join(".", "logs"))
        log_filename = log_filename or settings.get("LOG_FILENAME", "awsprovider.log")

        renderer = (
            structlog.processors.JSONRenderer()
            if settings.get("LOG_FORMAT", "console") == "json"
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )

        handlers: list[logging.Handler] = []
        if log_destination in ("file", "both"):
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, log_filename)))

        if log_destination in ("stderr", "both"):
            handlers.append(logging.StreamHandler(sys.stderr))

        for handler in handlers:
            handler.setFormatter(formatter)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        root = logging.getLogger("awsprovider")
        for existing in list(root.handlers):
            root.removeHandler(existing)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))
        root.propagate = False

        _configured = True
        return structlog.get_logger("awsprovider")


def get_logger(name: str = "awsprovider"):
    """Return a structlog logger, configuring logging on first use."""
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)
