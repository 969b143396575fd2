"""
Centralized logging configuration.

Call setup_logging() once at application startup; library modules only
create their own ``logging.getLogger(__name__)``.

What the package logs:
    INFO  - catalog files loaded, orchestrator stage progress
    ERROR - pricing skipped for a SKU missing from the catalog,
            spec extraction failures for a single product (the product
            falls back to an empty requirement set), and a failed
            orchestrator run (with traceback)
    DEBUG - the SKU selected for each RFP product

The CLI reads the level from ``LOG_LEVEL`` (default INFO) and can also
write to a file with ``--log-file``. Handlers write to stderr so command
output on stdout stays clean.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

_logging_configured = False

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure logging for the whole application.

    Subsequent calls are no-ops.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional file path to write logs to
        format_string: Custom format string
    """
    global _logging_configured

    if _logging_configured:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers: list = []

    # Logs go to stderr so CLI output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)

    _logging_configured = True
