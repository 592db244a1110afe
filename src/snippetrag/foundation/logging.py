"""Logging configuration for SnippetRAG.

Core modules only ever call ``logging.getLogger(__name__)`` (or use a logger
handed to them); handlers are installed here, by the CLI entrypoint.

Usage:
    from snippetrag.foundation.logging import configure_logging
    configure_logging(debug=args.debug)

Priority for level resolution (highest to lowest):
    1. Explicit `level` parameter (programmatic override)
    2. SNIPPETRAG_LOG_LEVEL env var (any level: DEBUG, INFO, WARNING, etc.)
    3. SNIPPETRAG_DEBUG=true env var (simple boolean)
    4. `debug=True` parameter (--debug flag or `debug: true` in config)
    5. WARNING (default)
"""

import logging
import os
import sys
from pathlib import Path

_DEBUG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
_DEFAULT_FORMAT = "%(name)s: %(message)s"

# Transport chatter; our own client logs the events that matter
_NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "asyncio",
)


def configure_logging(
    *,
    debug: bool = False,
    level: int | str | None = None,
    stream: object = None,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the SnippetRAG CLI.

    Args:
        debug: Enable DEBUG level with detailed format
        level: Override log level (int or string like "DEBUG", "INFO")
        stream: Output stream (default: stderr)
        log_file: Also write every record (DEBUG and up) to this file
    """
    resolved_level: int
    if level is not None:
        resolved_level = _parse_level(level)
    elif env_level := os.environ.get("SNIPPETRAG_LOG_LEVEL"):
        resolved_level = _parse_level(env_level)
    elif os.environ.get("SNIPPETRAG_DEBUG", "").lower() in ("true", "1", "yes"):
        resolved_level = logging.DEBUG
    elif debug:
        resolved_level = logging.DEBUG
    else:
        resolved_level = logging.WARNING

    console_format = _DEBUG_FORMAT if resolved_level <= logging.DEBUG else _DEFAULT_FORMAT

    root_logger = logging.getLogger()
    # File handler needs DEBUG records to reach it; console still filters
    root_logger.setLevel(logging.DEBUG if log_file else resolved_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(logging.Formatter(console_format))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
            root_logger.addHandler(file_handler)
        except OSError as e:
            sys.stderr.write(f"Warning: Could not open log file {log_file}: {e}\n")

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "logging.configured level=%s debug=%s log_file=%s",
        logging.getLevelName(resolved_level),
        debug,
        log_file,
    )


def _parse_level(level: int | str) -> int:
    """Parse log level from int or string."""
    if isinstance(level, int):
        return level
    numeric = getattr(logging, level.upper(), None)
    if isinstance(numeric, int):
        return numeric
    try:
        return int(level)
    except ValueError:
        return logging.WARNING
