"""
Structured Logging for CiteForge.

This module provides the logging infrastructure shared by every CiteForge
module: a logger with key/value fields, a page-pass logger for the Markdown
extension, and one place to configure levels and handlers.

Architecture Context
--------------------
All modules import get_logger() from here rather than using Python's
logging directly:

    # Good - uses CiteForge's structured logging
    from citeforge.core.logging import get_logger
    logger = get_logger(__name__)

    # Avoid - bypasses our structure
    import logging
    logger = logging.getLogger(__name__)

Logger Types
------------
**StructuredLogger**
    Base logger with context binding support. Key-value pairs passed to a
    log call, or bound once with bind(), are appended to the message:

        logger = get_logger(__name__)
        logger.warning("Citation key not found", key="smith2020")
        # -> "Citation key not found | key=smith2020"

**PageLogger**
    Tracks the citation and bibliography passes over a single page, with
    timing:

        plog = PageLogger("/blog/post/")
        plog.start_pass("citations")
        plog.finish(citations=3)

Loggers are cached by name, so multiple calls to get_logger() return the
same instance.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


class StructuredLogger:
    """
    Structured logger with context support.

    Provides consistent logging across the application with
    support for structured fields and context tracking.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _ConfigHolder.get_config()
        self._context: dict[str, Any] = {}
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Remove existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            self.config.format,
            datefmt=self.config.date_format,
        )

        if self.config.console:
            console_handler = RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Attach fields to every subsequent message from this logger."""
        self._context.update(kwargs)
        return self

    def unbind(self, *keys: str) -> None:
        """Remove previously bound fields."""
        for key in keys:
            self._context.pop(key, None)

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra fields."""
        fields = {**self._context, **kwargs}
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


# Module-level logger factory
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration.

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure global logging settings.

    Loggers that already exist are reconfigured so a CLI flag such as
    --verbose takes effect for modules imported before it was parsed.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.
    """
    config = LogConfig(
        level=level,
        file_path=log_file,
        console=console,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _ConfigHolder.set_config(config)

    for structured in _loggers.values():
        structured.config = config
        structured._setup_logger()


class _ConfigHolder:
    """Holds default logging configuration."""

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


class PageLogger:
    """
    Specialized logger for the per-page Markdown passes.

    Tracks which pass (citations, bibliography) is running for a page
    and how long each took. The page id is bound to the shared
    "citeforge.render" logger until finish().
    """

    def __init__(self, page_id: str) -> None:
        self.page_id = page_id
        self.logger = get_logger("citeforge.render").bind(page=page_id)
        self._pass_start: Optional[datetime] = None
        self._current_pass: Optional[str] = None

    @property
    def current_pass(self) -> Optional[str]:
        """Name of the pass in progress, if any."""
        return self._current_pass

    def start_pass(self, name: str) -> None:
        """Mark the start of a pass."""
        self._finish_current_pass()
        self._current_pass = name
        self._pass_start = datetime.now()
        self.logger.debug("Starting pass", pass_name=name)

    def _finish_current_pass(self) -> None:
        """Log completion of current pass if any."""
        if self._current_pass and self._pass_start:
            duration = (datetime.now() - self._pass_start).total_seconds()
            self.logger.debug(
                "Completed pass",
                pass_name=self._current_pass,
                duration_sec=f"{duration:.3f}",
            )
        self._current_pass = None
        self._pass_start = None

    def finish(self, **counts: Any) -> None:
        """Mark the end of all passes for this page."""
        self._finish_current_pass()
        self.logger.debug("Page passes completed", **counts)
        self.logger.unbind("page")

    def log_progress(self, message: str, **kwargs: Any) -> None:
        """Log progress within a pass."""
        self.logger.debug(
            message,
            pass_name=self._current_pass,
            **kwargs,
        )


__all__ = [
    "LogConfig",
    "StructuredLogger",
    "PageLogger",
    "get_logger",
    "configure_logging",
]
