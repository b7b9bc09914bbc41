"""Logging utilities for iconspec."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class BuildStats:
    """Statistics from a batch build."""

    built_count: int = 0
    rejected_count: int = 0
    error_count: int = 0
    warning_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    icon_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def failed_count(self) -> int:
        """Icons that produced no markup, for any reason."""
        return self.rejected_count + self.error_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

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
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("iconspec")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking build outcomes and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_icon_start(self, icon_name: str) -> None:
        """Log start of an icon build."""
        self._logger.debug("Building icon", icon=icon_name)

    def log_icon_built(
        self,
        icon_name: str,
        warning_count: int,
        changes: int,
        duration_ms: float,
    ) -> None:
        """Log an icon that compiled."""
        self._logger.info(
            "Icon built",
            icon=icon_name,
            warnings=warning_count,
            changes=changes,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.built_count += 1
        self._stats.warning_count += warning_count
        self._stats.icon_timings_ms.append(duration_ms)

    def log_icon_rejected(self, icon_name: str, codes: list[str]) -> None:
        """Log an icon whose expanded spec failed validation."""
        self._logger.warning("Icon rejected", icon=icon_name, codes=codes)
        self._stats.rejected_count += 1
        self._stats.errors.append((icon_name, ", ".join(codes)))

    def log_icon_error(
        self,
        icon_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log an icon build that raised."""
        self._logger.error(
            "Icon build failed",
            icon=icon_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((icon_name, str(error)))

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats


def reset_logging() -> None:
    """Remove handlers installed by configure_logging and reset structlog."""
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()
    structlog.reset_defaults()
