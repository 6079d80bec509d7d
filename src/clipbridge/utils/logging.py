"""Logging utilities for clipbridge."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

# Attribute set on handlers installed by configure_logging
_HANDLER_MARK = "_clipbridge_handler"


@dataclass
class OperationStats:
    """Statistics over engine calls made through one facade."""

    calls: int = 0
    failures: int = 0
    paths_returned: int = 0
    buffers_released: int = 0
    completed: int = 0
    total_time_ms: float = 0.0
    last_call_ms: float | None = None
    last_failure: tuple[str, int] | None = None

    @property
    def avg_call_time_ms(self) -> float | None:
        """Average time of completed engine calls in milliseconds."""
        if not self.completed:
            return None
        return self.total_time_ms / self.completed


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers left by an earlier call instead of stacking them
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(console_handler, _HANDLER_MARK, True)
        root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("clipbridge")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger routed through the stdlib logger ``name``.

    Events obey the host's stdlib log levels whether or not
    ``configure_logging`` was called.
    """
    return structlog.wrap_logger(logging.getLogger(name))


class OperationLogger:
    """Logger for tracking engine calls and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_operation_start(self, operation: str, **inputs: object) -> None:
        """Log start of an engine call."""
        self._logger.debug("Engine call", operation=operation, **inputs)
        self._stats.calls += 1

    def log_operation_complete(
        self,
        operation: str,
        paths_returned: int,
        duration_ms: float,
    ) -> None:
        """Log successful engine call."""
        self._logger.debug(
            "Engine call complete",
            operation=operation,
            paths=paths_returned,
            duration_ms=round(duration_ms, 3),
        )
        self._stats.paths_returned += paths_returned
        self._stats.completed += 1
        self._stats.total_time_ms += duration_ms
        self._stats.last_call_ms = duration_ms

    def log_operation_failed(self, operation: str, status: int) -> None:
        """Log engine call that reported a failure status."""
        self._logger.error(
            "Engine call failed",
            operation=operation,
            status=status,
        )
        self._stats.failures += 1
        self._stats.last_failure = (operation, status)

    def log_buffer_released(self, operation: str) -> None:
        """Log release of a native result buffer."""
        self._logger.debug("Native buffer released", operation=operation)
        self._stats.buffers_released += 1

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
