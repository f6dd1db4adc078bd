"""Logging utilities for the telemetry engine."""

import sys
import time
from typing import Any, Dict, Optional

from loguru import logger

from ..config.settings import TelemetrySettings, get_settings


def setup_logging(settings: Optional[TelemetrySettings] = None) -> None:
    """Configure logging for the engine."""
    settings = settings or get_settings()

    # Remove default handler
    logger.remove()

    # Console handler
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    if settings.debug:
        log_level = "DEBUG"
    else:
        log_level = settings.log_level.value

    logger.add(
        sys.stderr,
        format=log_format,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug
    )

    if settings.log_file:
        # One JSON object per line
        logger.add(
            settings.log_file,
            level="INFO",
            rotation="1 day",
            retention="7 days",
            compression="gz",
            serialize=True
        )


def log_operation(
    operation: str,
    status: str,
    duration: Optional[float] = None,
    metadata: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None
) -> None:
    """Log an engine operation with structured metadata."""
    log_data: Dict[str, Any] = {"operation": operation, "status": status}

    if duration is not None:
        log_data["duration_ms"] = round(duration * 1000, 3)

    if metadata:
        log_data["metadata"] = metadata

    if error:
        log_data["error"] = error

    bound = logger.bind(**log_data)
    if status == "success":
        bound.debug(f"Operation completed: {operation}")
    elif status == "error":
        bound.error(f"Operation failed: {operation}: {error}")
    else:
        bound.info(f"Operation {status}: {operation}")


class TelemetryLogger:
    """Context manager for logging engine operations."""

    def __init__(self, operation: str, metadata: Optional[Dict[str, Any]] = None):
        self.operation = operation
        self.metadata = metadata or {}
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        logger.debug(f"Starting operation: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - self.start_time

        if exc_type is None:
            log_operation(
                operation=self.operation,
                status="success",
                duration=duration,
                metadata=self.metadata
            )
        else:
            log_operation(
                operation=self.operation,
                status="error",
                duration=duration,
                metadata=self.metadata,
                error=str(exc_val)
            )
        return False

    def update_metadata(self, **kwargs):
        """Update operation metadata."""
        self.metadata.update(kwargs)
