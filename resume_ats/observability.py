"""Logging setup and operation tracking for the command line and tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "resume_ats"


def setup_logging(verbose: bool = False, level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once and return it.

    Args:
        verbose: Log at DEBUG instead of the configured level
        level: Level name from config (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``)

    Returns:
        The ``resume_ats`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(getattr(logging, (level or "WARNING").upper(), logging.WARNING))
    return logger


@dataclass
class OperationEvent:
    """A single parse, score or review operation."""

    timestamp: datetime
    operation: str  # "parse", "score", "jd"
    data: Dict[str, Any]
    duration_ms: float
    success: bool = True


class OperationObserver:
    """Collects operation events and logs them as they happen."""

    def __init__(self, verbose: bool = False):
        self.events: List[OperationEvent] = []
        self.verbose = verbose
        self.logger = logging.getLogger(ROOT_LOGGER)

    def log_operation(
        self,
        operation: str,
        duration_ms: float,
        success: bool = True,
        **data: Any,
    ) -> OperationEvent:
        """Record one operation.

        Args:
            operation: Operation name
            duration_ms: Wall time in milliseconds
            success: Whether the operation produced a result
            **data: Extra details such as the input path or the score
        """
        event = OperationEvent(
            timestamp=datetime.now(),
            operation=operation,
            data=data,
            duration_ms=duration_ms,
            success=success,
        )
        self.events.append(event)

        status = "ok" if success else "failed"
        details = " ".join(f"{key}={value}" for key, value in data.items())
        self.logger.info("%s %s (%.2fms) %s", operation, status, duration_ms, details)
        return event

    def get_session_summary(self) -> Dict[str, Any]:
        failures = [e for e in self.events if not e.success]
        return {
            "operations": len(self.events),
            "failures": len(failures),
            "total_duration_ms": round(sum(e.duration_ms for e in self.events), 2),
        }
