"""Evidence Integrity - Logging
Structured loguru logging with audit entries and in-process metrics.
"""

import json
import sys
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger as loguru_logger


class MetricsCollector:
    """Collect and aggregate metrics."""

    def __init__(self):
        self._counters: dict[str, int] = defaultdict(int)
        self._histograms: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()
        self._start_time = time.time()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None):
        """Increment a counter."""
        key = self._make_key(name, tags)
        with self._lock:
            self._counters[key] += value

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None):
        """Record a histogram value."""
        key = self._make_key(name, tags)
        with self._lock:
            self._histograms[key].append(value)
            # Keep last 1000 values
            if len(self._histograms[key]) > 1000:
                self._histograms[key] = self._histograms[key][-1000:]

    def _make_key(self, name: str, tags: dict[str, str] | None = None) -> str:
        if tags:
            tag_str = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
            return f"{name}{{{tag_str}}}"
        return name

    def get_stats(self) -> dict[str, Any]:
        """Get all metrics statistics."""
        with self._lock:
            stats = {
                "uptime_seconds": time.time() - self._start_time,
                "counters": dict(self._counters),
                "histograms": {},
            }

            for name, values in self._histograms.items():
                if values:
                    sorted_vals = sorted(values)
                    stats["histograms"][name] = {
                        "count": len(values),
                        "min": sorted_vals[0],
                        "max": sorted_vals[-1],
                        "avg": sum(values) / len(values),
                        "p50": sorted_vals[len(sorted_vals) // 2],
                        "p95": sorted_vals[int(len(sorted_vals) * 0.95)],
                    }

            return stats


class IntegrityLogger:
    """Main logging class for Evidence Integrity."""

    def __init__(
        self,
        log_dir: str | None = None,
        log_level: str = "INFO",
        json_format: bool = True,
        enable_console: bool = True,
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = log_level.upper()
        self.json_format = json_format
        self.metrics = MetricsCollector()
        self._setup(enable_console)

    def _setup(self, enable_console: bool):
        loguru_logger.remove()

        if enable_console:
            loguru_logger.add(
                sys.stderr,
                level=self.log_level,
                format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
                colorize=True,
            )

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

            loguru_logger.add(
                self.log_dir / "evidence-integrity.log",
                rotation="100 MB",
                retention="30 days",
                compression="gz",
                level=self.log_level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            )

            # Audit trail is kept longer than the main log
            loguru_logger.add(
                self.log_dir / "audit.log",
                rotation="50 MB",
                retention="365 days",
                compression="gz",
                level="INFO",
                filter=lambda record: record["extra"].get("audit", False),
                format="{time:YYYY-MM-DD HH:mm:ss} | {message}",
            )

            if self.json_format:
                loguru_logger.add(
                    self.log_dir / "evidence-integrity.jsonl",
                    rotation="100 MB",
                    retention="30 days",
                    compression="gz",
                    level=self.log_level,
                    serialize=True,
                )

        self._logger = loguru_logger

    def _log(self, level: str, message: str, extra: dict[str, Any] | None = None, audit: bool = False):
        log = self._logger.bind(audit=audit).opt(depth=2)
        if extra:
            log.log(level, f"{message} | {json.dumps(extra, default=str)}")
        else:
            log.log(level, message)
        self.metrics.increment(f"logs.{level.lower()}")

    def debug(self, message: str, **kwargs):
        self._log("DEBUG", message, kwargs or None)

    def info(self, message: str, **kwargs):
        self._log("INFO", message, kwargs or None)

    def warning(self, message: str, **kwargs):
        self._log("WARNING", message, kwargs or None)

    def error(self, message: str, **kwargs):
        self._log("ERROR", message, kwargs or None)
        self.metrics.increment("errors.total")

    def audit(self, action: str, resource_type: str, resource_id: str, **kwargs):
        """Log audit entry for compliance."""
        entry = {
            "action": action,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "timestamp": datetime.utcnow().isoformat(),
            **kwargs,
        }
        self._log("INFO", f"AUDIT: {action} on {resource_type}/{resource_id}", entry, audit=True)
        self.metrics.increment("audit.total")
        self.metrics.increment(f"audit.{action}")

    @contextmanager
    def timer(self, name: str, tags: dict[str, str] | None = None):
        """Context manager for timing operations."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.metrics.histogram(f"{name}.duration_ms", duration_ms, tags)

    def record_request(self, method: str, path: str, status_code: int, duration_ms: float):
        """Record HTTP request metrics."""
        tags = {"method": method, "status": str(status_code)}
        self.metrics.histogram("http.duration_ms", duration_ms, tags)
        self.metrics.increment(f"http.requests.{status_code}")
        self.metrics.increment("http.requests.total")

    def get_metrics(self) -> dict[str, Any]:
        return self.metrics.get_stats()


# Global logger instance
_logger: IntegrityLogger | None = None


def get_logger() -> IntegrityLogger:
    """Get or create the global logger."""
    global _logger
    if _logger is None:
        _logger = IntegrityLogger()
    return _logger


def configure_logging(
    log_dir: str | None = None,
    log_level: str = "INFO",
    json_format: bool = True,
) -> IntegrityLogger:
    """Configure and return the logger."""
    global _logger
    _logger = IntegrityLogger(
        log_dir=log_dir,
        log_level=log_level,
        json_format=json_format,
    )
    return _logger
