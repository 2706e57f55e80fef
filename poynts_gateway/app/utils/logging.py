"""Structured logging for proxied backend calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())


class StructuredProxyLogger:
    """Structured logger for backend proxy calls."""

    def log_upstream_error(
        self, method: str, url: str, status_code: int, message: str, latency_ms: float
    ) -> None:
        """Log a non-2xx backend response."""
        log_data: dict[str, Any] = {
            "method": method,
            "url": url,
            "status_code": status_code,
            "error": message,
            "latency_ms": round(latency_ms, 2),
        }
        logger.warning(
            f"Backend API error [{status_code}]: {method} {url} - {message}",
            extra={"structured": log_data},
        )

    def log_transport_failure(self, method: str, url: str, error: BaseException, latency_ms: float) -> None:
        """Log a backend call that never produced a response."""
        log_data: dict[str, Any] = {
            "method": method,
            "url": url,
            "error": str(error) or type(error).__name__,
            "error_type": type(error).__name__,
            "latency_ms": round(latency_ms, 2),
        }
        logger.error(
            f"Proxy request failed: {method} {url} - {log_data['error']}",
            extra={"structured": log_data},
        )

    def log_success(self, method: str, url: str, status_code: int, latency_ms: float) -> None:
        """Log a successful backend call at debug level."""
        logger.debug(
            f"Backend API ok [{status_code}]: {method} {url}",
            extra={
                "structured": {
                    "method": method,
                    "url": url,
                    "status_code": status_code,
                    "latency_ms": round(latency_ms, 2),
                }
            },
        )
