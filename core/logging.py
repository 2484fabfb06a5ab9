"""
Structured JSON logging infrastructure for Certifica.

Log records are emitted as single-line JSON documents so certificate
generation events (mode, filename, size, failures) can be correlated with
the HTTP requests that triggered them.

Example usage:
    >>> from core.logging import get_logger, setup_logging
    >>> setup_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("Certificate generated", extra={"certificate_file": "certificado_ana_x1.pdf"})
"""

import json
import logging
import os
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime',
})


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Emits time, level, logger and msg plus every field passed through
    ``extra``. Exceptions are serialized under ``exception``.

    Example:
        >>> formatter = JSONFormatter()
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for automatic request/response logging.

    Generates a short request ID per request, logs start, completion and
    failure with timing, and echoes the ID in the ``X-Request-ID`` header.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> app.add_middleware(RequestLoggingMiddleware)
    """

    def __init__(self, app, logger_name: str = "certifica.requests"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        client_ip = self._get_client_ip(request)
        start_time = time.time()

        self.logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client_ip": client_ip,
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            self.logger.error(
                f"Request failed: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status": 500,
                    "duration_ms": duration_ms,
                    "client_ip": client_ip,
                    "error": str(e)
                },
                exc_info=True
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        self.logger.info(
            f"Request completed: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": client_ip
            }
        )

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, honouring proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

        if request.client:
            return request.client.host

        return "unknown"


def setup_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
    logger_name: Optional[str] = None
) -> None:
    """
    Configure logging with JSON or plain-text formatting.

    Args:
        level: Logging level name; defaults to ``CERTIFICA_LOG_LEVEL`` or INFO
        format_type: "json" or "text"; defaults to ``CERTIFICA_LOG_FORMAT`` or json
        logger_name: Specific logger to configure (None for root)

    Example:
        >>> setup_logging(level="DEBUG", format_type="json")
        >>> logger = get_logger(__name__)
        >>> logger.info("Application started")
    """
    level = level or os.environ.get("CERTIFICA_LOG_LEVEL", "INFO")
    format_type = format_type or os.environ.get("CERTIFICA_LOG_FORMAT", "json")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if format_type.lower() == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(numeric_level)

    logger = logging.getLogger(logger_name) if logger_name else logging.getLogger()

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric_level)

    if logger_name:
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    request: Optional[Request] = None,
    **kwargs
) -> None:
    """
    Log message with request context if available.

    Args:
        logger: Logger instance to use
        level: Log level (info, warning, error, etc.)
        message: Log message
        request: FastAPI request object for context
        **kwargs: Additional context fields

    Example:
        >>> logger = get_logger(__name__)
        >>> log_with_context(logger, "info", "Certificate generated", certificate_file="certificado_ana_x1.pdf")
    """
    extra_fields = dict(kwargs)

    if request:
        if hasattr(request.state, 'request_id'):
            extra_fields['request_id'] = request.state.request_id

        extra_fields['path'] = request.url.path
        extra_fields['method'] = request.method

        if request.client:
            extra_fields['client_ip'] = request.client.host

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra=extra_fields)
