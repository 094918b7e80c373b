import json
import logging
import time
import uuid
from typing import Dict, Any, Optional

from core.security import mask_sensitive_data, setup_secure_logging

from .base import ShopTestError, ErrorContext
from .classification import (
    create_error_context,
    convert_to_suite_exception,
    get_recovery_strategy,
)

SUITE_LOGGER_NAME = "shoptest"
TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredErrorLogger:
    # JSON-structured error logger with correlation ID tracking

    def __init__(self, logger_name: str = __name__):
        self.logger = logging.getLogger(logger_name)

    def log_error(
        self,
        exception: Exception,
        context: Optional[ErrorContext] = None,
        level: str = "error",
        additional_fields: Optional[Dict[str, Any]] = None
    ) -> str:
        # Log error with structured JSON format and return correlation ID
        correlation_id = get_error_correlation_id()

        if context is None:
            context = create_error_context(correlation_id=correlation_id)

        if not context.correlation_id or context.correlation_id == "unknown":
            context.correlation_id = correlation_id

        if not isinstance(exception, ShopTestError):
            suite_exception = convert_to_suite_exception(exception, context)
        else:
            suite_exception = exception

        log_entry = {
            "timestamp": time.time(),
            "level": level.upper(),
            "correlation_id": context.correlation_id,
            "error": {
                "type": type(exception).__name__,
                "message": str(exception),
                "classification": suite_exception.classification.value,
                "recovery_strategy": get_recovery_strategy(exception).value,
                "recovery_suggestions": suite_exception.recovery_suggestions
            },
            "context": context.to_dict(),
        }

        if additional_fields:
            log_entry.update(additional_fields)

        if exception.__cause__:
            log_entry["error"]["cause"] = {
                "type": type(exception.__cause__).__name__,
                "message": str(exception.__cause__)
            }

        log_entry = mask_sensitive_data(log_entry)

        log_method = getattr(self.logger, level.lower(), self.logger.error)
        log_method(json.dumps(log_entry, default=str))

        return context.correlation_id


class JSONFormatter(logging.Formatter):
    # JSON formatter for structured logging

    def format(self, record: logging.LogRecord) -> str:
        # Messages that already are JSON objects pass through unchanged
        try:
            message = json.loads(record.getMessage())
            if isinstance(message, dict):
                return json.dumps(message, default=str)
        except (json.JSONDecodeError, TypeError):
            pass

        log_entry = {
            "timestamp": record.created,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


_structured_logger = StructuredErrorLogger(f"{SUITE_LOGGER_NAME}.errors")


def log_error_with_context(
    exception: Exception,
    context: Optional[ErrorContext] = None,
    level: str = "error",
    **additional_fields
) -> str:
    return _structured_logger.log_error(
        exception=exception,
        context=context,
        level=level,
        additional_fields=additional_fields
    )


def get_error_correlation_id() -> str:
    return str(uuid.uuid4())[:8]


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_LOG_FORMAT)


def configure_error_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: Optional[str] = None,
    enable_security: bool = True
):
    # Configure the suite logger tree ("shoptest", "shoptest.pages", ...)
    # Safe to call again: only the suite logger's own handlers are replaced
    logger = logging.getLogger(SUITE_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_build_formatter(format_type))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(_build_formatter(format_type))
        logger.addHandler(file_handler)

    if enable_security:
        setup_secure_logging(logger)
        logger.info("Secure logging configured - sensitive data will be masked")
