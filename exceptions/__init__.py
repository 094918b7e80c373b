# Shop test suite exception hierarchy
# Structured errors with classification, context and recovery hints

from .base import (
    ShopTestError,
    BrowserSessionError,
    ConfigurationError,
    ValidationError,
    ErrorClassification,
    ErrorContext,
)

from .classification import (
    classify_error,
    is_transient_error,
    get_recovery_strategy,
    create_error_context,
    convert_to_suite_exception,
    RecoveryStrategy,
)

from .logging import (
    StructuredErrorLogger,
    JSONFormatter,
    log_error_with_context,
    get_error_correlation_id,
    configure_error_logging,
)

__all__ = [
    # Base exceptions
    "ShopTestError",
    "BrowserSessionError",
    "ConfigurationError",
    "ValidationError",

    # Error classification
    "ErrorClassification",
    "ErrorContext",
    "classify_error",
    "is_transient_error",
    "get_recovery_strategy",
    "create_error_context",
    "convert_to_suite_exception",
    "RecoveryStrategy",

    # Structured logging
    "StructuredErrorLogger",
    "JSONFormatter",
    "log_error_with_context",
    "get_error_correlation_id",
    "configure_error_logging",
]
