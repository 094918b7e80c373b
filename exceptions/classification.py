import traceback
import uuid
from typing import Dict, Any, Optional
from enum import Enum

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .base import (
    ShopTestError,
    BrowserSessionError,
    ConfigurationError,
    ValidationError,
    ErrorClassification,
    ErrorContext,
)


class RecoveryStrategy(Enum):
    # What a person triaging the failure should do next
    RERUN_TEST = "rerun_test"
    RESTART_SESSION = "restart_session"
    UPDATE_LOCATOR = "update_locator"
    FIX_CONFIGURATION = "fix_configuration"
    FAIL_FAST = "fail_fast"


def create_error_context(
    correlation_id: Optional[str] = None,
    component: str = "",
    operation: str = "",
    page_url: Optional[str] = None,
    test_name: Optional[str] = None,
    **metadata
) -> ErrorContext:
    # Factory function to create error context with correlation ID
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())[:8]

    stack = traceback.format_exc()
    return ErrorContext(
        correlation_id=correlation_id,
        component=component,
        operation=operation,
        page_url=page_url,
        test_name=test_name,
        metadata=metadata,
        stack_trace=stack if stack.strip() != "NoneType: None" else None
    )


def classify_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> ErrorClassification:
    # Classification based on exception type first, message second
    if isinstance(exception, ShopTestError):
        return exception.classification

    if isinstance(exception, PlaywrightTimeoutError):
        return ErrorClassification.TRANSIENT

    if isinstance(exception, PlaywrightError):
        return _classify_playwright_error(exception)

    if isinstance(exception, AssertionError):
        return ErrorClassification.VALIDATION

    if isinstance(exception, (KeyError, EnvironmentError)) and _is_configuration_error(exception):
        return ErrorClassification.CONFIGURATION

    if _is_network_error(exception):
        return ErrorClassification.TRANSIENT

    return ErrorClassification.TERMINAL


def is_transient_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> bool:
    return classify_error(exception, context) == ErrorClassification.TRANSIENT


def get_recovery_strategy(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> RecoveryStrategy:
    classification = classify_error(exception, context)

    if isinstance(exception, BrowserSessionError):
        return RecoveryStrategy.RESTART_SESSION

    if classification == ErrorClassification.TRANSIENT:
        return RecoveryStrategy.RERUN_TEST
    elif classification == ErrorClassification.SESSION:
        return RecoveryStrategy.RESTART_SESSION
    elif classification == ErrorClassification.CONFIGURATION:
        return RecoveryStrategy.FIX_CONFIGURATION
    elif classification == ErrorClassification.VALIDATION:
        if isinstance(exception, PlaywrightError) or "locator" in str(exception).lower():
            return RecoveryStrategy.UPDATE_LOCATOR

    return RecoveryStrategy.FAIL_FAST


def convert_to_suite_exception(
    exception: Exception,
    context: Optional[ErrorContext] = None,
    component: str = "Unknown",
    operation: str = "Unknown"
) -> ShopTestError:
    # Wrap third-party exceptions so they can be logged uniformly
    if isinstance(exception, ShopTestError):
        return exception

    if context is None:
        context = create_error_context(
            component=component,
            operation=operation
        )

    error_message = str(exception)
    classification = classify_error(exception)

    if classification == ErrorClassification.SESSION:
        return BrowserSessionError(
            message=error_message,
            error_context=context,
            cause=exception
        )

    elif classification == ErrorClassification.CONFIGURATION:
        return ConfigurationError(
            message=error_message,
            error_context=context,
            cause=exception
        )

    elif classification == ErrorClassification.VALIDATION:
        return ValidationError(
            message=error_message,
            error_context=context,
            cause=exception
        )

    return ShopTestError(
        message=error_message,
        error_context=context,
        classification=classification,
        cause=exception
    )


def _classify_playwright_error(exception: Exception) -> ErrorClassification:
    error_str = str(exception).lower()

    if any(indicator in error_str for indicator in ["target closed", "browser has been closed",
                                                    "executable doesn't exist", "crash"]):
        return ErrorClassification.SESSION

    if any(indicator in error_str for indicator in ["net::", "navigation", "ssl", "dns"]):
        return ErrorClassification.TRANSIENT

    if any(indicator in error_str for indicator in ["strict mode violation", "not attached",
                                                    "not visible", "resolved to"]):
        return ErrorClassification.VALIDATION

    return ErrorClassification.TERMINAL


def _is_configuration_error(exception: Exception) -> bool:
    error_str = str(exception).lower()
    config_indicators = [
        "config", "environment", "env", "setting", "variable", ".env"
    ]
    return any(indicator in error_str for indicator in config_indicators)


def _is_network_error(exception: Exception) -> bool:
    error_str = str(exception).lower()
    exception_types = ("connectionerror", "timeouterror", "httperror", "urlerror")

    network_indicators = [
        "network", "connection", "timeout", "dns", "socket", "ssl", "certificate", "proxy"
    ]

    return (any(exc_type in type(exception).__name__.lower() for exc_type in exception_types) or
            any(indicator in error_str for indicator in network_indicators))
