import json
import time
from enum import Enum
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


class ErrorClassification(Enum):
    # Classification system for suite failures and how to react to them
    TRANSIENT = "transient"          # Site or network hiccup, rerun may pass
    TERMINAL = "terminal"            # Should fail fast
    CONFIGURATION = "configuration"  # Environment/config related
    SESSION = "session"              # Browser could not be launched or released
    VALIDATION = "validation"        # Page content did not match expectation


@dataclass
class ErrorContext:
    # Preserves error context for debugging failed scenarios
    correlation_id: str
    timestamp: float = field(default_factory=time.time)
    component: str = ""
    operation: str = ""
    page_url: Optional[str] = None
    test_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    stack_trace: Optional[str] = None
    recovery_suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp,
            "component": self.component,
            "operation": self.operation,
            "page_url": self.page_url,
            "test_name": self.test_name,
            "metadata": self.metadata,
            "stack_trace": self.stack_trace,
            "recovery_suggestions": self.recovery_suggestions,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str, indent=2)


class ShopTestError(Exception):
    # Base exception for all suite errors
    # Carries structured context and recovery guidance for the report

    def __init__(
        self,
        message: str,
        error_context: Optional[ErrorContext] = None,
        classification: ErrorClassification = ErrorClassification.TERMINAL,
        cause: Optional[Exception] = None,
        recovery_suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_context = error_context or ErrorContext(correlation_id="unknown")
        self.classification = classification
        self.cause = cause
        self.recovery_suggestions = recovery_suggestions or []

        if recovery_suggestions:
            self.error_context.recovery_suggestions.extend(recovery_suggestions)

    def is_transient(self) -> bool:
        return self.classification == ErrorClassification.TRANSIENT

    def get_actionable_message(self) -> str:
        # Error message followed by recovery suggestions
        base_message = f"{self.message}"

        if self.recovery_suggestions:
            suggestions = "\n".join(f"  - {suggestion}" for suggestion in self.recovery_suggestions)
            base_message += f"\n\nRecovery suggestions:\n{suggestions}"

        if self.error_context.page_url:
            base_message += f"\n\nPage: {self.error_context.page_url}"

        if self.error_context.correlation_id != "unknown":
            base_message += f"\nCorrelation ID: {self.error_context.correlation_id}"

        return base_message

    def __str__(self) -> str:
        return self.get_actionable_message()


class BrowserSessionError(ShopTestError):
    # Raised when the per-test browser session cannot be launched

    def __init__(
        self,
        message: str,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.browser_type = browser_type
        self.headless = headless

        recovery_suggestions = [
            "Run 'playwright install' to download the browser binaries",
            "Check that no stale browser processes hold the profile",
            "Set HEADLESS=true when running without a display",
        ]

        if "timeout" in message.lower():
            recovery_suggestions.insert(0, "Increase DEFAULT_TIMEOUT_MS for slow machines")

        if error_context:
            error_context.component = "Browser Session"
            if browser_type:
                error_context.metadata["browser_type"] = browser_type
            if headless is not None:
                error_context.metadata["headless"] = headless

        super().__init__(
            message=f"Browser Session Error: {message}",
            error_context=error_context,
            classification=ErrorClassification.SESSION,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )


class ConfigurationError(ShopTestError):
    # Exception for configuration issues - terminal, should fail fast

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
        expected_format: Optional[str] = None,
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.config_key = config_key
        self.config_file = config_file
        self.expected_format = expected_format

        recovery_suggestions = [
            "Review environment variables and the .env file",
            "Compare your values with .env.example",
        ]

        if config_key:
            recovery_suggestions.insert(0, f"Fix configuration value: {config_key}")

        if config_file:
            recovery_suggestions.insert(0, f"Check configuration file: {config_file}")

        if expected_format:
            recovery_suggestions.insert(0, f"Expected format: {expected_format}")

        if error_context:
            error_context.component = "Configuration"
            if config_key:
                error_context.metadata["config_key"] = config_key
            if config_file:
                error_context.metadata["config_file"] = config_file

        super().__init__(
            message=f"Configuration Error: {message}",
            error_context=error_context,
            classification=ErrorClassification.CONFIGURATION,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )


class ValidationError(ShopTestError):
    # Raised when a read-back from the page does not have the expected shape

    def __init__(
        self,
        message: str,
        expected_value: Optional[str] = None,
        actual_value: Optional[str] = None,
        validation_type: str = "content",
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.expected_value = expected_value
        self.actual_value = actual_value
        self.validation_type = validation_type

        recovery_suggestions = [
            "Check if the page content or layout has changed",
            "Verify test data and account state",
        ]

        if expected_value and actual_value:
            recovery_suggestions.insert(0,
                f"Expected: '{expected_value}' but got: '{actual_value}'")

        if error_context:
            error_context.component = "Validation"
            error_context.operation = validation_type
            error_context.metadata.update({
                "expected_value": expected_value,
                "actual_value": actual_value,
                "validation_type": validation_type,
            })

        super().__init__(
            message=f"Validation Error ({validation_type}): {message}",
            error_context=error_context,
            classification=ErrorClassification.VALIDATION,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )
