# validation/core.py
"""
Core result types for the suite's audit checks.

Performance and security checks inspect the live site and report a CheckResult.
A check can pass, fail, or pass with warnings; warnings are for findings the
suite reports but does not fail on (a missing security header, large images).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List


class CheckStatus(Enum):
    """Check result status."""
    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class CheckResult:
    """
    Outcome of a single audit check.

    Attributes:
        name: Short identifier of the check, e.g. "security_headers"
        status: Overall status, downgraded by add_warning/add_error
        details: Measured values, for logging and report attachments
    """
    name: str
    status: CheckStatus = CheckStatus.PASSED
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_successful(self) -> bool:
        """Failed is the only unsuccessful status; warnings still pass."""
        return self.status != CheckStatus.FAILED

    def add_detail(self, key: str, value: Any) -> None:
        self.details[key] = value

    def add_error(self, error_message: str) -> None:
        self.errors.append(error_message)
        self.status = CheckStatus.FAILED

    def add_warning(self, warning_message: str) -> None:
        self.warnings.append(warning_message)
        if self.status == CheckStatus.PASSED:
            self.status = CheckStatus.WARNING

    def summary(self) -> str:
        lines = [f"{self.name}: {self.status.value}"]
        if self.message:
            lines.append(self.message)
        lines.extend(f"  ERROR {error}" for error in self.errors)
        lines.extend(f"  WARN  {warning}" for warning in self.warnings)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "errors": self.errors,
            "warnings": self.warnings,
            "timestamp": self.timestamp.isoformat(),
        }
