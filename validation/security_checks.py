# validation/security_checks.py
"""
Passive security audits over what the browser observed.

These never attack anything: they inspect response headers, cookies, URLs and
rendered content after the suite has driven the site through its normal forms.
Most findings are warnings because the demo site is not hardened and the
suite's job is to report, not to gate on, its posture.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping

from playwright.sync_api import Dialog, Page

from core.waits import settle

from .core import CheckResult

logger = logging.getLogger("shoptest.security")

SECURITY_HEADERS = (
    "x-frame-options",
    "x-content-type-options",
    "x-xss-protection",
    "strict-transport-security",
    "content-security-policy",
)
MIN_SECURITY_HEADERS = 3

XSS_PAYLOADS = (
    "<script>alert('XSS')</script>",
    "<img src=x onerror=alert('XSS')>",
    "javascript:alert('XSS')",
    "<svg/onload=alert('XSS')>",
)

SQL_INJECTION_PAYLOADS = (
    "' OR '1'='1",
    "admin'--",
    "' OR '1'='1' --",
    "'; DROP TABLE users--",
    "1' UNION SELECT NULL--",
)

DATABASE_ERROR_WORDS = ("sql", "mysql", "syntax error", "database")

SESSION_COOKIE_MARKERS = ("session", "sess", "phpsessid", "jsessionid", "auth")

SENSITIVE_URL_PATTERNS = (
    r"password=",
    r"pwd=",
    r"pass=",
    r"credit.*card",
    r"ssn=",
    r"social.*security",
    r"api.*key",
    r"secret",
    r"token=.*[a-z0-9]{20,}",
)

TECHNICAL_ERROR_KEYWORDS = (
    "stack trace",
    "exception",
    "sql",
    "database",
    "server error",
    "php warning",
    "php notice",
    "undefined index",
    "mysql",
    "postgresql",
)

USER_ENUMERATION_PHRASES = ("user not found", "email does not exist")

FILE_SIZE_WORDS = ("max", "size", "mb", "kb")


def audit_security_headers(headers: Mapping[str, str]) -> CheckResult:
    """Report which recommended security headers a response carries."""
    lowered = {name.lower(): value for name, value in headers.items()}
    present = [name for name in SECURITY_HEADERS if name in lowered]
    missing = [name for name in SECURITY_HEADERS if name not in lowered]

    result = CheckResult(
        name="security_headers",
        details={"present": present, "missing": missing},
        message=f"Security headers present: {len(present)}/{len(SECURITY_HEADERS)}",
    )
    if len(present) < MIN_SECURITY_HEADERS:
        result.add_warning(f"Only {len(present)} security headers present. Consider adding: {', '.join(missing)}")
    return result


def audit_cookies(cookies: Iterable[Mapping[str, Any]], https: bool = True) -> CheckResult:
    """Check Secure, HttpOnly and SameSite attributes of browser context cookies."""
    cookies = list(cookies)
    result = CheckResult(name="cookie_flags", details={"cookies": len(cookies)})
    if not cookies:
        result.message = "No cookies set"
        return result

    for cookie in cookies:
        name = cookie.get("name", "")
        if https and not cookie.get("secure", False):
            result.add_warning(f"Cookie '{name}' is missing the Secure flag")
        if not cookie.get("httpOnly", False):
            result.add_warning(f"Cookie '{name}' is missing the HttpOnly flag")
        if cookie.get("sameSite", "None") == "None":
            result.add_warning(f"Cookie '{name}' has SameSite=None")
    return result


def find_session_cookies(cookies: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Cookies whose name marks them as session or auth cookies."""
    return [
        cookie for cookie in cookies
        if any(marker in cookie.get("name", "").lower() for marker in SESSION_COOKIE_MARKERS)
    ]


def find_sensitive_url_patterns(url: str) -> List[str]:
    """Patterns from SENSITIVE_URL_PATTERNS that match *url*, case-insensitively."""
    lowered = url.lower()
    return [pattern for pattern in SENSITIVE_URL_PATTERNS if re.search(pattern, lowered)]


def is_payload_reflected_unescaped(content: str, payload: str) -> bool:
    """True when the payload appears verbatim and the page carries no HTML escapes at all."""
    return payload in content and "&lt;" not in content and "&gt;" not in content


def find_keywords(content: str, keywords: Iterable[str]) -> List[str]:
    lowered = content.lower()
    return [keyword for keyword in keywords if keyword in lowered]


def find_technical_keywords(content: str) -> List[str]:
    return find_keywords(content, TECHNICAL_ERROR_KEYWORDS)


def find_database_errors(content: str) -> List[str]:
    return find_keywords(content, DATABASE_ERROR_WORDS)


@dataclass
class DialogWatcher:
    """
    Records and dismisses every JavaScript dialog a page opens.

    Used as the oracle for reflected script execution: a payload that runs
    ``alert()`` shows up in ``messages``.
    """
    messages: List[str] = field(default_factory=list)

    def attach(self, page: Page) -> "DialogWatcher":
        page.on("dialog", self._on_dialog)
        return self

    def detach(self, page: Page) -> None:
        page.remove_listener("dialog", self._on_dialog)

    @property
    def triggered(self) -> bool:
        return bool(self.messages)

    def reset(self) -> None:
        self.messages.clear()

    def _on_dialog(self, dialog: Dialog) -> None:
        logger.warning(f"Dialog opened ({dialog.type}): {dialog.message}")
        self.messages.append(dialog.message)
        dialog.dismiss()


def summarize(results: Iterable[CheckResult]) -> Dict[str, Any]:
    results = list(results)
    return {
        "checks": len(results),
        "failed": [r.name for r in results if not r.is_successful()],
        "warnings": sum(len(r.warnings) for r in results),
    }


def watch_dialogs_after(
    page: Page,
    submit: Callable[[], Any],
    settle_ms: int = 2000,
    watch_ms: int = 1000,
) -> DialogWatcher:
    """
    Submit a form, let the page settle, then watch for dialogs.

    Only dialogs opened during the watch window land in the returned watcher.
    Dialogs opened while submitting or settling are dismissed and logged.
    """
    early = DialogWatcher().attach(page)
    try:
        submit()
        settle(settle_ms)
    finally:
        early.detach(page)
    for message in early.messages:
        logger.warning(f"Dialog opened before the watch window: {message}")

    watcher = DialogWatcher().attach(page)
    try:
        settle(watch_ms)
    finally:
        watcher.detach(page)
    return watcher
