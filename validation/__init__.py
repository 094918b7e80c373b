# validation/__init__.py
"""
Audit helpers for the performance and security scenarios.

Key Components:
- CheckResult: outcome of one audit, with errors (fail) and warnings (report only)
- NetworkMonitor: request/response/requestfailed bookkeeping for a page
- Security audits: response headers, cookie flags, sensitive URL patterns,
  reflected payloads and technical error keywords
- DialogWatcher: records alert dialogs opened by injected payloads

Usage:
    from validation import NetworkMonitor, check_network_budget

    monitor = NetworkMonitor().attach(page)
    page.goto(url)
    page.wait_for_load_state("networkidle")
    result = check_network_budget(monitor)
    assert result.is_successful(), result.summary()
"""

from .core import CheckResult, CheckStatus

from .performance import (
    THRESHOLDS,
    PerformanceThresholds,
    NavigationTiming,
    NetworkMonitor,
    Stopwatch,
    check_image_budget,
    check_network_budget,
    collect_dom_metrics,
    content_length,
    read_js_heap_mb,
    read_navigation_timing,
)

from .security_checks import (
    SECURITY_HEADERS,
    SQL_INJECTION_PAYLOADS,
    XSS_PAYLOADS,
    DialogWatcher,
    audit_cookies,
    audit_security_headers,
    find_database_errors,
    find_keywords,
    find_sensitive_url_patterns,
    find_session_cookies,
    find_technical_keywords,
    is_payload_reflected_unescaped,
    summarize,
    watch_dialogs_after,
)

__all__ = [
    # Results
    "CheckResult",
    "CheckStatus",

    # Performance
    "THRESHOLDS",
    "PerformanceThresholds",
    "NavigationTiming",
    "NetworkMonitor",
    "Stopwatch",
    "check_image_budget",
    "check_network_budget",
    "collect_dom_metrics",
    "content_length",
    "read_js_heap_mb",
    "read_navigation_timing",

    # Security
    "SECURITY_HEADERS",
    "SQL_INJECTION_PAYLOADS",
    "XSS_PAYLOADS",
    "DialogWatcher",
    "audit_cookies",
    "audit_security_headers",
    "find_database_errors",
    "find_keywords",
    "find_sensitive_url_patterns",
    "find_session_cookies",
    "find_technical_keywords",
    "is_payload_reflected_unescaped",
    "summarize",
    "watch_dialogs_after",
]
