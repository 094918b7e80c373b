# validation/performance.py
"""
Performance measurement helpers.

Thresholds are generous on purpose: the demo site is slow and heavily
ad-loaded, and the checks exist to catch regressions by orders of magnitude.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, Request, Response

from .core import CheckResult

logger = logging.getLogger("shoptest.performance")

BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class PerformanceThresholds:
    max_page_load_ms: int = 20000
    max_ttfb_ms: int = 5000
    max_dom_content_loaded_ms: int = 10000
    max_action_response_ms: int = 30000
    max_search_response_ms: int = 8000
    max_request_count: int = 300
    max_page_size_mb: float = 15.0
    max_dom_nodes: int = 10000
    max_js_heap_mb: float = 150.0
    max_failed_requests: int = 30
    max_dom_depth: int = 30
    max_resource_count: int = 500
    large_image_bytes: int = 500 * BYTES_PER_KB
    image_budget_mb: float = 3.0


THRESHOLDS = PerformanceThresholds()


NAVIGATION_TIMING_SCRIPT = """
() => {
    const t = performance.timing;
    const result = {};
    if (t.navigationStart) result.navigationStart = t.navigationStart;
    if (t.responseStart) result.responseStart = t.responseStart;
    if (t.domContentLoadedEventEnd) result.domContentLoadedEventEnd = t.domContentLoadedEventEnd;
    if (t.loadEventEnd) result.loadEventEnd = t.loadEventEnd;
    return result;
}
"""

DOM_DEPTH_SCRIPT = """
() => {
    let maxDepth = 0;
    for (const el of document.getElementsByTagName('*')) {
        let depth = 0;
        let node = el;
        while (node.parentElement) {
            depth++;
            node = node.parentElement;
        }
        if (depth > maxDepth) maxDepth = depth;
    }
    return maxDepth;
}
"""

JS_HEAP_SCRIPT = """
() => {
    if (!performance.memory) return null;
    return JSON.stringify({
        jsHeapSizeLimit: performance.memory.jsHeapSizeLimit || 0,
        totalJSHeapSize: performance.memory.totalJSHeapSize || 0,
        usedJSHeapSize: performance.memory.usedJSHeapSize || 0
    });
}
"""

DOM_TAGS = ("*", "div", "img", "script", "a", "input")


class Stopwatch:
    """Context manager measuring wall-clock milliseconds."""

    def __init__(self):
        self.elapsed_ms = 0.0
        self._start = 0.0

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000


@dataclass
class NavigationTiming:
    ttfb_ms: Optional[int] = None
    dom_content_loaded_ms: Optional[int] = None
    full_load_ms: Optional[int] = None

    @classmethod
    def from_timing(cls, timing: Dict[str, int]) -> "NavigationTiming":
        """Derive durations from a performance.timing snapshot; missing marks stay None."""
        start = timing.get("navigationStart")
        if not start:
            return cls()

        def since_start(mark: str) -> Optional[int]:
            value = timing.get(mark)
            return value - start if value else None

        return cls(
            ttfb_ms=since_start("responseStart"),
            dom_content_loaded_ms=since_start("domContentLoadedEventEnd"),
            full_load_ms=since_start("loadEventEnd"),
        )


def read_navigation_timing(page: Page) -> NavigationTiming:
    """Navigation timing of the current page; empty when the page cannot report it."""
    try:
        timing = page.evaluate(NAVIGATION_TIMING_SCRIPT) or {}
    except PlaywrightError as e:
        logger.warning(f"Navigation timing unavailable: {e}")
        return NavigationTiming()
    return NavigationTiming.from_timing(timing)


def content_length(headers: Dict[str, str]) -> int:
    """Size from a Content-Length header; 0 when absent or malformed."""
    try:
        return int(headers.get("content-length", 0))
    except (TypeError, ValueError):
        return 0


@dataclass
class NetworkMonitor:
    """
    Records requests, response sizes and failures for one page.

    Attach before navigating:

        monitor = NetworkMonitor().attach(page)
        page.goto(url)
        page.wait_for_load_state("networkidle")
        monitor.detach()
    """
    requests: List[Tuple[str, str, str]] = field(default_factory=list)
    response_sizes: List[int] = field(default_factory=list)
    image_sizes: List[Tuple[str, int]] = field(default_factory=list)
    failed_requests: List[str] = field(default_factory=list)
    _page: Optional[Page] = field(default=None, repr=False)

    def attach(self, page: Page) -> "NetworkMonitor":
        self._page = page
        page.on("request", self.on_request)
        page.on("response", self.on_response)
        page.on("requestfailed", self.on_request_failed)
        return self

    def detach(self) -> None:
        if self._page is None:
            return
        self._page.remove_listener("request", self.on_request)
        self._page.remove_listener("response", self.on_response)
        self._page.remove_listener("requestfailed", self.on_request_failed)
        self._page = None

    def on_request(self, request: Request) -> None:
        self.requests.append((request.method, request.resource_type, request.url))

    def on_response(self, response: Response) -> None:
        size = content_length(response.headers)
        if size:
            self.response_sizes.append(size)
        if response.request.resource_type == "image":
            self.image_sizes.append((response.url, size))

    def on_request_failed(self, request: Request) -> None:
        failure = request.failure or "Unknown failure"
        self.failed_requests.append(f"{request.url} - {failure}")
        logger.debug(f"Request failed: {request.resource_type} {request.url}")

    @property
    def request_count(self) -> int:
        return len(self.requests)

    @property
    def total_size_mb(self) -> float:
        return sum(self.response_sizes) / BYTES_PER_MB

    @property
    def total_image_size_mb(self) -> float:
        return sum(size for _, size in self.image_sizes) / BYTES_PER_MB

    def count_by_type(self, resource_type: str) -> int:
        return sum(1 for _, kind, _ in self.requests if kind == resource_type)

    def large_images(self, limit_bytes: int = THRESHOLDS.large_image_bytes) -> List[Tuple[str, int]]:
        return [(url, size) for url, size in self.image_sizes if size > limit_bytes]

    def summary(self) -> Dict[str, Any]:
        return {
            "requests": self.request_count,
            "total_size_mb": round(self.total_size_mb, 2),
            "images": self.count_by_type("image"),
            "scripts": self.count_by_type("script"),
            "stylesheets": self.count_by_type("stylesheet"),
            "failed": len(self.failed_requests),
        }


def collect_dom_metrics(page: Page) -> Dict[str, int]:
    metrics = {
        tag if tag != "*" else "total": int(page.evaluate(f"document.getElementsByTagName('{tag}').length"))
        for tag in DOM_TAGS
    }
    metrics["stylesheets"] = page.locator("link[rel='stylesheet']").count()
    metrics["depth"] = int(page.evaluate(DOM_DEPTH_SCRIPT))
    return metrics


def read_js_heap_mb(page: Page) -> Optional[Dict[str, float]]:
    """Chromium-only performance.memory figures in MB, or None when unavailable."""
    raw = page.evaluate(JS_HEAP_SCRIPT)
    if not raw:
        return None
    memory = json.loads(raw)
    used = float(memory.get("usedJSHeapSize", 0))
    if used <= 0:
        return None
    return {
        "used_mb": used / BYTES_PER_MB,
        "total_mb": float(memory.get("totalJSHeapSize", 0)) / BYTES_PER_MB,
        "limit_mb": float(memory.get("jsHeapSizeLimit", 0)) / BYTES_PER_MB,
    }


def check_network_budget(monitor: NetworkMonitor, thresholds: PerformanceThresholds = THRESHOLDS) -> CheckResult:
    result = CheckResult(name="network_budget", details=monitor.summary())
    if monitor.request_count >= thresholds.max_request_count:
        result.add_error(f"Too many requests: {monitor.request_count} (max: {thresholds.max_request_count})")
    if monitor.total_size_mb >= thresholds.max_page_size_mb:
        result.add_error(
            f"Page size too large: {monitor.total_size_mb:.2f}MB (max: {thresholds.max_page_size_mb}MB)"
        )
    return result


def check_image_budget(monitor: NetworkMonitor, thresholds: PerformanceThresholds = THRESHOLDS) -> CheckResult:
    large = monitor.large_images(thresholds.large_image_bytes)
    result = CheckResult(
        name="image_budget",
        details={
            "images": len(monitor.image_sizes),
            "total_image_size_mb": round(monitor.total_image_size_mb, 2),
            "large_images": len(large),
        },
    )
    for url, size in large[:5]:
        result.add_warning(f"Large image {size // BYTES_PER_KB}KB: {url[:80]}")
    if monitor.total_image_size_mb > thresholds.image_budget_mb:
        result.add_warning(
            f"Total image size {monitor.total_image_size_mb:.2f}MB is high. Consider optimization."
        )
    if not monitor.image_sizes:
        result.add_error("Page should have images")
    return result
