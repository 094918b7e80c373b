"""Base Page Object for the Automation Exercise shop.

Every page object wraps the single Playwright ``Page`` of the current test
session and exposes user-level actions and queries. Locators are plain
selector strings kept as class constants and re-evaluated on every use, so
no page object ever holds on to DOM state between calls.
"""

from __future__ import annotations

import enum
import logging
import os
from datetime import datetime

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from core.config import DEFAULT_BASE_URL
from core.waits import SETTLE_DEFAULT_MS, settle

logger = logging.getLogger("shoptest.pages")


class ProbeResult(enum.Enum):
    """Outcome of a visibility probe."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TIMED_OUT = "timed_out"

    def __bool__(self) -> bool:
        return self is ProbeResult.FOUND


class BasePage:
    """Shared primitives for all page objects."""

    COOKIE_CONSENT_BUTTON = "button:has-text('Einwilligen')"
    COOKIE_CONSENT_TIMEOUT_MS = 3000
    DEFAULT_PROBE_TIMEOUT_MS = 5000

    # Subclasses override with their route on the site.
    path: str = "/"

    def __init__(
        self,
        page: Page,
        base_url: str = DEFAULT_BASE_URL,
        screenshot_dir: str = "screenshots",
    ) -> None:
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.screenshot_dir = screenshot_dir

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, url: str | None = None) -> None:
        """Load *url* (default: this page's route) and wait for DOMContentLoaded."""
        target = url or f"{self.base_url}{self.path}"
        logger.info(f"Navigating to {target}")
        self.page.goto(target)
        self.page.wait_for_load_state("domcontentloaded")

    def get_title(self) -> str:
        return self.page.title()

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Element primitives
    # ------------------------------------------------------------------

    def locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def click(self, selector: str) -> None:
        logger.debug(f"Click {selector}")
        self.page.click(selector)

    def fill(self, selector: str, text: str) -> None:
        logger.debug(f"Fill {selector}")
        self.page.fill(selector, text)

    def text_of(self, selector: str) -> str:
        """Inner text of the first match, stripped."""
        return (self.page.locator(selector).first.inner_text() or "").strip()

    def count(self, selector: str) -> int:
        return self.page.locator(selector).count()

    def probe(self, selector: str, timeout: float = DEFAULT_PROBE_TIMEOUT_MS) -> ProbeResult:
        """Wait up to *timeout* ms for a visible match; never raises."""
        try:
            target = self.page.locator(selector).first
            if timeout <= 0:
                # Playwright reads a zero timeout as "wait forever"
                return ProbeResult.FOUND if target.is_visible() else ProbeResult.NOT_FOUND
            target.wait_for(state="visible", timeout=timeout)
            return ProbeResult.FOUND
        except PlaywrightTimeoutError:
            return ProbeResult.TIMED_OUT
        except Exception:
            logger.debug(f"Visibility probe for {selector} failed", exc_info=True)
            return ProbeResult.NOT_FOUND

    def is_visible(self, selector: str, timeout: float = DEFAULT_PROBE_TIMEOUT_MS) -> bool:
        return bool(self.probe(selector, timeout))

    def dismiss_cookie_banner(self) -> None:
        """Click the consent button when the banner shows up within 3 seconds."""
        button = self.page.locator(self.COOKIE_CONSENT_BUTTON)
        try:
            button.wait_for(state="visible", timeout=self.COOKIE_CONSENT_TIMEOUT_MS)
            button.click()
            settle(SETTLE_DEFAULT_MS)
            logger.info("Cookie consent dismissed")
        except PlaywrightError:
            logger.debug("No cookie consent banner")

    def scroll_to(self, y: int | str) -> None:
        self.page.evaluate(f"window.scrollTo(0, {y})")

    def scroll_position(self) -> int:
        return int(self.page.evaluate("window.pageYOffset"))

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    def screenshot(self, name: str) -> str:
        """Full-page capture into ``{screenshot_dir}/{name}_{YYYYmmdd_HHMMSS}.png``."""
        os.makedirs(self.screenshot_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.screenshot_dir, f"{name}_{timestamp}.png")
        self.page.screenshot(path=path, full_page=True)
        logger.info(f"Screenshot saved: {path}")
        return path
