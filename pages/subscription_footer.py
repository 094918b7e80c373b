"""Newsletter subscription box rendered in the footer of every page."""

from __future__ import annotations

import logging

from core.waits import SETTLE_DEFAULT_MS, SETTLE_LONG_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class SubscriptionFooter(BasePage):
    SUBSCRIPTION_HEADER = "h2:has-text('Subscription')"
    EMAIL_INPUT = "input#susbscribe_email"
    SUBSCRIBE_BUTTON = "button#subscribe"
    SUCCESS_MESSAGE = "#success-subscribe .alert-success"

    def scroll_into_view(self) -> None:
        self.scroll_to("document.body.scrollHeight")
        settle(SETTLE_DEFAULT_MS)

    def is_subscription_header_visible(self) -> bool:
        return self.is_visible(self.SUBSCRIPTION_HEADER)

    def subscribe(self, email: str) -> None:
        logger.info(f"Subscribing {email} to the newsletter")
        self.fill(self.EMAIL_INPUT, email)
        self.click(self.SUBSCRIBE_BUTTON)
        settle(SETTLE_LONG_MS)

    def is_success_message_visible(self, timeout: float = 2000) -> bool:
        return self.is_visible(self.SUCCESS_MESSAGE, timeout=timeout)

    def get_success_message(self) -> str:
        if not self.is_success_message_visible():
            return ""
        return self.page.locator(self.SUCCESS_MESSAGE).first.text_content() or ""

    def get_email_validation_message(self) -> str:
        return self.page.locator(self.EMAIL_INPUT).evaluate("el => el.validationMessage") or ""
