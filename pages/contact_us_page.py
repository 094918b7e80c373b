"""The /contact_us "Get In Touch" form."""

from __future__ import annotations

import logging

import allure
from playwright.sync_api import Dialog

from core.waits import SETTLE_SHORT_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class ContactUsPage(BasePage):
    path = "/contact_us"

    HEADING = ".contact-form h2.title.text-center"
    NAME_INPUT = "input[data-qa='name']"
    EMAIL_INPUT = "input[data-qa='email']"
    SUBJECT_INPUT = "input[data-qa='subject']"
    MESSAGE_TEXTAREA = "textarea[data-qa='message']"
    SUBMIT_BUTTON = "input[data-qa='submit-button']"
    SUCCESS_MESSAGE = ".status.alert.alert-success"
    SUCCESS_TIMEOUT_MS = 5000

    def get_heading(self) -> str:
        return self.page.locator(self.HEADING).first.text_content() or ""

    def fill_form(self, name: str, email: str, subject: str, message: str) -> None:
        self.fill(self.NAME_INPUT, name)
        self.fill(self.EMAIL_INPUT, email)
        self.fill(self.SUBJECT_INPUT, subject)
        self.fill(self.MESSAGE_TEXTAREA, message)
        settle(SETTLE_SHORT_MS)

    def submit(self) -> None:
        """Submit the form, accepting the site's "Press OK to proceed!" confirm."""
        with allure.step("Submit contact form"):
            self.page.once("dialog", _accept_dialog)
            self.click(self.SUBMIT_BUTTON)

    def submit_without_confirm(self) -> None:
        self.click(self.SUBMIT_BUTTON)
        settle(SETTLE_SHORT_MS)

    def is_success_message_visible(self) -> bool:
        return self.is_visible(self.SUCCESS_MESSAGE, timeout=self.SUCCESS_TIMEOUT_MS)

    def get_success_message(self) -> str:
        if not self.is_success_message_visible():
            return ""
        return self.page.locator(self.SUCCESS_MESSAGE).first.text_content() or ""

    def get_email_validation_message(self) -> str:
        return self.page.locator(self.EMAIL_INPUT).evaluate("el => el.validationMessage") or ""


def _accept_dialog(dialog: Dialog) -> None:
    logger.info(f"Accepting {dialog.type} dialog: {dialog.message}")
    dialog.accept()
