"""The /login page: "Login to your account" and "New User Signup!" forms."""

from __future__ import annotations

import logging

import allure

from core.waits import SETTLE_DEFAULT_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class LoginPage(BasePage):
    path = "/login"

    # Login form
    LOGIN_EMAIL_INPUT = "input[data-qa='login-email']"
    LOGIN_PASSWORD_INPUT = "input[data-qa='login-password']"
    LOGIN_BUTTON = "button[data-qa='login-button']"
    LOGIN_SECTION_HEADER = "text=Login to your account"

    # Signup form
    SIGNUP_NAME_INPUT = "input[data-qa='signup-name']"
    SIGNUP_EMAIL_INPUT = "input[data-qa='signup-email']"
    SIGNUP_BUTTON = "button[data-qa='signup-button']"
    SIGNUP_SECTION_HEADER = "text=New User Signup!"

    # Messages
    LOGIN_ERROR_MESSAGE = "p[style*='color: red']"
    EMAIL_EXISTS_ERROR = "text=Email Address already exist!"
    LOGGED_IN_AS = "text=Logged in as"
    ACCOUNT_DELETED_MESSAGE = "h2[data-qa='account-deleted']"

    # ------------------------------------------------------------------
    # Login actions
    # ------------------------------------------------------------------

    def enter_login_email(self, email: str) -> None:
        self.fill(self.LOGIN_EMAIL_INPUT, email)

    def enter_login_password(self, password: str) -> None:
        self.fill(self.LOGIN_PASSWORD_INPUT, password)

    def click_login_button(self) -> None:
        self.click(self.LOGIN_BUTTON)

    def perform_login(self, email: str, password: str) -> None:
        with allure.step(f"Log in as {email}"):
            logger.info(f"Logging in as {email}")
            self.enter_login_email(email)
            self.enter_login_password(password)
            self.click_login_button()
            settle(SETTLE_DEFAULT_MS)

    def clear_login_email(self) -> None:
        self.page.locator(self.LOGIN_EMAIL_INPUT).clear()

    def clear_login_password(self) -> None:
        self.page.locator(self.LOGIN_PASSWORD_INPUT).clear()

    # ------------------------------------------------------------------
    # Signup actions
    # ------------------------------------------------------------------

    def enter_signup_name(self, name: str) -> None:
        self.fill(self.SIGNUP_NAME_INPUT, name)

    def enter_signup_email(self, email: str) -> None:
        self.fill(self.SIGNUP_EMAIL_INPUT, email)

    def click_signup_button(self) -> None:
        self.click(self.SIGNUP_BUTTON)

    def perform_signup(self, name: str, email: str) -> None:
        with allure.step(f"Start signup for {email}"):
            logger.info(f"Starting signup for {email}")
            self.enter_signup_name(name)
            self.enter_signup_email(email)
            self.click_signup_button()
            settle(SETTLE_DEFAULT_MS)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_login_form_visible(self) -> bool:
        return self.is_visible(self.LOGIN_EMAIL_INPUT)

    def is_signup_form_visible(self) -> bool:
        return self.is_visible(self.SIGNUP_NAME_INPUT)

    def is_login_section_header_visible(self) -> bool:
        return self.is_visible(self.LOGIN_SECTION_HEADER)

    def is_signup_section_header_visible(self) -> bool:
        return self.is_visible(self.SIGNUP_SECTION_HEADER)

    def is_login_successful(self) -> bool:
        return self.is_visible(self.LOGGED_IN_AS)

    def is_login_error_displayed(self) -> bool:
        return self.is_visible(self.LOGIN_ERROR_MESSAGE)

    def get_login_error_message(self) -> str:
        if not self.is_login_error_displayed():
            return ""
        return (self.page.locator(self.LOGIN_ERROR_MESSAGE).first.text_content() or "").strip()

    def is_email_exists_error_displayed(self) -> bool:
        return self.is_visible(self.EMAIL_EXISTS_ERROR)

    def is_account_deleted_message_visible(self) -> bool:
        return self.is_visible(self.ACCOUNT_DELETED_MESSAGE)

    def get_account_deleted_message(self) -> str:
        if not self.is_account_deleted_message_visible():
            return ""
        return self.page.locator(self.ACCOUNT_DELETED_MESSAGE).first.text_content() or ""

    def is_login_button_enabled(self) -> bool:
        return self.page.locator(self.LOGIN_BUTTON).is_enabled()

    def is_signup_button_enabled(self) -> bool:
        return self.page.locator(self.SIGNUP_BUTTON).is_enabled()
