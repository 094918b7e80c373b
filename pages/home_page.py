"""Home page and the header navigation shared by every page."""

from __future__ import annotations

import logging

from core.waits import SETTLE_SHORT_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class HomePage(BasePage):
    path = "/"

    SIGNUP_LOGIN_LINK = "a[href='/login']"
    PRODUCTS_LINK = "a[href='/products']"
    CART_LINK = "a[href='/view_cart']"
    CONTACT_US_LINK = "a[href='/contact_us']"
    TEST_CASES_LINK = "a[href='/test_cases']"
    LOGGED_IN_AS = "text=Logged in as"
    LOGOUT_LINK = "a[href='/logout']"
    DELETE_ACCOUNT_LINK = "a[href='/delete_account']"
    HOME_LINK = "a[href='/']"
    SECTION_HEADER = "h2.title.text-center"

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Load the site root and clear the consent banner."""
        self.navigate(self.base_url)
        self.dismiss_cookie_banner()

    def click_signup_login(self) -> None:
        self.click(self.SIGNUP_LOGIN_LINK)

    def click_products(self) -> None:
        self.click(self.PRODUCTS_LINK)

    def click_cart(self) -> None:
        self.click(self.CART_LINK)

    def click_contact_us(self) -> None:
        self.click(self.CONTACT_US_LINK)

    def click_test_cases(self) -> None:
        self.click(self.TEST_CASES_LINK)

    def click_logout(self) -> None:
        logger.info("Logging out")
        self.click(self.LOGOUT_LINK)

    def click_delete_account(self) -> None:
        logger.info("Deleting account")
        self.click(self.DELETE_ACCOUNT_LINK)

    def click_home(self) -> None:
        self.click(self.HOME_LINK)

    def scroll_to_footer(self) -> None:
        self.scroll_to("document.body.scrollHeight")
        settle(SETTLE_SHORT_MS)

    def scroll_to_top(self) -> None:
        self.scroll_to(0)
        settle(SETTLE_SHORT_MS)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_home_page_loaded(self) -> bool:
        return self.is_visible(self.SIGNUP_LOGIN_LINK)

    def is_user_logged_in(self) -> bool:
        return self.is_visible(self.LOGGED_IN_AS)

    def get_logged_in_username(self) -> str:
        """Name from the "Logged in as <name>" banner, or "" when logged out."""
        if not self.is_user_logged_in():
            return ""
        full_text = self.page.locator(self.LOGGED_IN_AS).first.text_content() or ""
        return full_text.replace("Logged in as", "", 1).strip()

    def is_logout_visible(self) -> bool:
        return self.is_visible(self.LOGOUT_LINK)

    def is_delete_account_visible(self) -> bool:
        return self.is_visible(self.DELETE_ACCOUNT_LINK)

    def get_header_text(self) -> str:
        return self.page.locator(self.SECTION_HEADER).first.text_content() or ""

    def get_scroll_position(self) -> int:
        return self.scroll_position()
