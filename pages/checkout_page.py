"""Checkout review (/checkout), payment (/payment) and order confirmation."""

from __future__ import annotations

import logging
from typing import List

import allure

from core.data import TEST_CARD, PaymentCard
from core.waits import SETTLE_LONG_MS, settle
from pages.base_page import BasePage, ProbeResult

logger = logging.getLogger("shoptest.pages")


class CheckoutPage(BasePage):
    path = "/checkout"

    # Review
    ADDRESS_DETAILS = ".checkout-information"
    DELIVERY_ADDRESS = "#address_delivery"
    BILLING_ADDRESS = "#address_invoice"
    ORDER_REVIEW = "#cart_items"
    ORDER_ITEM_DESCRIPTIONS = "#cart_info .cart_description"
    ORDER_TOTAL = ".cart_total_price"
    COMMENT_TEXTAREA = "textarea[name='message']"
    PLACE_ORDER_BUTTON = "a:has-text('Place Order')"

    # Payment
    NAME_ON_CARD_INPUT = "input[data-qa='name-on-card']"
    CARD_NUMBER_INPUT = "input[data-qa='card-number']"
    CVC_INPUT = "input[data-qa='cvc']"
    EXPIRY_MONTH_INPUT = "input[data-qa='expiry-month']"
    EXPIRY_YEAR_INPUT = "input[data-qa='expiry-year']"
    PAY_BUTTON = "button[data-qa='pay-button']"

    # Confirmation
    ORDER_CONFIRMATION = "p:has-text('Congratulations')"
    DOWNLOAD_INVOICE_LINK = "a:has-text('Download Invoice')"
    CONTINUE_BUTTON = "a[data-qa='continue-button']"
    CONFIRMATION_TIMEOUT_MS = 10000

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def get_address_details(self) -> str:
        return self.page.locator(self.ADDRESS_DETAILS).first.text_content() or ""

    def get_delivery_address(self) -> str:
        return self.page.locator(self.DELIVERY_ADDRESS).text_content() or ""

    def get_billing_address(self) -> str:
        return self.page.locator(self.BILLING_ADDRESS).text_content() or ""

    def is_order_review_visible(self) -> bool:
        return self.is_visible(self.ORDER_REVIEW)

    def get_order_item_descriptions(self) -> List[str]:
        return [text.strip() for text in self.page.locator(self.ORDER_ITEM_DESCRIPTIONS).all_text_contents()]

    def is_order_total_visible(self) -> bool:
        return self.is_visible(self.ORDER_TOTAL)

    def is_comment_box_visible(self) -> bool:
        return self.is_visible(self.COMMENT_TEXTAREA)

    def enter_comment(self, comment: str) -> None:
        self.fill(self.COMMENT_TEXTAREA, comment)

    def get_comment(self) -> str:
        return self.page.locator(self.COMMENT_TEXTAREA).input_value()

    def click_place_order(self) -> None:
        self.click(self.PLACE_ORDER_BUTTON)
        settle(SETTLE_LONG_MS)

    # ------------------------------------------------------------------
    # Payment
    # ------------------------------------------------------------------

    def is_payment_form_visible(self) -> bool:
        return self.is_visible(self.CARD_NUMBER_INPUT)

    def fill_payment_details(self, card: PaymentCard = TEST_CARD) -> None:
        self.fill(self.NAME_ON_CARD_INPUT, card.name_on_card)
        self.fill(self.CARD_NUMBER_INPUT, card.number)
        self.fill(self.CVC_INPUT, card.cvc)
        self.fill(self.EXPIRY_MONTH_INPUT, card.expiry_month)
        self.fill(self.EXPIRY_YEAR_INPUT, card.expiry_year)

    def click_pay(self) -> None:
        logger.info("Submitting payment")
        self.click(self.PAY_BUTTON)

    def pay(self, card: PaymentCard = TEST_CARD) -> ProbeResult:
        """Fill the card form, submit and wait for the confirmation page."""
        with allure.step("Pay and confirm order"):
            self.fill_payment_details(card)
            self.click_pay()
            return self.wait_for_order_confirmation()

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    def wait_for_order_confirmation(self) -> ProbeResult:
        result = self.probe(self.ORDER_CONFIRMATION, timeout=self.CONFIRMATION_TIMEOUT_MS)
        if not result:
            logger.warning(f"Order confirmation not shown after {self.CONFIRMATION_TIMEOUT_MS}ms: {result.value}")
        return result

    def is_order_confirmed(self) -> bool:
        return self.is_visible(self.ORDER_CONFIRMATION)

    def get_confirmation_message(self) -> str:
        if not self.is_order_confirmed():
            return ""
        return self.page.locator(self.ORDER_CONFIRMATION).first.text_content() or ""

    def is_download_invoice_visible(self) -> bool:
        return self.is_visible(self.DOWNLOAD_INVOICE_LINK)

    def download_invoice(self) -> str:
        """Click the invoice link and return the suggested file name."""
        with self.page.expect_download() as download_info:
            self.click(self.DOWNLOAD_INVOICE_LINK)
        filename = download_info.value.suggested_filename
        logger.info(f"Invoice downloaded: {filename}")
        return filename

    def is_continue_visible(self) -> bool:
        return self.is_visible(self.CONTINUE_BUTTON)

    def click_continue(self) -> None:
        self.click(self.CONTINUE_BUTTON)
        settle(SETTLE_LONG_MS)
