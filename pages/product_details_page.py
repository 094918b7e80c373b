"""A single product's page under /product_details/<id>."""

from __future__ import annotations

import logging
from typing import Dict

import allure

from core.pricing import parse_quantity
from core.waits import SETTLE_DEFAULT_MS, SETTLE_SHORT_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class ProductDetailsPage(BasePage):
    path = "/product_details/1"

    # Product information
    PRODUCT_NAME = ".product-information h2"
    PRODUCT_CATEGORY = ".product-information p:has-text('Category:')"
    PRODUCT_PRICE = ".product-information span span"
    PRODUCT_AVAILABILITY = ".product-information p:has-text('Availability:')"
    PRODUCT_CONDITION = ".product-information p:has-text('Condition:')"
    PRODUCT_BRAND = ".product-information p:has-text('Brand:')"

    # Images
    PRODUCT_MAIN_IMAGE = ".view-product img"
    PRODUCT_THUMBNAILS = ".product-image-wrapper img"

    # Quantity and cart
    QUANTITY_INPUT = "input#quantity"
    ADD_TO_CART_BUTTON = "button.btn.btn-default.cart"
    CONTINUE_SHOPPING_BUTTON = "button.btn.btn-success"
    VIEW_CART_LINK = "text=View Cart"

    # Reviews
    WRITE_REVIEW_TAB = "a[href='#reviews']"
    REVIEW_NAME_INPUT = "input#name"
    REVIEW_EMAIL_INPUT = "input#email"
    REVIEW_TEXTAREA = "textarea#review"
    SUBMIT_REVIEW_BUTTON = "button#button-review"
    REVIEW_SUCCESS_MESSAGE = ".alert-success.alert"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_product_details_visible(self) -> bool:
        return self.is_visible(self.PRODUCT_NAME)

    def are_all_product_details_visible(self) -> bool:
        selectors = (
            self.PRODUCT_NAME,
            self.PRODUCT_CATEGORY,
            self.PRODUCT_PRICE,
            self.PRODUCT_AVAILABILITY,
            self.PRODUCT_CONDITION,
            self.PRODUCT_BRAND,
        )
        return all(self.is_visible(selector) for selector in selectors)

    def _labelled_value(self, selector: str, label: str) -> str:
        full_text = self.page.locator(selector).first.text_content() or ""
        return full_text.replace(label, "", 1).strip()

    def get_product_name(self) -> str:
        return (self.page.locator(self.PRODUCT_NAME).first.text_content() or "").strip()

    def get_product_category(self) -> str:
        return self._labelled_value(self.PRODUCT_CATEGORY, "Category:")

    def get_product_price(self) -> str:
        return (self.page.locator(self.PRODUCT_PRICE).first.text_content() or "").strip()

    def get_product_availability(self) -> str:
        return self._labelled_value(self.PRODUCT_AVAILABILITY, "Availability:")

    def get_product_condition(self) -> str:
        return self._labelled_value(self.PRODUCT_CONDITION, "Condition:")

    def get_product_brand(self) -> str:
        return self._labelled_value(self.PRODUCT_BRAND, "Brand:")

    def get_all_product_details(self) -> Dict[str, str]:
        return {
            "Name": self.get_product_name(),
            "Category": self.get_product_category(),
            "Price": self.get_product_price(),
            "Availability": self.get_product_availability(),
            "Condition": self.get_product_condition(),
            "Brand": self.get_product_brand(),
        }

    def is_product_image_visible(self) -> bool:
        return self.is_visible(self.PRODUCT_MAIN_IMAGE)

    def get_product_images_count(self) -> int:
        return self.count(self.PRODUCT_THUMBNAILS)

    def has_product_images(self) -> bool:
        """Main product image, or failing that any image on the page."""
        if self.is_visible(self.PRODUCT_MAIN_IMAGE):
            return True
        return self.count("img") > 0

    # ------------------------------------------------------------------
    # Quantity and cart
    # ------------------------------------------------------------------

    def get_current_quantity(self) -> str:
        return self.page.locator(self.QUANTITY_INPUT).input_value()

    def set_quantity(self, quantity: str) -> None:
        self.page.locator(self.QUANTITY_INPUT).clear()
        self.fill(self.QUANTITY_INPUT, str(quantity))

    def increase_quantity(self, amount: int) -> None:
        self.set_quantity(str(parse_quantity(self.get_current_quantity()) + amount))

    def click_add_to_cart(self) -> None:
        logger.info(f"Adding {self.get_product_name()} to cart")
        self.click(self.ADD_TO_CART_BUTTON)
        settle(SETTLE_DEFAULT_MS)

    def add_product_with_quantity(self, quantity: str) -> None:
        with allure.step(f"Add product with quantity {quantity}"):
            self.set_quantity(quantity)
            self.click_add_to_cart()

    def click_continue_shopping(self) -> None:
        if self.is_visible(self.CONTINUE_SHOPPING_BUTTON, timeout=3000):
            self.click(self.CONTINUE_SHOPPING_BUTTON)

    def click_view_cart(self) -> None:
        self.click(self.VIEW_CART_LINK)
        settle(SETTLE_DEFAULT_MS)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def click_write_review(self) -> None:
        self.click(self.WRITE_REVIEW_TAB)
        settle(SETTLE_SHORT_MS)

    def write_review(self, name: str, email: str, review: str) -> None:
        with allure.step("Write product review"):
            self.click_write_review()
            self.fill(self.REVIEW_NAME_INPUT, name)
            self.fill(self.REVIEW_EMAIL_INPUT, email)
            self.fill(self.REVIEW_TEXTAREA, review)
            self.click(self.SUBMIT_REVIEW_BUTTON)
            settle(SETTLE_DEFAULT_MS)

    def is_review_success_message_visible(self) -> bool:
        return self.is_visible(self.REVIEW_SUCCESS_MESSAGE)

    def get_review_success_message(self) -> str:
        if not self.is_review_success_message_visible():
            return ""
        return self.page.locator(self.REVIEW_SUCCESS_MESSAGE).first.text_content() or ""
