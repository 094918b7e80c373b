"""The /view_cart page.

Cart lines have no stable identity on the page: they are addressed by their
row index at the moment of the call. Any add or delete shifts the rows, so
callers must re-read names, counts and indices after every mutation.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import allure

from core.pricing import line_total_matches
from core.waits import SETTLE_DEFAULT_MS, SETTLE_SHORT_MS, settle, wait_until
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class CartPage(BasePage):
    path = "/view_cart"

    # Page
    CART_INFO_TABLE = "#cart_info_table"
    BREADCRUMB = ".breadcrumb"
    EMPTY_CART_MESSAGE = "text=Cart is empty!"
    EMPTY_CART_TIMEOUT_MS = 3000

    # Cart lines
    CART_ITEMS = "tbody tr"
    PRODUCT_IMAGE = ".cart_product img"
    PRODUCT_NAME = ".cart_description h4 a"
    PRODUCT_PRICE = ".cart_price p"
    PRODUCT_QUANTITY = ".cart_quantity button"
    PRODUCT_TOTAL_PRICE = ".cart_total_price"
    DELETE_BUTTON = ".cart_quantity_delete"
    DELETE_TIMEOUT_MS = 5000

    # Checkout
    PROCEED_TO_CHECKOUT_BUTTON = "text=Proceed To Checkout"
    REGISTER_LOGIN_LINK = "text=Register / Login"

    # Recommended items
    RECOMMENDED_ITEMS_SECTION = "#recommended-item-carousel"
    RECOMMENDED_ADD_TO_CART = ".recommendeditem_add_to_cart"

    # ------------------------------------------------------------------
    # Page state
    # ------------------------------------------------------------------

    def is_cart_page_loaded(self) -> bool:
        return self.is_visible(self.CART_INFO_TABLE)

    def is_cart_empty(self) -> bool:
        return self.is_visible(self.EMPTY_CART_MESSAGE, timeout=self.EMPTY_CART_TIMEOUT_MS)

    def get_breadcrumb_text(self) -> str:
        return self.page.locator(self.BREADCRUMB).first.text_content() or ""

    def get_cart_items_count(self) -> int:
        if self.is_cart_empty():
            return 0
        return self.count(self.CART_ITEMS)

    def has_products(self) -> bool:
        return self.get_cart_items_count() > 0

    # ------------------------------------------------------------------
    # Per-line read-back
    # ------------------------------------------------------------------

    def _cell_text(self, selector: str, index: int) -> str:
        return (self.page.locator(selector).nth(index).text_content() or "").strip()

    def get_product_name_by_index(self, index: int) -> str:
        return self._cell_text(self.PRODUCT_NAME, index)

    def get_product_price_by_index(self, index: int) -> str:
        return self._cell_text(self.PRODUCT_PRICE, index)

    def get_product_quantity_by_index(self, index: int) -> str:
        return self._cell_text(self.PRODUCT_QUANTITY, index)

    def get_product_total_price_by_index(self, index: int) -> str:
        return self._cell_text(self.PRODUCT_TOTAL_PRICE, index)

    def get_all_product_names(self) -> List[str]:
        return [name.strip() for name in self.page.locator(self.PRODUCT_NAME).all_text_contents()]

    def find_product_index(self, product_name: str) -> Optional[int]:
        """Row index of the first line whose name contains *product_name*, ignoring case."""
        needle = product_name.lower()
        for index, name in enumerate(self.get_all_product_names()):
            if needle in name.lower():
                return index
        return None

    def is_product_in_cart(self, product_name: str) -> bool:
        return self.find_product_index(product_name) is not None

    def get_product_details(self, index: int) -> Dict[str, str]:
        return {
            "Name": self.get_product_name_by_index(index),
            "Price": self.get_product_price_by_index(index),
            "Quantity": self.get_product_quantity_by_index(index),
            "Total": self.get_product_total_price_by_index(index),
        }

    def get_all_products_details(self) -> List[Dict[str, str]]:
        return [self.get_product_details(index) for index in range(self.get_cart_items_count())]

    def is_product_image_visible(self, index: int) -> bool:
        try:
            return self.page.locator(self.PRODUCT_IMAGE).nth(index).is_visible()
        except Exception:
            logger.debug(f"Image probe for cart line {index} failed", exc_info=True)
            return False

    def get_product_image_url(self, index: int) -> str:
        return self.page.locator(self.PRODUCT_IMAGE).nth(index).get_attribute("src") or ""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def delete_product_by_index(self, index: int) -> None:
        rows_before = self.count(self.CART_ITEMS)
        logger.info(f"Deleting cart line {index} of {rows_before}")
        self.page.locator(self.DELETE_BUTTON).nth(index).click()
        wait_until(
            lambda: self.count(self.CART_ITEMS) < rows_before,
            timeout_ms=self.DELETE_TIMEOUT_MS,
            description="cart row removal",
        )

    def delete_product_by_name(self, product_name: str) -> None:
        """Delete the first matching line; does nothing when no line matches."""
        index = self.find_product_index(product_name)
        if index is None:
            logger.info(f"No cart line matches {product_name!r}, nothing deleted")
            return
        self.delete_product_by_index(index)

    def clear_cart(self) -> None:
        # Rows shift up after each delete, so always remove the first one
        with allure.step("Clear cart"):
            count = self.get_cart_items_count()
            for _ in range(count):
                self.delete_product_by_index(0)
                settle(SETTLE_SHORT_MS)

    # ------------------------------------------------------------------
    # Price checks
    # ------------------------------------------------------------------

    def verify_product_total_price(self, index: int) -> bool:
        """Unit price times quantity equals the line total for row *index*."""
        return line_total_matches(
            self.get_product_price_by_index(index),
            self.get_product_quantity_by_index(index),
            self.get_product_total_price_by_index(index),
        )

    def verify_all_product_total_prices(self) -> bool:
        return all(
            self.verify_product_total_price(index)
            for index in range(self.get_cart_items_count())
        )

    # ------------------------------------------------------------------
    # Checkout and recommendations
    # ------------------------------------------------------------------

    def click_proceed_to_checkout(self) -> None:
        self.click(self.PROCEED_TO_CHECKOUT_BUTTON)
        settle(SETTLE_DEFAULT_MS)

    def is_proceed_to_checkout_visible(self) -> bool:
        return self.is_visible(self.PROCEED_TO_CHECKOUT_BUTTON)

    def is_register_login_link_visible(self) -> bool:
        return self.is_visible(self.REGISTER_LOGIN_LINK, timeout=3000)

    def click_register_login(self) -> None:
        self.click(self.REGISTER_LOGIN_LINK)

    def are_recommended_items_visible(self) -> bool:
        return self.is_visible(self.RECOMMENDED_ITEMS_SECTION)

    def add_recommended_item_to_cart(self, index: int = 0) -> None:
        item = self.page.locator(self.RECOMMENDED_ADD_TO_CART).nth(index)
        item.scroll_into_view_if_needed()
        item.click()
        settle(SETTLE_DEFAULT_MS)

    def scroll_to_product(self, index: int) -> None:
        self.page.locator(self.CART_ITEMS).nth(index).scroll_into_view_if_needed()
        settle(300)
