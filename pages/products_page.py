"""Product listing: /products, search results and the brand/category sidebar."""

from __future__ import annotations

import logging
from typing import List, Optional

import allure

from core.waits import SETTLE_DEFAULT_MS, SETTLE_LONG_MS, SETTLE_SHORT_MS, settle, wait_until
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class ProductsPage(BasePage):
    path = "/products"

    # Listing
    ALL_PRODUCTS_HEADER = "h2.title.text-center"
    PRODUCTS_LIST = ".features_items"
    PRODUCT_ITEM = ".product-image-wrapper"
    PRODUCT_NAME = ".productinfo p"
    PRODUCT_PRICE = ".productinfo h2"

    # Search
    SEARCH_INPUT = "input#search_product"
    SEARCH_BUTTON = "button#submit_search"

    # Product interaction
    VIEW_PRODUCT_BUTTON = "a[href*='/product_details/']"
    ADD_TO_CART_BUTTON = ".btn.btn-default.add-to-cart"
    CONTINUE_SHOPPING_BUTTON = "button.btn.btn-success"
    VIEW_CART_LINK = "text=View Cart"
    CART_MODAL_TIMEOUT_MS = 3000

    # Sidebar
    BRANDS_HEADER = "h2:has-text('Brands')"
    BRAND_LINKS = ".brands-name .nav.nav-pills.nav-stacked li a"
    CATEGORY_HEADER = "h2:has-text('Category')"
    SIDEBAR_SCROLL_Y = 400

    # ------------------------------------------------------------------
    # Page state
    # ------------------------------------------------------------------

    def is_all_products_page_visible(self) -> bool:
        return self.is_visible(self.ALL_PRODUCTS_HEADER)

    def get_page_heading(self) -> str:
        return self.page.locator(self.ALL_PRODUCTS_HEADER).first.text_content() or ""

    def get_products_count(self) -> int:
        return self.count(self.PRODUCT_ITEM)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_product(self, product_name: str) -> None:
        with allure.step(f"Search for '{product_name}'"):
            logger.info(f"Searching products for {product_name!r}")
            self.fill(self.SEARCH_INPUT, product_name)
            self.click(self.SEARCH_BUTTON)
            settle(SETTLE_DEFAULT_MS)

    def clear_search_input(self) -> None:
        self.page.locator(self.SEARCH_INPUT).clear()

    def is_search_results_visible(self) -> bool:
        return self.is_visible(self.PRODUCTS_LIST)

    def get_searched_products_header_text(self) -> str:
        return self.get_page_heading()

    def get_product_names(self) -> List[str]:
        return [name.strip() for name in self.page.locator(self.PRODUCT_NAME).all_text_contents()]

    def find_product_name(self, product_name: str) -> Optional[str]:
        """First listed name containing *product_name*, case-insensitively."""
        needle = product_name.lower()
        return next((name for name in self.get_product_names() if needle in name.lower()), None)

    def is_product_in_search_results(self, product_name: str) -> bool:
        return self.find_product_name(product_name) is not None

    # ------------------------------------------------------------------
    # Product interaction
    # ------------------------------------------------------------------

    def click_view_product_by_index(self, index: int = 0) -> None:
        self.page.locator(self.VIEW_PRODUCT_BUTTON).nth(index).click()
        settle(SETTLE_DEFAULT_MS)

    def click_view_product_by_name(self, product_name: str) -> None:
        wrapper = self.page.locator(self.PRODUCT_ITEM).filter(has_text=product_name)
        wrapper.locator(self.VIEW_PRODUCT_BUTTON).first.click()
        settle(SETTLE_DEFAULT_MS)

    def add_product_to_cart_by_index(self, index: int = 0) -> None:
        logger.info(f"Adding product #{index} to cart")
        product = self.page.locator(self.PRODUCT_ITEM).nth(index)
        product.hover()
        settle(SETTLE_SHORT_MS)
        # Each card renders the button twice (card and hover overlay)
        product.locator(self.ADD_TO_CART_BUTTON).first.click()
        self._wait_for_cart_modal()

    def add_product_to_cart_by_name(self, product_name: str) -> None:
        logger.info(f"Adding {product_name!r} to cart")
        wrapper = self.page.locator(self.PRODUCT_ITEM).filter(has_text=product_name).first
        wrapper.hover()
        settle(SETTLE_SHORT_MS)
        wrapper.locator(self.ADD_TO_CART_BUTTON).first.click()
        self._wait_for_cart_modal()

    def add_multiple_products_to_cart(self, count: int) -> None:
        """Add the first *count* listed products, closing the modal after each."""
        with allure.step(f"Add {count} products to cart"):
            for index in range(count):
                self.add_product_to_cart_by_index(index)
                self.click_continue_shopping()
                settle(SETTLE_SHORT_MS)

    def click_continue_shopping(self) -> None:
        if self.is_visible(self.CONTINUE_SHOPPING_BUTTON, timeout=self.CART_MODAL_TIMEOUT_MS):
            self.click(self.CONTINUE_SHOPPING_BUTTON)
            settle(SETTLE_SHORT_MS)

    def click_view_cart(self) -> None:
        self.click(self.VIEW_CART_LINK)
        settle(SETTLE_DEFAULT_MS)

    def _wait_for_cart_modal(self) -> None:
        wait_until(
            lambda: self.page.locator(self.CONTINUE_SHOPPING_BUTTON).first.is_visible(),
            timeout_ms=self.CART_MODAL_TIMEOUT_MS,
            description="add-to-cart confirmation modal",
        )

    # ------------------------------------------------------------------
    # Per-product read-back
    # ------------------------------------------------------------------

    def get_product_price_by_index(self, index: int) -> str:
        return (self.page.locator(self.PRODUCT_PRICE).nth(index).text_content() or "").strip()

    def get_product_name_by_index(self, index: int) -> str:
        return (self.page.locator(self.PRODUCT_NAME).nth(index).text_content() or "").strip()

    def do_all_products_have_price(self) -> bool:
        products_count = self.get_products_count()
        return products_count > 0 and products_count == self.count(self.PRODUCT_PRICE)

    def do_all_products_have_view_button(self) -> bool:
        products_count = self.get_products_count()
        return products_count > 0 and products_count == self.count(self.VIEW_PRODUCT_BUTTON)

    def scroll_to_product(self, index: int) -> None:
        self.page.locator(self.PRODUCT_ITEM).nth(index).scroll_into_view_if_needed()
        settle(300)

    # ------------------------------------------------------------------
    # Brands and categories
    # ------------------------------------------------------------------

    def scroll_to_sidebar(self) -> None:
        self.scroll_to(self.SIDEBAR_SCROLL_Y)
        settle(SETTLE_DEFAULT_MS)

    def is_brands_section_visible(self) -> bool:
        return self.is_visible(self.BRANDS_HEADER)

    def is_category_section_visible(self) -> bool:
        return self.is_visible(self.CATEGORY_HEADER)

    def get_brand_names(self) -> List[str]:
        # Links read "(6)Polo"; the count sits in a nested span
        return [name.strip() for name in self.page.locator(self.BRAND_LINKS).all_text_contents()]

    def click_brand_by_index(self, index: int = 0) -> str:
        """Open the brand listing and return the link text that was clicked."""
        brand = self.page.locator(self.BRAND_LINKS).nth(index)
        brand_name = (brand.text_content() or "Unknown").strip()
        logger.info(f"Filtering by brand {brand_name}")
        brand.click()
        settle(SETTLE_LONG_MS)
        return brand_name

    def open_category(self, category: str, subcategory: str) -> None:
        """Expand e.g. "Women" in the sidebar and open "Dress"."""
        logger.info(f"Opening category {category} > {subcategory}")
        self.click(f"a[href='#{category}']")
        settle(SETTLE_SHORT_MS)
        self.click(f"#{category} a:has-text('{subcategory}')")
        settle(SETTLE_LONG_MS)
