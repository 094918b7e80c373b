"""Unit tests for page object logic (no browser required).

Page objects are exercised against MagicMock pages; only the bookkeeping
around the Playwright calls is under test.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pages import BasePage, CartPage, CheckoutPage, LoginPage, ProbeResult, ProductDetailsPage, ProductsPage


@pytest.mark.unit
class TestBasePage:

    def test_base_url_trailing_slash_removed(self):
        bp = BasePage(MagicMock(), base_url="https://shop.example.com/")
        assert bp.base_url == "https://shop.example.com"

    def test_navigate_uses_page_route(self):
        page = MagicMock()
        LoginPage(page, base_url="https://shop.example.com").navigate()
        page.goto.assert_called_once_with("https://shop.example.com/login")
        page.wait_for_load_state.assert_called_once_with("domcontentloaded")

    def test_navigate_to_explicit_url(self):
        page = MagicMock()
        BasePage(page).navigate("https://shop.example.com/anything")
        page.goto.assert_called_once_with("https://shop.example.com/anything")

    def test_text_of_strips(self):
        page = MagicMock()
        page.locator.return_value.first.inner_text.return_value = "  Hello  "
        assert BasePage(page).text_of("h2") == "Hello"


@pytest.mark.unit
class TestProbe:

    def test_found_when_visible_in_time(self):
        page = MagicMock()
        assert BasePage(page).probe("#x", timeout=1000) is ProbeResult.FOUND
        page.locator.return_value.first.wait_for.assert_called_once_with(state="visible", timeout=1000)

    def test_timeout_reported_as_timed_out(self):
        page = MagicMock()
        page.locator.return_value.first.wait_for.side_effect = PlaywrightTimeoutError("Timeout 1000ms exceeded")
        result = BasePage(page).probe("#x", timeout=1000)
        assert result is ProbeResult.TIMED_OUT
        assert not result

    def test_other_errors_reported_as_not_found(self):
        page = MagicMock()
        page.locator.side_effect = RuntimeError("page closed")
        assert BasePage(page).probe("#x") is ProbeResult.NOT_FOUND

    def test_zero_timeout_checks_current_state(self):
        page = MagicMock()
        target = page.locator.return_value.first
        target.is_visible.return_value = False

        assert BasePage(page).probe("#x", timeout=0) is ProbeResult.NOT_FOUND
        target.wait_for.assert_not_called()

    def test_is_visible_is_boolean_view_of_probe(self):
        page = MagicMock()
        assert BasePage(page).is_visible("#x") is True


@pytest.mark.unit
class TestCartBookkeeping:

    def make_cart(self, names):
        page = MagicMock()
        page.locator.return_value.all_text_contents.return_value = names
        return CartPage(page)

    def test_find_product_index_is_case_insensitive_substring(self):
        cart = self.make_cart(["Men Tshirt", "Tops T-Shirt"])
        assert cart.find_product_index("top") == 1
        assert cart.find_product_index("MEN") == 0

    def test_find_product_index_missing(self):
        assert self.make_cart(["Blue Top"]).find_product_index("Jeans") is None

    def test_delete_by_name_without_match_is_noop(self):
        cart = self.make_cart(["Blue Top"])
        with patch.object(cart, "delete_product_by_index") as delete:
            cart.delete_product_by_name("Jeans")
        delete.assert_not_called()

    def test_delete_by_name_deletes_first_match(self):
        cart = self.make_cart(["Blue Top", "Men Tshirt", "Fancy Top"])
        with patch.object(cart, "delete_product_by_index") as delete:
            cart.delete_product_by_name("top")
        delete.assert_called_once_with(0)

    def test_clear_cart_always_deletes_first_row(self):
        cart = CartPage(MagicMock())
        with patch.object(cart, "get_cart_items_count", return_value=3), \
                patch.object(cart, "delete_product_by_index") as delete, \
                patch("pages.cart_page.settle"):
            cart.clear_cart()

        assert delete.call_count == 3
        assert all(call.args == (0,) for call in delete.call_args_list)

    def test_clear_cart_empties_a_shrinking_cart(self):
        page = MagicMock()
        rows = [3]

        def remove_row():
            rows[0] -= 1

        page.locator.return_value.count.side_effect = lambda: rows[0]
        page.locator.return_value.nth.return_value.click.side_effect = remove_row
        cart = CartPage(page)

        with patch.object(cart, "is_cart_empty", side_effect=lambda: rows[0] == 0), \
                patch("pages.cart_page.settle"):
            cart.clear_cart()
            assert cart.get_cart_items_count() == 0

        nth = page.locator.return_value.nth
        assert nth.call_count == 3
        assert all(call.args == (0,) for call in nth.call_args_list)

    def test_delete_by_index_waits_for_row_removal(self):
        page = MagicMock()
        page.locator.return_value.count.side_effect = [2, 1]
        CartPage(page).delete_product_by_index(1)

        page.locator.return_value.nth.assert_called_with(1)
        page.locator.return_value.nth.return_value.click.assert_called_once()

    def test_empty_cart_counts_zero(self):
        cart = CartPage(MagicMock())
        with patch.object(cart, "is_cart_empty", return_value=True):
            assert cart.get_cart_items_count() == 0

    def test_verify_product_total_price(self):
        cart = CartPage(MagicMock())
        with patch.object(cart, "get_product_price_by_index", return_value="Rs. 500"), \
                patch.object(cart, "get_product_quantity_by_index", return_value="3"), \
                patch.object(cart, "get_product_total_price_by_index", return_value="Rs. 1,500"):
            assert cart.verify_product_total_price(0)


@pytest.mark.unit
class TestProductLookup:

    def test_find_product_name(self):
        page = MagicMock()
        page.locator.return_value.all_text_contents.return_value = [" Blue Top ", "Men Tshirt"]
        products = ProductsPage(page)
        assert products.find_product_name("blue") == "Blue Top"
        assert not products.is_product_in_search_results("jeans")

    def test_product_detail_labels_stripped(self):
        page = MagicMock()
        page.locator.return_value.first.text_content.return_value = "Category: Women > Tops"
        assert ProductDetailsPage(page).get_product_category() == "Women > Tops"


@pytest.mark.unit
class TestCheckoutPage:

    def test_missing_confirmation_times_out_and_warns(self, caplog):
        page = MagicMock()
        page.locator.return_value.first.wait_for.side_effect = PlaywrightTimeoutError("Timeout 10000ms exceeded")
        checkout = CheckoutPage(page)

        with caplog.at_level(logging.WARNING, logger="shoptest.pages"):
            result = checkout.wait_for_order_confirmation()

        assert result is ProbeResult.TIMED_OUT
        page.locator.assert_called_with(CheckoutPage.ORDER_CONFIRMATION)
        page.locator.return_value.first.wait_for.assert_called_once_with(
            state="visible", timeout=CheckoutPage.CONFIRMATION_TIMEOUT_MS
        )
        assert "Order confirmation not shown" in caplog.text

    def test_pay_returns_confirmation_result(self):
        checkout = CheckoutPage(MagicMock())
        with patch.object(checkout, "fill_payment_details"), \
                patch.object(checkout, "click_pay") as click_pay, \
                patch.object(checkout, "wait_for_order_confirmation", return_value=ProbeResult.FOUND):
            assert checkout.pay() is ProbeResult.FOUND
        click_pay.assert_called_once()
