import allure
import pytest

from conftest import BaseShopTest
from core.security import sanitize_for_allure
from core.waits import SETTLE_LONG_MS

pytestmark = pytest.mark.e2e


@allure.feature("Brands and Categories")
class TestBrandCategory(BaseShopTest):

    @allure.story("Brands")
    @allure.title("TC22 Products page lists brands")
    @allure.tag("Smoke")
    @pytest.mark.smoke
    def test_view_all_brands(self):
        self.home_page.click_products()
        self.wait(SETTLE_LONG_MS)
        self.products_page.scroll_to_sidebar()

        assert self.products_page.is_brands_section_visible(), "Brands section should be visible"

        brands = self.products_page.get_brand_names()
        allure.attach(sanitize_for_allure("\n".join(brands)), name="Brands", attachment_type=allure.attachment_type.TEXT)
        assert len(brands) > 0, "Should have at least one brand"

    @allure.story("Brands")
    @allure.title("TC23 Filtering by brand shows that brand's products")
    @allure.tag("Smoke")
    @pytest.mark.smoke
    def test_filter_by_brand(self):
        self.home_page.click_products()
        self.wait(SETTLE_LONG_MS)
        self.products_page.scroll_to_sidebar()

        brand_name = self.products_page.click_brand_by_index(0)

        with allure.step(f"Verify brand listing for {brand_name}"):
            assert "brand" in self.products_page.get_page_heading().lower(), "Should display brand products page"
            assert self.products_page.get_products_count() > 0, "Should display brand products"

    @allure.story("Categories")
    @allure.title("TC24 Women > Dress shows the category listing")
    @allure.tag("Smoke")
    @pytest.mark.smoke
    def test_view_category_products(self):
        assert self.products_page.is_category_section_visible(), "Category section should be visible"

        self.products_page.open_category("Women", "Dress")

        heading = self.products_page.get_page_heading().lower()
        assert "women" in heading, "Should display Women category page"
        assert "dress" in heading, "Should display Dress subcategory"
        assert self.products_page.get_products_count() > 0, "Should display category products"

    @allure.story("Categories")
    @allure.title("TC25 Switching categories updates the listing")
    @allure.tag("Smoke")
    @pytest.mark.smoke
    def test_navigate_between_categories(self):
        self.products_page.open_category("Women", "Dress")
        first_heading = self.products_page.get_page_heading()

        self.products_page.open_category("Men", "Tshirts")
        second_heading = self.products_page.get_page_heading()

        assert "men" in second_heading.lower(), "Should display Men category"
        assert "tshirts" in second_heading.lower(), "Should display Tshirts subcategory"
        assert second_heading != first_heading, "Category title should change when navigating"
        assert self.products_page.get_products_count() > 0, "Should display products in new category"
