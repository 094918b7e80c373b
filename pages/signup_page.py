"""The "Enter Account Information" form reached after starting a signup."""

from __future__ import annotations

import logging
from typing import List, Optional

import allure

from core.data import AddressDetails
from core.waits import SETTLE_LONG_MS, settle
from pages.base_page import BasePage

logger = logging.getLogger("shoptest.pages")


class SignupPage(BasePage):
    path = "/signup"

    # Account information
    TITLE_MR = "input#id_gender1"
    TITLE_MRS = "input#id_gender2"
    PASSWORD_INPUT = "input[data-qa='password']"
    DAY_DROPDOWN = "select[data-qa='days']"
    MONTH_DROPDOWN = "select[data-qa='months']"
    YEAR_DROPDOWN = "select[data-qa='years']"
    NEWSLETTER_CHECKBOX = "input#newsletter"
    OFFERS_CHECKBOX = "input#optin"
    ACCOUNT_INFO_HEADER = "text=Enter Account Information"

    # Address information
    FIRST_NAME_INPUT = "input[data-qa='first_name']"
    LAST_NAME_INPUT = "input[data-qa='last_name']"
    COMPANY_INPUT = "input[data-qa='company']"
    ADDRESS_INPUT = "input[data-qa='address']"
    ADDRESS2_INPUT = "input[data-qa='address2']"
    COUNTRY_DROPDOWN = "select[data-qa='country']"
    STATE_INPUT = "input[data-qa='state']"
    CITY_INPUT = "input[data-qa='city']"
    ZIPCODE_INPUT = "input[data-qa='zipcode']"
    MOBILE_NUMBER_INPUT = "input[data-qa='mobile_number']"

    # Buttons and messages
    CREATE_ACCOUNT_BUTTON = "button[data-qa='create-account']"
    ACCOUNT_CREATED_MESSAGE = "h2[data-qa='account-created']"
    CONTINUE_BUTTON = "a[data-qa='continue-button']"

    ACCOUNT_CREATED_TIMEOUT_MS = 10000

    # ------------------------------------------------------------------
    # Account information
    # ------------------------------------------------------------------

    def select_title(self, title: str) -> None:
        """Accepts "Mr"/"male" or "Mrs"/"female"; anything else is ignored."""
        value = title.lower()
        if value in ("mr", "male"):
            self.page.check(self.TITLE_MR)
        elif value in ("mrs", "female"):
            self.page.check(self.TITLE_MRS)

    def enter_password(self, password: str) -> None:
        self.fill(self.PASSWORD_INPUT, password)

    def select_date_of_birth(self, day: str, month: str, year: str) -> None:
        self.page.select_option(self.DAY_DROPDOWN, day)
        self.page.select_option(self.MONTH_DROPDOWN, month)
        self.page.select_option(self.YEAR_DROPDOWN, year)

    def check_newsletter(self) -> None:
        self.page.check(self.NEWSLETTER_CHECKBOX)

    def uncheck_newsletter(self) -> None:
        self.page.uncheck(self.NEWSLETTER_CHECKBOX)

    def check_special_offers(self) -> None:
        self.page.check(self.OFFERS_CHECKBOX)

    def uncheck_special_offers(self) -> None:
        self.page.uncheck(self.OFFERS_CHECKBOX)

    # ------------------------------------------------------------------
    # Address information
    # ------------------------------------------------------------------

    def enter_first_name(self, first_name: str) -> None:
        self.fill(self.FIRST_NAME_INPUT, first_name)

    def enter_last_name(self, last_name: str) -> None:
        self.fill(self.LAST_NAME_INPUT, last_name)

    def enter_company(self, company: str) -> None:
        self.fill(self.COMPANY_INPUT, company)

    def enter_address(self, address: str) -> None:
        self.fill(self.ADDRESS_INPUT, address)

    def enter_address2(self, address2: str) -> None:
        self.fill(self.ADDRESS2_INPUT, address2)

    def select_country(self, country: str) -> None:
        self.page.select_option(self.COUNTRY_DROPDOWN, label=country)

    def enter_state(self, state: str) -> None:
        self.fill(self.STATE_INPUT, state)

    def enter_city(self, city: str) -> None:
        self.fill(self.CITY_INPUT, city)

    def enter_zipcode(self, zipcode: str) -> None:
        self.fill(self.ZIPCODE_INPUT, zipcode)

    def enter_mobile_number(self, mobile_number: str) -> None:
        self.fill(self.MOBILE_NUMBER_INPUT, mobile_number)

    # ------------------------------------------------------------------
    # Composite flows
    # ------------------------------------------------------------------

    def fill_account_information(
        self,
        title: str,
        password: str,
        day: str,
        month: str,
        year: str,
        newsletter: bool = True,
        offers: bool = True,
    ) -> None:
        self.select_title(title)
        self.enter_password(password)
        self.select_date_of_birth(day, month, year)
        if newsletter:
            self.check_newsletter()
        if offers:
            self.check_special_offers()

    def fill_address_information(self, address: AddressDetails) -> None:
        self.enter_first_name(address.first_name)
        self.enter_last_name(address.last_name)
        self.enter_company(address.company)
        self.enter_address(address.address)
        self.enter_address2(address.address2)
        self.select_country(address.country)
        self.enter_state(address.state)
        self.enter_city(address.city)
        self.enter_zipcode(address.zipcode)
        self.enter_mobile_number(address.mobile_number)

    def complete_registration(
        self,
        password: str,
        address: AddressDetails,
        title: str = "Mr",
        day: str = "15",
        month: str = "5",
        year: str = "1990",
        newsletter: bool = True,
        offers: bool = True,
    ) -> None:
        """Fill both form sections and submit."""
        with allure.step("Complete registration form"):
            self.fill_account_information(title, password, day, month, year, newsletter, offers)
            self.fill_address_information(address)
            self.click_create_account()

    def quick_registration(
        self,
        password: str,
        first_name: str,
        last_name: str,
        mobile_number: Optional[str] = None,
    ) -> None:
        """Register with the stock address used by scenarios that do not test the form."""
        address = AddressDetails(first_name=first_name, last_name=last_name)
        if mobile_number:
            address.mobile_number = mobile_number
        self.complete_registration(password, address)

    def click_create_account(self) -> None:
        logger.info("Submitting account creation")
        self.click(self.CREATE_ACCOUNT_BUTTON)
        settle(SETTLE_LONG_MS)

    def click_continue(self) -> None:
        self.click(self.CONTINUE_BUTTON)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_account_info_header_visible(self) -> bool:
        return self.is_visible(self.ACCOUNT_INFO_HEADER)

    def is_account_created_message_visible(self) -> bool:
        return self.is_visible(self.ACCOUNT_CREATED_MESSAGE, timeout=self.ACCOUNT_CREATED_TIMEOUT_MS)

    def get_account_created_message(self) -> str:
        if not self.is_account_created_message_visible():
            return ""
        return self.page.locator(self.ACCOUNT_CREATED_MESSAGE).first.text_content() or ""

    def is_create_account_button_enabled(self) -> bool:
        return self.page.locator(self.CREATE_ACCOUNT_BUTTON).is_enabled()

    def is_newsletter_checked(self) -> bool:
        return self.page.locator(self.NEWSLETTER_CHECKBOX).is_checked()

    def is_special_offers_checked(self) -> bool:
        return self.page.locator(self.OFFERS_CHECKBOX).is_checked()

    def get_selected_country(self) -> str:
        return self.page.locator(self.COUNTRY_DROPDOWN).input_value() or ""

    def get_available_countries(self) -> List[str]:
        return self.page.locator(f"{self.COUNTRY_DROPDOWN} option").all_text_contents()
