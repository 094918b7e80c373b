import logging
import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Callable, Optional

import allure
import pytest
from dotenv import load_dotenv
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from core.config import SuiteSettings
from core.data import AccountData
from core.waits import SETTLE_DEFAULT_MS, SETTLE_LONG_MS, settle

# Import enhanced error handling
from exceptions import (
    BrowserSessionError,
    ConfigurationError,
    configure_error_logging,
    create_error_context,
    log_error_with_context,
)
from pages import (
    CartPage,
    CheckoutPage,
    ContactUsPage,
    HomePage,
    LoginPage,
    ProductDetailsPage,
    ProductsPage,
    SignupPage,
    SubscriptionFooter,
)

# Load environment variables from .env file
load_dotenv()

# Configure structured error logging with security features
configure_error_logging(level="INFO", format_type="json", enable_security=True)

logger = logging.getLogger("shoptest.session")

BANNER = "=" * 40


@pytest.fixture(scope="session")
def suite_settings() -> SuiteSettings:
    # Session-scoped fixture reading the run configuration from the environment
    # Fails the whole run early with the offending key and expected format
    try:
        settings = SuiteSettings.from_env()
    except ConfigurationError as e:
        correlation_id = log_error_with_context(e, e.error_context, level="error")
        raise pytest.UsageError(
            f"\n\nConfiguration Error [correlation_id: {correlation_id}]:\n{e.get_actionable_message()}\n\n"
            "Please check your environment configuration and try again.\n"
        )

    configure_error_logging(level=settings.log_level, format_type=settings.log_format, enable_security=True)
    return settings


@pytest.fixture(scope="session", autouse=True)
def environment_reporter(request: pytest.FixtureRequest):
    # Fixture to write environment details to a properties file for reporting
    # This runs once per session and is automatically used
    # By default, this creates environment.properties for Allure
    allure_dir = request.config.getoption("--alluredir", default=None)
    if not allure_dir or not isinstance(allure_dir, str):
        return

    settings = request.getfixturevalue("suite_settings")

    ENVIRONMENT_PROPERTIES_FILENAME = "environment.properties"
    properties_file = os.path.join(allure_dir, ENVIRONMENT_PROPERTIES_FILENAME)

    # Ensure the directory exists, with permission handling
    try:
        os.makedirs(allure_dir, exist_ok=True)
    except PermissionError:
        logger.error(f"Permission denied to create report directory: {allure_dir}")
        return

    try:
        playwright_version = version("playwright")
    except PackageNotFoundError:
        playwright_version = "N/A"

    env_props = {
        "operating_system": f"{platform.system()} {platform.release()}",
        "python_version": sys.version.split(" ")[0],
        "playwright_version": playwright_version,
        "browser_type": settings.browser,
        "headless_mode": str(settings.headless),
        "base_url": settings.base_url,
    }

    try:
        with open(properties_file, "w") as f:
            for key, value in env_props.items():
                f.write(f"{key}={value}\n")
    except IOError as e:
        logger.error(f"Failed to write environment properties file: {e}")


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    # Keep each phase report on the item so teardown can tell whether the test failed
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _test_failed(node) -> bool:
    for phase in ("setup", "call"):
        report = getattr(node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False


# --- Base Test Class for Browser-driven Scenarios ---


class BaseShopTest:
    # Base class for live scenarios: one isolated browser session per test
    # Setup launches the browser, binds every page object to the new page and
    # opens the site root; teardown screenshots failures and releases the session

    settings: SuiteSettings
    test_name: str = ""

    playwright = None
    browser = None
    context = None
    page = None

    @pytest.fixture(autouse=True)
    def browser_session(self, request: pytest.FixtureRequest, suite_settings: SuiteSettings):
        try:
            self.start_session(suite_settings, request.node.name)
            self.prepare_session()
        except Exception:
            self.close_session(failed=True)
            raise
        yield
        self.close_session(failed=_test_failed(request.node))

    def prepare_session(self) -> None:
        # Per-class setup hook, runs once the site root is loaded
        pass

    def start_session(self, settings: SuiteSettings, test_name: str) -> None:
        self.settings = settings
        self.test_name = test_name

        try:
            self.playwright = sync_playwright().start()
            browser_type = getattr(self.playwright, settings.browser)
            launch_args = ["--start-maximized"] if settings.browser == "chromium" else []
            self.browser = browser_type.launch(
                headless=settings.headless,
                args=launch_args,
                slow_mo=settings.slow_mo_ms,
            )
            self.context = self.browser.new_context(no_viewport=True, accept_downloads=True)
            self.context.set_default_navigation_timeout(settings.default_timeout_ms)
            self.context.set_default_timeout(settings.default_timeout_ms)
            self.page = self.context.new_page()
        except PlaywrightError as e:
            context = create_error_context(
                component="Browser Session",
                operation="session_creation",
                test_name=test_name,
            )
            browser_error = BrowserSessionError(
                message=f"Failed to launch browser session: {str(e)}",
                browser_type=settings.browser,
                headless=settings.headless,
                error_context=context,
                cause=e
            )
            log_error_with_context(browser_error, context)
            raise browser_error from e

        self._bind_page_objects()

        logger.info(BANNER)
        logger.info(f"Test Started: {test_name}")
        logger.info(BANNER)

        self.home_page.open()

    def _bind_page_objects(self) -> None:
        options = {
            "base_url": self.settings.base_url,
            "screenshot_dir": self.settings.screenshot_dir,
        }
        self.home_page = HomePage(self.page, **options)
        self.login_page = LoginPage(self.page, **options)
        self.signup_page = SignupPage(self.page, **options)
        self.products_page = ProductsPage(self.page, **options)
        self.product_details_page = ProductDetailsPage(self.page, **options)
        self.cart_page = CartPage(self.page, **options)
        self.checkout_page = CheckoutPage(self.page, **options)
        self.contact_us_page = ContactUsPage(self.page, **options)
        self.subscription = SubscriptionFooter(self.page, **options)

    def close_session(self, failed: bool) -> None:
        # Never raises: a broken session must not mask the test outcome
        logger.info(BANNER)
        logger.info(f"Test Finished: {self.test_name}")
        logger.info(f"Status: {'FAILED' if failed else 'PASSED'}")
        logger.info(BANNER)

        if failed and self.page is not None:
            self._capture_failure_screenshot()

        page, context, browser, playwright = self.page, self.context, self.browser, self.playwright
        self.page = self.context = self.browser = self.playwright = None

        if page is not None:
            self._release("page_close", page.close)
        if context is not None:
            self._release("context_close", context.close)
        if browser is not None:
            self._release("browser_close", browser.close)
        if playwright is not None:
            self._release("playwright_stop", playwright.stop)

    def _capture_failure_screenshot(self) -> None:
        try:
            path = self.home_page.screenshot(f"FAILED_{self.test_name}")
            allure.attach.file(path, name="Failure Screenshot", attachment_type=allure.attachment_type.PNG)
        except Exception as e:
            context = create_error_context(
                component="Browser Session",
                operation="failure_screenshot",
                test_name=self.test_name,
            )
            log_error_with_context(e, context, level="warning")

    def _release(self, operation: str, release: Callable[[], None]) -> None:
        try:
            release()
        except Exception as e:
            # Log session cleanup errors but don't fail the test
            context = create_error_context(
                component="Browser Session",
                operation=operation,
                test_name=self.test_name,
            )
            log_error_with_context(e, context, level="warning")

    # --- Utility methods for scenarios ---

    def wait(self, milliseconds: int) -> None:
        settle(milliseconds)

    def take_screenshot(self, name: str) -> str:
        return self.home_page.screenshot(name)

    def reload_page(self) -> None:
        self.page.reload()
        settle(SETTLE_DEFAULT_MS)

    def go_back(self) -> None:
        self.page.go_back()
        settle(SETTLE_DEFAULT_MS)

    def current_url(self) -> str:
        return self.page.url

    def url_contains(self, expected_text: str) -> bool:
        return expected_text.lower() in self.current_url().lower()

    def register_account(self, account: AccountData, first_name: str = "Test", last_name: str = "User") -> None:
        # Create an account through the signup form and leave it logged in
        with allure.step(f"Register account {account.email}"):
            logger.info(f"Registering account {account.email}")
            self.home_page.click_signup_login()
            self.login_page.perform_signup(account.name, account.email)
            settle(SETTLE_LONG_MS)

            self.signup_page.quick_registration(account.password, first_name, last_name, account.mobile)
            settle(SETTLE_LONG_MS)

            self.signup_page.click_continue()
            settle(SETTLE_LONG_MS)


class SignupTestBase(BaseShopTest):
    # Fresh, never-registered credentials for every test
    account: Optional[AccountData] = None

    def prepare_session(self) -> None:
        self.account = AccountData()
        logger.info(f"Generated signup data: {self.account.name} / {self.account.email}")


class LoginTestBase(SignupTestBase):
    # A disposable account, registered and logged out before every test

    def prepare_session(self) -> None:
        super().prepare_session()
        self.register_account(self.account)

        self.home_page.click_logout()
        settle(SETTLE_LONG_MS)
        logger.info("Test user created and logged out - ready for login tests")
