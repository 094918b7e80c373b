"""Unit tests for SuiteSettings.from_env."""

import pytest

from core.config import DEFAULT_BASE_URL, SuiteSettings
from exceptions import ConfigurationError, ErrorClassification


@pytest.mark.unit
class TestSuiteSettingsDefaults:

    def test_empty_environment_gives_defaults(self):
        settings = SuiteSettings.from_env({})
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.headless is True
        assert settings.browser == "chromium"
        assert settings.default_timeout_ms == 30000
        assert settings.slow_mo_ms == 0
        assert settings.screenshot_dir == "screenshots"
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"

    def test_blank_values_fall_back_to_defaults(self):
        settings = SuiteSettings.from_env({"HEADLESS": "", "SLOW_MO_MS": " "})
        assert settings.headless is True
        assert settings.slow_mo_ms == 0


@pytest.mark.unit
class TestSuiteSettingsParsing:

    @pytest.mark.parametrize("raw", ["false", "0", "F", "no"])
    def test_false_values(self, raw):
        assert SuiteSettings.from_env({"HEADLESS": raw}).headless is False

    @pytest.mark.parametrize("raw", ["true", "1", "T", "YES"])
    def test_true_values(self, raw):
        assert SuiteSettings.from_env({"HEADLESS": raw}).headless is True

    def test_base_url_trailing_slash_removed(self):
        settings = SuiteSettings.from_env({"BASE_URL": "https://shop.example.com/"})
        assert settings.base_url == "https://shop.example.com"

    def test_browser_and_log_settings_normalized(self):
        settings = SuiteSettings.from_env({"BROWSER": " Firefox ", "LOG_LEVEL": "debug", "LOG_FORMAT": "TEXT"})
        assert settings.browser == "firefox"
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "text"

    def test_integers(self):
        settings = SuiteSettings.from_env({"DEFAULT_TIMEOUT_MS": "45000", "SLOW_MO_MS": "250"})
        assert settings.default_timeout_ms == 45000
        assert settings.slow_mo_ms == 250


@pytest.mark.unit
class TestSuiteSettingsErrors:

    @pytest.mark.parametrize(
        "environ, key",
        [
            ({"BROWSER": "netscape"}, "BROWSER"),
            ({"HEADLESS": "maybe"}, "HEADLESS"),
            ({"DEFAULT_TIMEOUT_MS": "soon"}, "DEFAULT_TIMEOUT_MS"),
            ({"SLOW_MO_MS": "-5"}, "SLOW_MO_MS"),
            ({"LOG_FORMAT": "xml"}, "LOG_FORMAT"),
            ({"LOG_LEVEL": "chatty"}, "LOG_LEVEL"),
        ],
    )
    def test_invalid_value_names_the_key(self, environ, key):
        with pytest.raises(ConfigurationError) as excinfo:
            SuiteSettings.from_env(environ)

        error = excinfo.value
        assert error.config_key == key
        assert error.classification == ErrorClassification.CONFIGURATION
        assert f"Fix configuration value: {key}" in error.get_actionable_message()

    def test_invalid_integer_keeps_cause(self):
        with pytest.raises(ConfigurationError) as excinfo:
            SuiteSettings.from_env({"DEFAULT_TIMEOUT_MS": "soon"})
        assert isinstance(excinfo.value.cause, ValueError)
