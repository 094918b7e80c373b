import os
from dataclasses import dataclass
from typing import Mapping, Optional

from exceptions import ConfigurationError, create_error_context

DEFAULT_BASE_URL = "https://automationexercise.com"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
TRUE_VALUES = ("true", "1", "t", "yes")
FALSE_VALUES = ("false", "0", "f", "no")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SuiteSettings:
    # Runtime settings for one test run, read from the environment
    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    browser: str = "chromium"
    default_timeout_ms: int = 30000
    slow_mo_ms: int = 0
    screenshot_dir: str = "screenshots"
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SuiteSettings":
        env = os.environ if environ is None else environ

        browser = env.get("BROWSER", "chromium").lower().strip()
        if browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                message=f"Invalid BROWSER: '{browser}'",
                config_key="BROWSER",
                expected_format=f"One of: {', '.join(SUPPORTED_BROWSERS)}",
                error_context=create_error_context(
                    component="Configuration",
                    operation="browser_validation",
                    provided_value=browser,
                ),
            )

        log_format = env.get("LOG_FORMAT", "json").lower().strip()
        if log_format not in ("json", "text"):
            raise ConfigurationError(
                message=f"Invalid LOG_FORMAT: '{log_format}'",
                config_key="LOG_FORMAT",
                expected_format="'json' or 'text'",
            )

        log_level = env.get("LOG_LEVEL", "INFO").upper().strip()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                message=f"Invalid LOG_LEVEL: '{log_level}'",
                config_key="LOG_LEVEL",
                expected_format=f"One of: {', '.join(LOG_LEVELS)}",
            )

        return cls(
            base_url=env.get("BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            headless=_parse_bool(env, "HEADLESS", True),
            browser=browser,
            default_timeout_ms=_parse_int(env, "DEFAULT_TIMEOUT_MS", 30000),
            slow_mo_ms=_parse_int(env, "SLOW_MO_MS", 0),
            screenshot_dir=env.get("SCREENSHOT_DIR", "screenshots"),
            log_level=log_level,
            log_format=log_format,
        )


def _parse_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.lower().strip()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        message=f"Invalid boolean for {key}: '{raw}'",
        config_key=key,
        expected_format="true/false, 1/0, t/f or yes/no",
    )


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            message=f"Invalid integer for {key}: '{raw}'",
            config_key=key,
            expected_format="Non-negative integer",
            cause=e,
        ) from e
    if value < 0:
        raise ConfigurationError(
            message=f"{key} must not be negative, got {value}",
            config_key=key,
            expected_format="Non-negative integer",
        )
    return value
