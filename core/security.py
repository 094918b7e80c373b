"""
Security utilities for the shop test suite.

This module keeps test credentials and payment data out of logs and reports:
- Masking of passwords, card numbers and CVC codes in log records
- Secure data handling for Allure attachments
"""

import re
import logging
from typing import Any, Dict, List, Pattern


# Patterns for sensitive values that can show up in free text
SENSITIVE_PATTERNS: Dict[str, List[Pattern]] = {
    'password': [
        re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\',;\s]+)', re.IGNORECASE),
        re.compile(r'(passwd["\']?\s*[:=]\s*["\']?)([^"\',;\s]+)', re.IGNORECASE),
        re.compile(r'(pwd["\']?\s*[:=]\s*["\']?)([^"\',;\s]+)', re.IGNORECASE),
    ],
    'card': [
        re.compile(r'()\b(\d{13,19})\b'),
    ],
    'cvc': [
        re.compile(r'(cvc["\']?\s*[:=]\s*["\']?)(\d{3,4})', re.IGNORECASE),
        re.compile(r'(cvv["\']?\s*[:=]\s*["\']?)(\d{3,4})', re.IGNORECASE),
    ],
    'token': [
        re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\',;\s]+)', re.IGNORECASE),
    ],
}

# Dictionary keys whose values are always masked
SENSITIVE_KEYS = ('password', 'passwd', 'card_number', 'cvc', 'cvv', 'secret', 'token')


def mask_credential(value: str, mask_char: str = "*", reveal_chars: int = 4) -> str:
    """
    Mask a credential string, revealing only the last few characters.

    Args:
        value: The credential string to mask
        mask_char: Character to use for masking (default: "*")
        reveal_chars: Number of trailing characters to reveal (default: 4)

    Returns:
        Masked credential string
    """
    if not value or len(value) <= reveal_chars * 2:
        return mask_char * 8

    mask_length = max(8, len(value) - reveal_chars)
    return f"{mask_char * mask_length}{value[-reveal_chars:]}"


def mask_sensitive_data(data: Any) -> Any:
    """
    Recursively mask sensitive data in dicts, lists and strings.

    Args:
        data: Data structure to mask

    Returns:
        A copy of the data structure with sensitive values masked
    """
    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS) and isinstance(value, (str, int)):
                result[key] = mask_credential(str(value))
            else:
                result[key] = mask_sensitive_data(value)
        return result

    elif isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item) for item in data)

    elif isinstance(data, str):
        masked_data = data
        for patterns in SENSITIVE_PATTERNS.values():
            for pattern in patterns:
                masked_data = pattern.sub(
                    lambda m: f"{m.group(1)}{mask_credential(m.group(2))}", masked_data
                )
        return masked_data

    return data


def secure_log_formatter(record: logging.LogRecord) -> logging.LogRecord:
    """Mask sensitive data in a log record's message and arguments."""
    if isinstance(record.msg, str):
        record.msg = mask_sensitive_data(record.msg)

    if record.args:
        if isinstance(record.args, tuple):
            record.args = mask_sensitive_data(record.args)
        elif isinstance(record.args, dict):
            record.args = mask_sensitive_data(record.args)

    return record


class SecureLogHandler(logging.Handler):
    """
    Log handler that masks sensitive data before delegating to a wrapped handler.
    """

    def __init__(self, base_handler: logging.Handler):
        super().__init__()
        self.base_handler = base_handler
        self.setLevel(base_handler.level)
        self.setFormatter(base_handler.formatter)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Copy so other handlers still see the original record
            secure_record = logging.LogRecord(
                name=record.name,
                level=record.levelno,
                pathname=record.pathname,
                lineno=record.lineno,
                msg=record.msg,
                args=record.args,
                exc_info=record.exc_info,
                func=record.funcName,
                sinfo=record.stack_info
            )
            secure_record.created = record.created
            secure_record = secure_log_formatter(secure_record)
            self.base_handler.emit(secure_record)
        except Exception:
            self.handleError(record)


def sanitize_for_allure(data: Any) -> str:
    """
    Sanitize data for safe inclusion in Allure reports.

    Args:
        data: Data to sanitize

    Returns:
        String representation safe for reporting
    """
    if isinstance(data, (dict, list)):
        return str(mask_sensitive_data(data))
    elif isinstance(data, str):
        return mask_sensitive_data(data)
    return str(data)


def setup_secure_logging(logger: logging.Logger) -> None:
    """
    Wrap the handlers of *logger* so that every record it emits is masked.

    Only the given logger is touched. The root logger belongs to the test
    runner, which adds and removes its own capture handlers around each test.
    """
    existing_handlers = logger.handlers.copy()
    logger.handlers.clear()

    for handler in existing_handlers:
        if isinstance(handler, SecureLogHandler):
            logger.addHandler(handler)
        else:
            logger.addHandler(SecureLogHandler(handler))
