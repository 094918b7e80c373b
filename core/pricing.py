"""
Price helpers for values read from the shop's cart and product pages.

Prices are rendered as "Rs. 1,234". Price parsing is forgiving: any value
that does not reduce to an integer parses as 0, so a broken price cell
surfaces as a failed total check rather than an exception. Quantity parsing
is strict.
"""

import logging

logger = logging.getLogger("shoptest.pricing")

CURRENCY_PREFIX = "Rs."


def parse_price(price_text: str) -> int:
    """
    Convert a rendered price into an integer amount.

    Args:
        price_text: Text such as "Rs. 1,234"

    Returns:
        The integer amount, or 0 when the text cannot be parsed
    """
    if price_text is None:
        return 0
    cleaned = price_text.replace(CURRENCY_PREFIX, "").replace(",", "").strip()
    try:
        return int(cleaned)
    except ValueError:
        logger.debug(f"Could not parse price {price_text!r}, using 0")
        return 0


def parse_quantity(quantity_text: str) -> int:
    """
    Convert a quantity cell into an integer.

    Unlike prices, quantities are never defaulted: a cell that does not hold a
    bare integer raises ``ValueError``.
    """
    return int(str(quantity_text).strip())


def line_total_matches(price_text: str, quantity_text: str, total_text: str) -> bool:
    """True when unit price times quantity equals the rendered line total."""
    expected = parse_price(price_text) * parse_quantity(quantity_text)
    actual = parse_price(total_text)
    if expected != actual:
        logger.info(f"Line total mismatch: {price_text} x {quantity_text} != {total_text}")
    return expected == actual
