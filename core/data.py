"""
Fresh per-test account data.

Values keep the site's familiar shapes (timestamped e-mail, TestUser name,
ten digit mobile number). A process-wide counter is mixed into every value so
two scenarios started within the same second still get distinct accounts.
"""

import itertools
import random
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime

_random = random.Random()
_sequence = itertools.count(1)
_lock = threading.Lock()


def _next_token() -> int:
    with _lock:
        return next(_sequence)


def random_email() -> str:
    """testuser_{yyyyMMddHHmmss}_{1000-9999}{seq}@example.com"""
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")
    return f"testuser_{stamp}_{_random.randint(1000, 9999)}{_next_token()}@example.com"


def random_name() -> str:
    """TestUser_{HHmmss}{seq}"""
    stamp = datetime.now().strftime("%H%M%S")
    return f"TestUser_{stamp}{_next_token()}"


def random_mobile() -> str:
    # Ten digits starting with 9; the low digits follow the sub-second clock
    base = _random.randint(100000000, 999999999)
    offset = (time.perf_counter_ns() + _next_token()) % 1000
    return f"9{(base - base % 1000) + offset:09d}"


@dataclass
class AccountData:
    name: str = field(default_factory=random_name)
    email: str = field(default_factory=random_email)
    password: str = "Test123456"
    mobile: str = field(default_factory=random_mobile)


@dataclass(frozen=True)
class PaymentCard:
    name_on_card: str = "Test User"
    number: str = "5555555555554444"
    cvc: str = "123"
    expiry_month: str = "12"
    expiry_year: str = "2030"


TEST_CARD = PaymentCard()


@dataclass
class AddressDetails:
    # Defaults match the quick registration used by most scenarios
    first_name: str = "Test"
    last_name: str = "User"
    company: str = "Test Company"
    address: str = "123 Test Street"
    address2: str = "Apt 456"
    country: str = "India"
    state: str = "Test State"
    city: str = "Test City"
    zipcode: str = "12345"
    mobile_number: str = field(default_factory=random_mobile)
