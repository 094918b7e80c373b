"""Page objects for the Automation Exercise shop."""

from .base_page import BasePage, ProbeResult
from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .contact_us_page import ContactUsPage
from .home_page import HomePage
from .login_page import LoginPage
from .product_details_page import ProductDetailsPage
from .products_page import ProductsPage
from .signup_page import SignupPage
from .subscription_footer import SubscriptionFooter

__all__ = [
    "BasePage",
    "ProbeResult",
    "CartPage",
    "CheckoutPage",
    "ContactUsPage",
    "HomePage",
    "LoginPage",
    "ProductDetailsPage",
    "ProductsPage",
    "SignupPage",
    "SubscriptionFooter",
]
