# Import all models to register them with SQLModel
from storefront.models.cart import CartItem, CartOutcome, OutcomeKind
from storefront.models.product import Product
from storefront.models.user import User

__all__ = [
    "CartItem",
    "CartOutcome",
    "OutcomeKind",
    "Product",
    "User",
]
