import logging
from typing import Optional, Tuple
from storefront.core.errors import NotFound, StoreError, ValidationError
from storefront.core.identifiers import is_object_id, parse_object_id
from storefront.core.logging import log_performance, log_success
from storefront.db.store import DocumentStore
from storefront.models.cart import CartItem, CartOutcome, OutcomeKind

logger = logging.getLogger(__name__)

# Largest quantity a single cart line may hold (signed 32-bit column range)
MAX_AMOUNT = 2**31 - 1


def parse_amount(value: object) -> int:
    """Amounts must be positive integers; zero and negatives are rejected, never treated as removal."""
    if isinstance(value, bool):
        raise ValidationError("Invalid amount", f"amount must be a positive integer, got {value!r}")
    try:
        amount = int(str(value).strip())
    except ValueError:
        raise ValidationError("Invalid amount", f"amount must be a positive integer, got {value!r}")
    if amount <= 0:
        raise ValidationError("Invalid amount", f"amount must be a positive integer, got {value!r}")
    if amount > MAX_AMOUNT:
        raise ValidationError("Invalid amount", f"amount must not exceed {MAX_AMOUNT}, got {value!r}")
    return amount


class CartAggregator:
    """Keeps at most one cart line per (user, product) pair.

    Every operation returns a :class:`CartOutcome`; validation failures,
    missing lines and store failures are reported through ``kind`` rather
    than raised to the caller.
    """

    def __init__(self, store: DocumentStore[CartItem]):
        self.store = store

    def _keys(self, user_id: object, product_id: object) -> Tuple[str, str]:
        return parse_object_id(user_id, "userId"), parse_object_id(product_id, "productId")

    def _failure(self, error: Exception, action: str) -> CartOutcome:
        if isinstance(error, ValidationError):
            logger.info("Validation error while %s: %s", action, error.detail or error.message)
            return CartOutcome(kind=OutcomeKind.INVALID, message=error.message, error=error.detail)
        if isinstance(error, NotFound):
            logger.warning("%s while %s", error.message, action)
            return CartOutcome(kind=OutcomeKind.NOT_FOUND, message=error.message)
        logger.error("Error %s: %s", action, error.detail)
        return CartOutcome(kind=OutcomeKind.STORE_ERROR, message=f"Error {action}", error=error.detail)

    def add_or_increment(self, user_id: object, product_id: object, amount: object) -> CartOutcome:
        logger.info("Trying to add product %s to cart of user %s", product_id, user_id)
        try:
            user_key, product_key = self._keys(user_id, product_id)
            quantity = parse_amount(amount)
            with log_performance(logger, "Cart upsert"):
                item, created = self.store.upsert_increment(
                    {"user_id": user_key, "product_id": product_key}, "amount", quantity, limit=MAX_AMOUNT
                )
        except (ValidationError, StoreError) as e:
            return self._failure(e, "adding product to cart")

        if created:
            log_success(logger, "Product added to cart: %s", item.id)
            return CartOutcome(kind=OutcomeKind.CREATED, message="Product added to cart", item=item)
        log_success(logger, "Product quantity updated in cart: %s -> %s", item.id, item.amount)
        return CartOutcome(kind=OutcomeKind.UPDATED, message="Product quantity updated in cart", item=item)

    def set_amount(self, user_id: object, product_id: object, amount: object) -> CartOutcome:
        try:
            user_key, product_key = self._keys(user_id, product_id)
            quantity = parse_amount(amount)
            keys = {"user_id": user_key, "product_id": product_key}
            result = self.store.update_one(keys, {"amount": quantity})
            if result.matched_count == 0:
                raise NotFound("Product not found in cart")
            item = self.store.find_one(**keys)
            if item is None:
                raise NotFound("Product not found in cart")
        except (ValidationError, NotFound, StoreError) as e:
            return self._failure(e, "updating product in cart")

        log_success(logger, "Cart line %s set to %s", item.id, item.amount)
        return CartOutcome(kind=OutcomeKind.UPDATED, message="Product quantity updated in cart", item=item)

    def remove(self, user_id: object, product_id: object) -> CartOutcome:
        logger.info("Trying to remove product %s from cart of user %s", product_id, user_id)
        try:
            user_key, product_key = self._keys(user_id, product_id)
            result = self.store.delete_one(user_id=user_key, product_id=product_key)
            if result.deleted_count == 0:
                raise NotFound("Product not found in cart")
        except (ValidationError, NotFound, StoreError) as e:
            return self._failure(e, "deleting product from cart")

        log_success(logger, "Product %s deleted from cart", product_key)
        return CartOutcome(kind=OutcomeKind.REMOVED, message="Product deleted from cart", deleted_count=1)

    def list(self, user_id: Optional[object] = None) -> CartOutcome:
        # A malformed user id cannot own any line, so its cart is empty
        if user_id is not None and not is_object_id(user_id):
            return CartOutcome(kind=OutcomeKind.LISTED, message="Cart fetched", items=[])
        try:
            if user_id is None:
                items = self.store.find()
            else:
                items = self.store.find(user_id=parse_object_id(user_id, "userId"))
        except StoreError as e:
            return self._failure(e, "fetching cart")
        return CartOutcome(kind=OutcomeKind.LISTED, message="Cart fetched", items=items)

    def clear(self, user_id: object) -> CartOutcome:
        try:
            result = self.store.delete_many(user_id=parse_object_id(user_id, "userId"))
        except (ValidationError, StoreError) as e:
            return self._failure(e, "clearing cart")

        log_success(logger, "Cleared %d items from cart of user %s", result.deleted_count, user_id)
        return CartOutcome(kind=OutcomeKind.REMOVED, message="Cart cleared", deleted_count=result.deleted_count)
