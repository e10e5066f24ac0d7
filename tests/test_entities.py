import pytest
from storefront.core.errors import ValidationError
from storefront.models.entities import ProductCreate, UserCreate, validate_entity


def test_dispatches_on_kind():
    product = validate_entity({"kind": "product", "name": "Tång", "price": 129, "image": "x", "amount_in_stock": 1})
    user = validate_entity({"kind": "user", "name": "Grace", "email": "grace@example.com"})

    assert isinstance(product, ProductCreate)
    assert isinstance(user, UserCreate)


def test_fields_of_the_other_kind_do_not_help():
    # A user-shaped body tagged as a product is validated as a product
    with pytest.raises(ValidationError) as exc_info:
        validate_entity({"kind": "product", "name": "Grace", "email": "grace@example.com"})
    assert exc_info.value.message == "Invalid product data"
    assert "price" in exc_info.value.detail


def test_unknown_kind():
    with pytest.raises(ValidationError):
        validate_entity({"kind": "order", "name": "x"})


def test_missing_kind():
    with pytest.raises(ValidationError) as exc_info:
        validate_entity({"name": "x"})
    assert exc_info.value.message == "Invalid entity data"
