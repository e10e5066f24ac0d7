"""Request payloads for catalog entities.

Product and user payloads are a tagged union: each carries a ``kind``
literal and :func:`validate_entity` picks the model from that tag instead
of guessing from which fields happen to be present.
"""
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from storefront.core.errors import ValidationError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MAX_STOCK = 2**31 - 1


class ProductCreate(BaseModel):
    kind: Literal["product"] = "product"
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    image: str
    amount_in_stock: int = Field(ge=0, le=MAX_STOCK)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, gt=0)
    image: Optional[str] = None
    amount_in_stock: Optional[int] = Field(default=None, ge=0, le=MAX_STOCK)


class UserCreate(BaseModel):
    kind: Literal["user"] = "user"
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)


EntityPayload = Annotated[Union[ProductCreate, UserCreate], Field(discriminator="kind")]

_entity_adapter = TypeAdapter(EntityPayload)


def format_errors(error: PydanticValidationError) -> list:
    return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()]


def validate_entity(data: dict) -> Union[ProductCreate, UserCreate]:
    try:
        return _entity_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {data.get('kind', 'entity')} data", "; ".join(format_errors(e))) from e
