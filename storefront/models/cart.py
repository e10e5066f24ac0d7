from typing import List, Optional
from datetime import datetime
from enum import Enum
from sqlalchemy import UniqueConstraint
from pydantic import BaseModel
from sqlmodel import Field, SQLModel
from storefront.core.clock import TIMESTAMP, utc_now
from storefront.core.identifiers import new_object_id

class CartItem(SQLModel, table=True):
    __tablename__ = "cart"
    # One line per (user, product); CartAggregator relies on it for the atomic upsert
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),)

    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)

    # References
    user_id: str = Field(index=True, max_length=24)
    product_id: str = Field(max_length=24)

    # Cart Details
    amount: int = Field(default=1, ge=1)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)


class OutcomeKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"
    LISTED = "listed"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    STORE_ERROR = "store_error"


class CartOutcome(BaseModel):
    """Result of one cart operation; failures are carried here, never raised."""
    kind: OutcomeKind
    message: str
    item: Optional[CartItem] = None
    items: Optional[List[CartItem]] = None
    deleted_count: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind not in (OutcomeKind.NOT_FOUND, OutcomeKind.INVALID, OutcomeKind.STORE_ERROR)
