from datetime import datetime
from sqlmodel import Field, SQLModel
from storefront.core.clock import TIMESTAMP, utc_now
from storefront.core.identifiers import new_object_id

class Product(SQLModel, table=True):
    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)

    # Basic Info
    name: str = Field(index=True, min_length=1)
    image: str

    # Pricing
    price: float = Field(gt=0)

    # Inventory
    amount_in_stock: int = Field(default=0, ge=0)

    # Metadata
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
