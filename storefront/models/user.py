from datetime import datetime
from sqlmodel import Field, SQLModel
from storefront.core.clock import TIMESTAMP, utc_now
from storefront.core.identifiers import new_object_id

class User(SQLModel, table=True):
    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)

    # Basic Info
    name: str = Field(index=True, min_length=1)
    email: str = Field(unique=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
