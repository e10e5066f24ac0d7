from datetime import datetime, timezone
from sqlalchemy import DateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Column type for created_at / updated_at; values are always timezone aware
TIMESTAMP = DateTime(timezone=True)
