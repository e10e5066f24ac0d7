import os
import re
import time
from storefront.core.errors import InvalidIdentifier

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

def new_object_id() -> str:
    """24 hex chars: a 4 byte big-endian timestamp followed by 8 random bytes."""
    timestamp = int(time.time()).to_bytes(4, "big")
    return (timestamp + os.urandom(8)).hex()

def is_object_id(value: object) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.fullmatch(value))

def parse_object_id(value: object, field: str = "id") -> str:
    if not is_object_id(value):
        raise InvalidIdentifier(field, value)
    return value.lower()
