import logging
from typing import Any, Dict, List
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import SQLModel
from storefront.core.errors import NotFound, ValidationError
from storefront.core.identifiers import parse_object_id
from storefront.core.logging import log_success
from storefront.db.store import DocumentStore, UpdateResult
from storefront.models.entities import ProductUpdate, UserUpdate, format_errors, validate_entity

logger = logging.getLogger(__name__)

UPDATE_SCHEMAS = {
    "product": ProductUpdate,
    "user": UserUpdate,
}


class CatalogService:
    """CRUD and name search for one kind of catalog entity (products or users)."""

    def __init__(self, store: DocumentStore, kind: str):
        self.store = store
        self.kind = kind
        self.label = kind.capitalize()

    def get_all(self) -> List[SQLModel]:
        logger.info("Trying to get all %ss", self.kind)
        return self.store.find()

    def search(self, query: str) -> List[SQLModel]:
        if not query or not query.strip():
            raise ValidationError("Search query is required")
        return self.store.search("name", query.strip())

    def get(self, entity_id: str) -> SQLModel:
        logger.info("Trying to get %s with id: %s", self.kind, entity_id)
        key = parse_object_id(entity_id, f"{self.kind} ID")
        record = self.store.find_one(id=key)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return record

    def create(self, data: Dict[str, Any]) -> SQLModel:
        payload = validate_entity({**data, "kind": self.kind})
        record = self.store.model(**payload.model_dump(exclude={"kind"}))
        record = self.store.insert_one(record)
        log_success(logger, "%s added successfully: %s", self.label, record.id)
        return record

    def update(self, entity_id: str, data: Dict[str, Any]) -> UpdateResult:
        record = self.get(entity_id)
        try:
            # Unknown keys (including id) are dropped by the schema
            changes = UPDATE_SCHEMAS[self.kind].model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {self.kind} data", "; ".join(format_errors(e))) from e

        result = self.store.update_one({"id": record.id}, changes.model_dump(exclude_unset=True, exclude_none=True))
        if result.matched_count == 0:
            raise NotFound(f"{self.label} not found")
        if result.modified_count:
            log_success(logger, "%s %s updated", self.label, record.id)
        else:
            logger.info("No changes made to %s %s", self.kind, record.id)
        return result

    def delete(self, entity_id: str) -> None:
        logger.info("Trying to delete %s with id: %s", self.kind, entity_id)
        key = parse_object_id(entity_id, f"{self.kind} ID")
        result = self.store.delete_one(id=key)
        if result.deleted_count == 0:
            raise NotFound(f"{self.label} not found")
        log_success(logger, "%s deleted with ID: %s", self.label, key)
