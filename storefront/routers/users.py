from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from sqlmodel import Session
from storefront.db.session import get_session
from storefront.db.store import DocumentStore
from storefront.models.user import User
from storefront.services.catalog import CatalogService

router = APIRouter()

def get_user_service(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(DocumentStore(session, User), "user")

@router.get("/", response_model=List[User])
def read_users(service: CatalogService = Depends(get_user_service)):
    """
    List all users.
    """
    return service.get_all()

@router.get("/search", response_model=List[User])
def search_users(q: str = "", service: CatalogService = Depends(get_user_service)):
    return service.search(q)

@router.get("/{user_id}", response_model=User)
def read_user(user_id: str, service: CatalogService = Depends(get_user_service)):
    return service.get(user_id)

@router.post("/", status_code=201)
def create_user(user: Dict[str, Any] = Body(...), service: CatalogService = Depends(get_user_service)):
    """
    Create a user. Body is validated against the user schema, 400 on failure.
    """
    return {"message": "User created successfully", "user": service.create(user)}

@router.put("/{user_id}")
def update_user(user_id: str, user: Dict[str, Any] = Body(...), service: CatalogService = Depends(get_user_service)):
    result = service.update(user_id, user)
    if result.modified_count:
        return {"message": "User updated successfully", "modifiedCount": result.modified_count}
    return {"message": "No changes were made to the user"}

@router.delete("/{user_id}")
def delete_user(user_id: str, service: CatalogService = Depends(get_user_service)):
    service.delete(user_id)
    return {"message": "User deleted successfully"}
