from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from sqlmodel import Session
from storefront.db.session import get_session
from storefront.db.store import DocumentStore
from storefront.core.errors import NotFound
from storefront.models.product import Product
from storefront.services.catalog import CatalogService

router = APIRouter()

def get_product_service(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(DocumentStore(session, Product), "product")

@router.get("/", response_model=Dict[str, List[Product]])
def read_products(service: CatalogService = Depends(get_product_service)):
    products = service.get_all()
    if not products:
        raise NotFound("No products found")
    return {"products": products}

@router.get("/search", response_model=List[Product])
def search_products(q: str = "", service: CatalogService = Depends(get_product_service)):
    return service.search(q)

@router.get("/{product_id}")
def read_product(product_id: str, service: CatalogService = Depends(get_product_service)):
    return {"message": "Product found", "data": service.get(product_id)}

@router.post("/", status_code=201)
def create_product(product: Dict[str, Any] = Body(...), service: CatalogService = Depends(get_product_service)):
    return {"product": service.create(product)}

@router.put("/{product_id}")
def update_product(product_id: str, product: Dict[str, Any] = Body(...), service: CatalogService = Depends(get_product_service)):
    result = service.update(product_id, product)
    if result.modified_count:
        return {"message": "Product updated successfully."}
    return {"message": "No changes were made to the product."}

@router.delete("/{product_id}")
def delete_product(product_id: str, service: CatalogService = Depends(get_product_service)):
    service.delete(product_id)
    return {"message": "Product deleted successfully"}
