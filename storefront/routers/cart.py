from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlmodel import Session
from storefront.db.session import get_session
from storefront.db.store import DocumentStore
from storefront.models.cart import CartItem, CartOutcome, OutcomeKind
from storefront.services.cart import CartAggregator

router = APIRouter()

STATUS_CODES = {
    OutcomeKind.CREATED: 201,
    OutcomeKind.UPDATED: 200,
    OutcomeKind.REMOVED: 200,
    OutcomeKind.LISTED: 200,
    OutcomeKind.INVALID: 400,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.STORE_ERROR: 500,
}

def get_cart_aggregator(session: Session = Depends(get_session)) -> CartAggregator:
    return CartAggregator(DocumentStore(session, CartItem))

def render(outcome: CartOutcome) -> JSONResponse:
    status_code = STATUS_CODES[outcome.kind]
    if outcome.kind == OutcomeKind.LISTED:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(outcome.items))

    body = {"message": outcome.message}
    if outcome.item is not None:
        body["item"] = outcome.item
    if outcome.deleted_count is not None:
        body["deletedCount"] = outcome.deleted_count
    if outcome.error is not None:
        body["error"] = outcome.error
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))

@router.get("/")
def get_cart(user_id: Optional[str] = None, service: CartAggregator = Depends(get_cart_aggregator)):
    """List every cart line, or only those of one user"""
    return render(service.list(user_id))

@router.post("/add/{user_id}/{product_id}/{amount}")
def add_cart_item(user_id: str, product_id: str, amount: str, service: CartAggregator = Depends(get_cart_aggregator)):
    """Add a product to the cart, accumulating the amount if it is already there"""
    return render(service.add_or_increment(user_id, product_id, amount))

@router.put("/update/{user_id}/{product_id}/{amount}")
def update_cart_item(user_id: str, product_id: str, amount: str, service: CartAggregator = Depends(get_cart_aggregator)):
    """Replace the amount of a product already in the cart"""
    return render(service.set_amount(user_id, product_id, amount))

@router.delete("/delete/{user_id}/{product_id}")
def delete_cart_item(user_id: str, product_id: str, service: CartAggregator = Depends(get_cart_aggregator)):
    """Remove a product from the cart"""
    return render(service.remove(user_id, product_id))

@router.delete("/clear/{user_id}")
def clear_cart(user_id: str, service: CartAggregator = Depends(get_cart_aggregator)):
    """Clear entire cart"""
    return render(service.clear(user_id))
