"""Cart API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from ..models.cart import (
    AddToCartRequest,
    UpdateQuantityRequest,
    ValidateHashRequest,
    CartResponse,
)
from ..models.line_item import LineItem
from ..database.products import product_db
from ..core.dependencies import get_session, get_session_manager
from ..core.session import SessionManager, StorefrontSession

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def build_cart_response(
    session: StorefrontSession,
    manager: SessionManager,
    message: Optional[str] = None,
) -> CartResponse:
    cart = session.cart.snapshot()
    return CartResponse(
        cart=cart,
        summary=manager.shipping.summarize(cart),
        item_count=cart.item_count,
        message=message,
    )


@router.get("", response_model=CartResponse)
async def get_cart(
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Get the session's cart"""
    return build_cart_response(session, manager)


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Add a product selection to the cart"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if request.variant_id is None and product.variants:
        raise HTTPException(status_code=400, detail="Select a variant for this product")

    try:
        item = LineItem.from_product(
            product,
            variant_id=request.variant_id,
            quantity=request.quantity,
            attributes=request.attributes,
        )
    except ValueError:
        raise HTTPException(status_code=404, detail="Variant not found")

    session.cart.add_item(item)
    return build_cart_response(
        session,
        manager,
        message=f"Added {request.quantity}x {product.name} to cart",
    )


@router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str,
    request: UpdateQuantityRequest,
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Set item quantity; zero or less removes the item"""
    session.cart.update_quantity(item_id, request.quantity)
    return build_cart_response(session, manager, message="Cart updated")


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_from_cart(
    item_id: str,
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Remove an item from the cart"""
    session.cart.remove_item(item_id)
    return build_cart_response(session, manager, message="Item removed")


@router.post("/toggle", response_model=CartResponse)
async def toggle_cart(
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Show or hide the cart overlay"""
    session.cart.toggle_open()
    return build_cart_response(session, manager)


@router.post("/close", response_model=CartResponse)
async def close_cart(
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Hide the cart overlay"""
    session.cart.close()
    return build_cart_response(session, manager)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Clear all items from cart"""
    session.cart.clear()
    return build_cart_response(session, manager, message="Cart cleared")


@router.post("/validate-hash", response_model=CartResponse)
async def validate_cart_hash(
    request: Optional[ValidateHashRequest] = None,
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Clear the cart if the catalog changed since it was filled"""
    current_hash = (request.hash if request else None) or product_db.catalog_hash()
    cleared = session.cart.validate_catalog_hash(current_hash)

    message = None
    if cleared:
        message = (
            "Your cart has been cleared because product information was updated. "
            "Please add items again."
        )
    return build_cart_response(session, manager, message=message)
