"""Checkout API routes for the storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from ..models.checkout import (
    BeginCheckoutRequest,
    CheckoutFormUpdate,
    CheckoutStateResponse,
    Order,
    OrderSummary,
    SubmissionResponse,
)
from ..database.orders import order_db
from ..core.dependencies import get_session, get_session_manager
from ..core.session import SessionManager, StorefrontSession
from ..services.order_pipeline import (
    EmptyCartError,
    OrderSubmission,
    SubmissionClosedError,
    SubmissionInProgressError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


def get_submission(session: StorefrontSession = Depends(get_session)) -> OrderSubmission:
    """Current checkout of the session"""
    if session.submission is None:
        raise HTTPException(status_code=404, detail="Checkout not started")
    return session.submission


def build_state_response(submission: OrderSubmission) -> CheckoutStateResponse:
    return CheckoutStateResponse(
        form=submission.form_state.form,
        errors=submission.form_state.errors,
        state=submission.state,
        can_submit=submission.can_submit,
        failure_reason=submission.failure_reason,
    )


@router.post("", response_model=CheckoutStateResponse)
async def begin_checkout(
    request: Optional[BeginCheckoutRequest] = None,
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Enter checkout, optionally prefilled from a purchaser profile"""
    if not session.cart.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    submission = manager.begin_checkout(session, profile=request.profile if request else None)
    return build_state_response(submission)


@router.get("", response_model=CheckoutStateResponse)
async def get_checkout(submission: OrderSubmission = Depends(get_submission)):
    """Get the checkout form, its errors and the submission state"""
    return build_state_response(submission)


@router.patch("/form", response_model=CheckoutStateResponse)
async def update_form(
    request: CheckoutFormUpdate,
    submission: OrderSubmission = Depends(get_submission),
):
    """Apply purchaser edits; edited fields lose their error"""
    if not submission.can_submit:
        raise HTTPException(status_code=409, detail="Checkout is not editable")

    submission.form_state.update(**request.model_dump(exclude_unset=True))
    return build_state_response(submission)


@router.post("/validate", response_model=CheckoutStateResponse)
async def validate_form(submission: OrderSubmission = Depends(get_submission)):
    """Validate the form without submitting"""
    submission.form_state.validate()
    return build_state_response(submission)


@router.get("/summary", response_model=OrderSummary)
async def get_summary(
    session: StorefrontSession = Depends(get_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Subtotal, shipping and final total for the session's cart"""
    return manager.shipping.summarize(session.cart.snapshot())


@router.post("/submit", response_model=SubmissionResponse)
async def submit_order(submission: OrderSubmission = Depends(get_submission)):
    """
    Submit the order.

    Returns field errors if the form is invalid, the placed order on
    success, or a failure reason if placement failed (submit again to
    retry).
    """
    try:
        result = await submission.submit()
    except (SubmissionInProgressError, SubmissionClosedError) as e:
        logger.warning(f"Rejected submit for cart {submission.cart.cart_id}: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SubmissionResponse(
        success=result.success,
        state=result.state,
        errors=result.errors,
        order=result.order,
        failure_reason=result.failure_reason,
        redirect_to=result.redirect_to,
    )


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/orders", response_model=list[Order])
async def list_orders(limit: int = 50):
    """List recent orders"""
    return order_db.list_orders(limit=limit)
