"""FastAPI dependencies for session-owned cart and checkout state"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException

from ..database.orders import order_db
from ..services.order_placement import (
    HttpOrderPlacement,
    OrderPlacement,
    SimulatedOrderPlacement,
)
from ..services.shipping import ShippingPolicy
from .config import settings
from .session import SessionManager, StorefrontSession

logger = logging.getLogger(__name__)

# Initialized lazily so tests can override before first use
session_manager: Optional[SessionManager] = None


def build_order_placement() -> OrderPlacement:
    """Pick the order placement collaborator from settings"""
    if settings.remote_placement_configured:
        logger.info(f"Placing orders via {settings.order_api_url}")
        return HttpOrderPlacement(
            base_url=settings.order_api_url,
            timeout=settings.order_api_timeout,
            order_db=order_db,
        )
    return SimulatedOrderPlacement(order_db, delay_seconds=settings.order_placement_delay)


def get_session_manager() -> SessionManager:
    """Get or create the session manager"""
    global session_manager
    if session_manager is None:
        session_manager = SessionManager(
            placement=build_order_placement(),
            shipping=ShippingPolicy(),
            redirect_path=settings.checkout_redirect_path,
        )
    return session_manager


def get_session(
    x_session_id: Optional[str] = Header(None),
    manager: SessionManager = Depends(get_session_manager),
) -> StorefrontSession:
    """Resolve the caller's session from the X-Session-Id header"""
    if not x_session_id:
        raise HTTPException(status_code=400, detail="X-Session-Id header is required")

    session = manager.get_session(x_session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    session.touch()
    return session
