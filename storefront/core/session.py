"""Session management for storefront visitors"""

import uuid
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from ..models.checkout import PurchaserProfile, SubmissionState
from ..services.cart_store import CartStore
from ..services.checkout_form import CheckoutFormState
from ..services.order_pipeline import OrderSubmission
from ..services.order_placement import OrderPlacement
from ..services.shipping import ShippingPolicy
from .events import EventDispatcher


@dataclass
class StorefrontSession:
    """One visitor's cart and checkout"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartStore
    checkout: Optional[CheckoutFormState] = None
    submission: Optional[OrderSubmission] = None

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SessionManager:
    """Owns every session's cart and checkout state"""

    def __init__(
        self,
        placement: OrderPlacement,
        shipping: Optional[ShippingPolicy] = None,
        events: Optional[EventDispatcher] = None,
        redirect_path: str = "/",
    ):
        self.placement = placement
        self.shipping = shipping or ShippingPolicy()
        self.events = events or EventDispatcher()
        self.redirect_path = redirect_path
        self.sessions: dict[str, StorefrontSession] = {}

    def create_session(self) -> StorefrontSession:
        """Create a new session with an empty cart"""
        now = datetime.utcnow()
        session_id = str(uuid.uuid4())
        session = StorefrontSession(
            session_id=session_id,
            created_at=now,
            updated_at=now,
            cart=CartStore(cart_id=session_id, events=self.events),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[StorefrontSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def get_or_create_session(self, session_id: Optional[str] = None) -> StorefrontSession:
        """Get existing session or create new one"""
        if session_id and session_id in self.sessions:
            return self.sessions[session_id]
        return self.create_session()

    def begin_checkout(
        self,
        session: StorefrontSession,
        profile: Optional[PurchaserProfile] = None,
    ) -> OrderSubmission:
        """
        Enter checkout for a session.

        Reuses the open checkout if there is one; a finished (succeeded)
        checkout is replaced by a fresh form and submission. A profile only
        fills fields the purchaser has not edited.
        """
        submission = session.submission
        if submission is None or submission.state == SubmissionState.SUCCEEDED:
            form_state = CheckoutFormState(profile=profile)
            submission = OrderSubmission(
                cart=session.cart,
                form_state=form_state,
                placement=self.placement,
                shipping=self.shipping,
                events=self.events,
                redirect_path=self.redirect_path,
            )
            session.checkout = form_state
            session.submission = submission
        elif profile:
            submission.form_state.apply_prefill(profile)

        session.touch()
        return submission

    def delete_session(self, session_id: str) -> bool:
        """Delete a session"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions older than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        return len(old_sessions)
