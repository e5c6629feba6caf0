"""Session API routes for the storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from ..core.config import settings
from ..core.dependencies import get_session_manager
from ..core.session import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["Session"])


@router.post("")
async def create_session(manager: SessionManager = Depends(get_session_manager)):
    """Start a browsing session with an empty cart"""
    removed = manager.cleanup_old_sessions(max_age_hours=settings.session_max_age_hours)
    if removed:
        logger.info(f"Expired {removed} idle sessions")

    session = manager.create_session()
    return {"session_id": session.session_id}


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Delete a session"""
    if manager.delete_session(session_id):
        return {"message": "Session deleted"}
    raise HTTPException(status_code=404, detail="Session not found")
