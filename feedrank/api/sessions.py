"""
Session management endpoints
"""
from fastapi import APIRouter, HTTPException
import logging

from feedrank.core.rounds import (
    create_session, get_session, reset_session
)
from feedrank.core.session import session_stats


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("")
async def create_session_endpoint():
    """
    Start a new game session

    Response:
        {"session_id": "<token>", "session": {...stats}}
    """
    player = create_session()
    return {
        "success": True,
        "session_id": player.session_id,
        "session": session_stats(player.game)
    }


@router.get("/{session_id}")
async def get_session_endpoint(session_id: str):
    """Get stats for a session"""
    player = get_session(session_id)
    if not player:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    current = player.current_round
    return {
        "session_id": session_id,
        "session": session_stats(player.game),
        "round_in_progress": bool(current and not current.is_submitted)
    }


@router.post("/{session_id}/reset")
async def reset_session_endpoint(session_id: str):
    """Restart a session (fresh counters)"""
    if not get_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    player = reset_session(session_id)
    return {
        "success": True,
        "session": session_stats(player.game),
        "message": "Session reset"
    }
