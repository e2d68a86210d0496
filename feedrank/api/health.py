"""
Health check and system status endpoints
"""
from fastapi import APIRouter

from feedrank.core.catalog import CURATED_EXAMPLES
from feedrank.core.rounds import active_sessions


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "FeedRank - Wilson Score Ranking Game",
        "version": "1.0.0",
        "curated_examples": len(CURATED_EXAMPLES),
        "active_sessions": len(active_sessions)
    }
