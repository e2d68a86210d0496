"""
Round endpoints: start a round and submit a ranking
"""
from fastapi import APIRouter, HTTPException, Request
import logging

from feedrank.core.rounds import get_session, start_round, submit_round
from feedrank.errors import FeedRankError, IncompleteSubmission, RoundNotActive
from feedrank.normalizer import normalize_order
from feedrank.services.results import get_results_data
from feedrank.utils import item_to_dict


router = APIRouter(prefix="/sessions/{session_id}", tags=["rounds"])
logger = logging.getLogger(__name__)


@router.post("/rounds")
async def start_round_endpoint(session_id: str):
    """
    Start the next round for a session

    Response:
        {
            "round": 4,
            "difficulty": "intermediate",
            "concept": "sample_size",
            "items": [{"id": 1, "upvotes": 19, "downvotes": 1, ...}, ...],
            "hint": "..."
        }

    Items come without Wilson scores or ranks.
    """
    player = get_session(session_id)
    if not player:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    try:
        current = start_round(session_id)
    except FeedRankError as e:
        logger.error(f"❌ Could not start round for {session_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "round": player.game.rounds_played + 1,
        "example_id": current.example.id,
        "difficulty": current.example.difficulty.value,
        "concept": current.example.concept.value,
        "items": [item_to_dict(item, reveal=False) for item in current.items],
        "hint": current.hint
    }


@router.post("/submit")
async def submit_ranking(session_id: str, request: Request):
    """
    Submit a ranking for the active round

    Request:
        {"order": [2, 3, 1]}    # item ids, best first

    Response (scored):
        {
            "success": true,
            "score": {"exact_matches": 1, "total_score": 5, "max_score": 9, ...},
            "user_order": [...],
            "correct_order": [...],
            "key_insight": "...",
            "session": {...}
        }

    Response (rejected, 400):
        {"detail": {"error": "incomplete_submission", "missing": [...], ...}}
    """
    body = None
    try:
        body = await request.json()
        logger.info(f"📥 Submission for {session_id} | Body: {body}")

        player = get_session(session_id)
        if not player:
            raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

        try:
            order = normalize_order(body if isinstance(body, dict) else {})
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid submission format: {str(e)}")

        try:
            result, ordered = submit_round(session_id, order)
        except IncompleteSubmission as e:
            logger.info(f"❌ Session {session_id} | Rejected: {e}")
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "incomplete_submission",
                    "missing": e.missing,
                    "duplicates": e.duplicates,
                    "unknown": e.unknown,
                    "message": "Rank every item exactly once and try again"
                }
            )
        except RoundNotActive as e:
            raise HTTPException(status_code=409, detail=str(e))

        logger.info(
            f"✅ Session {session_id} | Exact: {result.exact_matches}/{result.item_count} | "
            f"Score: {result.total_score}/{result.max_score} | Streak: {player.game.streak}"
        )

        data = get_results_data(player.current_round, ordered, result, player.game)
        data["success"] = True
        data["message"] = "Perfect ranking!" if result.is_perfect else "Not quite. See the Wilson order."
        return data

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"❌ ERROR in /submit for {session_id}\n"
            f"Request Body: {body}\n"
            f"Error: {str(e)}\n"
            f"Error Type: {type(e).__name__}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")
