"""
Player session and round management
Server-side round flow with per-session serialization
"""
import logging
import random
import threading
import time
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from feedrank import state
from feedrank.core.hints import get_hint
from feedrank.core.progression import next_example
from feedrank.core.scoring import order_submission, rank_items, score_ranking
from feedrank.core.session import new_session, record_round
from feedrank.errors import RoundNotActive
from feedrank.models import PlayerSession, Round, ScoredItem, ScoreResult


logger = logging.getLogger(__name__)

# Global storage: session_id → PlayerSession
active_sessions: Dict[str, PlayerSession] = {}

# One lock per session: round N's scoring and round N+1's selection never interleave
_locks: Dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def _lock_for(session_id: str) -> threading.Lock:
    with _registry_lock:
        lock = _locks.get(session_id)
    if lock is None:
        raise KeyError(session_id)
    return lock


def create_session() -> PlayerSession:
    """Create a fresh player session with a random id"""
    player = PlayerSession(
        session_id=uuid.uuid4().hex,
        created_at=time.time(),
        game=new_session()
    )
    with _registry_lock:
        _locks[player.session_id] = threading.Lock()
        active_sessions[player.session_id] = player
    logger.info(f"✅ Session {player.session_id} created")
    return player


def get_session(session_id: str) -> Optional[PlayerSession]:
    """Get a player session"""
    return active_sessions.get(session_id)


def _require(session_id: str) -> PlayerSession:
    player = active_sessions.get(session_id)
    if player is None:
        raise KeyError(session_id)
    return player


def start_round(session_id: str, rng: Optional[random.Random] = None) -> Round:
    """
    Select and serve the next round for a session

    Args:
        session_id: Player session id
        rng: Random source (state.RNG if None)

    Returns:
        New active Round

    Raises:
        KeyError: If session does not exist
    """
    rng = rng or state.RNG
    config = state.CONFIG

    with _lock_for(session_id):
        player = _require(session_id)
        game = player.game

        example = next_example(
            game.rounds_played,
            game.consecutive_correct,
            game.concepts_learned,
            rng=rng,
            config=config
        )
        items = rank_items(example.vote_records, config.confidence)
        if config.shuffle_items:
            rng.shuffle(items)

        player.current_round = Round(
            example=example,
            items=items,
            hint=get_hint(example, rng),
            started_at=time.time()
        )

    logger.info(
        f"🎯 Session {session_id} | Round {game.rounds_played + 1} | "
        f"Example {example.id} ({example.difficulty.value}/{example.concept.value})"
    )
    return player.current_round


def submit_round(session_id: str, order: Sequence[int]) -> Tuple[ScoreResult, List[ScoredItem]]:
    """
    Score a submitted order and record the round

    Args:
        session_id: Player session id
        order: Item ids, top to bottom

    Returns:
        (score result, items in submitted order)

    Raises:
        KeyError: If session does not exist
        RoundNotActive: If no round is waiting for a submission
        IncompleteSubmission: If order is not a permutation of the round's ids
    """
    with _lock_for(session_id):
        player = _require(session_id)
        current = player.current_round

        if current is None or current.is_submitted:
            raise RoundNotActive("No round in progress. Start a round first.")

        ordered = order_submission(current.items, order)
        result = score_ranking(ordered, state.CONFIG.scoring)

        player.game = record_round(
            player.game,
            result,
            current.example.concept,
            current.example.difficulty
        )
        current.is_submitted = True
        current.submitted_order = list(order)
        current.result = result

    return result, ordered


def reset_session(session_id: str) -> PlayerSession:
    """Restart a session: fresh counters, no active round"""
    with _lock_for(session_id):
        player = _require(session_id)
        player.game = new_session()
        player.current_round = None
    logger.info(f"🔄 Session {session_id} reset")
    return player


def reset_all_sessions() -> int:
    """Drop every session"""
    with _registry_lock:
        count = len(active_sessions)
        active_sessions.clear()
        _locks.clear()
    logger.info(f"🔄 Reset all sessions. Cleared {count} sessions.")
    return count
