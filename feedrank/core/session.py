"""
Game session lifecycle

fresh (rounds_played = 0) → in-progress (≥ 1 round) → fresh on reset.
Sessions are immutable values: every transition returns a new GameSession.
"""
from typing import Dict, Optional, Union

from feedrank.models import Concept, Difficulty, GameSession, ScoreResult


STREAK_HIGHLIGHT = 3    # streak shown as "on fire" from here


def new_session() -> GameSession:
    """Create a fresh session"""
    return GameSession()


def reset_session(session: Optional[GameSession] = None) -> GameSession:
    """Explicit restart: discard all counters"""
    return GameSession()


def is_fresh(session: GameSession) -> bool:
    return session.rounds_played == 0


def record_round(
    session: GameSession,
    result: ScoreResult,
    concept: Union[Concept, str],
    difficulty: Optional[Difficulty] = None
) -> GameSession:
    """
    Apply one completed round to the session

    Rules:
    - rounds_played += 1
    - total_score += exact_matches, max_possible_score += N
    - Perfect round: streak and consecutive_correct += 1, concept learned
    - Otherwise: streak and consecutive_correct reset to 0

    Args:
        session: Session before the round
        result: Score of the round
        concept: Concept the round's example set teaches
        difficulty: Difficulty the round was played at (unchanged if None)

    Returns:
        Updated session
    """
    concept_key = concept.value if isinstance(concept, Concept) else str(concept)

    if result.is_perfect:
        streak = session.streak + 1
        consecutive_correct = session.consecutive_correct + 1
        concepts_learned = session.concepts_learned | {concept_key}
    else:
        streak = 0
        consecutive_correct = 0
        concepts_learned = session.concepts_learned

    return session.model_copy(update={
        "rounds_played": session.rounds_played + 1,
        "total_score": session.total_score + result.exact_matches,
        "max_possible_score": session.max_possible_score + result.item_count,
        "concepts_learned": concepts_learned,
        "difficulty": difficulty or session.difficulty,
        "streak": streak,
        "consecutive_correct": consecutive_correct,
    })


def session_stats(session: GameSession) -> Dict:
    """
    Stats for display

    Returns:
        Dictionary with rounds, success rate (%), streak, score and concepts
    """
    return {
        "rounds_played": session.rounds_played,
        "success_rate": session.success_rate,
        "streak": session.streak,
        "consecutive_correct": session.consecutive_correct,
        "score": f"{session.total_score}/{session.max_possible_score}",
        "total_score": session.total_score,
        "max_possible_score": session.max_possible_score,
        "difficulty": session.difficulty.value,
        "concepts_learned": sorted(session.concepts_learned),
        "on_fire": session.streak >= STREAK_HIGHLIGHT,
    }
