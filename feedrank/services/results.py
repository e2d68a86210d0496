"""
Results service - Assemble and format results view data
"""
from typing import Dict, List, Sequence

from feedrank import state
from feedrank.core.hints import validation_issues
from feedrank.core.scoring import naive_order, wilson_order
from feedrank.core.session import session_stats
from feedrank.core.wilson import wilson_interval
from feedrank.models import GameSession, Round, ScoredItem, ScoreResult
from feedrank.utils import item_to_dict


def _with_user_rank(items: Sequence[ScoredItem]) -> List[Dict]:
    rows = []
    for position, item in enumerate(items, start=1):
        row = item_to_dict(item)
        row["user_rank"] = position
        row["correct"] = position == item.actual_rank
        rows.append(row)
    return rows


def _with_interval(items: Sequence[ScoredItem]) -> List[Dict]:
    rows = []
    for item in items:
        row = item_to_dict(item)
        interval = wilson_interval(item.upvotes, item.downvotes, state.CONFIG.confidence)
        row["interval"] = interval.model_dump()
        rows.append(row)
    return rows


def get_results_data(
    current: Round,
    ordered: Sequence[ScoredItem],
    result: ScoreResult,
    game: GameSession
) -> Dict:
    """
    Get results data for display

    Args:
        current: The round just scored
        ordered: Items in the user's submitted order
        result: Score of the submission
        game: Session after recording the round

    Returns:
        Formatted results: score, both orders, key insight, feedback and stats
    """
    # Naive order is a property of the example, not of the submission
    by_id = {item.id: item for item in current.items}
    catalog_order = [by_id[record.id] for record in current.example.vote_records]
    correct = wilson_order(catalog_order)
    naive = naive_order(catalog_order)

    return {
        "score": {
            "exact_matches": result.exact_matches,
            "total_score": result.total_score,
            "max_score": result.max_score,
            "item_count": result.item_count,
            "is_perfect": result.is_perfect,
        },
        "user_order": _with_user_rank(ordered),
        "correct_order": _with_interval(correct),
        "naive_order_ids": [item.id for item in naive],
        "naive_matches_wilson": [i.id for i in naive] == [i.id for i in correct],
        "example": {
            "id": current.example.id,
            "description": current.example.description,
            "difficulty": current.example.difficulty.value,
            "concept": current.example.concept.value,
            "synthesized": current.example.synthesized,
        },
        "key_insight": current.example.key_insight,
        "issues": validation_issues(ordered),
        "show_explanation": not result.is_perfect,
        "session": session_stats(game),
    }
