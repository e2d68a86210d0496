"""
Utility functions
"""
from typing import Dict

from feedrank.models import ScoredItem


def format_percentage(ratio: float) -> str:
    """
    Format a ratio for display

    Example:
        >>> format_percentage(0.8912)
        '89.1%'
    """
    return f"{ratio * 100:.1f}%"


def item_to_dict(item: ScoredItem, reveal: bool = True) -> Dict:
    """
    Serialize a scored item for the presentation layer

    Args:
        item: Scored item
        reveal: Include Wilson score and actual rank (False before submission)

    Returns:
        Dictionary with ids, votes, approval and, if revealed, ranking data
    """
    data = {
        "id": item.id,
        "upvotes": item.upvotes,
        "downvotes": item.downvotes,
        "total_votes": item.total_votes,
        "approval": format_percentage(item.approval_ratio),
    }
    if reveal:
        data["wilson_score"] = item.wilson_score
        data["wilson_display"] = f"{item.wilson_score:.4f}"
        data["actual_rank"] = item.actual_rank
    return data
