"""
Ranking & Scoring Engine

Rank assignment:
  actual_rank = position in descending Wilson score order (1 = best)
  Ties keep input order (stable sort), so ranks are always 1..N

Scoring (position i in the submitted list → user_rank = i + 1):
  exact_matches = #items with user_rank == actual_rank
  award = full_credit    if user_rank == actual_rank
          partial_credit if |user_rank - actual_rank| == 1
          0              otherwise
  total_score = Σ award,  max_score = N × full_credit
"""
from collections import Counter
from typing import List, Optional, Sequence

from feedrank.core.wilson import wilson_lower_bound
from feedrank.errors import IncompleteSubmission
from feedrank.models import ScoredItem, ScoreResult, ScoringWeights, VoteRecord


def rank_items(records: Sequence[VoteRecord], confidence: float = 0.95) -> List[ScoredItem]:
    """
    Annotate vote records with Wilson scores and actual ranks

    Args:
        records: Vote records in presentation order
        confidence: Confidence level for the Wilson bound

    Returns:
        ScoredItems in the same order as `records`
    """
    scores = [wilson_lower_bound(r.upvotes, r.downvotes, confidence) for r in records]

    # sorted() is stable: equal scores keep first-seen order
    by_score = sorted(range(len(records)), key=lambda idx: scores[idx], reverse=True)
    ranks = [0] * len(records)
    for rank, idx in enumerate(by_score, start=1):
        ranks[idx] = rank

    return [
        ScoredItem(
            id=record.id,
            upvotes=record.upvotes,
            downvotes=record.downvotes,
            wilson_score=score,
            actual_rank=rank
        )
        for record, score, rank in zip(records, scores, ranks)
    ]


def wilson_order(items: Sequence[ScoredItem]) -> List[ScoredItem]:
    """Items sorted best to worst by actual rank"""
    return sorted(items, key=lambda item: item.actual_rank)


def naive_order(items: Sequence[ScoredItem]) -> List[ScoredItem]:
    """
    Items sorted the way a raw-percentage ranking would put them

    Ties in approval ratio go to the item with more votes, then keep
    input order.
    """
    return sorted(items, key=lambda item: (item.approval_ratio, item.total_votes), reverse=True)


def order_submission(items: Sequence[ScoredItem], submission: Sequence[int]) -> List[ScoredItem]:
    """
    Rearrange scored items into the user's submitted order

    Args:
        items: The round's scored items
        submission: Item ids, top to bottom

    Returns:
        Items in submitted order

    Raises:
        IncompleteSubmission: If submission is not a permutation of item ids
    """
    by_id = {item.id: item for item in items}
    counts = Counter(submission)

    missing = [item_id for item_id in by_id if item_id not in counts]
    duplicates = [item_id for item_id, count in counts.items() if count > 1]
    unknown = [item_id for item_id in counts if item_id not in by_id]

    if missing or duplicates or unknown:
        raise IncompleteSubmission(missing, duplicates, unknown)

    return [by_id[item_id] for item_id in submission]


def calculate_item_award(user_rank: int, actual_rank: int, weights: ScoringWeights) -> int:
    """
    Award for one item

    Returns:
        full_credit on exact position, partial_credit when one off, else 0
    """
    distance = abs(user_rank - actual_rank)
    if distance == 0:
        return weights.full_credit
    if distance == 1:
        return weights.partial_credit
    return 0


def score_ranking(items: Sequence[ScoredItem], weights: Optional[ScoringWeights] = None) -> ScoreResult:
    """
    Main scoring entry point

    Args:
        items: Scored items in the user's submitted order
        weights: Scoring weights (defaults: 3 full / 1 partial)

    Returns:
        ScoreResult with exact matches and weighted score

    Raises:
        ValueError: If items is empty
    """
    if not items:
        raise ValueError("Cannot score an empty ranking")

    weights = weights or ScoringWeights()

    exact_matches = 0
    total_score = 0
    for position, item in enumerate(items):
        user_rank = position + 1
        if user_rank == item.actual_rank:
            exact_matches += 1
        total_score += calculate_item_award(user_rank, item.actual_rank, weights)

    return ScoreResult(
        exact_matches=exact_matches,
        total_score=total_score,
        max_score=len(items) * weights.full_credit,
        item_count=len(items)
    )
