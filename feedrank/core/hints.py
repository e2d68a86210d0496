"""
Hints and ranking feedback
"""
import random
from typing import Dict, List, Optional, Sequence

from feedrank.models import Concept, ExampleSet, ScoredItem


HINTS: Dict[Concept, List[str]] = {
    Concept.SAMPLE_SIZE: [
        "Look at how many people voted, not just the percentage.",
        "Would you trust a restaurant with 3 perfect reviews over one with 300 great ones?",
    ],
    Concept.PERFECT_SCORES: [
        "100% sounds great, but how many votes is it based on?",
        "A perfect score from a handful of votes could just be luck.",
    ],
    Concept.SIMILAR_RATIOS: [
        "The percentages are close. What else separates these posts?",
        "When ratios tie, more evidence means more certainty.",
    ],
    Concept.HIGH_VOLUME: [
        "Everyone here has lots of votes. Does sample size still matter much?",
        "With thousands of votes, the percentage becomes a reliable signal.",
    ],
}


def get_hint(example: ExampleSet, rng: Optional[random.Random] = None) -> str:
    """Pick a pre-submission hint for the example's concept"""
    rng = rng or random
    return rng.choice(HINTS[example.concept])


def validation_issues(items: Sequence[ScoredItem]) -> List[str]:
    """
    Point out adjacent pairs ordered by raw ratio against the Wilson order

    Args:
        items: Scored items in the user's order

    Returns:
        One message per offending pair; empty if none
    """
    issues = []
    for upper, lower in zip(items, items[1:]):
        if upper.wilson_score < lower.wilson_score and upper.approval_ratio >= lower.approval_ratio:
            issues.append(
                f"Post #{upper.id} ({upper.upvotes}↑ {upper.downvotes}↓) is above "
                f"Post #{lower.id} ({lower.upvotes}↑ {lower.downvotes}↓), but it has "
                f"{upper.total_votes} votes against {lower.total_votes}."
            )
    return issues
