"""
Error taxonomy for the ranking game core

All errors derive from ValueError: they signal bad input, never a transient
condition, so callers should not retry them.
"""
from typing import Iterable, List


class FeedRankError(ValueError):
    """Base class for all core errors"""


class InvalidVoteCounts(FeedRankError):
    """Negative upvotes or downvotes supplied"""

    def __init__(self, upvotes: int, downvotes: int):
        self.upvotes = upvotes
        self.downvotes = downvotes
        super().__init__(
            f"Vote counts must be non-negative, got upvotes={upvotes}, downvotes={downvotes}"
        )


class UnsupportedConfidenceLevel(FeedRankError):
    """Confidence level has no known z-value"""

    def __init__(self, confidence: float, supported: Iterable[float]):
        self.confidence = confidence
        self.supported = sorted(supported)
        super().__init__(
            f"Unsupported confidence level {confidence}. Supported: {self.supported}"
        )


class IncompleteSubmission(FeedRankError):
    """
    Submitted order is not a permutation of the round's item ids

    Attributes:
        missing: Round ids absent from the submission
        duplicates: Ids that appear more than once
        unknown: Ids that are not part of the round
    """

    def __init__(self, missing: List[int], duplicates: List[int], unknown: List[int]):
        self.missing = sorted(missing)
        self.duplicates = sorted(duplicates)
        self.unknown = sorted(unknown)

        problems = []
        if self.missing:
            problems.append(f"missing ids {self.missing}")
        if self.duplicates:
            problems.append(f"duplicate ids {self.duplicates}")
        if self.unknown:
            problems.append(f"unknown ids {self.unknown}")
        super().__init__("Submission must rank every item exactly once: " + "; ".join(problems))


class RoundNotActive(FeedRankError):
    """Submission arrived with no round in progress"""
