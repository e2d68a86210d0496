"""
Wilson Score Engine

Formula (n = up + down, p = up / n, z from confidence level):
  center = (p + z²/2n) / (1 + z²/n)
  margin = z × sqrt((p(1 - p) + z²/4n) / n) / (1 + z²/n)
  lower  = center - margin      <- ranking score

Rules:
  - n = 0 → score 0.0
  - Only known confidence levels are accepted (no silent z substitution)
  - No rounding here; round only for display
"""
import math
from typing import Tuple

from feedrank.errors import InvalidVoteCounts, UnsupportedConfidenceLevel
from feedrank.models import WilsonInterval


# Two-sided z-values for supported confidence levels
Z_SCORES = {
    0.90: 1.64485,
    0.95: 1.96,
    0.99: 2.576,
}


def z_for_confidence(confidence: float) -> float:
    """
    Look up the z-value for a confidence level

    Raises:
        UnsupportedConfidenceLevel: If confidence is not in Z_SCORES
    """
    for level, z in Z_SCORES.items():
        if math.isclose(confidence, level):
            return z
    raise UnsupportedConfidenceLevel(confidence, Z_SCORES.keys())


def _center_and_margin(upvotes: int, downvotes: int, z: float) -> Tuple[float, float]:
    n = upvotes + downvotes
    # int / int never overflows, even for counts past the float range
    inv_n = 1 / n
    p_hat = upvotes / n
    z2 = z * z
    denominator = 1 + z2 * inv_n
    center = (p_hat + z2 * inv_n / 2) / denominator
    margin = (z * math.sqrt((p_hat * (1 - p_hat) + z2 * inv_n / 4) * inv_n)) / denominator
    return center, margin


def _check_votes(upvotes: int, downvotes: int) -> None:
    if upvotes < 0 or downvotes < 0:
        raise InvalidVoteCounts(upvotes, downvotes)


def wilson_lower_bound(upvotes: int, downvotes: int, confidence: float = 0.95) -> float:
    """
    Calculate the Wilson score lower bound

    Deliberately pessimistic about small samples: the fewer the votes,
    the wider the margin subtracted from the center.

    Args:
        upvotes: Number of positive votes (>= 0)
        downvotes: Number of negative votes (>= 0)
        confidence: Confidence level, one of Z_SCORES

    Returns:
        Lower bound in range [0.0, 1.0]

    Example:
        >>> wilson_lower_bound(19, 1) < wilson_lower_bound(178, 22)
        True
    """
    _check_votes(upvotes, downvotes)
    z = z_for_confidence(confidence)

    if upvotes + downvotes == 0:
        return 0.0

    center, margin = _center_and_margin(upvotes, downvotes, z)
    # center - margin is analytically 0 at p = 0; clamp float noise
    return min(1.0, max(0.0, center - margin))


def wilson_interval(upvotes: int, downvotes: int, confidence: float = 0.95) -> WilsonInterval:
    """
    Calculate the full Wilson confidence interval

    Args:
        upvotes: Number of positive votes (>= 0)
        downvotes: Number of negative votes (>= 0)
        confidence: Confidence level, one of Z_SCORES

    Returns:
        WilsonInterval with lower/upper bound, point estimate (raw ratio),
        confidence range (2 × margin) and sample size
    """
    _check_votes(upvotes, downvotes)
    z = z_for_confidence(confidence)
    n = upvotes + downvotes

    if n == 0:
        return WilsonInterval(
            lower_bound=0.0,
            upper_bound=0.0,
            point_estimate=0.0,
            confidence_range=0.0,
            sample_size=0
        )

    center, margin = _center_and_margin(upvotes, downvotes, z)
    return WilsonInterval(
        lower_bound=min(1.0, max(0.0, center - margin)),
        upper_bound=min(1.0, max(0.0, center + margin)),
        point_estimate=upvotes / n,
        confidence_range=2 * margin,
        sample_size=n
    )
