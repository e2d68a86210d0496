"""
Tests for Wilson score lower bound and interval
"""
import pytest
from feedrank.core.wilson import (
    wilson_lower_bound,
    wilson_interval,
    z_for_confidence,
    Z_SCORES
)
from feedrank.errors import InvalidVoteCounts, UnsupportedConfidenceLevel


def test_zero_votes():
    """No votes → score exactly 0"""
    assert wilson_lower_bound(0, 0) == 0


def test_all_downvotes():
    """Only downvotes → score 0"""
    assert wilson_lower_bound(0, 25) == pytest.approx(0.0, abs=1e-12)


def test_known_value():
    """19 up / 1 down at 95% ≈ 0.7639"""
    assert wilson_lower_bound(19, 1) == pytest.approx(0.7639, abs=1e-4)


def test_bounds_hold():
    """0 ≤ lower bound ≤ raw ratio for every vote pair"""
    for up in range(0, 30):
        for down in range(0, 30):
            if up + down == 0:
                continue
            score = wilson_lower_bound(up, down)
            assert 0.0 <= score <= up / (up + down) + 1e-12


def test_monotonic_in_volume():
    """Fixed 80% ratio, more votes → strictly higher lower bound"""
    scores = [wilson_lower_bound(4 * k, k) for k in range(1, 60)]
    assert all(a < b for a, b in zip(scores, scores[1:]))
    assert scores[-1] < 0.8


def test_sample_size_beats_percentage():
    """95% of 20 ranks below 89% of 200"""
    assert wilson_lower_bound(19, 1) < wilson_lower_bound(178, 22)


def test_perfect_scores_differ_by_volume():
    """100% of 5 ranks below 100% of 15"""
    assert wilson_lower_bound(5, 0) < wilson_lower_bound(15, 0)


def test_confidence_90_is_less_pessimistic():
    """Smaller z → narrower margin → higher lower bound"""
    assert wilson_lower_bound(19, 1, 0.90) > wilson_lower_bound(19, 1, 0.95)
    assert wilson_lower_bound(19, 1, 0.99) < wilson_lower_bound(19, 1, 0.95)


def test_unsupported_confidence_raises():
    """Unknown confidence levels fail loudly instead of substituting a z-value"""
    with pytest.raises(UnsupportedConfidenceLevel):
        wilson_lower_bound(10, 2, confidence=0.8)


def test_unsupported_confidence_raises_on_zero_votes():
    """Confidence is checked even when there are no votes"""
    with pytest.raises(UnsupportedConfidenceLevel):
        wilson_lower_bound(0, 0, confidence=0.5)


def test_negative_votes_rejected():
    """Negative counts are never scored"""
    with pytest.raises(InvalidVoteCounts):
        wilson_lower_bound(-1, 5)
    with pytest.raises(InvalidVoteCounts):
        wilson_interval(3, -2)


def test_z_lookup():
    """Supported levels map to their z-values"""
    assert z_for_confidence(0.95) == 1.96
    assert z_for_confidence(0.90) == 1.64485
    assert set(Z_SCORES) == {0.90, 0.95, 0.99}


def test_interval_fields():
    """Interval: lower matches lower bound, point estimate is raw ratio"""
    interval = wilson_interval(19, 1)
    assert interval.lower_bound == pytest.approx(wilson_lower_bound(19, 1))
    assert interval.point_estimate == 0.95
    assert interval.sample_size == 20
    assert interval.lower_bound < interval.point_estimate < interval.upper_bound
    assert interval.confidence_range == pytest.approx(interval.upper_bound - interval.lower_bound)


def test_interval_zero_votes():
    """Empty sample → all-zero interval"""
    interval = wilson_interval(0, 0)
    assert interval.lower_bound == 0.0
    assert interval.upper_bound == 0.0
    assert interval.sample_size == 0


def test_interval_narrows_with_volume():
    """Confidence range shrinks as sample grows"""
    small = wilson_interval(8, 2)
    large = wilson_interval(800, 200)
    assert large.confidence_range < small.confidence_range


def test_counts_beyond_float_range():
    """Huge integer counts still give a bound instead of raising"""
    assert wilson_lower_bound(10**400, 1) == pytest.approx(1.0)
    assert wilson_lower_bound(1, 10**400) == pytest.approx(0.0, abs=1e-12)
    interval = wilson_interval(10**400, 10**400)
    assert interval.point_estimate == pytest.approx(0.5)
    assert interval.lower_bound == pytest.approx(0.5)
