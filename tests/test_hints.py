"""
Tests for hints, ranking feedback and submission normalization
"""
import random

import pytest
from feedrank.core.catalog import get_example
from feedrank.core.hints import HINTS, get_hint, validation_issues
from feedrank.core.scoring import naive_order, rank_items, wilson_order
from feedrank.models import Concept
from feedrank.normalizer import normalize_order


def test_every_concept_has_hints():
    """Each concept has at least one hint"""
    for concept in Concept:
        assert HINTS[concept]


def test_hint_matches_concept():
    """Hint comes from the example's concept"""
    example = get_example(7)
    assert get_hint(example, random.Random(0)) in HINTS[Concept.PERFECT_SCORES]


def test_no_issues_for_wilson_order():
    """Correct order → no feedback"""
    items = rank_items(get_example(6).vote_records)
    assert validation_issues(wilson_order(items)) == []


def test_issues_for_naive_order():
    """Ratio-first order flags the small-sample post"""
    items = rank_items(get_example(6).vote_records)
    issues = validation_issues(naive_order(items))
    # naive [1, 2, 3]: post 1 (20 votes) sits above post 2 (200 votes)
    assert len(issues) == 1
    assert "Post #1" in issues[0]
    assert "20 votes against 200" in issues[0]


def test_normalize_list():
    """List body"""
    assert normalize_order({"order": [2, 3, 1]}) == [2, 3, 1]


def test_normalize_string():
    """Comma-separated body"""
    assert normalize_order({"order": "2, 3,1"}) == [2, 3, 1]


def test_normalize_alias():
    """itemIds alias"""
    assert normalize_order({"itemIds": ["3", "1", "2"]}) == [3, 1, 2]


def test_normalize_missing():
    """No order → error"""
    with pytest.raises(ValueError):
        normalize_order({})
    with pytest.raises(ValueError):
        normalize_order({"order": []})


def test_normalize_bad_ids():
    """Non-integer ids rejected"""
    with pytest.raises(ValueError):
        normalize_order({"order": ["a", 2]})
    with pytest.raises(ValueError):
        normalize_order({"order": [1.5, 2]})
    with pytest.raises(ValueError):
        normalize_order({"order": [True, 2]})
    with pytest.raises(ValueError):
        normalize_order({"order": {"1": 2}})
