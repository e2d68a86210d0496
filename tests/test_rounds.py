"""
Tests for the in-memory round store
"""
import random

import pytest
from feedrank import state
from feedrank.core import rounds
from feedrank.core.rounds import (
    create_session,
    get_session,
    reset_all_sessions,
    reset_session,
    start_round,
    submit_round
)
from feedrank.errors import RoundNotActive
from feedrank.models import GameConfig


@pytest.fixture(autouse=True)
def fresh_store():
    state.apply_config(GameConfig(seed=99))
    reset_all_sessions()
    yield
    reset_all_sessions()


def test_unknown_session_leaves_no_lock():
    """Unknown ids raise KeyError and register nothing"""
    for call in (start_round, reset_session):
        with pytest.raises(KeyError):
            call("missing")
    with pytest.raises(KeyError):
        submit_round("missing", [1, 2, 3])
    assert "missing" not in rounds._locks
    assert rounds._locks == {}


def test_create_registers_lock():
    """New session gets its lock"""
    player = create_session()
    assert player.session_id in rounds._locks
    assert get_session(player.session_id) is player


def test_round_flow():
    """Start → submit → recorded; second submit rejected"""
    player = create_session()
    current = start_round(player.session_id, random.Random(1))
    order = [item.id for item in sorted(current.items, key=lambda i: i.actual_rank)]

    result, ordered = submit_round(player.session_id, order)
    assert result.is_perfect
    assert [item.id for item in ordered] == order
    assert get_session(player.session_id).game.rounds_played == 1

    with pytest.raises(RoundNotActive):
        submit_round(player.session_id, order)


def test_reset_all_sessions():
    """Every session and lock dropped"""
    create_session()
    create_session()
    assert reset_all_sessions() == 2
    assert rounds.active_sessions == {}
    assert rounds._locks == {}
