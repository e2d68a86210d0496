"""
Progression policy - pick the next round's difficulty and example

Difficulty rules (thresholds tunable via ProgressionThresholds):
  - First round                        → beginner
  - ≥ escalate_streak perfect in a row → intermediate (< 5 rounds) / advanced
  - < 3 rounds                         → beginner
  - < 7 rounds                         → beginner / intermediate (50/50)
  - otherwise                          → intermediate (70%) / advanced (30%)

All randomness goes through the injected `rng`, so a seeded
random.Random gives reproducible sequences.
"""
import logging
import random
from typing import Iterable, Optional

from feedrank.core.catalog import list_curated, pick_curated, synthesize
from feedrank.models import (
    Concept, Difficulty, ExampleSet, GameConfig, ProgressionThresholds
)


logger = logging.getLogger(__name__)


def select_difficulty(
    rounds_played: int,
    consecutive_correct: int,
    rng: Optional[random.Random] = None,
    thresholds: Optional[ProgressionThresholds] = None
) -> Difficulty:
    """
    Decide the difficulty of the next round

    Args:
        rounds_played: Rounds completed so far
        consecutive_correct: Perfect rounds in a row
        rng: Random source (module-level random if None)
        thresholds: Tunable cut points (defaults if None)

    Returns:
        Difficulty for the next round
    """
    rng = rng or random
    t = thresholds or ProgressionThresholds()

    if rounds_played == 0:
        return Difficulty.BEGINNER

    if consecutive_correct >= t.escalate_streak:
        if rounds_played < t.escalate_advanced_after:
            return Difficulty.INTERMEDIATE
        return Difficulty.ADVANCED

    if rounds_played < t.beginner_until:
        return Difficulty.BEGINNER

    if rounds_played < t.mixed_until:
        if rng.random() < t.mixed_intermediate_probability:
            return Difficulty.INTERMEDIATE
        return Difficulty.BEGINNER

    if rng.random() < t.late_intermediate_probability:
        return Difficulty.INTERMEDIATE
    return Difficulty.ADVANCED


def _unmastered(concepts: Iterable[Concept], mastered: set) -> list:
    return [c for c in concepts if c.value not in mastered]


def next_example(
    rounds_played: int,
    consecutive_correct: int,
    concepts_mastered: Iterable[str],
    rng: Optional[random.Random] = None,
    config: Optional[GameConfig] = None
) -> ExampleSet:
    """
    Choose the example set for the next round

    Prefers curated sets whose concept is not yet mastered. Falls back to
    synthesis when every curated concept at the difficulty is mastered, and
    occasionally synthesizes anyway (synthesis_rate) after the first round.

    Args:
        rounds_played: Rounds completed so far
        consecutive_correct: Perfect rounds in a row
        concepts_mastered: Concept values already learned
        rng: Random source (module-level random if None)
        config: Game configuration (defaults if None)

    Returns:
        ExampleSet for the next round
    """
    rng = rng or random
    config = config or GameConfig()
    mastered = set(concepts_mastered)

    difficulty = select_difficulty(rounds_played, consecutive_correct, rng, config.progression)

    if rounds_played > 0 and rng.random() < config.progression.synthesis_rate:
        concept = rng.choice(_unmastered(Concept, mastered) or list(Concept))
        logger.info(f"🎲 Synthesizing {concept.value} example at {difficulty.value}")
        return synthesize(concept, difficulty, rng, config.synthesis, config.confidence)

    curated = list_curated(difficulty)
    fresh = [ex for ex in curated if ex.concept.value not in mastered]
    if fresh:
        return rng.choice(fresh)

    remaining = _unmastered(Concept, mastered)
    if remaining:
        concept = rng.choice(remaining)
        logger.info(f"🎲 Curated {difficulty.value} concepts mastered, synthesizing {concept.value}")
        return synthesize(concept, difficulty, rng, config.synthesis, config.confidence)

    return pick_curated(difficulty, rng)
