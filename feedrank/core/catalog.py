"""
Example catalog - curated vote scenarios plus on-demand synthesis

Curated sets are hand-picked so the raw-percentage order and the Wilson
order disagree (except high_volume sets, where large samples make the two
orders converge, which is the lesson). Synthesized sets are built fresh per
request from SynthesisParams and are never added to the catalog.
"""
import itertools
import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from feedrank.core.wilson import wilson_lower_bound
from feedrank.models import (
    Concept, Difficulty, ExampleSet, ItemTarget, SynthesisParams, VoteRecord
)


logger = logging.getLogger(__name__)


def _records(*votes: Tuple[int, int]) -> Tuple[VoteRecord, ...]:
    return tuple(
        VoteRecord(id=idx, upvotes=up, downvotes=down)
        for idx, (up, down) in enumerate(votes, start=1)
    )


# ==================== CURATED EXAMPLES ====================

CURATED_EXAMPLES: Tuple[ExampleSet, ...] = (
    ExampleSet(
        id=1,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.SAMPLE_SIZE,
        description="Sample size certainty difference",
        vote_records=_records((3, 0), (30, 3), (15, 5)),
        key_insight=(
            "Posts with a high approval ratio but very few votes rank lower, "
            "because 3 out of 3 could easily be luck while 30 out of 33 is hard to fake."
        ),
    ),
    ExampleSet(
        id=2,
        difficulty=Difficulty.INTERMEDIATE,
        concept=Concept.PERFECT_SCORES,
        description="Perfect score with a tiny sample",
        vote_records=_records((5, 0), (95, 5), (28, 2)),
        key_insight=(
            "A perfect 100% from 5 votes ranks below 95% from 100 votes: "
            "the confidence interval around 5 votes is too wide to trust."
        ),
    ),
    ExampleSet(
        id=3,
        difficulty=Difficulty.ADVANCED,
        concept=Concept.SAMPLE_SIZE,
        description="The obvious winner is not the statistical winner",
        vote_records=_records((10, 0), (99, 1), (19, 1)),
        key_insight=(
            "Wilson scoring can rank a 95% post above a 100% post when the 95% "
            "comes from twice as many votes."
        ),
    ),
    ExampleSet(
        id=4,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.SAMPLE_SIZE,
        description="Small numbers edge case",
        vote_records=_records((2, 0), (4, 2), (1, 0)),
        key_insight=(
            "With very few votes, it's hard to know if a post is truly better or just lucky. "
            "A single upvote says almost nothing."
        ),
    ),
    ExampleSet(
        id=5,
        difficulty=Difficulty.ADVANCED,
        concept=Concept.HIGH_VOLUME,
        description="Large scale differences",
        vote_records=_records((900, 100), (800, 50), (950, 150)),
        key_insight=(
            "With hundreds of votes each, the confidence margins are tiny, so the "
            "Wilson order converges to the approval ratio. Here the percentages can be trusted."
        ),
    ),
    ExampleSet(
        id=6,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.SAMPLE_SIZE,
        description="Sample size beats raw percentage",
        vote_records=_records((19, 1), (178, 22), (95, 15)),
        key_insight=(
            "95% of 20 votes ranks below 89% of 200 votes: ten times the evidence "
            "outweighs a six point lead in approval."
        ),
    ),
    ExampleSet(
        id=7,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.PERFECT_SCORES,
        description="Three perfect posts",
        vote_records=_records((5, 0), (15, 0), (1, 0)),
        key_insight=(
            "All three posts have 100% approval, yet they are not equal: "
            "15 straight upvotes is much stronger evidence than 5, and 1 is barely any."
        ),
    ),
    ExampleSet(
        id=8,
        difficulty=Difficulty.INTERMEDIATE,
        concept=Concept.PERFECT_SCORES,
        description="Flawless but unproven",
        vote_records=_records((4, 0), (40, 4), (12, 2)),
        key_insight=(
            "A flawless 4 for 4 ranks last: even 12 of 14 gives more confidence "
            "that the post is genuinely good."
        ),
    ),
    ExampleSet(
        id=9,
        difficulty=Difficulty.INTERMEDIATE,
        concept=Concept.SIMILAR_RATIOS,
        description="Same ratio, different evidence",
        vote_records=_records((8, 2), (80, 20), (30, 8)),
        key_insight=(
            "When approval ratios are nearly identical, vote volume decides: "
            "80% of 100 is far more certain than 80% of 10."
        ),
    ),
    ExampleSet(
        id=10,
        difficulty=Difficulty.ADVANCED,
        concept=Concept.SIMILAR_RATIOS,
        description="A one point drop with sixteen times the votes",
        vote_records=_records((9, 1), (45, 5), (160, 20)),
        key_insight=(
            "88.9% of 180 votes beats 90% of 10 votes. A one point drop in ratio "
            "is nothing next to a much narrower confidence interval."
        ),
    ),
    ExampleSet(
        id=11,
        difficulty=Difficulty.ADVANCED,
        concept=Concept.SIMILAR_RATIOS,
        description="Close ratios, wide spread in volume",
        vote_records=_records((48, 12), (390, 110), (95, 25)),
        key_insight=(
            "The lowest ratio wins here: 78% of 500 votes is a tighter estimate "
            "than 80% of 60, so its lower bound sits higher."
        ),
    ),
    ExampleSet(
        id=12,
        difficulty=Difficulty.INTERMEDIATE,
        concept=Concept.PERFECT_SCORES,
        description="Seven for seven",
        vote_records=_records((7, 0), (60, 5), (25, 3)),
        key_insight=(
            "Seven perfect votes still leave a lot of room for doubt; "
            "92% of 65 votes is the safer bet."
        ),
    ),
    ExampleSet(
        id=13,
        difficulty=Difficulty.ADVANCED,
        concept=Concept.HIGH_VOLUME,
        description="Thousands of votes, fractions of a percent",
        vote_records=_records((470, 30), (1900, 150), (320, 15)),
        key_insight=(
            "At this volume every interval is narrow, so small ratio differences "
            "survive into the Wilson order almost unchanged."
        ),
    ),
    ExampleSet(
        id=14,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.SIMILAR_RATIOS,
        description="Identical ratios",
        vote_records=_records((3, 1), (12, 4), (120, 40)),
        key_insight=(
            "All three posts sit at exactly 75%. The only difference is how much "
            "evidence backs that number, and Wilson rewards the most evidence."
        ),
    ),
    ExampleSet(
        id=15,
        difficulty=Difficulty.INTERMEDIATE,
        concept=Concept.HIGH_VOLUME,
        description="Volume breaks the near-tie",
        vote_records=_records((960, 40), (97, 3), (2900, 200)),
        key_insight=(
            "97% of 100 votes loses to 96% of 1,000 and even to 93.5% of 3,100: "
            "once volumes differ by an order of magnitude, certainty matters more than a point of ratio."
        ),
    ),
    ExampleSet(
        id=16,
        difficulty=Difficulty.BEGINNER,
        concept=Concept.HIGH_VOLUME,
        description="Big numbers are trustworthy",
        vote_records=_records((45, 5), (900, 100), (280, 20)),
        key_insight=(
            "Two posts at 90%, but the one with 1,000 votes ranks higher "
            "because its true approval is pinned down much more tightly."
        ),
    ),
)

DEFAULT_EXAMPLE = CURATED_EXAMPLES[0]

# Synthesized sets get ids above the curated range
_synthesized_ids = itertools.count(1000)


def list_curated(difficulty: Optional[Difficulty] = None) -> List[ExampleSet]:
    """List curated example sets, optionally filtered by difficulty"""
    if difficulty is None:
        return list(CURATED_EXAMPLES)
    return [ex for ex in CURATED_EXAMPLES if ex.difficulty == difficulty]


def get_example(example_id: int) -> Optional[ExampleSet]:
    """Look up a curated example set by id"""
    for example in CURATED_EXAMPLES:
        if example.id == example_id:
            return example
    return None


def pick_curated(difficulty: Difficulty, rng: Optional[random.Random] = None) -> ExampleSet:
    """
    Pick a random curated set of the given difficulty

    Args:
        difficulty: Target difficulty
        rng: Random source (module-level random if None)

    Returns:
        Uniformly chosen matching set, or DEFAULT_EXAMPLE if none match
    """
    rng = rng or random
    candidates = list_curated(difficulty)
    if not candidates:
        logger.warning(f"No curated example for {difficulty.value}, using default set {DEFAULT_EXAMPLE.id}")
        return DEFAULT_EXAMPLE
    return rng.choice(candidates)


# ==================== SYNTHESIS ====================

CONCEPT_LESSONS: Dict[Concept, str] = {
    Concept.SAMPLE_SIZE: (
        "A slightly lower ratio backed by many more votes is more trustworthy "
        "than a high ratio from a handful of votes."
    ),
    Concept.PERFECT_SCORES: (
        "A perfect score from a few votes is weak evidence; "
        "Wilson scoring needs volume before it trusts 100%."
    ),
    Concept.SIMILAR_RATIOS: (
        "When approval ratios are close, the post with more votes has the "
        "narrower confidence interval and the higher lower bound."
    ),
    Concept.HIGH_VOLUME: (
        "With very large vote counts the confidence margin shrinks, so the "
        "Wilson order lines up closely with the raw ratio."
    ),
}


def _jittered_volume(volume: int, jitter: float, rng) -> int:
    return max(1, round(volume * (1 + rng.uniform(-jitter, jitter))))


def _spread_ratios(targets: Sequence[ItemTarget], spread: float) -> List[float]:
    """Pull ratios toward their mean; spread=1.0 leaves them unchanged"""
    mean = sum(t.ratio for t in targets) / len(targets)
    return [min(1.0, max(0.0, mean + (t.ratio - mean) * spread)) for t in targets]


def _to_votes(ratio: float, volume: int) -> Tuple[int, int]:
    upvotes = round(volume * ratio)
    return upvotes, volume - upvotes


def _synthesize_sample_size(params: SynthesisParams, difficulty: Difficulty, rng) -> List[Tuple[int, int]]:
    # high ratio / low volume, slightly lower ratio / high volume, intermediate
    targets = params.targets[Concept.SAMPLE_SIZE]
    ratios = _spread_ratios(targets, params.difficulty_spread[difficulty])
    return [
        _to_votes(ratio, _jittered_volume(t.volume, params.volume_jitter, rng))
        for ratio, t in zip(ratios, targets)
    ]


def _synthesize_perfect_scores(params: SynthesisParams, difficulty: Difficulty, rng) -> List[Tuple[int, int]]:
    # Perfect items stay perfect; harder levels give them more votes
    targets = params.targets[Concept.PERFECT_SCORES]
    boost = 1 / params.difficulty_spread[difficulty]
    votes = []
    for t in targets:
        volume = _jittered_volume(t.volume, params.volume_jitter, rng)
        if t.ratio >= 1.0:
            volume = max(1, round(volume * boost))
        votes.append(_to_votes(t.ratio, volume))
    return votes


def _synthesize_similar_ratios(params: SynthesisParams, difficulty: Difficulty, rng) -> List[Tuple[int, int]]:
    targets = params.targets[Concept.SIMILAR_RATIOS]
    ratios = _spread_ratios(targets, params.difficulty_spread[difficulty])
    return [
        _to_votes(ratio, _jittered_volume(t.volume, params.volume_jitter, rng))
        for ratio, t in zip(ratios, targets)
    ]


def _synthesize_high_volume(params: SynthesisParams, difficulty: Difficulty, rng) -> List[Tuple[int, int]]:
    # Harder levels shrink the ratio gaps and grow the volumes
    targets = params.targets[Concept.HIGH_VOLUME]
    spread = params.difficulty_spread[difficulty]
    ratios = _spread_ratios(targets, spread)
    return [
        _to_votes(ratio, _jittered_volume(round(t.volume / spread), params.volume_jitter, rng))
        for ratio, t in zip(ratios, targets)
    ]


_SYNTHESIZERS: Dict[Concept, Callable[[SynthesisParams, Difficulty, random.Random], List[Tuple[int, int]]]] = {
    Concept.SAMPLE_SIZE: _synthesize_sample_size,
    Concept.PERFECT_SCORES: _synthesize_perfect_scores,
    Concept.SIMILAR_RATIOS: _synthesize_similar_ratios,
    Concept.HIGH_VOLUME: _synthesize_high_volume,
}

assert set(_SYNTHESIZERS) == set(Concept), "Every concept needs a synthesizer"
assert set(CONCEPT_LESSONS) == set(Concept), "Every concept needs a lesson"


def _pct(record: VoteRecord) -> str:
    return f"{record.approval_ratio * 100:.0f}%"


def build_key_insight(
    concept: Concept,
    records: Sequence[VoteRecord],
    confidence: float = 0.95
) -> str:
    """
    Explain, in the concept's terms, why Wilson order differs from naive order

    Names the naive leader and the Wilson leader when they differ.
    """
    lesson = CONCEPT_LESSONS[concept]
    # max() keeps the first of equal keys, matching rank tie-breaks
    naive_top = max(records, key=lambda r: (r.approval_ratio, r.total_votes))
    wilson_top = max(records, key=lambda r: wilson_lower_bound(r.upvotes, r.downvotes, confidence))

    if naive_top.id == wilson_top.id:
        return (
            f"Post #{wilson_top.id} leads on both approval ({_pct(wilson_top)}) "
            f"and confidence ({wilson_top.total_votes} votes). {lesson}"
        )
    return (
        f"Post #{naive_top.id} has the highest approval ({_pct(naive_top)}) from "
        f"{naive_top.total_votes} votes, but Post #{wilson_top.id} ranks first with "
        f"{_pct(wilson_top)} from {wilson_top.total_votes} votes. {lesson}"
    )


def synthesize(
    concept: Concept,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    params: Optional[SynthesisParams] = None,
    confidence: float = 0.95
) -> ExampleSet:
    """
    Build a fresh 3-item example set biased toward a concept

    Args:
        concept: Lesson the set should teach
        difficulty: Controls how close the items' ratios sit
        rng: Random source (module-level random if None)
        params: Target ratios/volumes (defaults if None)
        confidence: Confidence level the round will be ranked at

    Returns:
        New ExampleSet with a fresh id and synthesized=True
    """
    rng = rng or random
    params = params or SynthesisParams()

    votes = _SYNTHESIZERS[concept](params, difficulty, rng)
    rng.shuffle(votes)
    records = _records(*votes)

    example = ExampleSet(
        id=next(_synthesized_ids),
        difficulty=difficulty,
        concept=concept,
        description=f"Generated {concept.value.replace('_', ' ')} scenario",
        vote_records=records,
        key_insight=build_key_insight(concept, records, confidence),
        synthesized=True,
    )
    logger.debug(f"Synthesized example {example.id}: {concept.value}/{difficulty.value} {votes}")
    return example
