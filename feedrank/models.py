"""
Data models for the ranking game
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from feedrank.errors import InvalidVoteCounts


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Concept(str, Enum):
    """Statistical lesson an example set is built to teach"""
    SAMPLE_SIZE = "sample_size"
    PERFECT_SCORES = "perfect_scores"
    SIMILAR_RATIOS = "similar_ratios"
    HIGH_VOLUME = "high_volume"


class VoteRecord(BaseModel):
    """One rankable item: an id and its vote counts"""
    model_config = ConfigDict(frozen=True)

    id: int
    upvotes: int = Field(ge=0)
    downvotes: int = Field(ge=0)

    def __init__(self, **data):
        # Raised directly rather than wrapped in a pydantic ValidationError
        up = data.get("upvotes", 0)
        down = data.get("downvotes", 0)
        if isinstance(up, int) and isinstance(down, int) and (up < 0 or down < 0):
            raise InvalidVoteCounts(up, down)
        super().__init__(**data)

    @property
    def total_votes(self) -> int:
        return self.upvotes + self.downvotes

    @property
    def approval_ratio(self) -> float:
        """Naive upvote share; 0.0 when there are no votes"""
        if self.total_votes == 0:
            return 0.0
        return self.upvotes / self.total_votes


class ScoredItem(VoteRecord):
    """VoteRecord annotated with its Wilson score and correct rank"""
    wilson_score: float = Field(ge=0.0, le=1.0)
    actual_rank: int = Field(ge=1)


class ExampleSet(BaseModel):
    """A scenario of vote records shown to the user in one round"""
    model_config = ConfigDict(frozen=True)

    id: int
    difficulty: Difficulty
    concept: Concept
    vote_records: Tuple[VoteRecord, ...]
    key_insight: str
    description: str = ""
    synthesized: bool = False


class ScoreResult(BaseModel):
    """Outcome of comparing a submitted order with the Wilson order"""
    model_config = ConfigDict(frozen=True)

    exact_matches: int
    total_score: int
    max_score: int
    item_count: int

    @property
    def is_perfect(self) -> bool:
        return self.exact_matches == self.item_count


class GameSession(BaseModel):
    """
    Aggregate counters for one player's session

    Never mutated in place: record_round() returns a new value.
    """
    model_config = ConfigDict(frozen=True)

    rounds_played: int = 0
    total_score: int = 0
    max_possible_score: int = 0
    concepts_learned: FrozenSet[str] = frozenset()
    difficulty: Difficulty = Difficulty.BEGINNER
    streak: int = 0                 # consecutive perfect rounds
    consecutive_correct: int = 0

    @property
    def success_rate(self) -> int:
        """Percentage of exact matches over all rounds, rounded"""
        if self.max_possible_score <= 0:
            return 0
        return round(self.total_score / self.max_possible_score * 100)


class WilsonInterval(BaseModel):
    """Full Wilson confidence interval, for diagnostic display"""
    lower_bound: float
    upper_bound: float
    point_estimate: float
    confidence_range: float
    sample_size: int


class Round(BaseModel):
    """One presented example and, once submitted, its outcome"""
    example: ExampleSet
    items: List[ScoredItem]                 # presentation order
    hint: str = ""
    started_at: float
    is_submitted: bool = False
    submitted_order: Optional[List[int]] = None
    result: Optional[ScoreResult] = None


class PlayerSession(BaseModel):
    """Server-side state for one player"""
    session_id: str
    created_at: float
    game: GameSession = Field(default_factory=GameSession)
    current_round: Optional[Round] = None


# ==================== CONFIGURATION ====================

class ScoringWeights(BaseModel):
    """Per-item awards for the weighted score"""
    full_credit: int = 3        # user rank == actual rank
    partial_credit: int = 1     # off by exactly one position


class ProgressionThresholds(BaseModel):
    """Tunable cut points for difficulty selection"""
    escalate_streak: int = 2            # consecutive perfect rounds before escalating
    escalate_advanced_after: int = 5    # rounds before escalation goes to advanced
    beginner_until: int = 3
    mixed_until: int = 7
    mixed_intermediate_probability: float = 0.5
    late_intermediate_probability: float = 0.7
    synthesis_rate: float = 0.3         # chance of a generated set after round one


class ItemTarget(BaseModel):
    """Target approval ratio and vote volume for one synthesized item"""
    ratio: float = Field(ge=0.0, le=1.0)
    volume: int = Field(ge=0)


class SynthesisParams(BaseModel):
    """
    Target items for each concept, listed as (ratio, volume) anchors

    Difficulty narrows the ratio spread between items around the anchors;
    jitter adds a random offset to each volume.
    """
    targets: Dict[Concept, List[ItemTarget]] = Field(default_factory=lambda: {
        Concept.SAMPLE_SIZE: [
            ItemTarget(ratio=0.95, volume=20),
            ItemTarget(ratio=0.89, volume=200),
            ItemTarget(ratio=0.86, volume=110),
        ],
        Concept.PERFECT_SCORES: [
            ItemTarget(ratio=1.0, volume=4),
            ItemTarget(ratio=1.0, volume=16),
            ItemTarget(ratio=0.92, volume=60),
        ],
        Concept.SIMILAR_RATIOS: [
            ItemTarget(ratio=0.80, volume=25),
            ItemTarget(ratio=0.78, volume=250),
            ItemTarget(ratio=0.79, volume=90),
        ],
        Concept.HIGH_VOLUME: [
            ItemTarget(ratio=0.90, volume=1000),
            ItemTarget(ratio=0.94, volume=850),
            ItemTarget(ratio=0.86, volume=1100),
        ],
    })
    volume_jitter: float = Field(default=0.15, ge=0.0, lt=1.0)
    difficulty_spread: Dict[Difficulty, float] = Field(default_factory=lambda: {
        Difficulty.BEGINNER: 1.0,
        Difficulty.INTERMEDIATE: 0.6,
        Difficulty.ADVANCED: 0.3,
    })

    @model_validator(mode="after")
    def _check_coverage(self):
        missing = [c.value for c in Concept if not self.targets.get(c)]
        if missing:
            raise ValueError(f"synthesis targets missing for concepts: {missing}")
        missing = [d.value for d in Difficulty if self.difficulty_spread.get(d, 0) <= 0]
        if missing:
            raise ValueError(f"difficulty_spread must be positive for: {missing}")
        return self


class GameConfig(BaseModel):
    """Game configuration loaded from YAML"""
    confidence: float = 0.95
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)
    progression: ProgressionThresholds = Field(default_factory=ProgressionThresholds)
    synthesis: SynthesisParams = Field(default_factory=SynthesisParams)
    shuffle_items: bool = True
    seed: Optional[int] = None
