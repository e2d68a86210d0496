"""
Configuration and catalog endpoints
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from feedrank import state
from feedrank.core.catalog import get_example, list_curated
from feedrank.core.scoring import naive_order, rank_items, wilson_order
from feedrank.core.wilson import Z_SCORES
from feedrank.models import Difficulty


logger = logging.getLogger(__name__)

router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config():
    """Get active game configuration"""
    config = state.CONFIG
    return {
        "confidence": config.confidence,
        "supported_confidence_levels": sorted(Z_SCORES),
        "scoring": config.scoring.model_dump(),
        "progression": config.progression.model_dump(),
        "synthesis": config.synthesis.model_dump(mode="json"),
        "shuffle_items": config.shuffle_items
    }


@router.get("/examples")
async def list_examples(difficulty: Optional[Difficulty] = None):
    """List curated example sets (vote counts only, no answers)"""
    examples = list_curated(difficulty)
    return {
        "examples": [
            {
                "id": ex.id,
                "difficulty": ex.difficulty.value,
                "concept": ex.concept.value,
                "description": ex.description,
                "num_items": len(ex.vote_records)
            }
            for ex in examples
        ],
        "total": len(examples)
    }


@router.get("/examples/{example_id}")
async def get_example_detail(example_id: int):
    """Curated example with its Wilson and naive orders"""
    example = get_example(example_id)
    if not example:
        raise HTTPException(status_code=404, detail=f"Example {example_id} not found")

    items = rank_items(example.vote_records, state.CONFIG.confidence)
    return {
        "id": example.id,
        "difficulty": example.difficulty.value,
        "concept": example.concept.value,
        "description": example.description,
        "key_insight": example.key_insight,
        "items": [item.model_dump() for item in items],
        "wilson_order": [item.id for item in wilson_order(items)],
        "naive_order": [item.id for item in naive_order(items)]
    }
