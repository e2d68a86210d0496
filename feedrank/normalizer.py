"""
Normalizer for ranking submissions
"""
from typing import Dict, List


def normalize_order(body: Dict) -> List[int]:
    """
    Normalize a ranking submission into a list of item ids

    Body format (list):
    {
        "order": [2, 3, 1]
    }

    OR comma-separated string:
    {
        "order": "2,3,1"
    }

    "itemIds" is accepted as an alias of "order".

    Args:
        body: Request body JSON

    Returns:
        Item ids, top to bottom

    Raises:
        ValueError: If order is absent or holds non-integer ids
    """
    raw = body.get("order")
    if raw is None:
        raw = body.get("itemIds")

    if raw is None or raw == "" or raw == []:
        raise ValueError("order required")

    if isinstance(raw, str):
        parts = [p.strip() for p in raw.split(',') if p.strip()]
    elif isinstance(raw, list):
        parts = raw
    else:
        raise ValueError(f"order must be a list or comma-separated string, got {type(raw).__name__}")

    order = []
    for part in parts:
        # bool is an int subclass; reject it explicitly
        if isinstance(part, bool) or (isinstance(part, float) and not part.is_integer()):
            raise ValueError(f"Invalid item id: {part}")
        try:
            order.append(int(part))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid item id: {part}")

    return order
