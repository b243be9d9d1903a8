"""Receipt validation, scoring and bookkeeping."""

from receipt_points.engine.bonus import BonusTracker, bonus_for
from receipt_points.engine.scoring import (
    AFTERNOON_WINDOW,
    AfternoonWindow,
    calculate_points,
    score_breakdown,
)
from receipt_points.engine.store import ScoreStore, generate_id
from receipt_points.engine.validation import validate_item, validate_receipt

__all__ = [
    "AFTERNOON_WINDOW",
    "AfternoonWindow",
    "BonusTracker",
    "ScoreStore",
    "bonus_for",
    "calculate_points",
    "generate_id",
    "score_breakdown",
    "validate_item",
    "validate_receipt",
]
