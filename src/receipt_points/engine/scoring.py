"""Point scoring rules for validated receipts.

``score_breakdown`` is the single implementation of the rules. It records
what each rule contributed and logs it at DEBUG level; ``calculate_points``
returns the total. Both assume the receipt already passed
``validate_receipt``.
"""

import logging
import math
from datetime import datetime, time
from decimal import Decimal
from typing import NamedTuple

from receipt_points.models import Receipt, RuleContribution, ScoreBreakdown

logger = logging.getLogger(__name__)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")


class AfternoonWindow(NamedTuple):
    """Open interval of purchase times that earn the afternoon bonus."""

    start: time
    end: time

    @classmethod
    def from_strings(cls, start: str, end: str) -> "AfternoonWindow":
        return cls(
            datetime.strptime(start, "%H:%M").time(),
            datetime.strptime(end, "%H:%M").time(),
        )

    def __contains__(self, moment: object) -> bool:
        return isinstance(moment, time) and self.start < moment < self.end


# Closes at 18:00; a 14:00-16:00 window must be configured explicitly
AFTERNOON_WINDOW = AfternoonWindow(time(14, 0), time(18, 0))


def _retailer_points(receipt: Receipt) -> RuleContribution:
    count = sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())
    return RuleContribution(
        rule="retailer_alphanumeric",
        points=count,
        detail=f"{receipt.retailer!r} has {count} alphanumeric characters",
    )


def _total_points(receipt: Receipt) -> list[RuleContribution]:
    cents = int(receipt.total.split(".")[1])
    contributions = []

    if cents == 0:
        contributions.append(
            RuleContribution(
                rule="round_dollar",
                points=ROUND_DOLLAR_POINTS,
                detail=f"{receipt.total} is a round dollar amount",
            )
        )

    if cents % 25 == 0:
        contributions.append(
            RuleContribution(
                rule="quarter_multiple",
                points=QUARTER_MULTIPLE_POINTS,
                detail=f"{receipt.total} is a multiple of 0.25",
            )
        )

    return contributions


def _item_pair_points(receipt: Receipt) -> RuleContribution:
    pairs = len(receipt.items) // 2
    return RuleContribution(
        rule="item_pairs",
        points=ITEM_PAIR_POINTS * pairs,
        detail=f"{pairs} pairs of items",
    )


def _description_points(receipt: Receipt) -> list[RuleContribution]:
    contributions = []
    for item in receipt.items:
        trimmed = item.short_description.strip()
        if trimmed and len(trimmed) % 3 == 0:
            points = math.ceil(Decimal(item.price) * DESCRIPTION_PRICE_MULTIPLIER)
            contributions.append(
                RuleContribution(
                    rule="trimmed_description",
                    points=points,
                    detail=f"{trimmed!r} trimmed length is a multiple of 3",
                )
            )
    return contributions


def _odd_day_points(receipt: Receipt) -> RuleContribution | None:
    day = datetime.strptime(receipt.purchase_date, "%Y-%m-%d").day
    if day % 2 == 0:
        return None
    return RuleContribution(
        rule="odd_day",
        points=ODD_DAY_POINTS,
        detail=f"{receipt.purchase_date} is an odd day",
    )


def _afternoon_points(
    receipt: Receipt, window: AfternoonWindow
) -> RuleContribution | None:
    purchased_at = datetime.strptime(receipt.purchase_time, "%H:%M").time()
    if purchased_at not in window:
        return None
    return RuleContribution(
        rule="afternoon_window",
        points=AFTERNOON_POINTS,
        detail=(
            f"{receipt.purchase_time} is between "
            f"{window.start:%H:%M} and {window.end:%H:%M}"
        ),
    )


def score_breakdown(
    receipt: Receipt,
    bonus: int = 0,
    *,
    window: AfternoonWindow = AFTERNOON_WINDOW,
) -> ScoreBreakdown:
    """Apply every scoring rule and record each contribution.

    Args:
        receipt: A receipt that passed ``validate_receipt``
        bonus: First-use bonus supplied by the caller, added verbatim
        window: Afternoon window for the purchase time rule

    Returns:
        ScoreBreakdown listing the rules that awarded points

    Raises:
        ValueError: If bonus is negative
    """
    if bonus < 0:
        raise ValueError(f"bonus must be non-negative, got {bonus}")

    candidates = [
        _retailer_points(receipt),
        *_total_points(receipt),
        _item_pair_points(receipt),
        *_description_points(receipt),
        _odd_day_points(receipt),
        _afternoon_points(receipt, window),
    ]
    if bonus:
        candidates.append(
            RuleContribution(rule="bonus", points=bonus, detail="submitter bonus")
        )

    contributions = [c for c in candidates if c is not None and c.points > 0]
    for contribution in contributions:
        logger.debug("%s +%d", contribution.detail, contribution.points)

    return ScoreBreakdown(contributions=contributions)


def calculate_points(
    receipt: Receipt,
    bonus: int = 0,
    *,
    window: AfternoonWindow = AFTERNOON_WINDOW,
) -> int:
    """Return the total points for a validated receipt."""
    return score_breakdown(receipt, bonus, window=window).total
