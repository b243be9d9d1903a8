"""Receipt submission and point lookup."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from receipt_points.engine.bonus import BonusTracker
from receipt_points.engine.scoring import (
    AFTERNOON_WINDOW,
    AfternoonWindow,
    calculate_points,
)
from receipt_points.engine.store import ScoreStore
from receipt_points.engine.validation import validate_receipt
from receipt_points.errors import InvalidReceiptError, ReceiptNotFoundError
from receipt_points.models import Receipt
from receipt_points.utils.identifiers import is_valid_identifier

logger = logging.getLogger(__name__)


def parse_receipt(payload: Receipt | Mapping[str, Any]) -> Receipt:
    """Coerce a raw payload into a Receipt.

    Raises:
        InvalidReceiptError: If the payload does not have the receipt shape
    """
    if isinstance(payload, Receipt):
        return payload
    try:
        return Receipt.model_validate(payload)
    except ValidationError as e:
        raise InvalidReceiptError(f"payload is not a receipt: {e}") from e


class SubmissionService:
    """
    Validates, scores and stores receipts, and answers point queries.

    The store and bonus tracker are owned by the caller and passed in, so
    several independent services can coexist (one per test, for example).
    """

    def __init__(
        self,
        store: ScoreStore,
        bonus_tracker: BonusTracker,
        window: AfternoonWindow = AFTERNOON_WINDOW,
    ) -> None:
        self.store = store
        self.bonus_tracker = bonus_tracker
        self.window = window

    def submit(
        self, payload: Receipt | Mapping[str, Any], submitter_key: str
    ) -> str:
        """
        Score a receipt and store the result.

        Args:
            payload: Receipt model or raw JSON-like mapping
            submitter_key: Identity used for the first-use bonus

        Returns:
            Identifier under which the score was stored

        Raises:
            InvalidReceiptError: If the receipt fails validation. No bonus
                tier is consumed in that case.
        """
        try:
            receipt = parse_receipt(payload)
            validate_receipt(receipt)
        except InvalidReceiptError as e:
            logger.info("Receipt data was invalid: %s", e.reason)
            raise

        bonus = self.bonus_tracker.next_bonus(submitter_key)
        points = calculate_points(receipt, bonus, window=self.window)
        identifier = self.store.put(points)

        logger.info("Created entry for receipt: (%s, %d)", identifier, points)
        return identifier

    def query(self, identifier: str | None) -> int:
        """
        Look up the points stored for an identifier.

        Raises:
            ReceiptNotFoundError: If the identifier is malformed or unknown
        """
        if not is_valid_identifier(identifier):
            logger.info("ID didn't match pattern: %r", identifier)
            raise ReceiptNotFoundError("identifier is empty or has whitespace")

        points = self.store.get(identifier)
        if points is None:
            logger.info("ID does not exist: %s", identifier)
            raise ReceiptNotFoundError(f"unknown identifier {identifier}")

        logger.info("Retrieved ID '%s': %d points", identifier, points)
        return points


def create_service(window: AfternoonWindow = AFTERNOON_WINDOW) -> SubmissionService:
    """Build a service with a fresh, empty store and bonus tracker."""
    return SubmissionService(ScoreStore(), BonusTracker(), window=window)
