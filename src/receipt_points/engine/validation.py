"""Format checks for submitted receipts.

Validation is short-circuiting. Rules are checked in a fixed order (item
count, retailer, total, purchase date, purchase time, then each item in
sequence) and the first failure is raised as ``InvalidReceiptError``. The
failing rule is kept on the exception's ``reason`` for logging only.
"""

import logging
import re
from datetime import datetime

from receipt_points.errors import InvalidReceiptError
from receipt_points.models import Item, Receipt

logger = logging.getLogger(__name__)

SHORT_DESCRIPTION_PATTERN = re.compile(r"[\w\s\-]+", re.ASCII)
DOLLAR_AMOUNT_PATTERN = re.compile(r"\d+\.\d{2}", re.ASCII)
RETAILER_PATTERN = re.compile(r"[\w\s\-&]+", re.ASCII)

# Shape checks applied before strptime, which tolerates unpadded fields
DATE_SHAPE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_SHAPE_PATTERN = re.compile(r"\d{1,2}:\d{2}", re.ASCII)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def _fail(reason: str) -> InvalidReceiptError:
    logger.debug("Receipt rejected: %s", reason)
    return InvalidReceiptError(reason)


def _parses(value: str, shape: re.Pattern, fmt: str) -> bool:
    if not shape.fullmatch(value):
        return False
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True


def validate_item(item: Item, index: int = 0) -> None:
    """Check a single line item.

    Raises:
        InvalidReceiptError: If the description or price is malformed
    """
    if not SHORT_DESCRIPTION_PATTERN.fullmatch(item.short_description):
        raise _fail(
            f"items[{index}].shortDescription didn't follow pattern: "
            f"{SHORT_DESCRIPTION_PATTERN.pattern}"
        )

    if not DOLLAR_AMOUNT_PATTERN.fullmatch(item.price):
        raise _fail(
            f"items[{index}].price didn't follow pattern: "
            f"{DOLLAR_AMOUNT_PATTERN.pattern}"
        )


def validate_receipt(receipt: Receipt) -> None:
    """Check a receipt and all of its items.

    Args:
        receipt: Receipt parsed from untrusted input

    Raises:
        InvalidReceiptError: On the first rule the receipt violates
    """
    if len(receipt.items) < 1:
        raise _fail("items must have at least 1 item")

    if not RETAILER_PATTERN.fullmatch(receipt.retailer):
        raise _fail(f"retailer didn't follow pattern: {RETAILER_PATTERN.pattern}")

    if not DOLLAR_AMOUNT_PATTERN.fullmatch(receipt.total):
        raise _fail(f"total didn't follow pattern: {DOLLAR_AMOUNT_PATTERN.pattern}")

    if not _parses(receipt.purchase_date, DATE_SHAPE_PATTERN, DATE_FORMAT):
        raise _fail(f"purchaseDate is not a valid date: {receipt.purchase_date!r}")

    if not _parses(receipt.purchase_time, TIME_SHAPE_PATTERN, TIME_FORMAT):
        raise _fail(f"purchaseTime is not a valid time: {receipt.purchase_time!r}")

    for index, item in enumerate(receipt.items):
        validate_item(item, index)
