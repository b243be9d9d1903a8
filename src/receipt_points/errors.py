"""Errors surfaced to callers of the submission service."""


class ReceiptError(Exception):
    """Base exception for receipt processing errors."""

    message = "Receipt processing failed."

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(self.message)
        # Internal diagnostic only; never part of a response
        self.reason = reason or self.message


class InvalidReceiptError(ReceiptError):
    """Raised when a receipt or one of its items is malformed."""

    message = "The receipt is invalid."


class ReceiptNotFoundError(ReceiptError):
    """Raised when no score exists for an identifier."""

    message = "No receipt found for that ID."
