"""Data models for receipt submission and point queries."""

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Individual line item on a receipt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_description: str = Field("", alias="shortDescription")
    price: str = ""


class Receipt(BaseModel):
    """Receipt as submitted by a client.

    Every field is kept as the raw submitted string. Formats are checked by
    ``receipt_points.engine.validation``, not here, so that incomplete
    payloads are rejected with the same signal as malformed ones.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    retailer: str = ""
    total: str = ""  # dollars.cents, e.g. "35.35"
    purchase_date: str = Field("", alias="purchaseDate")  # YYYY-MM-DD format
    purchase_time: str = Field("", alias="purchaseTime")  # HH:MM, 24h
    items: list[Item] = Field(default_factory=list)


class ProcessReceiptResponse(BaseModel):
    """Response body for a processed receipt."""

    id: str


class PointsResponse(BaseModel):
    """Response body for a points query."""

    points: int = Field(..., ge=0)


class RuleContribution(BaseModel):
    """Points awarded by a single scoring rule."""

    model_config = ConfigDict(frozen=True)

    rule: str
    points: int
    detail: str = ""


class ScoreBreakdown(BaseModel):
    """Per-rule trace of a scoring run."""

    contributions: list[RuleContribution] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(c.points for c in self.contributions)
