from pydantic import BaseModel, Field, field_serializer
from typing import Optional, Text
from decimal import Decimal
import datetime


class DailyEntryBase(BaseModel):
    profit_loss: float
    trades_count: int = Field(..., ge=0)
    amount_invested: Optional[float] = Field(None, ge=0)
    roi_percent: Optional[float] = None
    notes: Optional[Text] = None


class DailyEntryUpsert(DailyEntryBase):
    """
    Body of ``PUT /api/daily-entries/{date}``.

    ``profit_loss`` and ``trades_count`` are required; the path date is the
    source of truth for the day, so the body carries no date.
    """

    pass


class DailyEntry(BaseModel):
    """Properties to return to client."""

    id: int
    user_id: int
    trade_date: datetime.date
    profit_loss: Decimal
    trades_count: int
    amount_invested: Optional[Decimal] = None
    roi_percent: Optional[Decimal] = None
    notes: Optional[Text] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True

    # Numeric columns come back as Decimal; clients get plain JSON numbers
    @field_serializer("profit_loss", "amount_invested", "roi_percent")
    def serialize_money(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None


class AvailableMonths(BaseModel):
    months: list[str]  # "YYYY-MM", newest first
