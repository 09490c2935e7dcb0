from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class DailyEntry(TimestampMixin, Base):
    __tablename__ = "daily_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Calendar day the results belong to; one row per user and day
    trade_date = Column(Date, nullable=False)

    profit_loss = Column(Numeric(14, 2), nullable=False, default=0)
    trades_count = Column(Integer, nullable=False, default=0)
    amount_invested = Column(Numeric(14, 2), nullable=True)
    roi_percent = Column(Numeric(9, 4), nullable=True)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="daily_entries")

    __table_args__ = (
        UniqueConstraint("user_id", "trade_date", name="uq_daily_entry_user_date"),
        CheckConstraint("trades_count >= 0", name="ck_daily_entry_trades_count"),
        Index("ix_daily_entry_user_date", "user_id", "trade_date"),
    )

    def __repr__(self):
        return (
            f"<DailyEntry("
            f"date='{self.trade_date}', "
            f"user_id={self.user_id}, "
            f"profit_loss={self.profit_loss}, "
            f"trades={self.trades_count}"
            f")>"
        )
