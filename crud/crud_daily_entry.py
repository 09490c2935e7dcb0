from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
import datetime
import logging

from trade_journal import models
from schemas import daily_entry as daily_entry_schema

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """First day of the month (inclusive) and first day of the next month (exclusive)."""
    start = datetime.date(year, month, 1)
    if month == 12:
        end = datetime.date(year + 1, 1, 1)
    else:
        end = datetime.date(year, month + 1, 1)
    return start, end


class CRUDDailyEntry:
    def list_entries(
        self,
        db: Session,
        user_id: int,
        date_from: Optional[datetime.date] = None,
        date_to: Optional[datetime.date] = None,
    ) -> List[models.DailyEntry]:
        """
        All entries for one user, ascending by date.
        Both bounds are inclusive; a missing bound leaves that side open.
        """
        query = db.query(models.DailyEntry).filter(
            models.DailyEntry.user_id == user_id
        )
        if date_from:
            query = query.filter(models.DailyEntry.trade_date >= date_from)
        if date_to:
            query = query.filter(models.DailyEntry.trade_date <= date_to)
        return query.order_by(models.DailyEntry.trade_date.asc()).all()

    def get_entries_for_month(
        self, db: Session, user_id: int, year: int, month: int
    ) -> List[models.DailyEntry]:
        start, end = month_bounds(year, month)
        return (
            db.query(models.DailyEntry)
            .filter(
                models.DailyEntry.user_id == user_id,
                models.DailyEntry.trade_date >= start,
                models.DailyEntry.trade_date < end,
            )
            .order_by(models.DailyEntry.trade_date.asc())
            .all()
        )

    def get_entry_by_date(
        self, db: Session, user_id: int, trade_date: datetime.date
    ) -> Optional[models.DailyEntry]:
        return (
            db.query(models.DailyEntry)
            .filter(
                models.DailyEntry.user_id == user_id,
                models.DailyEntry.trade_date == trade_date,
            )
            .first()
        )

    def get_available_months(self, db: Session, user_id: int) -> List[str]:
        """Distinct ``YYYY-MM`` months that have at least one entry, newest first."""
        dates = (
            db.query(models.DailyEntry.trade_date)
            .filter(models.DailyEntry.user_id == user_id)
            .order_by(models.DailyEntry.trade_date.desc())
            .all()
        )
        months: List[str] = []
        for (trade_date,) in dates:
            month = trade_date.strftime("%Y-%m")
            if not months or months[-1] != month:
                months.append(month)
        return months

    def upsert_entry(
        self,
        db: Session,
        *,
        user_id: int,
        trade_date: datetime.date,
        entry_in: daily_entry_schema.DailyEntryUpsert,
    ) -> models.DailyEntry:
        """Create the entry for ``(user_id, trade_date)`` or replace every field of the existing one."""
        db_entry = self.get_entry_by_date(db, user_id=user_id, trade_date=trade_date)
        if db_entry is None:
            db_entry = models.DailyEntry(user_id=user_id, trade_date=trade_date)
            logger.info("Creating daily entry for user %s on %s", user_id, trade_date)
        else:
            logger.info("Updating daily entry for user %s on %s", user_id, trade_date)

        for field, value in entry_in.model_dump().items():
            setattr(db_entry, field, value)
        db_entry.updated_at = func.now()

        db.add(db_entry)
        db.commit()
        db.refresh(db_entry)
        return db_entry

    def delete_entry(
        self, db: Session, *, user_id: int, trade_date: datetime.date
    ) -> Optional[models.DailyEntry]:
        db_entry = self.get_entry_by_date(db, user_id=user_id, trade_date=trade_date)
        if db_entry:
            db.delete(db_entry)
            db.commit()
            logger.info("Deleted daily entry for user %s on %s", user_id, trade_date)
            return db_entry
        return None


daily_entry = CRUDDailyEntry()
