from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.orm import Session
from typing import Any, List
import datetime

from api.deps import db as deps_db
from api.deps import auth as deps_auth
from crud import crud_daily_entry
from schemas import daily_entry as daily_entry_schema
from trade_journal import models

router = APIRouter()

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def parse_trade_date(
    date: str = Path(..., pattern=DATE_PATTERN, description="Trade date, YYYY-MM-DD")
) -> datetime.date:
    try:
        return datetime.date.fromisoformat(date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid date, expected YYYY-MM-DD",
        )


@router.get("", response_model=List[daily_entry_schema.DailyEntry])
def read_entries_for_month(
    db: Session = Depends(deps_db.get_db),
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    """
    All daily entries of the current user for one calendar month, ascending by date.
    """
    return crud_daily_entry.daily_entry.get_entries_for_month(
        db, user_id=current_user.id, year=year, month=month
    )


@router.get("/months", response_model=daily_entry_schema.AvailableMonths)
def read_available_months(
    db: Session = Depends(deps_db.get_db),
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    """
    Months (YYYY-MM) in which the current user recorded anything, newest first.
    """
    months = crud_daily_entry.daily_entry.get_available_months(
        db, user_id=current_user.id
    )
    return {"months": months}


@router.get("/{date}", response_model=daily_entry_schema.DailyEntry)
def read_entry(
    *,
    db: Session = Depends(deps_db.get_db),
    trade_date: datetime.date = Depends(parse_trade_date),
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    entry = crud_daily_entry.daily_entry.get_entry_by_date(
        db, user_id=current_user.id, trade_date=trade_date
    )
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Daily entry not found"
        )
    return entry


@router.put("/{date}", response_model=daily_entry_schema.DailyEntry)
def upsert_entry(
    *,
    db: Session = Depends(deps_db.get_db),
    trade_date: datetime.date = Depends(parse_trade_date),
    entry_in: daily_entry_schema.DailyEntryUpsert,
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    """
    Create or replace the current user's entry for one day.
    """
    return crud_daily_entry.daily_entry.upsert_entry(
        db, user_id=current_user.id, trade_date=trade_date, entry_in=entry_in
    )


@router.delete("/{date}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    *,
    db: Session = Depends(deps_db.get_db),
    trade_date: datetime.date = Depends(parse_trade_date),
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Response:
    deleted = crud_daily_entry.daily_entry.delete_entry(
        db, user_id=current_user.id, trade_date=trade_date
    )
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Daily entry not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
