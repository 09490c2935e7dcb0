from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Any, Optional
import datetime
import logging

from api.deps import db as deps_db
from api.deps import auth as deps_auth
from crud import crud_daily_entry
from schemas import dashboard as dashboard_schema
from trade_journal import analytics, models

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_date_or_none(value: Optional[str]) -> Optional[datetime.date]:
    """Lenient date parsing for range bounds: anything unparseable counts as absent."""
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value.strip()[:10])
    except ValueError:
        logger.debug("Ignoring unparseable date bound %r", value)
        return None


@router.get("/summary", response_model=dashboard_schema.DashboardSummary)
def read_dashboard_summary(
    db: Session = Depends(deps_db.get_db),
    date_from: Optional[str] = Query(
        None, alias="from", description="Inclusive start date, YYYY-MM-DD"
    ),
    date_to: Optional[str] = Query(
        None, alias="to", description="Inclusive end date, YYYY-MM-DD"
    ),
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    """
    KPIs, risk metrics and chart series for the current user's entries.
    Without bounds, every entry (past and future) is included.
    """
    start = parse_date_or_none(date_from)
    end = parse_date_or_none(date_to)

    entries = crud_daily_entry.daily_entry.list_entries(
        db, user_id=current_user.id, date_from=start, date_to=end
    )
    return analytics.build_dashboard_summary(entries, date_from=start, date_to=end)
