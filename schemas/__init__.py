from .user import User, UserCreate
from .token import Token, TokenData, AuthResponse
from .daily_entry import DailyEntry, DailyEntryUpsert, AvailableMonths
from .dashboard import (
    KPI,
    Metrics,
    ChartPoint,
    Charts,
    DateRange,
    DashboardSummary,
)

__all__ = [
    "User",
    "UserCreate",
    "Token",
    "TokenData",
    "AuthResponse",
    "DailyEntry",
    "DailyEntryUpsert",
    "AvailableMonths",
    "KPI",
    "Metrics",
    "ChartPoint",
    "Charts",
    "DateRange",
    "DashboardSummary",
]
