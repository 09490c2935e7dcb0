from .base import Base
from .daily_entry import DailyEntry
from .user import User

__all__ = [
    "Base",
    "User",
    "DailyEntry",
]
