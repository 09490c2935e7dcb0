from .crud_user import user
from .crud_daily_entry import daily_entry

__all__ = [
    "user",
    "daily_entry",
]
