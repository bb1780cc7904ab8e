# foodchef/services/common.py
import calendar
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel
from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError

from foodchef.core.exceptions import PersistenceError, ValidationError
from foodchef.core.gateway import Db
from foodchef.core.logger import ActivityLogger
from foodchef.services.notifier import Notifier


def to_dict(data: Union[BaseModel, dict, None]) -> dict:
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def require_fields(data: Dict[str, Any], fields: Iterable[str]):
    for field in fields:
        if is_missing(data.get(field)):
            raise ValidationError(f"Missing required field: {field}")


def positive_int(value: Any) -> Optional[int]:
    """``value`` as an int >= 1, or None."""
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if isinstance(value, float) and number != value:
        return None
    return number if number >= 1 else None


def parse_rating(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Rating must be between 1 and 5")
    try:
        rating = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be between 1 and 5")
    if not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    if rating != int(rating):
        raise ValidationError("Rating must be a whole number between 1 and 5")
    return int(rating)


def parse_date(value: Union[str, date], field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field}: expected YYYY-MM-DD")


def parse_time(value: Union[str, time], field: str = "time") -> time:
    if isinstance(value, time):
        return value.replace(microsecond=0)
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field}: expected HH:MM")


def month_bounds(today: Optional[date] = None) -> Tuple[date, date]:
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def date_range(start: Union[str, date, None], end: Union[str, date, None]) -> Tuple[date, date]:
    """Inclusive reporting range, defaulting to the current month."""
    first, last = month_bounds()
    start = parse_date(start, "start date") if start else first
    end = parse_date(end, "end date") if end else last
    if end < start:
        raise ValidationError("End date must not be before start date")
    return start, end


def day_window(start: date, end: date) -> Tuple[datetime, datetime]:
    """Half-open datetime window covering whole days ``start`` through ``end``."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def append_note(column, reason: str):
    """SQL expression appending a cancellation note to ``column`` in the UPDATE itself."""
    note = f"Cancelled: {reason}" if reason else "Cancelled"
    return case((func.coalesce(column, "") == "", note), else_=column + " " + note)


def rounded(value: Any, places: int = 2) -> Optional[float]:
    return round(float(value), places) if value is not None else None


class BaseManager:
    log_name = "foodchef"

    def __init__(self, db: Db, logger: Optional[ActivityLogger] = None, notifier: Optional[Notifier] = None):
        self.db = db
        self.logger = logger or ActivityLogger(self.log_name)
        self.notifier = notifier

    def _db_error(self, message: str, exc: SQLAlchemyError) -> Dict[str, Any]:
        self.db.rollback()
        self.logger.error(message, {"error": str(exc)})
        return PersistenceError().to_result()

    def _notify(self, recipient: str, subject: str, body_html: str) -> bool:
        if not self.notifier:
            return False
        return self.notifier.send(recipient, subject, body_html)
