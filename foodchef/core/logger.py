# foodchef/core/logger.py
"""
Application logging.

Everything goes through the stdlib ``logging`` tree under the ``foodchef``
logger. ``setup_logging`` adds a console handler and a JSON-lines file that
rotates at midnight; ``ActivityLogger`` is what the managers hold, and it
stamps each record with the caller from the request context.
"""
import json
import logging
import os
from datetime import date, datetime
from logging.handlers import TimedRotatingFileHandler
from typing import Any, Dict, List, Optional

from foodchef.core.context import RequestContext, SYSTEM_CONTEXT

LOG_FILE_NAME = "app.log"
ROOT_LOGGER = "foodchef"


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": getattr(record, "context", {}),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None, retention_days: int = 30) -> logging.Logger:
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    if log_dir and not any(isinstance(h, TimedRotatingFileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        handler = TimedRotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            when="midnight",
            backupCount=retention_days,
            encoding="utf-8",
        )
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)
    return logger


def read_logs(log_dir: str, day: Optional[date] = None, level: Optional[str] = None) -> List[Dict[str, Any]]:
    """Entries from one day's log file, optionally at or above ``level``."""
    day = day or date.today()
    if day == date.today():
        path = os.path.join(log_dir, LOG_FILE_NAME)
    else:
        # TimedRotatingFileHandler suffix for when="midnight"
        path = os.path.join(log_dir, f"{LOG_FILE_NAME}.{day.strftime('%Y-%m-%d')}")

    if not os.path.exists(path):
        return []

    threshold = logging.getLevelName(level.upper()) if level else logging.NOTSET
    if not isinstance(threshold, int):
        threshold = logging.NOTSET

    entries = []
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except ValueError:
                continue
            entry_level = logging.getLevelName(entry.get("level", "INFO"))
            if isinstance(entry_level, int) and entry_level >= threshold:
                entries.append(entry)
    return entries


class ActivityLogger:
    def __init__(self, name: str = ROOT_LOGGER, context: Optional[RequestContext] = None):
        self._log = logging.getLogger(name)
        self.context = context or SYSTEM_CONTEXT

    def _emit(self, level: int, message: str, context: Optional[Dict[str, Any]] = None, exc_info=None):
        self._log.log(level, message, extra={"context": context or {}}, exc_info=exc_info)

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None):
        self._emit(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None):
        self._emit(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None):
        self._emit(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None, exc_info=None):
        self._emit(logging.ERROR, message, context, exc_info=exc_info)

    def _caller(self) -> Dict[str, Any]:
        return {
            "actor": self.context.actor,
            "role": self.context.role,
            "ip_address": self.context.ip_address,
            "user_agent": self.context.user_agent,
            "timestamp": datetime.now().isoformat(timespec="seconds"),
        }

    def log_activity(self, action: str, data: Optional[Dict[str, Any]] = None):
        self.info(f"User Activity: {action}", {**self._caller(), "action": action, "data": data or {}})

    def log_reservation(self, action: str, reservation: Dict[str, Any]):
        self.info(f"Reservation {action}", {
            **self._caller(),
            "action": action,
            "reservation_id": reservation.get("id", "new"),
            "customer_name": reservation.get("name", "unknown"),
            "customer_email": reservation.get("email", "unknown"),
            "date": str(reservation.get("reservation_date", "unknown")),
            "time": str(reservation.get("reservation_time", "unknown")),
            "guests": reservation.get("guests", 1),
        })

    def log_security(self, event: str, details: Optional[Dict[str, Any]] = None):
        self.warning(f"Security Event: {event}", {**self._caller(), "event": event, "details": details or {}})
