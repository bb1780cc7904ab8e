# foodchef/services/reservation_manager.py
"""
Table bookings: availability checks, reservation lifecycle, reporting and
reminder dispatch.

Capacity is a flat table count per (date, time) slot: every pending or
confirmed reservation at the exact slot holds one table regardless of party
size. The check and the insert are separate statements, so two concurrent
bookings for the last table can both succeed.
"""
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError

from foodchef.core.config import settings
from foodchef.core.exceptions import CapacityError, FoodChefError, NotFoundError, ValidationError
from foodchef.models.sql_models import RESERVATION_STATUSES, Reservation
from foodchef.services import emails
from foodchef.services.common import (
    BaseManager, append_note, date_range, parse_date, parse_time, positive_int, require_fields, rounded, to_dict,
)

_reservations = Reservation.__table__

# Statuses that hold a table
ACTIVE_STATUSES = ("pending", "confirmed")


class ReservationManager(BaseManager):
    log_name = "foodchef.reservations"

    def __init__(self, db, logger=None, notifier=None, total_tables: Optional[int] = None):
        super().__init__(db, logger, notifier)
        self.total_tables = total_tables if total_tables is not None else settings.TOTAL_TABLES

    # --- availability ---
    def _availability(self, day: date, slot, guests) -> Dict[str, Any]:
        c = _reservations.c
        row = self.db.fetch_one(
            select(func.count().label("booked_tables"))
            .select_from(_reservations)
            .where(c.reservation_date == day, c.reservation_time == slot, c.status.in_(ACTIVE_STATUSES))
        )
        booked = row["booked_tables"] if row else 0
        available_tables = self.total_tables - booked
        can_accommodate = available_tables > 0

        self.logger.info(f"Availability check for {day} {slot} - {guests} guests", {
            "date": str(day),
            "time": str(slot),
            "guests": guests,
            "available_tables": available_tables,
            "booked_tables": booked,
            "can_accommodate": can_accommodate,
        })
        return {
            "available": can_accommodate,
            "available_tables": available_tables,
            "total_tables": self.total_tables,
            "booked_tables": booked,
        }

    def check_availability(self, reservation_date, reservation_time, guests=1) -> Dict[str, Any]:
        try:
            day = parse_date(reservation_date)
            slot = parse_time(reservation_time)
            return self._availability(day, slot, guests)
        except ValidationError as e:
            return {"available": False, "error": e.message}
        except SQLAlchemyError as e:
            self._db_error("Database error in availability check", e)
            return {"available": False, "error": "Database error"}

    # --- lifecycle ---
    def create_reservation(self, data) -> Dict[str, Any]:
        data = to_dict(data)
        try:
            require_fields(data, ("name", "email", "date", "time", "guests"))
            day = parse_date(data["date"])
            slot = parse_time(data["time"])
            guests = positive_int(data["guests"])
            if guests is None:
                raise ValidationError("Guests must be a whole number of at least 1")

            if not self._availability(day, slot, guests)["available"]:
                raise CapacityError()

            reservation_id = self.db.insert_or_update("reservations", {
                "name": str(data["name"]).strip(),
                "email": str(data["email"]).strip(),
                "phone": str(data.get("phone") or "").strip(),
                "reservation_date": day,
                "reservation_time": slot,
                "guests": guests,
                "message": data.get("message") or "",
                "status": "pending",
                "reminder_sent": False,
            })
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error creating reservation", e)

        self.logger.log_reservation("created", {
            **data, "id": reservation_id, "reservation_date": day, "reservation_time": slot,
        })
        return {
            "success": True,
            "message": "Reservation created successfully",
            "reservation_id": reservation_id,
        }

    def get_reservation(self, reservation_id: int) -> Optional[Dict[str, Any]]:
        try:
            return self.db.fetch_by_id("reservations", reservation_id)
        except SQLAlchemyError as e:
            self._db_error("Database error getting reservation", e)
            return None

    def update_status(self, reservation_id: int, status: str) -> Dict[str, Any]:
        try:
            if status not in RESERVATION_STATUSES:
                raise ValidationError(f"Invalid reservation status: {status}")
            updated = self.db.insert_or_update(
                "reservations", {"status": status, "updated_at": datetime.now()}, reservation_id
            )
            if not updated:
                raise NotFoundError("Reservation not found")
            reservation = self.db.fetch_by_id("reservations", reservation_id)
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error updating reservation status", e)

        self.logger.info("Reservation status updated", {"reservation_id": reservation_id, "new_status": status})
        if status == "confirmed" and reservation:
            self._notify(
                reservation["email"],
                "Reservation Confirmation - Food Chef Cafe",
                emails.reservation_confirmation(reservation),
            )
        return {"success": True, "message": f"Reservation status updated to {status}"}

    def cancel_reservation(self, reservation_id: int, reason: str = "") -> Dict[str, Any]:
        """Cancel from any status. The reason is appended to the guest's message."""
        try:
            reservation = self.db.fetch_by_id("reservations", reservation_id)
            if not reservation:
                raise NotFoundError("Reservation not found")

            previous = reservation["status"]
            if previous in ("cancelled", "completed"):
                self.logger.warning("Cancelling a reservation that is already closed", {
                    "reservation_id": reservation_id, "status": previous,
                })

            self.db.insert_or_update("reservations", {
                "status": "cancelled",
                "message": append_note(_reservations.c.message, reason),
                "updated_at": datetime.now(),
            }, reservation_id)
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error cancelling reservation", e)

        self.logger.log_reservation("cancelled", {**reservation, "reason": reason})
        return {"success": True, "message": "Reservation cancelled"}

    # --- reporting ---
    def get_reservations_by_date(self, reservation_date) -> List[Dict[str, Any]]:
        c = _reservations.c
        try:
            day = parse_date(reservation_date)
            return self.db.fetch_all(
                select(_reservations).where(c.reservation_date == day).order_by(c.reservation_time, c.id)
            )
        except ValidationError:
            return []
        except SQLAlchemyError as e:
            self._db_error("Database error getting reservations by date", e)
            return []

    def get_recent_reservations(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Latest bookings by creation time, whatever their date."""
        c = _reservations.c
        try:
            return self.db.fetch_all(select(_reservations).order_by(c.created_at.desc(), c.id.desc()).limit(limit))
        except SQLAlchemyError as e:
            self._db_error("Database error getting recent reservations", e)
            return []

    def get_upcoming_reservations(self, limit: int = 10) -> List[Dict[str, Any]]:
        c = _reservations.c
        try:
            return self.db.fetch_all(
                select(_reservations)
                .where(c.reservation_date >= date.today(), c.status.in_(ACTIVE_STATUSES))
                .order_by(c.reservation_date, c.reservation_time, c.id)
                .limit(limit)
            )
        except SQLAlchemyError as e:
            self._db_error("Database error getting upcoming reservations", e)
            return []

    def get_statistics(self, start_date=None, end_date=None) -> Dict[str, Any]:
        c = _reservations.c
        try:
            start, end = date_range(start_date, end_date)
            in_range = c.reservation_date.between(start, end)

            stats = self.db.fetch_one(
                select(
                    func.count().label("total_reservations"),
                    *[func.count(case((c.status == s, 1))).label(s) for s in RESERVATION_STATUSES],
                    func.avg(c.guests).label("avg_guests"),
                    func.sum(c.guests).label("total_guests"),
                ).where(in_range)
            )
            booked = func.count().label("count")
            stats["popular_times"] = self.db.fetch_all(
                select(c.reservation_time, booked)
                .where(in_range, c.status.in_(("confirmed", "completed")))
                .group_by(c.reservation_time)
                .order_by(booked.desc(), c.reservation_time)
                .limit(5)
            )
        except ValidationError:
            return {}
        except SQLAlchemyError as e:
            self._db_error("Database error getting statistics", e)
            return {}

        stats["avg_guests"] = rounded(stats["avg_guests"])
        stats["total_guests"] = stats["total_guests"] or 0
        stats["start_date"], stats["end_date"] = start, end
        return stats

    # --- reminders ---
    def send_reminders(self, days_ahead: int = 1) -> Dict[str, Any]:
        """
        Flag confirmed reservations ``days_ahead`` days out as reminded.

        When a notifier is configured the reminder email goes out first; the
        flag is set whether or not delivery succeeded so nobody gets two.
        """
        c = _reservations.c
        reminder_date = date.today() + timedelta(days=days_ahead)
        sent = 0
        try:
            due = self.db.fetch_all(
                select(_reservations)
                .where(c.reservation_date == reminder_date, c.status == "confirmed", c.reminder_sent.is_(False))
                .order_by(c.reservation_time, c.id)
            )
            for reservation in due:
                self._notify(
                    reservation["email"],
                    "Reservation Reminder - Food Chef Cafe",
                    emails.reservation_reminder(reservation),
                )
                sent += self.db.insert_or_update("reservations", {"reminder_sent": True}, reservation["id"])
        except SQLAlchemyError as e:
            self._db_error("Database error sending reminders", e)
            return {"date": reminder_date, "sent": sent, "total": 0}

        self.logger.info("Reminders sent", {"date": str(reminder_date), "sent_count": sent, "total_reservations": len(due)})
        return {"date": reminder_date, "sent": sent, "total": len(due)}
