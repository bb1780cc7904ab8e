# foodchef/api/endpoints/admin.py
"""Staff operations. Every route here needs an admin bearer key."""
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from foodchef.api.deps import (
    get_feedback_manager, get_order_manager, get_reservation_manager, success, unwrap,
)
from foodchef.core.config import settings
from foodchef.core.logger import read_logs
from foodchef.models.schemas import CancelRequest, ModerationRequest, StatusUpdate
from foodchef.services.feedback_manager import FeedbackManager
from foodchef.services.order_manager import OrderManager
from foodchef.services.reservation_manager import ReservationManager

router = APIRouter()


@router.get("/dashboard")
def dashboard(
    reservations: ReservationManager = Depends(get_reservation_manager),
    orders: OrderManager = Depends(get_order_manager),
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return success({
        "today_reservations": reservations.get_reservations_by_date(dt.date.today()),
        "reservation_stats": reservations.get_statistics(),
        "upcoming_reservations": reservations.get_upcoming_reservations(5),
        "today_orders": orders.get_today_orders(),
        "order_stats": orders.get_order_statistics(),
        "pending_reviews": len(feedback.get_pending_reviews()),
        "feedback_stats": feedback.get_feedback_statistics(),
    })


# --- reservations ---
@router.get("/reservations")
def reservations_by_date(
    date: Optional[dt.date] = None,
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return success(reservations.get_reservations_by_date(date or dt.date.today()))


@router.get("/reservations/upcoming")
def upcoming_reservations(
    limit: int = Query(10, ge=1, le=100),
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return success(reservations.get_upcoming_reservations(limit))


@router.get("/reservations/statistics")
def reservation_statistics(
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return success(reservations.get_statistics(start_date, end_date))


@router.post("/reservations/reminders")
def send_reminders(
    days_ahead: int = Query(1, ge=0),
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return success(reservations.send_reminders(days_ahead))


@router.get("/reservations/{reservation_id}")
def get_reservation(reservation_id: int, reservations: ReservationManager = Depends(get_reservation_manager)):
    reservation = reservations.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return success(reservation)


@router.put("/reservations/{reservation_id}/status")
def update_reservation_status(
    reservation_id: int,
    body: StatusUpdate,
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return unwrap(reservations.update_status(reservation_id, body.status))


@router.post("/reservations/{reservation_id}/cancel")
def cancel_reservation(
    reservation_id: int,
    body: CancelRequest,
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    return unwrap(reservations.cancel_reservation(reservation_id, body.reason))


# --- orders ---
@router.get("/orders")
def orders_by_status(
    status: str = "pending",
    limit: int = Query(20, ge=1, le=100),
    orders: OrderManager = Depends(get_order_manager),
):
    return success(orders.get_orders_by_status(status, limit))


@router.get("/orders/today")
def today_orders(orders: OrderManager = Depends(get_order_manager)):
    return success(orders.get_today_orders())


@router.get("/orders/statistics")
def order_statistics(
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    orders: OrderManager = Depends(get_order_manager),
):
    return success(orders.get_order_statistics(start_date, end_date))


@router.get("/orders/{order_id}")
def get_order(order_id: int, orders: OrderManager = Depends(get_order_manager)):
    order = orders.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return success(order)


@router.put("/orders/{order_id}/status")
def update_order_status(order_id: int, body: StatusUpdate, orders: OrderManager = Depends(get_order_manager)):
    return unwrap(orders.update_order_status(order_id, body.status, body.notes))


@router.post("/orders/{order_id}/cancel")
def cancel_order(order_id: int, body: CancelRequest, orders: OrderManager = Depends(get_order_manager)):
    return unwrap(orders.cancel_order(order_id, body.reason))


# --- reviews & feedback ---
@router.get("/reviews/pending")
def pending_reviews(
    limit: int = Query(20, ge=1, le=100),
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return success(feedback.get_pending_reviews(limit))


@router.post("/reviews/{review_id}/moderate")
def moderate_review(
    review_id: int,
    body: ModerationRequest,
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return unwrap(feedback.moderate_review(review_id, body.approved, body.admin_notes))


@router.get("/feedback/statistics")
def feedback_statistics(
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return success(feedback.get_feedback_statistics(start_date, end_date))


@router.get("/feedback/history")
def feedback_history(email: str, feedback: FeedbackManager = Depends(get_feedback_manager)):
    return success(feedback.get_customer_feedback_history(email))


@router.put("/feedback/{feedback_id}/status")
def update_feedback_status(
    feedback_id: int,
    body: StatusUpdate,
    feedback: FeedbackManager = Depends(get_feedback_manager),
):
    return unwrap(feedback.update_feedback_status(feedback_id, body.status))


@router.delete("/feedback/{feedback_id}")
def delete_feedback(feedback_id: int, feedback: FeedbackManager = Depends(get_feedback_manager)):
    return unwrap(feedback.delete_feedback(feedback_id))


# --- logs ---
@router.get("/logs")
def view_logs(date: Optional[dt.date] = None, level: Optional[str] = None):
    return success(read_logs(settings.LOG_DIR, date, level))
