# foodchef/api/endpoints/reservations.py
import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query

from foodchef.api.deps import get_reservation_manager, success, unwrap
from foodchef.models.schemas import ReservationCreate
from foodchef.services.reservation_manager import ReservationManager

router = APIRouter()


@router.get("/availability")
def availability(
    date: dt.date,
    time: dt.time,
    guests: int = Query(1, ge=1),
    reservations: ReservationManager = Depends(get_reservation_manager),
):
    result = reservations.check_availability(date, time, guests)
    if "error" in result:
        raise HTTPException(status_code=500, detail="Database error occurred")
    return success(result)


@router.post("")
def create_reservation(booking: ReservationCreate, reservations: ReservationManager = Depends(get_reservation_manager)):
    return unwrap(reservations.create_reservation(booking))
