# foodchef/api/endpoints/json_api.py
"""
Bearer-key JSON API for the mobile app and partner integrations.

Every response is ``{"status": ..., "data": ... | "error": ..., "count"?}``.
"""
from fastapi import APIRouter, Depends

from foodchef.api.deps import get_catalog_manager, get_reservation_manager, success, unwrap
from foodchef.models.schemas import ContactCreate, ReservationCreate
from foodchef.services.catalog import CatalogManager
from foodchef.services.reservation_manager import ReservationManager

router = APIRouter()


@router.get("/menu")
def menu(catalog: CatalogManager = Depends(get_catalog_manager)):
    return success(catalog.list_menu())


@router.post("/reservations")
def create_reservation(booking: ReservationCreate, reservations: ReservationManager = Depends(get_reservation_manager)):
    return unwrap(reservations.create_reservation(booking))


@router.get("/reservations")
def recent_reservations(reservations: ReservationManager = Depends(get_reservation_manager)):
    return success(reservations.get_recent_reservations(50))


@router.post("/contact")
def contact(message: ContactCreate, catalog: CatalogManager = Depends(get_catalog_manager)):
    return unwrap(catalog.save_contact(message))


@router.get("/about")
def about(catalog: CatalogManager = Depends(get_catalog_manager)):
    return success(catalog.get_about())


@router.get("/team")
def team(catalog: CatalogManager = Depends(get_catalog_manager)):
    return success(catalog.list_team())
