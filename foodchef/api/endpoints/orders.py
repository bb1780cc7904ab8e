# foodchef/api/endpoints/orders.py
from fastapi import APIRouter, Depends, HTTPException

from foodchef.api.deps import get_order_manager, success, unwrap
from foodchef.models.schemas import OrderCreate
from foodchef.services.order_manager import OrderManager

router = APIRouter()


@router.post("")
def place_order(order: OrderCreate, orders: OrderManager = Depends(get_order_manager)):
    return unwrap(orders.create_order(order))


@router.get("/{order_id}")
def track_order(order_id: int, email: str, orders: OrderManager = Depends(get_order_manager)):
    """Order tracking for customers; the email must match the one on the order."""
    order = orders.get_order(order_id)
    if not order or order["customer_email"].lower() != email.strip().lower():
        raise HTTPException(status_code=404, detail="Order not found")
    return success(order)
