# foodchef/services/order_manager.py
"""
Food orders: creation with server-side pricing, tracking and reporting.

An order and its items are written in a single transaction. Prices always
come from the ``food`` table at the moment the order is placed; any price
sent by the client is ignored.
"""
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from foodchef.core.exceptions import FoodChefError, NotFoundError, ValidationError
from foodchef.models.sql_models import ORDER_STATUSES, ORDER_TYPES, Food, Order, OrderItem
from foodchef.services import emails
from foodchef.services.common import (
    BaseManager, append_note, date_range, day_window, positive_int, require_fields, rounded, to_dict,
)
from foodchef.services.notifier import Notifier

_orders = Order.__table__
_items = OrderItem.__table__
_food = Food.__table__

CANCELLABLE_STATUSES = ("pending", "confirmed")


class OrderManager(BaseManager):
    log_name = "foodchef.orders"

    def __init__(self, db, logger=None, notifier=None, staff_notifier: Optional[Notifier] = None):
        super().__init__(db, logger, notifier)
        self.staff_notifier = staff_notifier

    def _price_item(self, item) -> Dict[str, Any]:
        item = to_dict(item)
        food_id = positive_int(item.get("food_id"))
        quantity = positive_int(item.get("quantity"))
        if food_id is None or quantity is None:
            raise ValidationError("Invalid item data")

        food = self.db.fetch_one(
            select(_food.c.id, _food.c.name, _food.c.price, _food.c.is_active).where(_food.c.id == food_id)
        )
        if not food or not food["is_active"]:
            raise NotFoundError(f"Food item not available: {food_id}")

        return {
            "food_id": food_id,
            "food_name": food["name"],
            "quantity": quantity,
            "unit_price": food["price"],
            "total_price": round(food["price"] * quantity, 2),
        }

    def create_order(self, data) -> Dict[str, Any]:
        data = to_dict(data)
        try:
            require_fields(data, ("customer_name", "customer_email", "customer_phone", "items"))
            items = data["items"]
            if not isinstance(items, (list, tuple)) or not items:
                raise ValidationError("Order must contain at least one item")

            order_type = data.get("order_type") or "dine_in"
            if order_type not in ORDER_TYPES:
                raise ValidationError(f"Invalid order type: {order_type}")
            delivery_address = str(data.get("delivery_address") or "").strip()
            if order_type == "delivery" and not delivery_address:
                raise ValidationError("Delivery address is required for delivery orders")

            order_items = [self._price_item(item) for item in items]
            total = round(sum(item["total_price"] for item in order_items), 2)

            with self.db.transaction():
                order_id = self.db.insert_or_update("orders", {
                    "customer_name": str(data["customer_name"]).strip(),
                    "customer_email": str(data["customer_email"]).strip(),
                    "customer_phone": str(data["customer_phone"]).strip(),
                    "total_amount": total,
                    "order_type": order_type,
                    "delivery_address": delivery_address,
                    "special_instructions": data.get("special_instructions") or "",
                    "status": "pending",
                })
                for item in order_items:
                    self.db.insert_or_update("order_items", {**item, "order_id": order_id})
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error creating order", e)

        self.logger.info("Order created", {
            "order_id": order_id,
            "customer_name": data["customer_name"],
            "total_amount": total,
            "items_count": len(order_items),
        })
        self._notify(
            data["customer_email"],
            f"Order Confirmation #{order_id} - Food Chef Cafe",
            emails.order_confirmation(order_id, data["customer_name"], order_items, total),
        )
        if self.staff_notifier:
            self.staff_notifier.send(
                "",
                f"💰 New order #{order_id}",
                emails.staff_order_alert(order_id, data["customer_name"], order_items, total, order_type),
            )
        return {
            "success": True,
            "message": "Order created successfully",
            "order_id": order_id,
            "total_amount": total,
        }

    def _with_summaries(self, orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not orders:
            return orders
        lines = defaultdict(list)
        rows = self.db.fetch_all(
            select(_items.c.order_id, _items.c.food_name, _items.c.quantity)
            .where(_items.c.order_id.in_([o["id"] for o in orders]))
            .order_by(_items.c.id)
        )
        for row in rows:
            lines[row["order_id"]].append(f"{row['food_name']} x{row['quantity']}")
        for order in orders:
            order["items_summary"] = ", ".join(lines[order["id"]])
        return orders

    def get_order(self, order_id: int) -> Optional[Dict[str, Any]]:
        try:
            order = self.db.fetch_by_id("orders", order_id)
            if not order:
                return None
            order["items"] = self.db.fetch_all(
                select(_items).where(_items.c.order_id == order_id).order_by(_items.c.id)
            )
        except SQLAlchemyError as e:
            self._db_error("Database error getting order", e)
            return None

        order["items_summary"] = ", ".join(f"{i['food_name']} x{i['quantity']}" for i in order["items"])
        return order

    def update_order_status(self, order_id: int, status: str, notes: str = "") -> Dict[str, Any]:
        """Set any lifecycle status. ``notes`` replaces the stored notes only when given."""
        try:
            if status not in ORDER_STATUSES:
                raise ValidationError(f"Invalid order status: {status}")
            fields = {"status": status, "updated_at": datetime.now()}
            if notes:
                fields["notes"] = notes
            if not self.db.insert_or_update("orders", fields, order_id):
                raise NotFoundError("Order not found")
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error updating order status", e)

        self.logger.info("Order status updated", {"order_id": order_id, "new_status": status, "notes": notes})
        return {"success": True, "message": f"Order status updated to {status}"}

    def get_orders_by_status(self, status: str, limit: int = 20) -> List[Dict[str, Any]]:
        try:
            orders = self.db.fetch_all(
                select(_orders)
                .where(_orders.c.status == status)
                .order_by(_orders.c.created_at.desc(), _orders.c.id.desc())
                .limit(limit)
            )
            return self._with_summaries(orders)
        except SQLAlchemyError as e:
            self._db_error("Database error getting orders by status", e)
            return []

    def get_pending_orders(self) -> List[Dict[str, Any]]:
        return self.get_orders_by_status("pending")

    def get_today_orders(self) -> List[Dict[str, Any]]:
        start, end = day_window(date.today(), date.today())
        try:
            orders = self.db.fetch_all(
                select(_orders)
                .where(_orders.c.created_at >= start, _orders.c.created_at < end)
                .order_by(_orders.c.created_at.desc(), _orders.c.id.desc())
            )
            return self._with_summaries(orders)
        except SQLAlchemyError as e:
            self._db_error("Database error getting today's orders", e)
            return []

    def get_order_statistics(self, start_date=None, end_date=None) -> Dict[str, Any]:
        """Revenue and average value cover non-cancelled orders only."""
        c = _orders.c
        try:
            start, end = date_range(start_date, end_date)
            window_start, window_end = day_window(start, end)
            in_range = (c.created_at >= window_start) & (c.created_at < window_end)
            live = c.status != "cancelled"

            stats = self.db.fetch_one(
                select(
                    func.count().label("total_orders"),
                    func.count(case((c.status == "completed", 1))).label("completed"),
                    func.count(case((c.status == "cancelled", 1))).label("cancelled"),
                    func.sum(case((live, c.total_amount))).label("total_revenue"),
                    func.avg(case((live, c.total_amount))).label("avg_order_value"),
                    func.count(func.distinct(c.customer_email)).label("unique_customers"),
                ).where(in_range)
            )
            total_ordered = func.sum(_items.c.quantity).label("total_ordered")
            stats["popular_items"] = self.db.fetch_all(
                select(_items.c.food_id, _items.c.food_name, total_ordered)
                .select_from(_items.join(_orders, _items.c.order_id == c.id))
                .where(in_range, live)
                .group_by(_items.c.food_id, _items.c.food_name)
                .order_by(total_ordered.desc(), _items.c.food_name)
                .limit(10)
            )
        except ValidationError:
            return {}
        except SQLAlchemyError as e:
            self._db_error("Database error getting order statistics", e)
            return {}

        stats["total_revenue"] = rounded(stats["total_revenue"]) or 0.0
        stats["avg_order_value"] = rounded(stats["avg_order_value"]) or 0.0
        stats["start_date"], stats["end_date"] = start, end
        return stats

    def cancel_order(self, order_id: int, reason: str = "") -> Dict[str, Any]:
        """Only pending or confirmed orders can be cancelled; anything later is left untouched."""
        try:
            order = self.db.fetch_by_id("orders", order_id)
            if not order:
                raise NotFoundError("Order not found")
            if order["status"] not in CANCELLABLE_STATUSES:
                raise ValidationError(f"Order cannot be cancelled once it is {order['status']}")

            changed = self.db.execute(
                update(_orders)
                .where(_orders.c.id == order_id, _orders.c.status.in_(CANCELLABLE_STATUSES))
                .values(status="cancelled", notes=append_note(_orders.c.notes, reason), updated_at=datetime.now())
            )
            if not changed:
                raise ValidationError("Order status changed before it could be cancelled")
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error cancelling order", e)

        self.logger.info("Order cancelled", {"order_id": order_id, "reason": reason})
        return {"success": True, "message": "Order cancelled"}
