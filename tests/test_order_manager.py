# tests/test_order_manager.py
import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from foodchef.models.sql_models import Order, OrderItem
from foodchef.services.order_manager import OrderManager


def _count(db, model):
    return db.fetch_one(select(func.count().label("n")).select_from(model.__table__))["n"]


@pytest.fixture
def manager(db, notifier, staff_notifier):
    return OrderManager(db, notifier=notifier, staff_notifier=staff_notifier)


@pytest.fixture
def order_data(menu):
    return {
        "customer_name": "Sam Smith",
        "customer_email": "sam@example.com",
        "customer_phone": "555-0199",
        "items": [
            {"food_id": menu["burger"], "quantity": 2, "price": 0.01},
            {"food_id": menu["cake"], "quantity": 1, "price": 999},
        ],
        "special_instructions": "No onions",
    }


def test_total_uses_menu_prices_not_client_prices(manager, order_data):
    result = manager.create_order(order_data)

    assert result["success"] is True
    assert result["total_amount"] == pytest.approx(15.99 * 2 + 12.50)

    order = manager.get_order(result["order_id"])
    assert order["total_amount"] == pytest.approx(44.48)
    assert order["status"] == "pending"
    assert order["order_type"] == "dine_in"
    assert [(i["food_name"], i["quantity"], i["unit_price"], i["total_price"]) for i in order["items"]] == [
        ("Beef Burger", 2, 15.99, 31.98),
        ("Chocolate Cake", 1, 12.50, 12.50),
    ]
    assert order["items_summary"] == "Beef Burger x2, Chocolate Cake x1"


def test_order_snapshot_survives_menu_price_change(manager, order_data, db, menu):
    order_id = manager.create_order(order_data)["order_id"]
    db.insert_or_update("food", {"price": 20.00}, menu["burger"])

    order = manager.get_order(order_id)
    assert order["items"][0]["unit_price"] == 15.99
    assert order["total_amount"] == pytest.approx(44.48)


def test_confirmation_and_staff_alert_are_sent(manager, order_data, notifier, staff_notifier):
    order_id = manager.create_order(order_data)["order_id"]

    assert notifier.sent[0]["recipient"] == "sam@example.com"
    assert notifier.sent[0]["subject"] == f"Order Confirmation #{order_id} - Food Chef Cafe"
    assert "Beef Burger" in notifier.sent[0]["body"]
    assert "$44.48" in notifier.sent[0]["body"]
    assert len(staff_notifier.sent) == 1
    assert f"#{order_id}" in staff_notifier.sent[0]["subject"]


@pytest.mark.parametrize("field", ["customer_name", "customer_email", "customer_phone", "items"])
def test_missing_required_field(manager, order_data, db, field):
    order_data[field] = [] if field == "items" else ""

    result = manager.create_order(order_data)

    assert result["success"] is False
    assert result["message"] == f"Missing required field: {field}"
    assert _count(db, Order) == 0


@pytest.mark.parametrize("item", [{"food_id": 0, "quantity": 1}, {"food_id": 1, "quantity": 0}, {"quantity": 2}])
def test_invalid_item_data(manager, order_data, db, item):
    order_data["items"].append(item)

    result = manager.create_order(order_data)

    assert result == {"success": False, "message": "Invalid item data", "error": "validation_error"}
    assert _count(db, Order) == 0


def test_inactive_food_fails_the_whole_order(manager, order_data, db, menu):
    order_data["items"].append({"food_id": menu["soup"], "quantity": 1})

    result = manager.create_order(order_data)

    assert result["success"] is False
    assert result["error"] == "not_found"
    assert result["message"] == f"Food item not available: {menu['soup']}"
    assert _count(db, Order) == 0
    assert _count(db, OrderItem) == 0


def test_unknown_food_fails(manager, order_data):
    order_data["items"] = [{"food_id": 9999, "quantity": 1}]
    assert manager.create_order(order_data)["error"] == "not_found"


def test_delivery_requires_address(manager, order_data):
    order_data["order_type"] = "delivery"
    result = manager.create_order(order_data)
    assert result["message"] == "Delivery address is required for delivery orders"

    order_data["delivery_address"] = "1 High Street"
    assert manager.create_order(order_data)["success"] is True


def test_unknown_order_type(manager, order_data):
    order_data["order_type"] = "drive_through"
    assert manager.create_order(order_data)["error"] == "validation_error"


def test_failure_mid_transaction_leaves_nothing_behind(manager, order_data, db, notifier):
    real_insert = db.insert_or_update

    def failing_insert(table, fields, _id=None):
        if table == "order_items":
            raise SQLAlchemyError("constraint failed")
        return real_insert(table, fields, _id)

    db.insert_or_update = failing_insert

    result = manager.create_order(order_data)

    assert result == {"success": False, "message": "Database error occurred", "error": "persistence_error"}
    db.insert_or_update = real_insert
    assert _count(db, Order) == 0
    assert _count(db, OrderItem) == 0
    assert notifier.sent == []


def test_get_missing_order(manager):
    assert manager.get_order(12345) is None


# --- status ---
@pytest.mark.parametrize("status", ["confirmed", "preparing", "ready", "delivered", "completed"])
def test_update_status_accepts_full_lifecycle(manager, order_data, status):
    order_id = manager.create_order(order_data)["order_id"]

    assert manager.update_order_status(order_id, status)["success"] is True
    assert manager.get_order(order_id)["status"] == status


def test_update_status_rejects_unknown(manager, order_data):
    order_id = manager.create_order(order_data)["order_id"]
    assert manager.update_order_status(order_id, "eaten")["error"] == "validation_error"


def test_notes_replaced_only_when_given(manager, order_data):
    order_id = manager.create_order(order_data)["order_id"]

    manager.update_order_status(order_id, "confirmed", "Table 4")
    manager.update_order_status(order_id, "preparing")

    assert manager.get_order(order_id)["notes"] == "Table 4"


def test_update_status_of_missing_order(manager):
    assert manager.update_order_status(55, "ready")["error"] == "not_found"
    assert manager.update_order_status(0, "ready")["error"] == "not_found"


# --- listing ---
def test_orders_by_status_newest_first_with_summary(manager, order_data, menu):
    first = manager.create_order(order_data)["order_id"]
    order_data["items"] = [{"food_id": menu["cake"], "quantity": 3}]
    second = manager.create_order(order_data)["order_id"]
    third = manager.create_order(order_data)["order_id"]
    manager.update_order_status(third, "ready")

    pending = manager.get_pending_orders()
    assert [o["id"] for o in pending] == [second, first]
    assert pending[0]["items_summary"] == "Chocolate Cake x3"
    assert [o["id"] for o in manager.get_orders_by_status("ready")] == [third]
    assert len(manager.get_orders_by_status("pending", limit=1)) == 1


def test_today_orders(manager, order_data):
    order_id = manager.create_order(order_data)["order_id"]

    today = manager.get_today_orders()
    assert [o["id"] for o in today] == [order_id]
    assert today[0]["items_summary"] == "Beef Burger x2, Chocolate Cake x1"


def test_order_statistics_exclude_cancelled(manager, order_data, menu):
    completed = manager.create_order(order_data)["order_id"]
    manager.update_order_status(completed, "completed")

    order_data["customer_email"] = "other@example.com"
    order_data["items"] = [{"food_id": menu["cake"], "quantity": 5}]
    cancelled = manager.create_order(order_data)["order_id"]
    manager.cancel_order(cancelled, "changed mind")

    order_data["items"] = [{"food_id": menu["cake"], "quantity": 2}]
    manager.create_order(order_data)

    stats = manager.get_order_statistics()

    assert stats["total_orders"] == 3
    assert stats["completed"] == 1
    assert stats["cancelled"] == 1
    assert stats["total_revenue"] == pytest.approx(44.48 + 25.00)
    assert stats["avg_order_value"] == pytest.approx((44.48 + 25.00) / 2, abs=0.01)
    assert stats["unique_customers"] == 2
    assert [(p["food_name"], p["total_ordered"]) for p in stats["popular_items"]] == [
        ("Chocolate Cake", 3),
        ("Beef Burger", 2),
    ]


def test_order_statistics_empty_range(manager):
    stats = manager.get_order_statistics("2001-01-01", "2001-01-31")
    assert stats["total_orders"] == 0
    assert stats["total_revenue"] == 0.0
    assert stats["popular_items"] == []


# --- cancel ---
def test_cancel_pending_order_appends_reason(manager, order_data):
    order_id = manager.create_order(order_data)["order_id"]
    manager.update_order_status(order_id, "confirmed", "Call on arrival")

    assert manager.cancel_order(order_id, "Out of stock")["success"] is True

    order = manager.get_order(order_id)
    assert order["status"] == "cancelled"
    assert order["notes"] == "Call on arrival Cancelled: Out of stock"


def test_cancel_keeps_notes_written_after_the_order_was_read(manager, order_data, monkeypatch):
    order_id = manager.create_order(order_data)["order_id"]
    read_order = manager.db.fetch_by_id

    def read_then_annotate(table, _id):
        row = read_order(table, _id)
        manager.db.insert_or_update("orders", {"notes": "Call on arrival"}, _id)
        return row

    monkeypatch.setattr(manager.db, "fetch_by_id", read_then_annotate)

    assert manager.cancel_order(order_id, "Out of stock")["success"] is True

    assert read_order("orders", order_id)["notes"] == "Call on arrival Cancelled: Out of stock"


def test_cancel_delivered_order_fails_and_changes_nothing(manager, order_data):
    order_id = manager.create_order(order_data)["order_id"]
    manager.update_order_status(order_id, "delivered")

    result = manager.cancel_order(order_id, "Too late")

    assert result["success"] is False
    assert result["message"] == "Order cannot be cancelled once it is delivered"
    order = manager.get_order(order_id)
    assert order["status"] == "delivered"
    assert order["notes"] == ""


def test_cancel_missing_order(manager):
    assert manager.cancel_order(8, "x")["error"] == "not_found"
