# tests/test_gateway.py
from datetime import date, time

import pytest
from sqlalchemy import select

from foodchef.models.sql_models import Reservation

_reservations = Reservation.__table__


def _booking(**overrides):
    fields = {
        "name": "Jane",
        "email": "jane@example.com",
        "reservation_date": date(2030, 5, 1),
        "reservation_time": time(19, 0),
        "guests": 2,
        "status": "pending",
        "reminder_sent": False,
    }
    fields.update(overrides)
    return fields


def test_insert_returns_new_id_and_sets_last_insert_id(db):
    first = db.insert_or_update("reservations", _booking())
    second = db.insert_or_update("reservations", _booking(name="John"))

    assert second == first + 1
    assert db.last_insert_id == second


def test_update_returns_rowcount(db):
    reservation_id = db.insert_or_update("reservations", _booking())

    assert db.insert_or_update("reservations", {"status": "confirmed"}, reservation_id) == 1
    assert db.insert_or_update("reservations", {"status": "confirmed"}, 999) == 0
    assert db.fetch_by_id("reservations", reservation_id)["status"] == "confirmed"


def test_fetch_helpers_return_plain_dicts(db):
    db.insert_or_update("reservations", _booking())
    db.insert_or_update("reservations", _booking(name="John", guests=4))

    rows = db.fetch_all(select(_reservations).order_by(_reservations.c.id))
    assert [r["name"] for r in rows] == ["Jane", "John"]
    assert isinstance(rows[0], dict)

    row = db.fetch_one("SELECT name, guests FROM reservations WHERE guests = :guests", {"guests": 4})
    assert row == {"name": "John", "guests": 4}
    assert db.fetch_one("SELECT id FROM reservations WHERE guests = :guests", {"guests": 99}) is None


def test_execute_returns_rowcount(db):
    db.insert_or_update("reservations", _booking())
    db.insert_or_update("reservations", _booking(name="John"))

    changed = db.execute("UPDATE reservations SET status = :status WHERE guests = :guests",
                         {"status": "completed", "guests": 2})
    assert changed == 2


def test_delete(db):
    reservation_id = db.insert_or_update("reservations", _booking())

    assert db.delete("reservations", reservation_id) == 1
    assert db.delete("reservations", reservation_id) == 0
    assert db.fetch_by_id("reservations", reservation_id) is None


def test_unknown_table_is_rejected(db):
    with pytest.raises(ValueError, match="Unknown table"):
        db.insert_or_update("reservations; DROP TABLE food", {"name": "x"})


def test_transaction_commits_all_writes(db, session):
    with db.transaction():
        db.insert_or_update("reservations", _booking())
        db.insert_or_update("reservations", _booking(name="John"))

    session.expire_all()
    assert len(db.fetch_all(select(_reservations))) == 2


def test_transaction_rolls_back_everything_on_error(db):
    with pytest.raises(RuntimeError):
        with db.transaction():
            db.insert_or_update("reservations", _booking())
            raise RuntimeError("boom")

    assert db.fetch_all(select(_reservations)) == []


def test_manual_transaction_control(db):
    db.begin_transaction()
    db.insert_or_update("reservations", _booking())
    db.rollback()
    assert db.fetch_all(select(_reservations)) == []

    db.begin_transaction()
    db.insert_or_update("reservations", _booking())
    db.commit()
    assert len(db.fetch_all(select(_reservations))) == 1


def test_update_of_id_zero_is_an_update_not_an_insert(db):
    db.insert_or_update("reservations", _booking())

    assert db.insert_or_update("reservations", {"status": "confirmed"}, 0) == 0
    assert db.fetch_one(select(_reservations).where(_reservations.c.status == "confirmed")) is None
