# tests/test_feedback_manager.py
import pytest
from sqlalchemy import func, select

from foodchef.models.sql_models import CustomerFeedback, FoodReview
from foodchef.services.feedback_manager import FeedbackManager


def _count(db, model):
    return db.fetch_one(select(func.count().label("n")).select_from(model.__table__))["n"]


@pytest.fixture
def manager(db, notifier):
    return FeedbackManager(db, notifier=notifier)


def _feedback(**overrides):
    data = {
        "customer_name": "Ana",
        "customer_email": "ana@example.com",
        "rating": 5,
        "feedback_type": "service",
        "subject": "Great night",
        "message": "Lovely staff",
    }
    data.update(overrides)
    return data


def _review(food_id, rating, **overrides):
    data = {
        "food_id": food_id,
        "customer_name": "Ana",
        "customer_email": "ana@example.com",
        "rating": rating,
        "review": "Tasty",
    }
    data.update(overrides)
    return data


# --- feedback ---
def test_submit_feedback(manager, db, notifier):
    result = manager.submit_feedback(_feedback())

    assert result["success"] is True
    row = db.fetch_by_id("customer_feedback", result["feedback_id"])
    assert row["status"] == "pending"
    assert row["rating"] == 5
    assert row["is_public"] is True
    assert notifier.sent[0]["recipient"] == "ana@example.com"
    assert "Lovely staff" in notifier.sent[0]["body"]


@pytest.mark.parametrize("rating", [6, 0, -1, "abc"])
def test_rating_out_of_range_is_rejected(manager, db, notifier, rating):
    result = manager.submit_feedback(_feedback(rating=rating))

    assert result == {"success": False, "message": "Rating must be between 1 and 5", "error": "validation_error"}
    assert _count(db, CustomerFeedback) == 0
    assert notifier.sent == []


def test_fractional_rating_is_rejected(manager):
    assert manager.submit_feedback(_feedback(rating=4.5))["message"] == "Rating must be a whole number between 1 and 5"


def test_invalid_feedback_type(manager, db):
    result = manager.submit_feedback(_feedback(feedback_type="parking"))

    assert result["message"] == "Invalid feedback type"
    assert _count(db, CustomerFeedback) == 0


@pytest.mark.parametrize("field", ["customer_name", "customer_email", "rating", "feedback_type"])
def test_feedback_missing_field(manager, field):
    result = manager.submit_feedback(_feedback(**{field: None}))
    assert result["message"] == f"Missing required field: {field}"


def test_feedback_status_and_history(manager):
    first = manager.submit_feedback(_feedback())["feedback_id"]
    second = manager.submit_feedback(_feedback(rating=2, feedback_type="delivery"))["feedback_id"]
    manager.submit_feedback(_feedback(customer_email="someone@example.com"))

    assert manager.update_feedback_status(first, "resolved")["success"] is True
    assert manager.update_feedback_status(first, "ignored")["error"] == "validation_error"
    assert manager.update_feedback_status(999, "reviewed")["error"] == "not_found"
    assert manager.update_feedback_status(0, "reviewed")["error"] == "not_found"

    history = manager.get_customer_feedback_history("ana@example.com")
    assert [f["id"] for f in history] == [second, first]
    assert history[1]["status"] == "resolved"


def test_delete_feedback(manager, db):
    feedback_id = manager.submit_feedback(_feedback())["feedback_id"]

    assert manager.delete_feedback(feedback_id)["success"] is True
    assert _count(db, CustomerFeedback) == 0
    assert manager.delete_feedback(feedback_id)["error"] == "not_found"


# --- reviews ---
def test_review_starts_unapproved_and_leaves_rating_alone(manager, db, menu):
    result = manager.submit_food_review(_review(menu["burger"], 5))

    assert result["success"] is True
    assert result["message"] == "Review submitted successfully and pending approval"
    assert db.fetch_by_id("food_reviews", result["review_id"])["is_approved"] is False
    food = db.fetch_by_id("food", menu["burger"])
    assert food["avg_rating"] is None
    assert food["total_reviews"] == 0
    assert manager.get_food_reviews(menu["burger"]) == []


def test_review_for_inactive_or_missing_food(manager, db, menu):
    for food_id in (menu["soup"], 4242):
        result = manager.submit_food_review(_review(food_id, 4))
        assert result["message"] == "Food item not found or not available"
        assert result["error"] == "not_found"
    assert _count(db, FoodReview) == 0


def test_review_rating_range(manager, menu):
    assert manager.submit_food_review(_review(menu["burger"], 6))["message"] == "Rating must be between 1 and 5"


def test_approving_reviews_recomputes_average(manager, db, menu):
    ids = [manager.submit_food_review(_review(menu["cake"], r))["review_id"] for r in (4, 5, 3)]

    for review_id in ids:
        result = manager.moderate_review(review_id, True, "ok")

    assert result["avg_rating"] == 4.00
    assert result["total_reviews"] == 3
    food = db.fetch_by_id("food", menu["cake"])
    assert food["avg_rating"] == 4.00
    assert food["total_reviews"] == 3


def test_rejecting_an_approved_review_drops_it_from_average(manager, db, menu):
    ids = [manager.submit_food_review(_review(menu["cake"], r))["review_id"] for r in (5, 2)]
    manager.moderate_review(ids[0], True)
    manager.moderate_review(ids[1], True)

    result = manager.moderate_review(ids[1], False, "Spam")

    assert result["avg_rating"] == 5.00
    assert result["total_reviews"] == 1
    review = db.fetch_by_id("food_reviews", ids[1])
    assert review["admin_notes"] == "Spam"
    assert review["moderated_at"] is not None


def test_moderate_missing_review(manager):
    assert manager.moderate_review(31337, True)["error"] == "not_found"


def test_pending_queue_is_oldest_first_with_food_name(manager, menu):
    first = manager.submit_food_review(_review(menu["burger"], 4))["review_id"]
    second = manager.submit_food_review(_review(menu["cake"], 2))["review_id"]
    moderated = manager.submit_food_review(_review(menu["cake"], 5))["review_id"]
    manager.moderate_review(moderated, True)

    queue = manager.get_pending_reviews()
    assert [(r["id"], r["food_name"]) for r in queue] == [(first, "Beef Burger"), (second, "Chocolate Cake")]
    assert len(manager.get_pending_reviews(limit=1)) == 1


def test_rejected_review_stays_in_queue_and_counts_as_pending(manager, menu):
    review_id = manager.submit_food_review(_review(menu["cake"], 1))["review_id"]

    manager.moderate_review(review_id, False, "Off topic")

    assert [r["id"] for r in manager.get_pending_reviews()] == [review_id]
    assert manager.get_feedback_statistics()["food_reviews"]["pending_reviews"] == 1


def test_food_reviews_are_approved_only_newest_first(manager, menu):
    ids = [manager.submit_food_review(_review(menu["cake"], r, review=f"r{r}"))["review_id"] for r in (3, 4, 5)]
    manager.moderate_review(ids[0], True)
    manager.moderate_review(ids[2], True)

    reviews = manager.get_food_reviews(menu["cake"])
    assert [r["review"] for r in reviews] == ["r5", "r3"]
    assert len(manager.get_food_reviews(menu["cake"], limit=1)) == 1


# --- statistics ---
def test_feedback_statistics(manager, menu):
    for rating, kind in ((5, "service"), (4, "service"), (3, "food_quality"), (1, "delivery")):
        manager.submit_feedback(_feedback(rating=rating, feedback_type=kind))
    review_ids = [manager.submit_food_review(_review(menu["cake"], r))["review_id"] for r in (4, 2)]
    manager.moderate_review(review_ids[0], True)

    stats = manager.get_feedback_statistics()

    assert stats["total_feedback"] == 4
    assert stats["avg_rating"] == 3.25
    assert stats["positive_feedback"] == 2
    assert stats["neutral_feedback"] == 1
    assert stats["negative_feedback"] == 1
    assert stats["by_type"][0] == {"feedback_type": "service", "count": 2, "avg_rating": 4.5}
    assert {t["feedback_type"] for t in stats["by_type"]} == {"service", "food_quality", "delivery"}
    assert stats["food_reviews"] == {
        "total_reviews": 2,
        "approved_reviews": 1,
        "pending_reviews": 1,
        "avg_food_rating": 3.0,
    }


def test_feedback_statistics_rejects_inverted_range(manager):
    assert manager.get_feedback_statistics("2030-02-01", "2030-01-01") == {}
