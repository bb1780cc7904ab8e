# foodchef/services/feedback_manager.py
"""
Customer feedback and food reviews.

Reviews wait for moderation before they count. Each moderation recomputes the
food's cached average and review count from the approved reviews.
"""
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError

from foodchef.core.exceptions import FoodChefError, NotFoundError, ValidationError
from foodchef.models.sql_models import FEEDBACK_STATUSES, FEEDBACK_TYPES, CustomerFeedback, Food, FoodReview
from foodchef.services import emails
from foodchef.services.common import (
    BaseManager, date_range, day_window, parse_rating, positive_int, require_fields, rounded, to_dict,
)

_feedback = CustomerFeedback.__table__
_reviews = FoodReview.__table__
_food = Food.__table__


class FeedbackManager(BaseManager):
    log_name = "foodchef.feedback"

    # --- customer feedback ---
    def submit_feedback(self, data) -> Dict[str, Any]:
        data = to_dict(data)
        try:
            require_fields(data, ("customer_name", "customer_email", "rating", "feedback_type"))
            rating = parse_rating(data["rating"])
            if data["feedback_type"] not in FEEDBACK_TYPES:
                raise ValidationError("Invalid feedback type")

            feedback_id = self.db.insert_or_update("customer_feedback", {
                "customer_name": str(data["customer_name"]).strip(),
                "customer_email": str(data["customer_email"]).strip(),
                "customer_phone": str(data.get("customer_phone") or "").strip(),
                "rating": rating,
                "feedback_type": data["feedback_type"],
                "subject": data.get("subject") or "",
                "message": data.get("message") or "",
                "order_id": positive_int(data.get("order_id")),
                "reservation_id": positive_int(data.get("reservation_id")),
                "is_public": bool(data.get("is_public", True)),
                "status": "pending",
            })
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error submitting feedback", e)

        self.logger.info("Customer feedback submitted", {
            "feedback_id": feedback_id,
            "customer_name": data["customer_name"],
            "rating": rating,
            "type": data["feedback_type"],
        })
        self._notify(
            data["customer_email"],
            "Thank you for your feedback - Food Chef Cafe",
            emails.feedback_acknowledgment({**data, "rating": rating}),
        )
        return {"success": True, "message": "Feedback submitted successfully", "feedback_id": feedback_id}

    def update_feedback_status(self, feedback_id: int, status: str) -> Dict[str, Any]:
        try:
            if status not in FEEDBACK_STATUSES:
                raise ValidationError(f"Invalid feedback status: {status}")
            if not self.db.insert_or_update("customer_feedback", {"status": status}, feedback_id):
                raise NotFoundError("Feedback not found")
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error updating feedback status", e)

        self.logger.info("Feedback status updated", {"feedback_id": feedback_id, "new_status": status})
        return {"success": True, "message": f"Feedback marked {status}"}

    def get_customer_feedback_history(self, email: str) -> List[Dict[str, Any]]:
        try:
            return self.db.fetch_all(
                select(_feedback)
                .where(_feedback.c.customer_email == email)
                .order_by(_feedback.c.created_at.desc(), _feedback.c.id.desc())
            )
        except SQLAlchemyError as e:
            self._db_error("Database error getting customer feedback history", e)
            return []

    def delete_feedback(self, feedback_id: int) -> Dict[str, Any]:
        try:
            if not self.db.delete("customer_feedback", feedback_id):
                raise NotFoundError("Feedback not found")
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error deleting feedback", e)

        self.logger.info("Feedback deleted", {"feedback_id": feedback_id})
        return {"success": True, "message": "Feedback deleted"}

    # --- food reviews ---
    def submit_food_review(self, data) -> Dict[str, Any]:
        data = to_dict(data)
        try:
            require_fields(data, ("food_id", "customer_name", "customer_email", "rating", "review"))
            rating = parse_rating(data["rating"])
            food_id = positive_int(data["food_id"])
            food = None
            if food_id is not None:
                food = self.db.fetch_one(
                    select(_food.c.id, _food.c.name).where(_food.c.id == food_id, _food.c.is_active.is_(True))
                )
            if not food:
                raise NotFoundError("Food item not found or not available")

            review_id = self.db.insert_or_update("food_reviews", {
                "food_id": food_id,
                "customer_name": str(data["customer_name"]).strip(),
                "customer_email": str(data["customer_email"]).strip(),
                "rating": rating,
                "review": data["review"],
                "is_approved": False,
            })
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error submitting food review", e)

        self.logger.info("Food review submitted", {
            "review_id": review_id, "food_id": food_id, "food_name": food["name"], "rating": rating,
        })
        return {
            "success": True,
            "message": "Review submitted successfully and pending approval",
            "review_id": review_id,
        }

    def _update_food_rating(self, food_id: int) -> Dict[str, Any]:
        approved = self.db.fetch_one(
            select(func.avg(_reviews.c.rating).label("avg_rating"), func.count().label("total_reviews"))
            .select_from(_reviews)
            .where(_reviews.c.food_id == food_id, _reviews.c.is_approved.is_(True))
        )
        rating = {"avg_rating": rounded(approved["avg_rating"]), "total_reviews": approved["total_reviews"]}
        self.db.insert_or_update("food", rating, food_id)
        return rating

    def moderate_review(self, review_id: int, approved: bool, admin_notes: str = "") -> Dict[str, Any]:
        try:
            review = self.db.fetch_by_id("food_reviews", review_id)
            if not review:
                raise NotFoundError("Review not found")

            with self.db.transaction():
                self.db.insert_or_update("food_reviews", {
                    "is_approved": bool(approved),
                    "admin_notes": admin_notes,
                    "moderated_at": datetime.now(),
                }, review_id)
                rating = self._update_food_rating(review["food_id"])
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error moderating review", e)

        self.logger.info("Review moderated", {
            "review_id": review_id, "approved": bool(approved), "admin_notes": admin_notes,
        })
        return {
            "success": True,
            "message": "Review approved" if approved else "Review rejected",
            "food_id": review["food_id"],
            **rating,
        }

    def get_food_reviews(self, food_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        c = _reviews.c
        try:
            return self.db.fetch_all(
                select(_reviews)
                .where(c.food_id == food_id, c.is_approved.is_(True))
                .order_by(c.created_at.desc(), c.id.desc())
                .limit(limit)
            )
        except SQLAlchemyError as e:
            self._db_error("Database error getting food reviews", e)
            return []

    def get_pending_reviews(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Moderation queue, oldest first."""
        c = _reviews.c
        try:
            return self.db.fetch_all(
                select(_reviews, _food.c.name.label("food_name"))
                .select_from(_reviews.join(_food, c.food_id == _food.c.id))
                .where(c.is_approved.is_(False))
                .order_by(c.created_at, c.id)
                .limit(limit)
            )
        except SQLAlchemyError as e:
            self._db_error("Database error getting pending reviews", e)
            return []

    # --- reporting ---
    def get_feedback_statistics(self, start_date=None, end_date=None) -> Dict[str, Any]:
        try:
            start, end = date_range(start_date, end_date)
            window_start, window_end = day_window(start, end)

            f = _feedback.c
            in_range = (f.created_at >= window_start) & (f.created_at < window_end)
            stats = self.db.fetch_one(
                select(
                    func.count().label("total_feedback"),
                    func.avg(f.rating).label("avg_rating"),
                    func.count(case((f.rating >= 4, 1))).label("positive_feedback"),
                    func.count(case((f.rating == 3, 1))).label("neutral_feedback"),
                    func.count(case((f.rating <= 2, 1))).label("negative_feedback"),
                ).select_from(_feedback).where(in_range)
            )

            count = func.count().label("count")
            stats["by_type"] = self.db.fetch_all(
                select(f.feedback_type, count, func.avg(f.rating).label("avg_rating"))
                .where(in_range)
                .group_by(f.feedback_type)
                .order_by(count.desc(), f.feedback_type)
            )

            r = _reviews.c
            stats["food_reviews"] = self.db.fetch_one(
                select(
                    func.count().label("total_reviews"),
                    func.count(case((r.is_approved.is_(True), 1))).label("approved_reviews"),
                    func.count(case((r.is_approved.is_(False), 1))).label("pending_reviews"),
                    func.avg(r.rating).label("avg_food_rating"),
                ).select_from(_reviews).where(r.created_at >= window_start, r.created_at < window_end)
            )
        except ValidationError:
            return {}
        except SQLAlchemyError as e:
            self._db_error("Database error getting feedback statistics", e)
            return {}

        stats["avg_rating"] = rounded(stats["avg_rating"])
        for row in stats["by_type"]:
            row["avg_rating"] = rounded(row["avg_rating"])
        stats["food_reviews"]["avg_food_rating"] = rounded(stats["food_reviews"]["avg_food_rating"])
        stats["start_date"], stats["end_date"] = start, end
        return stats
