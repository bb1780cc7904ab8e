# foodchef/services/catalog.py
"""Menu, about/team content and contact messages."""
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from foodchef.core.exceptions import FoodChefError
from foodchef.models.sql_models import About, Food, MenuCategory, TeamMember
from foodchef.services import emails
from foodchef.services.common import BaseManager, require_fields, to_dict
from foodchef.services.notifier import Notifier

_food = Food.__table__
_categories = MenuCategory.__table__
_about = About.__table__
_team = TeamMember.__table__


class CatalogManager(BaseManager):
    log_name = "foodchef.catalog"

    def __init__(self, db, logger=None, notifier=None, staff_notifier: Optional[Notifier] = None,
                 admin_email: str = ""):
        super().__init__(db, logger, notifier)
        self.staff_notifier = staff_notifier
        self.admin_email = admin_email

    def _menu_query(self):
        return (
            select(_food, _categories.c.name.label("category_name"))
            .select_from(_food.outerjoin(_categories, _food.c.category_id == _categories.c.id))
            .where(_food.c.is_active.is_(True))
        )

    def list_menu(self, category_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Active food items grouped by category order, then name."""
        query = self._menu_query()
        if category_id:
            query = query.where(_food.c.category_id == category_id)
        try:
            return self.db.fetch_all(query.order_by(_categories.c.sort_order, _food.c.name, _food.c.id))
        except SQLAlchemyError as e:
            self._db_error("Database error listing menu", e)
            return []

    def get_food(self, food_id: int) -> Optional[Dict[str, Any]]:
        try:
            return self.db.fetch_one(self._menu_query().where(_food.c.id == food_id))
        except SQLAlchemyError as e:
            self._db_error("Database error getting food item", e)
            return None

    def get_about(self) -> Optional[Dict[str, Any]]:
        try:
            return self.db.fetch_one(select(_about).where(_about.c.status.is_(True)).order_by(_about.c.id).limit(1))
        except SQLAlchemyError as e:
            self._db_error("Database error getting about content", e)
            return None

    def list_team(self) -> List[Dict[str, Any]]:
        try:
            return self.db.fetch_all(
                select(_team).where(_team.c.status.is_(True)).order_by(_team.c.position_order, _team.c.id)
            )
        except SQLAlchemyError as e:
            self._db_error("Database error listing team", e)
            return []

    def save_contact(self, data) -> Dict[str, Any]:
        data = to_dict(data)
        try:
            require_fields(data, ("name", "email", "message"))
            contact = {
                "name": str(data["name"]).strip(),
                "email": str(data["email"]).strip(),
                "subject": str(data.get("subject") or "").strip(),
                "message": str(data["message"]).strip(),
            }
            contact_id = self.db.insert_or_update("contact_messages", contact)
        except FoodChefError as e:
            return e.to_result()
        except SQLAlchemyError as e:
            return self._db_error("Database error saving contact message", e)

        self.logger.log_activity("contact_message", {"contact_id": contact_id, "email": contact["email"]})
        body = emails.contact_notification(contact)
        if self.admin_email:
            self._notify(self.admin_email, f"New Contact Message: {contact['subject'] or contact['name']}", body)
        if self.staff_notifier:
            self.staff_notifier.send("", "📩 New contact message", body)
        return {"success": True, "message": "Message sent successfully", "contact_id": contact_id}
