# foodchef/core/exceptions.py
"""
Error taxonomy shared by the domain managers.

Managers raise these internally and turn them into a uniform
``{"success": False, "message": ..., "error": ...}`` result at the method
boundary, so no store exception ever reaches a router.
"""
from typing import Any, Dict


class FoodChefError(Exception):
    status_code = 500
    code = "error"
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_result(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message, "error": self.code}


class ValidationError(FoodChefError):
    """Missing or malformed input. Never retried."""
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input"


class CapacityError(FoodChefError):
    """The requested reservation slot is full."""
    status_code = 409
    code = "capacity_error"
    default_message = "No tables available for the selected time"


class NotFoundError(FoodChefError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class PersistenceError(FoodChefError):
    """Store failure. The cause is logged, never shown to the caller."""
    status_code = 500
    code = "persistence_error"
    default_message = "Database error occurred"


ERROR_STATUS = {
    cls.code: cls.status_code
    for cls in (ValidationError, CapacityError, NotFoundError, PersistenceError)
}
