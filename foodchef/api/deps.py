# foodchef/api/deps.py
"""Shared FastAPI dependencies: bearer-key auth, request context and the managers."""
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from foodchef.core.config import settings
from foodchef.core.context import RequestContext
from foodchef.core.database import get_db
from foodchef.core.exceptions import ERROR_STATUS
from foodchef.core.gateway import Db
from foodchef.core.logger import ActivityLogger
from foodchef.services.catalog import CatalogManager
from foodchef.services.feedback_manager import FeedbackManager
from foodchef.services.notifier import Notifier, build_customer_notifier, build_staff_notifier
from foodchef.services.order_manager import OrderManager
from foodchef.services.reservation_manager import ReservationManager

BEARER_PREFIX = "bearer "


# --- auth ---
def _authenticate(request: Request, authorization: Optional[str]) -> RequestContext:
    api_key = None
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        api_key = authorization[len(BEARER_PREFIX):].strip()

    if not api_key:
        ActivityLogger("foodchef.security", RequestContext.from_request(request)).log_security(
            "missing_api_key", {"path": request.url.path}
        )
        raise HTTPException(status_code=401, detail="API key required", headers={"WWW-Authenticate": "Bearer"})

    role = settings.api_key_roles().get(api_key)
    if not role:
        ActivityLogger("foodchef.security", RequestContext.from_request(request)).log_security(
            "invalid_api_key", {"path": request.url.path}
        )
        raise HTTPException(status_code=401, detail="Invalid API key", headers={"WWW-Authenticate": "Bearer"})

    context = RequestContext.from_request(request, actor=f"{role}-key", role=role)
    request.state.context = context
    return context


def require_api_key(request: Request, authorization: Optional[str] = Header(None)) -> RequestContext:
    return _authenticate(request, authorization)


def require_admin(request: Request, authorization: Optional[str] = Header(None)) -> RequestContext:
    context = _authenticate(request, authorization)
    if not context.is_admin:
        ActivityLogger("foodchef.security", context).log_security("admin_access_denied", {"path": request.url.path})
        raise HTTPException(status_code=403, detail="Admin access required")
    return context


def get_request_context(request: Request) -> RequestContext:
    """The authenticated caller when a router-level auth dependency ran, otherwise a guest."""
    context = getattr(request.state, "context", None)
    return context or RequestContext.from_request(request)


# --- collaborators ---
def get_gateway(db: Session = Depends(get_db)) -> Db:
    return Db(db)


def get_customer_notifier() -> Optional[Notifier]:
    return build_customer_notifier(settings)


def get_staff_notifier() -> Optional[Notifier]:
    return build_staff_notifier(settings)


def get_reservation_manager(
    db: Db = Depends(get_gateway),
    context: RequestContext = Depends(get_request_context),
    notifier: Optional[Notifier] = Depends(get_customer_notifier),
) -> ReservationManager:
    return ReservationManager(db, ActivityLogger(ReservationManager.log_name, context), notifier)


def get_order_manager(
    db: Db = Depends(get_gateway),
    context: RequestContext = Depends(get_request_context),
    notifier: Optional[Notifier] = Depends(get_customer_notifier),
    staff_notifier: Optional[Notifier] = Depends(get_staff_notifier),
) -> OrderManager:
    return OrderManager(db, ActivityLogger(OrderManager.log_name, context), notifier, staff_notifier)


def get_feedback_manager(
    db: Db = Depends(get_gateway),
    context: RequestContext = Depends(get_request_context),
    notifier: Optional[Notifier] = Depends(get_customer_notifier),
) -> FeedbackManager:
    return FeedbackManager(db, ActivityLogger(FeedbackManager.log_name, context), notifier)


def get_catalog_manager(
    db: Db = Depends(get_gateway),
    context: RequestContext = Depends(get_request_context),
    notifier: Optional[Notifier] = Depends(get_customer_notifier),
    staff_notifier: Optional[Notifier] = Depends(get_staff_notifier),
) -> CatalogManager:
    return CatalogManager(
        db, ActivityLogger(CatalogManager.log_name, context), notifier, staff_notifier, settings.ADMIN_EMAIL
    )


# --- responses ---
def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body = {"status": "success", "data": data}
    if message:
        body["message"] = message
    if isinstance(data, list):
        body["count"] = len(data)
    return body


def unwrap(result: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a manager result into a success body, or raise with the matching HTTP status."""
    if not result.get("success"):
        raise HTTPException(status_code=ERROR_STATUS.get(result.get("error"), 500), detail=result.get("message"))
    payload = {k: v for k, v in result.items() if k not in ("success", "message")}
    return success(payload, result.get("message"))
