# main.py
import logging

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodchef.api.deps import require_admin, require_api_key
from foodchef.api.endpoints import admin, feedback, json_api, menu, orders, reservations
from foodchef.core.config import settings
from foodchef.core.database import Base, engine
from foodchef.core.logger import setup_logging

setup_logging(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_RETENTION_DAYS)
logger = logging.getLogger("foodchef.app")

if settings.AUTO_CREATE_TABLES:
    # Local/dev convenience; production schemas come from `alembic upgrade head`
    Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Reservations, orders and feedback for Food Chef Cafe",
    version="1.0"
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# --- error envelope ---
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"status": "error", "error": "; ".join(problems) or "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"status": "error", "error": "Internal server error"})


# Include the separated routers
app.include_router(menu.router, prefix="/menu", tags=["Menu"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])
app.include_router(json_api.router, prefix="/api", tags=["JSON API"], dependencies=[Depends(require_api_key)])


@app.get("/")
def read_root():
    return {"status": "Food Chef Cafe API Online 🚀"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
