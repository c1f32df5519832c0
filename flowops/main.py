import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flowops import __version__
from flowops.core.config import get_settings
from flowops.core.errors import FlowOpsError, InternalError, ValidationError
from flowops.db.session import SessionLocal
from flowops.routers.admin import router as admin_router
from flowops.routers.auth import router as auth_router
from flowops.routers.chat import router as chat_router
from flowops.routers.checklists import router as checklists_router
from flowops.routers.equipment import router as equipment_router
from flowops.routers.health import router as health_router
from flowops.routers.inventory import logs_router as inventory_logs_router
from flowops.routers.inventory import router as inventory_router
from flowops.routers.menu import ingredients_router
from flowops.routers.menu import router as menu_router
from flowops.routers.notifications import router as notifications_router
from flowops.routers.sales import router as sales_router
from flowops.routers.tasks import router as tasks_router
from flowops.routers.timeline import router as timeline_router
from flowops.routers.users import router as users_router
from flowops.services.bootstrap import bootstrap_system_admin

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SYSTEM_ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            bootstrap_system_admin(db, settings)
        finally:
            db.close()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Restaurant operations API - inventory, equipment, checklists, tasks, menu and sales with automatic stock deduction.",
    version=__version__,
    lifespan=lifespan,
)


def _error_response(request: Request, exc: FlowOpsError) -> JSONResponse:
    content = exc.to_dict()
    content["request_id"] = request.headers.get("X-Request-ID")
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(FlowOpsError)
async def flowops_exception_handler(request: Request, exc: FlowOpsError):
    """Map the service error taxonomy onto HTTP status codes."""
    return _error_response(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(request, ValidationError.from_pydantic(exc))


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error_response(request, InternalError())


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(inventory_router, prefix="/api")
app.include_router(inventory_logs_router, prefix="/api")
app.include_router(equipment_router, prefix="/api")
app.include_router(checklists_router, prefix="/api")
app.include_router(tasks_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(timeline_router, prefix="/api")
app.include_router(menu_router, prefix="/api")
app.include_router(ingredients_router, prefix="/api")
app.include_router(sales_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "docs": "/docs",
        "health": "/health"
    }
