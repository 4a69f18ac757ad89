# tattoo_workshop/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tattoo_workshop.core.config import get_settings
from tattoo_workshop.core.logging_config import configure_logging
from tattoo_workshop.database import create_db_and_tables, new_session

# Import models so SQLModel metadata is populated before create_all()
from tattoo_workshop.models import user as _user_models  # noqa: F401
from tattoo_workshop.models import customer as _customer_models  # noqa: F401
from tattoo_workshop.models import appointment as _appointment_models  # noqa: F401
from tattoo_workshop.models import catalog as _catalog_models  # noqa: F401
from tattoo_workshop.models import setting as _setting_models  # noqa: F401
from tattoo_workshop.models import email as _email_models  # noqa: F401

from tattoo_workshop.repositories.user_repo import UserRepository
from tattoo_workshop.services.email_templates import seed_default_templates
from tattoo_workshop.services.notification_queue import (
    get_email_service,
    get_notification_queue,
)
from tattoo_workshop.services.scheduler import ReminderScheduler
from tattoo_workshop.services.user_service import UserService

# Routers
from tattoo_workshop.routers.auth import router as auth_router
from tattoo_workshop.routers.customers import router as customers_router
from tattoo_workshop.routers.appointments import router as appointments_router
from tattoo_workshop.routers.pricelist import router as pricelist_router
from tattoo_workshop.routers.portfolio import router as portfolio_router
from tattoo_workshop.routers.generated_tattoos import router as generated_router
from tattoo_workshop.routers.settings import router as settings_router
from tattoo_workshop.routers.email import router as email_router

settings = get_settings()

logger = logging.getLogger(__name__)


def bootstrap_database() -> None:
    """Create tables, seed default email templates and the first admin."""
    create_db_and_tables()
    with new_session() as session:
        seed_default_templates(session)
        UserService(UserRepository()).ensure_default_admin(session, settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Configure logging.
      - Create tables, seed templates and the default admin.
      - Start the reminder scheduler and the notification worker
        (each can be disabled from settings).

    Shutdown:
      - Stop both background threads.
    """
    configure_logging()
    logger.info("Startup: connecting to database...")
    try:
        bootstrap_database()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise

    scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = ReminderScheduler(
            get_email_service(),
            interval_minutes=settings.REMINDER_INTERVAL_MINUTES,
        )
        scheduler.start()

    notification_queue = get_notification_queue()
    if settings.NOTIFICATION_WORKER_ENABLED:
        notification_queue.start()

    yield

    notification_queue.stop()
    if scheduler is not None:
        scheduler.stop()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
# Credentials are allowed so the browser client can send the `token` cookie.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handlers ---


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}",
        extra={"request_path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


# All routes live under the API prefix, e.g. /api/customers
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(customers_router, prefix=settings.API_PREFIX)
app.include_router(appointments_router, prefix=settings.API_PREFIX)
app.include_router(pricelist_router, prefix=settings.API_PREFIX)
app.include_router(portfolio_router, prefix=settings.API_PREFIX)
app.include_router(generated_router, prefix=settings.API_PREFIX)
app.include_router(settings_router, prefix=settings.API_PREFIX)
app.include_router(email_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "tattoo-workshop-backend"}
