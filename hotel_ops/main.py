"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_ops.config import settings
from hotel_ops.database import engine, Base
from hotel_ops.errors import register_exception_handlers
from hotel_ops.logging_config import configure_logging
from hotel_ops import models  # noqa: F401  (register tables before create_all)
from hotel_ops.routes import auth, rooms, titles, issues, users, logs

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Room maintenance log for hotel staff with an admin audit trail",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(rooms.router, prefix="/api")
app.include_router(titles.router, prefix="/api")
app.include_router(issues.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(logs.router, prefix="/api")

logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
