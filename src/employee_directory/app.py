"""
Employee Directory Service
CRUD API for the employees table, plus the landing page that drives it.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from employee_directory.config.settings import (
    ALLOWED_ORIGINS,
    DATABASE_URL,
    DB_COMMAND_TIMEOUT,
    HOST,
    LOG_LEVEL,
    PORT,
    STATIC_DIR,
)
from employee_directory.database.connection import DatabaseConnection
from employee_directory.database.schema import init_schema
from employee_directory.api.routes import employees, health, pages
from employee_directory.utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

STATIC_URL_PREFIX = "/static"

API_ENDPOINTS = [
    ("GET", "/api/employees", "Get all employees"),
    ("GET", "/api/employees/{id}", "Get single employee"),
    ("POST", "/api/employees", "Create new employee"),
    ("PUT", "/api/employees/{id}", "Update employee"),
    ("DELETE", "/api/employees/{id}", "Delete employee"),
]


def log_endpoints() -> None:
    logger.info(f"Server running at http://{HOST}:{PORT}")
    logger.info("API endpoints:")
    for method, path, description in API_ENDPOINTS:
        logger.info(f"{method:<7}{path:<21}- {description}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect and bootstrap the schema on startup, release the session on shutdown.

    A failed connect or schema bootstrap is logged and the service keeps
    serving; store-backed endpoints then answer 500 and /health answers 503.
    """
    database: DatabaseConnection = app.state.database

    try:
        await database.connect()
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
    else:
        try:
            await init_schema(database)
        except Exception as e:
            logger.error(f"Schema initialization failed: {e}")

    log_endpoints()
    yield

    try:
        await database.close()
        app.state.clean_shutdown = True
    except Exception as e:
        logger.error(f"Error closing database connection: {e}")
        app.state.clean_shutdown = False


def create_app(
    database: Optional[DatabaseConnection] = None,
    static_dir: Optional[Path] = None
) -> FastAPI:
    """Build the application around an owned database handle"""
    app = FastAPI(
        title="Employee Directory Service",
        description="CRUD API for employee records",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.database = database or DatabaseConnection(DATABASE_URL, command_timeout=DB_COMMAND_TIMEOUT)
    app.state.static_dir = Path(static_dir) if static_dir is not None else STATIC_DIR
    app.state.clean_shutdown = False

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(pages.router, tags=["Pages"])
    app.include_router(health.router, tags=["Health"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])

    # Assets live under their own prefix so unmatched API paths still reach
    # the router (trailing-slash redirects, JSON 404/405)
    if app.state.static_dir.is_dir():
        app.mount(STATIC_URL_PREFIX, StaticFiles(directory=app.state.static_dir), name="static")
    else:
        logger.warning(f"Static directory {app.state.static_dir} not found - landing page disabled")

    return app


app = create_app()
