import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dragons import __version__
from dragons.api import health
from dragons.api.v1.endpoints import admin, auth, projects, tasks, teams
from dragons.core.config import Settings
from dragons.core.exceptions import AppError, first_error_message
from dragons.core.init_db import init_db
from dragons.core.logging_config import setup_logging
from dragons.db.mongodb import close_mongo_connection, connect_to_mongo, get_app_database

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Every error response has the body {"msg": "..."}."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = first_error_message(exc.errors())
        logger.info(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": message})

    @app.exception_handler(PydanticValidationError)
    async def model_validation_handler(request: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"msg": first_error_message(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"msg": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        # Details stay in the server log
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": "Server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Settings are read from the environment unless given; they and the
    MongoDB client live on app.state.
    """
    if settings is None:
        settings = Settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
    Deadlines & Dragons API for student teams.

    ## Features
    * **Accounts**: Registration, login, token refresh and logout.
    * **Teams**: Create and join teams, hand over the lead, assign mentors and coordinators.
    * **Projects & Tasks**: One project per team, tasks with assignees, deadlines and grading.
    * **Supervision**: Dashboard of the teams a mentor or coordinator looks after.
    """,
        version=__version__,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
    )
    app.state.settings = settings
    app.state.mongo_client = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        await connect_to_mongo(app)
        await init_db(get_app_database(app), settings)

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_mongo_connection(app)

    prefix = settings.API_PREFIX
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(teams.router, prefix=f"{prefix}/team", tags=["team"])
    app.include_router(tasks.router, prefix=f"{prefix}/tasks", tags=["tasks"])
    app.include_router(projects.router, prefix=f"{prefix}/projects", tags=["projects"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["admin"])

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Deadlines & Dragons API"}

    return app


def run() -> None:
    """Console entry point."""
    uvicorn.run("dragons.main:create_app", factory=True, host="0.0.0.0", port=8000)
