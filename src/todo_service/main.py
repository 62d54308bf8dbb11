from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ServiceError
from .logging_config import setup_structured_logging
from .repositories import Repository, get_repository
from .routers import todos as todos_router
from .routers import users as users_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "users", "description": "User registration."},
    {
        "name": "todos",
        "description": "Create, list, update, complete and delete the acting user's todos. "
        "The acting user is named by the identity header.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: the store lives exactly as long as the app."""
    logger.info("Todo service starting", extra={"identity_header": app.state.settings.identity_header})
    yield
    logger.info("Todo service stopping", extra={"users": app.state.repository.count_users()})


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Map service errors to their status code and a JSON body.

    Response format:
        {"error": "NotFoundError", "message": "Todo not found"}
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "message": exc.message},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    logger.info("Request validation failed", extra={"path": request.url.path})
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            # ctx may hold the raw ValueError, which is not JSON serializable
            "detail": [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()],
        },
    )


# PUBLIC_INTERFACE
def create_app(repository: Optional[Repository] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application around an explicit store.

    Args:
        repository: Store to serve from; a fresh in-memory one by default.
        settings: Settings to use; loaded from the environment by default.
    """
    settings = settings or get_settings()
    setup_structured_logging(settings.log_level)

    app = FastAPI(
        title="Todo Service",
        description="In-memory task tracking API. Users register, then manage their own todos.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository or get_repository()

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of registered users.
        """
        return {"message": "Healthy", "users": app.state.repository.count_users()}

    app.include_router(users_router.router)
    app.include_router(todos_router.router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def serve() -> None:
    """Run the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "todo_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
