"""Tasks Service entry point.

Builds the FastAPI application: routers, CORS, table creation on startup
and the handlers that give every error the ``{error, message}`` shape.
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from application.rest.routers import router_health, router_tags, router_tasks
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from infrastructure.models.base import Base
from starlette.exceptions import HTTPException as StarletteHTTPException
from utils.config import API_PREFIX, HOST, PORT, get_cors_origins
from utils.dependencies import engine

# Register every ORM model on Base.metadata
from infrastructure.models import associations, tag_orm, task_orm  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)
    yield


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Validation failed for {request.method} {request.url.path}")
    details = [
        {
            "path": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation Error",
            "message": details[0]["message"] if details else "Invalid request",
            "details": details,
        },
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": HTTPStatus(exc.status_code).phrase, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )


def create_app() -> FastAPI:
    """Create the Tasks Service application.

    Returns:
        FastAPI: Application with routers, CORS and error handlers installed.
    """
    app = FastAPI(
        title="Task Manager API",
        description="Task management service with filtering, bulk actions and manual ordering",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router_health.router, tags=["Health"])
    app.include_router(router_tasks.router, prefix=API_PREFIX, tags=["Tasks"])
    app.include_router(router_tags.router, prefix=API_PREFIX, tags=["Tags"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
