from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from tenantnotes.api.middleware import request_context_middleware
from tenantnotes.api.routes.auth import router as auth_router
from tenantnotes.api.routes.notes import router as notes_router
from tenantnotes.api.routes.tenants import router as tenants_router
from tenantnotes.api.routes.users import router as users_router
from tenantnotes.core.config import settings
from tenantnotes.core.db import Database
from tenantnotes.core.errors import ErrorCode, error_body
from tenantnotes.core.log import configure_logging
from tenantnotes.seed import seed_demo_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    database = Database(settings.database_url)
    database.connect()
    app.state.database = database

    if settings.seed_demo_data:
        async with database.session() as session:
            await seed_demo_data(session)

    try:
        yield
    finally:
        await database.close()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": error_body(
                ErrorCode.VALIDATION_ERROR,
                "Request validation failed",
                errors=jsonable_encoder(exc.errors()),
            )
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": error_body(ErrorCode.INTERNAL_ERROR, "Internal server error")},
    )


app = FastAPI(title="Tenant Notes", lifespan=lifespan)
app.middleware("http")(request_context_middleware)
if settings.cors_origins():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)
app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(tenants_router, prefix="/api")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    return {"status": "ok"}
