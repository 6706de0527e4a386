import logging

from fastapi import FastAPI

from contextlib import asynccontextmanager
from filmorate_api.db.postgres import close_pool, get_pool
from filmorate_api.db.schema import init_schema

from filmorate_api.core.logger import setup_json_logging, shutdown_logging
from filmorate_api.core.sentry import init_sentry
from filmorate_api.core.config import settings
from filmorate_api.core.middleware import RequestContextMiddleware

from filmorate_api.api.http_utils import register_error_handlers
from filmorate_api.api.v1.films import router as films_router
from filmorate_api.api.v1.users import router as users_router
from filmorate_api.api.v1.reference import router as reference_router
from filmorate_api.api.v1.debug import include_debug_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env,
                service=settings.app_name)
    log = logging.getLogger(__name__)

    # 2) пул Postgres + схема и справочники; memory-режим БД не трогает
    if settings.storage == "postgres":
        await init_schema(await get_pool())
    log.info("storage_ready", extra={"storage": settings.storage})

    try:
        yield
    finally:
        await close_pool()
        shutdown_logging()


app = FastAPI(title="Filmorate", lifespan=lifespan)

# наш trace_id + access JSON
app.add_middleware(RequestContextMiddleware)
register_error_handlers(app)
include_debug_routes(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(films_router)
app.include_router(users_router)
app.include_router(reference_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("filmorate_api.main:app", host=settings.host,
                port=settings.port, log_config=None)
