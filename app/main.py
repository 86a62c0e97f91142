from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from app import settings
from app.db import close_db, init_db
from app.errors import register_exception_handlers
from app.log import configure_logging
from app.routers import (
    admin,
    auth,
    billing,
    booking,
    customer,
    hotel,
    notification,
    pages,
    user,
    venue,
)
from app.sessions import close_redis


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Production schemas are managed out of band
    await init_db(generate_schemas=settings.ENV != "production")
    logger.info("venbook started (env={})", settings.ENV)
    yield
    await close_db()
    await close_redis()
    logger.info("venbook stopped")


def create_app() -> FastAPI:
    app = FastAPI(title="venbook", lifespan=lifespan)
    register_exception_handlers(app)

    for module in (
        auth,
        user,
        booking,
        customer,
        hotel,
        venue,
        billing,
        notification,
        admin,
    ):
        app.include_router(module.router)
    app.include_router(auth.http_router)
    app.include_router(pages.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
