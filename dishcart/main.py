# dishcart/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from dishcart.data.database import Base, engine, ensure_sqlite_dir
from dishcart.api.deps import parse_user_id
from dishcart.api.errors import install_error_handlers
from dishcart.api.routers import carts, catalog, health, orders, users
from dishcart.utils.logging import add_context, clear_context, configure_logging, get_logger
import uvicorn

# IMPORT WSZYSTKICH MODELI PRZED CREATE_ALL
import dishcart.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db(bind=engine) -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        ensure_sqlite_dir(bind.url)
        Base.metadata.create_all(bind=bind)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield


async def log_context_middleware(request: Request, call_next):
    """
    Kontekst logow (user_id) wiazany przed wywolaniem endpointu.
    Endpoint i zaleznosci dostaja kopie tego kontekstu w watkach threadpoola.
    """
    clear_context()
    user_id = parse_user_id(request.headers.get("x-user-id"))
    if user_id is not None:
        add_context(user_id=user_id)
    try:
        return await call_next(request)
    finally:
        clear_context()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Dish Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    install_error_handlers(app)
    app.middleware("http")(log_context_middleware)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
