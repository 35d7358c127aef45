"""FastAPI application bootstrap and router wiring."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
import uvicorn

from app.api.error_handlers import register_error_handlers
from app.api.middleware import OriginGateMiddleware, RequestLoggingMiddleware
from app.api.routers import health, products
from app.core.config import Settings, get_settings
from app.db.session import Database

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.2"
OPENAPI_URL = "/docs.json"
OPENAPI_TAGS = [{"name": "Products", "description": "REST APi for products"}]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)


def create_app(
    settings: Settings | None = None, database: Database | None = None
) -> FastAPI:
    """Instantiate the FastAPI app, its database handle and routers."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if database is None:
        database = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A failed check is logged and the server keeps accepting requests
        database.connect()
        yield
        database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="API DOCS for Products",
        version="1.0.0",
        openapi_url=OPENAPI_URL,
        openapi_tags=OPENAPI_TAGS,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.openapi_version = OPENAPI_VERSION
    app.state.database = database
    app.state.settings = settings

    allowed_origin = settings.allowed_origin
    logger.info(f"[CORS] Allowed frontend origin: {allowed_origin}")

    # Starlette runs the last added middleware first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[allowed_origin] if allowed_origin else [],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGateMiddleware, allowed_origin=allowed_origin)
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api/products", tags=["Products"])

    @app.get("/docs", include_in_schema=False)
    async def swagger_ui():
        return get_swagger_ui_html(openapi_url=OPENAPI_URL, title=settings.docs_title)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using HOST/PORT settings."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
