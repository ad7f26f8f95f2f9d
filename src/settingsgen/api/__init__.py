import logging
import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from .routes import pages, views

logger = logging.getLogger(__name__)


def create_app(config_obj=None, *, store=None, hooks=None) -> FastAPI:
    from ..config import Config
    from ..db import close_db
    from ..errors import StoreException
    from ..i18n import initialize
    from ..registry import PageRegistry
    from ..stores import get_store

    if config_obj is None:
        config_file = os.environ.get("CONFIG_FILE", "config.toml")
        config_obj = Config.load_from_file(config_file)

    initialize(ui_language=config_obj.language)

    if store is None:
        store = get_store(config_obj.store)

    app = FastAPI(title="Settings API")

    app.state.config = config_obj
    app.state.registry = PageRegistry.from_config(config_obj, store, hooks=hooks)

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(pages.router)
    app.include_router(api_router)
    app.include_router(views.router)

    @app.exception_handler(StoreException)
    def store_exception_handler(request: Request, exc: StoreException):
        logger.error(f"Settings store error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    @app.on_event("shutdown")
    def shutdown_db():
        close_db()

    return app
