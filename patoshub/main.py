# patoshub/main.py

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .db import init_db, make_engine
from .errors import register_exception_handlers
from .storage import ImageStorage, build_storage
from .routers import (
    auth_routes,
    users_routes,
    negocios_routes,
    productos_routes,
    reservaciones_routes,
    disponibilidades_routes,
    upload_routes,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    storage: Optional[ImageStorage] = None,
) -> FastAPI:
    """
    Build the application around services created once per process.

    The engine and the storage backend are resolved here and read from
    `app.state` by the request dependencies; pass them in to reuse existing
    ones (tests do this).
    """
    settings = settings or Settings()
    if engine is None:
        if not settings.sqlalchemy_url:
            raise RuntimeError("DATABASE_URL is not set")
        engine = make_engine(settings.sqlalchemy_url)
    if storage is None:
        storage = build_storage(settings)

    app = FastAPI(title="PatosHub API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    for module in (
        auth_routes,
        users_routes,
        negocios_routes,
        productos_routes,
        reservaciones_routes,
        disponibilidades_routes,
        upload_routes,
    ):
        app.include_router(module.router)

    # locally stored images are served back from here
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
    return app


def main() -> None:
    import uvicorn

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

    if not settings.database_url:
        logger.error("DATABASE_URL is not set")
        sys.exit(1)

    engine = make_engine(settings.sqlalchemy_url)
    try:
        init_db(engine, settings.admin_password)
    except SQLAlchemyError:
        logger.exception("Could not initialise the database")
        sys.exit(1)

    app = create_app(settings, engine=engine)
    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
