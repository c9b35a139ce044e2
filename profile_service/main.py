# profile_service/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from shared.database import init_db, make_engine, make_session_factory
from .config import Settings
from .errors import register_exception_handlers
from .routes import build_router

logger = logging.getLogger("profile-service")


def create_app(settings: Optional[Settings] = None, SessionLocal: Optional[sessionmaker] = None) -> FastAPI:
    logging.basicConfig(level=logging.INFO)

    settings = settings or Settings.from_env()
    if SessionLocal is None:
        engine = make_engine(settings.database_url)
        init_db(engine)
        SessionLocal = make_session_factory(engine)

    app = FastAPI(title="Profile Service", version="1.0.0")

    origins = list(settings.cors_origins)
    # Browsers reject "*" with credentials
    allow_credentials = origins != ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(build_router(SessionLocal, settings), prefix="/api/profile", tags=["Profile"])

    @app.get("/health", operation_id="health_check", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "service": "profile-service"}

    @app.get("/", operation_id="root", tags=["Root"])
    async def root():
        return {
            "service": "Profile Service",
            "version": "1.0.0",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    logger.info("Profile service ready (db=%s)", settings.database_url.split("@")[-1])
    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
