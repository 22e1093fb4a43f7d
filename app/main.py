# app/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.session import Database

# Routers
from app.api.routes import router as api_router
from app.api.profile_routes import router as profile_router
from app.api.job_routes import router as job_router
from app.api.employer_routes import router as employer_router

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME)

    # Root -> redirect to Swagger UI
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    # CORS
    origins = [o.strip() for o in settings.BACKEND_CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Persistence context, shared by every request through get_db
    db = Database(database_url or settings.DATABASE_URL)
    app.state.db = db
    # A down store is logged, not fatal; requests surface 500s until it recovers
    db.create_all()

    # API routes
    app.include_router(api_router)       # /health, /api/auth/*
    app.include_router(profile_router)   # /api/profile
    app.include_router(job_router)       # /api/jobs
    app.include_router(employer_router)  # /api/employer

    logger.info("%s started (env=%s)", settings.APP_NAME, settings.APP_ENV)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
