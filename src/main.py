from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.database import StorageContext
from src.logging_config import setup_logging
from src.auth import router as auth_router
from src.packages import router as packages_router
from src.bookings import router as bookings_router
from src.stats import router as stats_router
from src.content import router as content_router

logger = logging.getLogger(__name__)

def create_app(storage: Optional[StorageContext] = None) -> FastAPI:
    """Build the API; a storage context may be injected, otherwise one is opened at startup"""
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.storage is None
        if owned:
            app.state.storage = StorageContext(settings.DATABASE_URL)
        app.state.storage.create_all()
        logger.info("Storage ready (%s)", app.state.storage.engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            if owned:
                app.state.storage.dispose()
                app.state.storage = None

    # Create FastAPI app
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Tour package booking and analytics API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.storage = storage

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        auth_router,
        prefix=f"{settings.API_PREFIX}/admin",
        tags=["Operator Authentication"]
    )

    app.include_router(
        packages_router,
        prefix=f"{settings.API_PREFIX}/packages",
        tags=["Packages"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_PREFIX}/bookings",
        tags=["Bookings"]
    )

    app.include_router(
        stats_router,
        prefix=f"{settings.API_PREFIX}/stats",
        tags=["Statistics"]
    )

    app.include_router(
        content_router,
        prefix=settings.API_PREFIX,
        tags=["Site Content"]
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"ok": True}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
