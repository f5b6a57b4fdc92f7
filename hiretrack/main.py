"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from hiretrack.app.api.v1 import api_router
from hiretrack.app.core.config import settings
from hiretrack.app.core.logging_config import setup_logging
from hiretrack.app.db import session as db_session
from hiretrack.app.db.base import Base
from hiretrack.app.tasks.scheduler import start_scheduler, stop_scheduler
from hiretrack.app.utils import cache

# Import models so they register with Base.metadata
import hiretrack.app.models  # noqa: F401

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in production; create_all covers fresh SQLite dev databases
    Base.metadata.create_all(bind=db_session.engine)
    await cache.connect()
    scheduler = start_scheduler()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    try:
        yield
    finally:
        stop_scheduler(scheduler)
        await cache.close()


app = FastAPI(
    title=f"{settings.app_name} API",
    description="Job application tracking API",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")

# Serve locally stored CVs (create dir if missing)
upload_path = Path(settings.upload_dir)
upload_path.mkdir(parents=True, exist_ok=True)
app.mount(f"/{settings.upload_dir.strip('/')}", StaticFiles(directory=str(upload_path)), name="cvs")


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": f"{settings.app_name} API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
