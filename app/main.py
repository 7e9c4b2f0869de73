from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.core.config import settings
from app.core.database import init_db, close_db
from app.core.errors import register_exception_handlers
from app.core.logging_setup import setup_logging
from app.routers import health, tasks


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    # ouverture/fermeture explicite du store
    init_db()
    yield
    close_db()


app = FastAPI(
    title="Task Tracker API",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
