"""Photo Portfolio Application - FastAPI Entry Point."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from .config import LOG_LEVEL
from .error_handlers import register_error_handlers
from .infrastructure.database import init_async_db, close_async_db
from .middleware import PrincipalMiddleware
from .routes import router as api_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: runs before the application starts accepting requests
    await init_async_db()
    yield
    # Shutdown: close pooled connections
    await close_async_db()


app = FastAPI(title="Photo Portfolio", lifespan=lifespan)

app.add_middleware(PrincipalMiddleware)
register_error_handlers(app)

app.include_router(api_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
