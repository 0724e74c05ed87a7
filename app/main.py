"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import database
from app.routers import auth, bucket_list, insights


def configure_logging() -> None:
    """Route application logs to stderr at the configured level."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    configure_logging()
    await database.connect()
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="Bucket List API",
    description="Backend API for bucket list goals, progress and reminders",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(bucket_list.router)
app.include_router(insights.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Bucket List API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
