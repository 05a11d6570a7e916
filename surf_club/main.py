"""
FastAPI application entry point for the Session Surf Club API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from surf_club.config import settings
from surf_club.database import init_db
from surf_club.errors import register_exception_handlers
from surf_club.logging_config import setup_logging
from surf_club.routers import auth, sessions, likes, comments, messages, users
from surf_club.utils.uploads import upload_dir

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables and the uploads directory on startup."""
    logger.info("Starting Session Surf Club API...")

    # Schema is created from the models; there is no migration tooling
    init_db()
    upload_dir()
    logger.info("Uploads directory: %s", settings.UPLOAD_DIR)

    yield

    logger.info("Shutting down Session Surf Club API...")


app = FastAPI(
    title="Session Surf Club API",
    description="Log surf sessions and share them with likes, comments and direct messages",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "Session Surf Club API is running",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["Sessions"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(likes.router, prefix="/api/likes", tags=["Likes"])
app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])

# Uploaded images, referenced as /uploads/<filename>
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
