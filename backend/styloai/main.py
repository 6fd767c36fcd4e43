import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import settings
from .core.exceptions import register_exception_handlers
from .database import init_db
from .routers import (
    analysis,
    auth,
    calendar,
    config,
    daily_outfit,
    gaps,
    occasions,
    outfits,
    payment,
    planner,
    profile,
    style_history,
    wardrobe,
    weather,
)
from .schemas import HealthResponse

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="StyloAI API",
    description="Backend API for StyloAI wardrobe and outfit recommendations",
    version="1.0.0"
)

# Rate limiting (limits are declared on the auth routes)
app.state.limiter = auth.limiter
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins if not settings.is_development else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Local image uploads (used when Cloudinary is off or failing)
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info(f"StyloAI API started ({settings.ENVIRONMENT})")


# Include routers
for module in (
    auth,
    profile,
    analysis,
    wardrobe,
    outfits,
    occasions,
    daily_outfit,
    planner,
    gaps,
    style_history,
    calendar,
    payment,
    config,
    weather,
):
    app.include_router(module.router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def health_check():
    return {"message": "StyloAI API is running", "status": "ok"}


@app.get("/")
def root():
    return {
        "message": "Welcome to StyloAI API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
