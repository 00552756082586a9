"""
FastAPI application for LectureDeck
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from datetime import datetime

from lecturedeck import __version__
from lecturedeck.models.schemas import HealthResponse
from lecturedeck.api.session_routes import router as session_router
from lecturedeck.api.library_routes import router as library_router
from lecturedeck.sessions.registry import get_session_registry
from lecturedeck.utils.logger import get_logger
from config import settings

logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="LectureDeck API",
    description="Study sessions (quizzes, flashcards, summaries) over analyzed lecture material",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_HOUR}/hour"]
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include routes
app.include_router(session_router)
app.include_router(library_router)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup"""
    logger.info("Starting LectureDeck API...")
    logger.info(f"API running on {settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"Content backend: {settings.CONTENT_API_URL}")
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not configured, uploads will fail")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down LectureDeck API...")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to LectureDeck API",
        "version": __version__,
        "docs": "/docs"
    }


@app.get(f"/api/{settings.API_VERSION}/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=__version__,
        active_sessions=len(get_session_registry())
    )


# Error handlers
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lecturedeck.api.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG_MODE
    )
