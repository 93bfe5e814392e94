from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .database import engine, Base
from .api import links, collections, board, track, pages
from .core.middleware import RequestLoggingMiddleware
from .utils.logger import setup_logging
from .config import settings

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Link-in-bio profiles with collections and click tracking",
    version="1.0.0"
)

# Setup rate limiter
app.state.limiter = track.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(track.router, prefix="/api")
app.include_router(board.router, prefix="/api")
app.include_router(links.router, prefix="/api")
app.include_router(collections.router, prefix="/api")
app.include_router(pages.router)


@app.get("/")
async def root():
    """Send visitors to their dashboard"""
    return RedirectResponse(url="/dashboard", status_code=302)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": settings.APP_NAME}


# Public profile (must be last to not conflict with other routes)
app.get("/{username}")(pages.public_profile)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
