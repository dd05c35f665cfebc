from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import RequestIdMiddleware, configure_logging
from app.api.error_handlers import register_error_handlers
from app.api.v1 import swipes, matches, users

configure_logging(app_env=settings.app_env)

app = FastAPI(
    title="Swipe Match API",
    description="FastAPI backend for swipe-based mutual matching",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

register_error_handlers(app)

# Include API routers
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(swipes.router, prefix="/api/v1/swipes", tags=["Swipes"])
app.include_router(matches.router, prefix="/api/v1/matches", tags=["Matches"])


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Swipe Match API", "docs": "/docs"}
