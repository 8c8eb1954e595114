"""
FastAPI Application: Hexagonal Architecture
Main entry point for the Receipt & Statement Extractor API
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from api.v1.routes import health, receipts, statements
from api.v1.dependencies import get_store, close_store
from config import settings


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Receipt & Statement Extractor API",
    description="Receipt OCR and bank statement import for Indonesian personal finance",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize database connection pool on startup"""
    try:
        store = await get_store()
        health_status = await store.health_check()
        logger.info(f"Database connected: {health_status}")
    except Exception as e:
        logger.warning(f"Database connection failed: {e}")
        logger.warning("API will start but saving transactions will fail")


@app.on_event("shutdown")
async def shutdown_event():
    """Close database connection pool on shutdown"""
    await close_store()
    logger.info("Database connection closed")


# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(receipts.router, prefix="/api/v1", tags=["Receipts"])
app.include_router(statements.router, prefix="/api/v1", tags=["Statements"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Receipt & Statement Extractor API",
        "version": "1.0.0",
        "architecture": "Hexagonal (Ports & Adapters)",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    # Run with uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
