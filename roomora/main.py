"""
FastAPI application entry point.

Assembles the FastAPI app with the recommendation and conversation routers.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomora.conversation.conversation_api import router as conversation_router
from roomora.recommendations.recommendations_api import (
    router as recommendations_router,
)
from roomora.shared.config import get_settings
from roomora.shared.logging import setup_logging


# ============================================================================
# Logging configuration (single source of truth for all components)
# ============================================================================
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,  # Override any prior basicConfig calls
)

if get_settings().log_json:
    setup_logging(level=logging.INFO)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)


# Create FastAPI app
app = FastAPI(
    title="Roomora",
    description="Location-aware hotel recommendations and booking assistant",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(recommendations_router)
app.include_router(conversation_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    settings = get_settings()
    return {
        "name": "Roomora",
        "version": "0.1.0",
        "components": {
            "recommendations": {
                "status": "active",
                "endpoints": "/api/recommendations",
                "synthetic_fallback": settings.synthetic_fallback,
            },
            "conversation": {
                "status": "active",
                "endpoints": "/api/conversation",
                "copy_service": "enabled" if settings.copy_enabled else "local",
            },
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
