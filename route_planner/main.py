"""
FastAPI application entry point.

Assembles the FastAPI app with the route planner router.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from route_planner.planner.route_api import router as route_router
from route_planner.shared.logging.config import TEXT_FORMAT, DATE_FORMAT, configure_from_env


# ============================================================================
# Logging configuration (single source of truth for the application)
# ============================================================================
logging.basicConfig(
    level=logging.INFO,
    format=TEXT_FORMAT,
    datefmt=DATE_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,  # Override any prior basicConfig calls
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)

# ROUTE_PLANNER_LOG_FORMAT=json moves route_planner.* to JSON lines
configure_from_env()


app = FastAPI(
    title="Speech Route Planner",
    description="Campaign street-speech routes for Ueda City, planned with grounded Gemini",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(route_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Speech Route Planner",
        "version": "0.1.0",
        "endpoints": {
            "districts": "/api/route/districts",
            "sessions": "/api/route/sessions",
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
