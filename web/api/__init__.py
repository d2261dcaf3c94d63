"""FastAPI backend for the Regicide engine."""

import logging
import os
import re
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from regicide_engine.errors import RegicideError
from web.api.routes import games

logger = logging.getLogger(__name__)


def error_kind(exc: RegicideError) -> str:
    """``IllegalPlay`` -> ``illegal_play``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).lower()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan."""
    logger.info("Regicide API starting")
    yield
    logger.info("Regicide API shutting down")


app = FastAPI(
    title="Regicide Game API",
    description="API for playing the Regicide cooperative card game",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
cors_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
]

# Add production frontend URL if set
prod_url = os.environ.get("FRONTEND_URL")
if prod_url:
    cors_origins.append(prod_url)

logger.info("CORS origins configured: %s", cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RegicideError)
async def regicide_error_handler(request: Request, exc: RegicideError):
    """Rejected actions leave the game untouched and come back as 400s."""
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"type": "error", "error": error_kind(exc), "message": str(exc)},
    )


# Include routers
app.include_router(games.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
