"""
Seat Board - FastAPI Backend
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from app.core.config import settings
from app.core.db import engine, Base
from app.api import routes_pages, routes_threads
from app.services.repositories import use_firestore
from app.utils.responses import error_response, method_not_allowed

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if not use_firestore():
        # Create database tables
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Seat Board",
    description="Seat selection grid with a message board per seat",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Answer wrong-method requests with the allowed methods listed"""
    if exc.status_code == 405:
        allow = (exc.headers or {}).get("Allow", "")
        logger.error(f"Method Not Allowed: {request.method} {request.url.path}")
        return method_not_allowed([m.strip() for m in allow.split(",") if m.strip()])
    return await http_exception_handler(request, exc)

@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are reported like missing fields"""
    logger.error(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return error_response(
        message="Invalid Request",
        details=jsonable_encoder(exc.errors()),
        status_code=400
    )

# Mount static files
os.makedirs("static", exist_ok=True)
app.mount("/static", StaticFiles(directory="static"), name="static")

# Include routers
app.include_router(routes_threads.router, prefix="/api", tags=["threads"])
app.include_router(routes_pages.router, tags=["pages"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
