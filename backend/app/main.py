# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Routers
from app.routes.auth import auth_router
from app.routes.facilities import facility_router
from app.routes.profile import profile_router
from app.routes.upload import upload_router

from facilitiease.core.config import settings

# Error Handlers
from facilitiease.core.error_handlers import (
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from facilitiease.core.exceptions import DomainError
from facilitiease.core.logging import setup_logging
from facilitiease.db.database import mongo

setup_logging()
logger = logging.getLogger(__name__)


# ------------------------
# MongoDB lifecycle
# ------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    await mongo.connect()
    try:
        yield
    finally:
        await mongo.close()


# ------------------------
# App init
# ------------------------
app = FastAPI(title="FacilitiEase API", version="1.0.0", lifespan=lifespan)

# ------------------------
# CORS
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# Routes
# ------------------------
app.include_router(auth_router, prefix="/api")
app.include_router(profile_router, prefix="/api")
app.include_router(facility_router, prefix="/api")
app.include_router(upload_router, prefix="/api")

# ------------------------
# Exception handlers
# ------------------------
app.add_exception_handler(DomainError, domain_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# ------------------------
# Health & root
# ------------------------
@app.get("/")
async def root():
    return {"message": "Welcome to FacilitiEase API"}


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
