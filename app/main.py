from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger
from contextlib import asynccontextmanager

import uvicorn

from app.config import settings
from app.database import engine, Base
from app.users.routers import router as user_router
from app.transactions.router import router as transaction_router


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.LOG_FILE:
        logger.add(settings.LOG_FILE, rotation="500 MB", level=settings.LOG_LEVEL)
    logger.info("Application startup")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Application shutdown")


# Create app
app = FastAPI(
    title="PERSONAL FINANCE TRACKER",
    description="An API for tracking personal income and expenses per user account.",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def case_insensitive_paths(request: Request, call_next):
    # The browser client calls /api/Auth/... and /api/Transactions/...
    request.scope["path"] = request.scope["path"].lower()
    return await call_next(request)


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.opt(exception=exc).error(f"[DB ERROR] {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Database operation failed. Please try again later."},
    )


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"[UNEXPECTED ERROR] {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Unexpected server error. Please try again later."},
    )


# Routers
app.include_router(user_router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(transaction_router, prefix=f"{settings.API_PREFIX}/transactions", tags=["Transactions"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.SERVER_IP, port=settings.SERVER_PORT)
