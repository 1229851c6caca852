import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from family_loans.config import settings
from family_loans.core.exceptions import (
    InvalidCredentialsException,
    NotFoundException,
    SessionException,
    UnauthorizedException,
    ValidationException,
)
from family_loans.core.logging import setup_logging
from family_loans.database import init_db
from family_loans.routes import auth_routes, family_member_routes, loan_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
    if settings.AUTO_CREATE_TABLES:
        init_db()
    logger.info("%s %s started (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield
    logger.info("%s stopped", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    """Every error body is {"error": "<message>"}"""
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors or any(error.get("type") == "missing" for error in errors):
        return "Missing required fields"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return error_response(status.HTTP_401_UNAUTHORIZED, "Not authenticated")


@app.exception_handler(InvalidCredentialsException)
async def invalid_credentials_exception_handler(request: Request, exc: InvalidCredentialsException):
    return error_response(status.HTTP_401_UNAUTHORIZED, str(exc))


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SessionException)
async def session_exception_handler(request: Request, exc: SessionException):
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Family Loans API",
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(auth_routes.router, prefix="/api", tags=["Auth"])
app.include_router(
    family_member_routes.router, prefix="/api/family-members", tags=["Family Members"]
)
app.include_router(loan_routes.router, prefix="/api/loans", tags=["Loans"])
