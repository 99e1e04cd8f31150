# backend/styledecor/main.py

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import (
    api_admin,
    api_booking,
    api_decorator,
    api_payment,
    api_service,
    api_user,
)
from .core.config import Settings, settings as default_settings
from .core.observability import setup_logging
from .database import Storage
from .services.identity import IdentityVerifier
from .services.payment_gateway import StripeCheckoutGateway
from .utils.errors import DomainError, Unauthenticated

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
    payment_gateway=None,
) -> FastAPI:
    """Build the API with its collaborators.

    Anything not passed in is built from ``settings``. The storage context is
    opened (schema created) at startup and disposed at shutdown.
    """
    settings = settings or default_settings
    storage = storage or Storage(settings.SQLALCHEMY_DATABASE_URL)
    identity_verifier = identity_verifier or IdentityVerifier(
        settings.SECRET_KEY,
        settings.ALGORITHM,
        settings.TOKEN_AUDIENCE or None,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    payment_gateway = payment_gateway or StripeCheckoutGateway(
        settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.create_all()
        logger.info("StyleDecor API started")
        try:
            yield
        finally:
            storage.dispose()

    app = FastAPI(title="StyleDecor API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.identity_verifier = identity_verifier
    app.state.payment_gateway = payment_gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS origins set to: %s", settings.CORS_ORIGINS)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        level = logging.WARNING if exc.status_code >= 500 else logging.INFO
        logger.log(level, "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.to_detail()},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Return validation errors with details and log them for debugging."""
        errors = exc.errors()
        logger.warning("Validation error at %s: %s", request.url.path, errors)
        field_errors = {
            ".".join(str(part) for part in err.get("loc", ()) if part != "body"): err.get("msg", "invalid")
            for err in errors
        }
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder(
                {"detail": {"message": "Invalid request", "field_errors": field_errors}}
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": {"message": "Internal server error", "field_errors": {}}},
        )

    @app.get("/", tags=["health"])
    def root():
        return {"message": "Hello from Server.."}

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "service": "styledecor-api"}

    app.include_router(api_service.router)
    app.include_router(api_decorator.router)
    app.include_router(api_user.router)
    app.include_router(api_booking.router)
    app.include_router(api_payment.router)
    app.include_router(api_admin.router)
    return app


app = create_app()
