"""
Emirates Careers OAuth Server - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from app.api import applications, auth, webhooks
from app.application.application_service import ApplicationService
from app.clients.discord_client import DiscordClient
from app.config import Settings, settings
from app.core.exceptions import RelayError
from app.repositories.application_repository import InMemoryApplicationRepository
from app.services.webhook_notifier import WebhookNotifier
from app.version import __version__
import httpx
import logging
import re


# Custom logging filter to redact sensitive data
class SensitiveDataFilter(logging.Filter):
    """Filter to redact OAuth secrets from logs"""

    _PATTERNS = [
        # Form-encoded / query string values: access_token=..., client_secret=..., code=...
        (re.compile(r"\b(access_token|client_secret|refresh_token|code)=([^&\s'\"]+)"), r"\1=[REDACTED]"),
        # JSON/dict representations: 'access_token': '...'
        (re.compile(r"(['\"](?:access_token|client_secret|refresh_token)['\"]:\s*['\"])([^'\"]+)(['\"])"), r"\1[REDACTED]\3"),
        # Bearer tokens in headers
        (re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/-]+=*"), r"\1[REDACTED]"),
        # Discord webhook tokens: /api/webhooks/{id}/{token}
        (re.compile(r"(/webhooks/\d+/)[A-Za-z0-9._-]+"), r"\1[REDACTED]"),
    ]

    def filter(self, record):
        # httpx passes the request URL through record.args, so redact the
        # fully formatted message and drop the args
        msg = record.getMessage()
        for pattern, replacement in self._PATTERNS:
            msg = pattern.sub(replacement, msg)
        record.msg = msg
        record.args = None
        return True


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Add filter to all loggers
for handler in logging.root.handlers:
    handler.addFilter(SensitiveDataFilter())

# Add filter to httpx logger (logs API requests)
httpx_logger = logging.getLogger('httpx')
httpx_logger.addFilter(SensitiveDataFilter())

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded instance)
        http_transport: Transport for the shared outbound HTTP client
            (tests pass httpx.MockTransport here)
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - handles startup and shutdown"""
        # Startup
        logger.info("🚀 Starting Emirates Careers OAuth Server")
        logger.info(f"📦 Version: {__version__}")
        logger.info(f"📝 Environment: {app_settings.environment}")

        http_client = httpx.AsyncClient(
            timeout=app_settings.http_timeout,
            transport=http_transport
        )

        # Lifetime-scoped components; state lives only as long as this process
        repository = InMemoryApplicationRepository()
        notifier = WebhookNotifier(
            http_client,
            username=app_settings.webhook_username,
            timeout=app_settings.http_timeout
        )
        app.state.webhook_notifier = notifier
        app.state.discord_client = DiscordClient(http_client, app_settings)
        app.state.application_service = ApplicationService(repository, notifier)

        logger.warning("⚠️ Applications are stored in memory and will be lost on restart")
        logger.info(f"🚀 Listening on port {app_settings.port}")
        logger.info(f"📍 Frontend URL: {app_settings.frontend_url}")

        yield

        # Shutdown
        logger.info("Shutting down...")
        await notifier.drain()
        await http_client.aclose()

    app = FastAPI(
        title="Emirates Careers OAuth Server",
        description="Discord login relay and application intake for the Emirates careers site",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # ============================================
    # CORS Middleware Configuration
    # ============================================
    # Only the configured frontend may call the API, with credentials
    allowed_origins = [app_settings.cors_origin]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info(f"✅ CORS configured for origins: {allowed_origins}")

    @app.exception_handler(RelayError)
    async def relay_exception_handler(request: Request, exc: RelayError):
        """Map relay errors to {error, details} responses"""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies are reported as 400, like missing fields"""
        logger.error(f"Validation error for {request.method} {request.url.path}")
        logger.error(f"Validation errors: {exc.errors()}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request body",
                "details": jsonable_encoder(exc.errors())
            }
        )

    # Register API routes
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(webhooks.router, prefix="/api", tags=["webhooks"])
    app.include_router(applications.router, prefix="/api", tags=["applications"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "status": "Emirates Careers OAuth Server Running",
            "version": __version__
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint - no dependency checks, nothing to check"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": app_settings.environment
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
