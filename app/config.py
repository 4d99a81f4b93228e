"""Configuration management using environment variables"""
import os
from urllib.parse import urlsplit
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_FRONTEND_URL = "https://giorgio.is-a.dev/emirates/careers"


class Settings:
    """Application settings - only what the relay needs"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # Discord OAuth credentials
        if self.environment == "production":
            self.discord_client_id = self._get_required("DISCORD_CLIENT_ID")
            self.discord_client_secret = self._get_required("DISCORD_CLIENT_SECRET")
        else:
            # Development mode: Load from .env file (never commit secrets to git)
            self.discord_client_id = os.getenv("DISCORD_CLIENT_ID", "")
            self.discord_client_secret = os.getenv("DISCORD_CLIENT_SECRET", "")
            self._warn_missing_credentials()

        # Frontend URL - the only CORS origin allowed
        self.frontend_url = os.getenv("FRONTEND_URL", DEFAULT_FRONTEND_URL)

        # The frontend URL doubles as the OAuth redirect URI unless overridden
        self.discord_redirect_uri = os.getenv("DISCORD_REDIRECT_URI", self.frontend_url)

        # Discord endpoints (overridable for staging/test doubles)
        self.discord_api_base_url = os.getenv(
            "DISCORD_API_BASE_URL", "https://discord.com/api"
        ).rstrip("/")
        self.discord_cdn_base_url = os.getenv(
            "DISCORD_CDN_BASE_URL", "https://cdn.discordapp.com"
        ).rstrip("/")

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "3000"))

        # Outbound HTTP deadline for Discord API and webhook calls
        self.http_timeout = float(os.getenv("HTTP_TIMEOUT", "10.0"))  # seconds

        # Display name used for webhook notifications
        self.webhook_username = os.getenv("WEBHOOK_USERNAME", "Emirates Applications")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def cors_origin(self) -> str:
        """
        Origin of the frontend URL (scheme://host[:port]).

        Browsers send the bare origin in the Origin header, so the path part
        of FRONTEND_URL (e.g. /emirates/careers) must be stripped.
        """
        parts = urlsplit(self.frontend_url)
        if not parts.scheme or not parts.netloc:
            return self.frontend_url.rstrip("/")
        return f"{parts.scheme}://{parts.netloc}"

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                f"Required in production mode."
            )
        return value

    def _warn_missing_credentials(self) -> None:
        """Warn about missing credentials in development mode."""
        import logging
        logger = logging.getLogger(__name__)

        required_credentials = {
            "DISCORD_CLIENT_ID": "OAuth2 client ID. Get from: https://discord.com/developers/applications",
            "DISCORD_CLIENT_SECRET": "OAuth2 client secret from the same application page.",
        }

        missing = [
            f"{key} - {desc}"
            for key, desc in required_credentials.items()
            if not getattr(self, key.lower(), "").strip()
        ]

        if missing:
            logger.warning(
                "⚠️  Missing configuration - Discord login will fail until these are set:\n" +
                "\n".join(f"  - {config}" for config in missing) +
                "\n\nCopy .env.example to .env and fill in your credentials."
            )


# Global settings instance
settings = Settings()
