"""
Discord API client for the OAuth2 login flow.

Discord Login Flow:
1. Frontend redirects the user to Discord's authorize page
2. Discord redirects back to the frontend with an authorization code
3. Frontend POSTs the code to /api/auth/discord
4. We exchange the code for an access token at {api}/oauth2/token
5. We fetch the user at {api}/users/@me with the bearer token
6. We return a normalized profile (avatar resolved to a CDN URL)

Nothing is persisted - the access token is used once and dropped.
"""
import httpx
import logging
from typing import Optional

from app.config import Settings
from app.core.exceptions import BadRequestError, UpstreamAuthError
from app.domain.entities import UserProfile

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Failed to authenticate with Discord"

# Discord hands out five default avatars, picked by discriminator
DEFAULT_AVATAR_COUNT = 5


def build_avatar_url(
    user_id: str,
    avatar_hash: Optional[str],
    discriminator: Optional[str],
    cdn_base_url: str = "https://cdn.discordapp.com"
) -> str:
    """
    Resolve a Discord avatar to a CDN URL.

    Args:
        user_id: Discord user ID
        avatar_hash: Avatar hash from /users/@me (None if the user has no avatar)
        discriminator: Legacy 4-digit discriminator ("0" for new-style usernames)
        cdn_base_url: Discord CDN base URL

    Returns:
        {cdn}/avatars/{id}/{hash}.png when a hash is present, otherwise the
        default avatar {cdn}/embed/avatars/{discriminator % 5}.png

    Note:
        New-style accounts report discriminator "0" and land on index 0.
        Missing or non-numeric discriminators are treated the same way.
    """
    if avatar_hash:
        return f"{cdn_base_url}/avatars/{user_id}/{avatar_hash}.png"

    try:
        index = int(discriminator) % DEFAULT_AVATAR_COUNT
    except (TypeError, ValueError):
        index = 0

    return f"{cdn_base_url}/embed/avatars/{index}.png"


class DiscordClient:
    """
    Client for the Discord OAuth2 and user APIs.

    Usage:
        client = DiscordClient(http_client, settings)
        profile = await client.exchange(code)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        logger_instance: logging.Logger = logger
    ):
        """
        Initialize Discord API client.

        Args:
            http_client: httpx AsyncClient for making HTTP requests
            settings: Application settings containing OAuth credentials
            logger_instance: Logger for tracking API calls
        """
        self._http_client = http_client
        self._settings = settings
        self._logger = logger_instance
        self._api_base_url = settings.discord_api_base_url

    async def exchange(self, code: Optional[str]) -> UserProfile:
        """
        Exchange an authorization code for the user's Discord profile.

        Raises:
            BadRequestError: code is missing (no outbound calls are made)
            UpstreamAuthError: token exchange or profile fetch failed
        """
        if not code:
            raise BadRequestError("Authorization code is required")

        access_token = await self._exchange_code(code)
        user = await self._fetch_current_user(access_token)

        profile = UserProfile(
            id=user.get("id"),
            username=user.get("username"),
            discriminator=user.get("discriminator"),
            avatar=build_avatar_url(
                user.get("id"),
                user.get("avatar"),
                user.get("discriminator"),
                self._settings.discord_cdn_base_url
            ),
            email=user.get("email")
        )

        self._logger.info(f"✅ Discord login for user {profile.id}")
        return profile

    async def _exchange_code(self, code: str) -> str:
        """POST the code to the token endpoint and return the access token"""
        response = await self._request(
            "POST",
            f"{self._api_base_url}/oauth2/token",
            data={
                "client_id": self._settings.discord_client_id,
                "client_secret": self._settings.discord_client_secret,
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._settings.discord_redirect_uri
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )

        token_data = self._json(response)
        access_token = token_data.get("access_token")
        if not access_token:
            self._logger.error("Token exchange response missing access_token")
            raise UpstreamAuthError(
                AUTH_FAILED_MESSAGE,
                details=token_data.get("error_description") or "No access token in Discord response"
            )
        return access_token

    async def _fetch_current_user(self, access_token: str) -> dict:
        response = await self._request(
            "GET",
            f"{self._api_base_url}/users/@me",
            headers={"Authorization": f"Bearer {access_token}"}
        )
        return self._json(response)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Send a request, turning transport errors and non-2xx responses into
        UpstreamAuthError. No retries.
        """
        try:
            response = await self._http_client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            details = str(e) or e.__class__.__name__
            self._logger.error(f"Discord OAuth Error: {details}")
            raise UpstreamAuthError(AUTH_FAILED_MESSAGE, details=details) from e

        if not response.is_success:
            error_data = self._safe_json(response)
            self._logger.error(
                f"Discord OAuth Error: status {response.status_code} from {url} - {error_data or response.text}"
            )
            details = None
            if isinstance(error_data, dict):
                details = error_data.get("error_description")
            raise UpstreamAuthError(
                AUTH_FAILED_MESSAGE,
                details=details or f"Request failed with status code {response.status_code}"
            )

        return response

    def _json(self, response: httpx.Response) -> dict:
        data = self._safe_json(response)
        if not isinstance(data, dict):
            raise UpstreamAuthError(AUTH_FAILED_MESSAGE, details="Invalid JSON in Discord response")
        return data

    @staticmethod
    def _safe_json(response: httpx.Response):
        try:
            return response.json()
        except ValueError:
            return None
