"""
Discord login endpoint.

The frontend completes the Discord authorize step itself and posts the
resulting authorization code here; we trade it for the user's profile.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import get_discord_client
from app.clients.discord_client import DiscordClient

router = APIRouter()
logger = logging.getLogger(__name__)


class DiscordAuthRequest(BaseModel):
    """Authorization code returned by Discord to the frontend"""
    code: Optional[str] = None


class DiscordUserResponse(BaseModel):
    """Normalized Discord profile (fields Discord omits come back as null)"""
    id: Optional[str] = None
    username: Optional[str] = None
    discriminator: Optional[str] = None
    avatar: str
    email: Optional[str] = None


@router.post("/auth/discord", response_model=DiscordUserResponse)
async def discord_login(
    request: Optional[DiscordAuthRequest] = None,
    discord: DiscordClient = Depends(get_discord_client)
):
    """
    Exchange a Discord authorization code for the user's profile.

    Returns:
        id, username, discriminator, avatar (CDN URL) and email

    Errors:
        400 if code is missing (Discord is not contacted)
        500 with {error, details} if Discord rejects the code or is unreachable
    """
    code = request.code if request else None
    profile = await discord.exchange(code)
    return profile.to_dict()
