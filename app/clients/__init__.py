"""Discord API clients"""
from app.clients.discord_client import DiscordClient, build_avatar_url

__all__ = ["DiscordClient", "build_avatar_url"]
