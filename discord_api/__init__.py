"""
Discord API client layer

HTTP client for delivering notifications through the Discord REST API.
"""
from .client import DiscordClient, get_discord_client

__all__ = ['DiscordClient', 'get_discord_client']
