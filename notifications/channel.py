"""
Discord notification channel

Adapter a notification dispatcher calls to deliver a single notification
through the Discord API client.
"""
import logging
from typing import Any, Dict, Optional, Protocol

from discord_api.client import DiscordClient
from notifications.message import DiscordMessage
from utils.logging import log_context, set_notification_context

logger = logging.getLogger(f'{__name__}.DiscordChannel')


class Notifiable(Protocol):
    """Anything that can be routed a Discord notification."""

    def route_notification_for(self, channel: str) -> Optional[str]:
        ...


class DiscordNotification(Protocol):
    """A notification that can render itself as a Discord message."""

    def to_discord(self, notifiable: Notifiable) -> DiscordMessage:
        ...


class DiscordChannel:
    """Delivers notifications to the Discord channel a notifiable routes to."""

    def __init__(self, client: DiscordClient):
        self.client = client

    async def send(self, notifiable: Notifiable, notification: DiscordNotification) -> Optional[Dict[str, Any]]:
        """
        Send the given notification.

        Args:
            notifiable: Recipient providing the Discord channel id
            notification: Notification rendering the message

        Returns:
            The created message, or None when the notifiable has no Discord route

        Raises:
            CouldNotSendNotification: If Discord rejects or never receives the message
        """
        channel_id = notifiable.route_notification_for('discord')
        if not channel_id:
            logger.debug(f"No Discord route for {type(notifiable).__name__}, skipping")
            return None

        token = set_notification_context(
            channel_id=channel_id,
            notification=type(notification).__name__
        )
        try:
            message = notification.to_discord(notifiable)
            return await self.client.send(channel_id, message.to_payload())
        finally:
            log_context.reset(token)
