"""
Discord API client

Thin aiohttp-based wrapper around the Discord REST API used for delivering
notifications. The HTTP session is injected; this module only builds
requests, authenticates them and turns failures into CouldNotSendNotification.
"""
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Union

import aiohttp

from config import get_config
from exceptions import CouldNotSendNotification, ConfigurationException

logger = logging.getLogger(f'{__name__}.DiscordClient')

JSONBody = Union[Dict[str, Any], List[Any]]


class DiscordClient:
    """
    Async client for the Discord HTTP API.

    Every request carries the `Bot` authorization header. No retries,
    rate-limit handling or caching happen here.
    """

    base_url = 'https://discord.com/api'

    def __init__(self, session: aiohttp.ClientSession, token: str):
        """
        Args:
            session: HTTP session used for every request, owned by the caller
            token: Discord bot token
        """
        self.session = session
        self.token = token

    async def send(self, channel_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Send a message to a Discord channel and return the created message."""
        return await self._request('POST', f'channels/{channel_id}/messages', data)

    async def delete_message(self, channel_id: str, message_id: str) -> JSONBody:
        """Delete a message from a Discord channel."""
        return await self._request('DELETE', f'channels/{channel_id}/messages/{message_id}')

    async def get_messages(self, channel_id: str) -> List[Dict[str, Any]]:
        """Fetch the messages of a Discord channel."""
        return await self._request('GET', f'channels/{channel_id}/messages')

    async def get_has_joined_guild(self, guild_id: str, user_id: str) -> bool:
        """
        Check whether a user is a member of a guild.

        Never raises: any failure during the member lookup means False.
        """
        try:
            result = await self._request('GET', f'guilds/{guild_id}/members/{user_id}')
        except Exception as e:
            logger.debug(f"Guild member lookup failed for {user_id} in {guild_id}: {e}")
            return False

        return isinstance(result, dict) and result.get('user') is not None

    async def get_private_channel(self, user_id: str) -> str:
        """Open (or fetch) the DM channel with a user and return its id."""
        result = await self._request('POST', 'users/@me/channels', {'recipient_id': user_id})
        return result['id']

    def _build_url(self, endpoint: str) -> str:
        """Join the base URL and endpoint with exactly one slash."""
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    async def _request(
        self,
        verb: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform an HTTP request against the Discord API.

        Args:
            verb: HTTP method
            endpoint: Path relative to the base URL
            data: JSON payload, only sent when non-empty

        Returns:
            Decoded JSON body ({} for an empty body)

        Raises:
            DiscordHTTPError: Discord answered with a non-2xx status
            DiscordCommunicationError: No usable response was received
            DiscordAPIError: The body carries a positive `code`
        """
        url = self._build_url(endpoint)

        options: Dict[str, Any] = {
            'headers': {'Authorization': f'Bot {self.token}'}
        }
        if data:
            options['json'] = data

        logger.debug(f"{verb}: {endpoint} data: {data}")

        try:
            async with self.session.request(verb, url, **options) as response:
                if not 200 <= response.status < 300:
                    cause = aiohttp.ClientResponseError(
                        response.request_info,
                        response.history,
                        status=response.status,
                        message=response.reason or '',
                        headers=response.headers
                    )
                    error_text = (await response.read()).decode('utf-8', errors='replace')
                    logger.debug(f"{verb} {url} returned {response.status}: {error_text[:1200]}")
                    raise CouldNotSendNotification.service_responded_with_an_http_error(
                        response, response.status, cause, _loads_or_none(error_text)
                    )

                raw = await response.read()
        except CouldNotSendNotification:
            raise
        except aiohttp.ClientResponseError as e:
            # Sessions created with raise_for_status=True fail before we see the response
            logger.debug(f"{verb} {url} returned {e.status}: {e.message}")
            raise CouldNotSendNotification.service_responded_with_an_http_error(None, e.status, e)
        except Exception as e:
            logger.debug(f"{verb} {url} failed: {e}")
            raise CouldNotSendNotification.service_communication_error(e)

        try:
            body = json.loads(raw) if raw.strip() else {}
        except ValueError as e:
            # Covers both invalid JSON and undecodable bytes
            raise CouldNotSendNotification.service_communication_error(e)

        code = body.get('code') if isinstance(body, dict) else None
        if isinstance(code, (int, float)) and not isinstance(code, bool) and code > 0:
            raise CouldNotSendNotification.service_responded_with_an_api_error(body, code)

        logger.debug(f"{verb} Response: {str(body)[:1200]}{'...' if len(str(body)) > 1200 else ''}")
        return body


def _loads_or_none(raw: str) -> Optional[JSONBody]:
    """Decode an error body if it is JSON, otherwise None."""
    try:
        return json.loads(raw)
    except ValueError:
        return None


@asynccontextmanager
async def get_discord_client(token: Optional[str] = None) -> AsyncIterator[DiscordClient]:
    """
    Get a Discord client with its own session as an async context manager.

    Usage:
        async with get_discord_client() as client:
            await client.send(channel_id, {'content': 'hello'})
    """
    config = get_config()
    token = token or config.discord_bot_token
    if not token:
        raise ConfigurationException("DISCORD_BOT_TOKEN must be configured")

    timeout = aiohttp.ClientTimeout(total=config.request_timeout, connect=config.connect_timeout)
    session = aiohttp.ClientSession(timeout=timeout, headers={'User-Agent': config.user_agent})
    try:
        yield DiscordClient(session, token)
    finally:
        await session.close()
