"""
Discord message model

Pydantic model for the payload posted to a channel's messages endpoint.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DiscordMessage(BaseModel):
    """A Discord message built by a notification."""

    model_config = {
        "validate_assignment": True,
    }

    body: str = Field("", description="Message text content")
    embed: Optional[Dict[str, Any]] = Field(None, description="Rich embed object")
    components: Optional[List[Dict[str, Any]]] = Field(None, description="Message components (buttons, selects)")

    @classmethod
    def create(
        cls,
        body: str = "",
        embed: Optional[Dict[str, Any]] = None,
        components: Optional[List[Dict[str, Any]]] = None
    ) -> "DiscordMessage":
        return cls(body=body, embed=embed, components=components)

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON payload Discord expects, omitting unset parts."""
        payload: Dict[str, Any] = {"content": self.body}
        if self.embed:
            payload["embed"] = self.embed
        if self.components:
            payload["components"] = self.components
        return payload
