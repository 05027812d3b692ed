"""
Configuration management for the Discord notification client
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotifierConfig(BaseSettings):
    """Application configuration with environment variable support."""

    # Discord settings
    discord_bot_token: str = ""

    # HTTP session settings
    request_timeout: int = 10
    connect_timeout: int = 5
    user_agent: str = "DiscordBot (https://github.com/discord-notifications, 1.0)"

    # Application settings
    log_level: str = "INFO"
    log_file: str = "logs/discord_notifications.json"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


# Global configuration instance - lazily initialized to avoid import-time errors
_config = None

def get_config() -> NotifierConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = NotifierConfig()
    return _config
