"""
Discord notification channel and message model
"""
from .channel import DiscordChannel, DiscordNotification, Notifiable
from .message import DiscordMessage

__all__ = ['DiscordChannel', 'DiscordMessage', 'DiscordNotification', 'Notifiable']
