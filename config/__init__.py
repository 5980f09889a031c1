"""Configuration module"""

from .settings import AssistantConfig, VoiceClientConfig

__all__ = ["AssistantConfig", "VoiceClientConfig"]
