"""
Configuration for the conversation manager.
"""

from .loader import (
    ConfigError,
    ConversationConfig,
    QualityConfig,
    HealthConfig,
    ResetConfig,
    get_config,
    load_conversation_config,
)

__all__ = [
    "ConfigError",
    "ConversationConfig",
    "QualityConfig",
    "HealthConfig",
    "ResetConfig",
    "get_config",
    "load_conversation_config",
]
