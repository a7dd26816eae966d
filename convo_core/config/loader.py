"""
CONFIG_LOADER
=============

Configuration for the conversation manager.

Handles:
- Conversation limits (window size, token budgets)
- Quality filter patterns
- Health thresholds
- Reset markers

All sections are frozen dataclasses: a config value is built once at
startup and passed to the manager, never mutated afterwards.

Usage:
    from convo_core.config import get_config, load_conversation_config

    config = get_config()
    print(config.max_recent_messages)

    config = load_conversation_config("./conversation.json")
    print(config.health.max_error_messages)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONVO_CORE_CONFIG"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


def _section(data: Dict, name: str) -> Dict:
    """Nested config section; absent means defaults."""
    if name not in data:
        return {}
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a JSON object, got {type(section).__name__}")
    return section


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class QualityConfig:
    """Quality filter settings.

    The doubled-error patterns are literal substrings; the apology
    patterns are case-insensitive regular expressions. Both are tied
    to the wording of whatever LLM client produced the messages.
    """
    min_content_length: int = 5
    fingerprint_chars: int = 100
    truncation_marker: str = "... [truncated]"
    doubled_error_patterns: Tuple[str, ...] = ("Error: Error:",)
    repeated_apology_patterns: Tuple[str, ...] = (r"I'm sorry.*I'm sorry",)

    def to_dict(self) -> Dict:
        return {
            "min_content_length": self.min_content_length,
            "fingerprint_chars": self.fingerprint_chars,
            "truncation_marker": self.truncation_marker,
            "doubled_error_patterns": list(self.doubled_error_patterns),
            "repeated_apology_patterns": list(self.repeated_apology_patterns),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "QualityConfig":
        return cls(
            min_content_length=data.get("min_content_length", 5),
            fingerprint_chars=data.get("fingerprint_chars", 100),
            truncation_marker=data.get("truncation_marker", "... [truncated]"),
            doubled_error_patterns=tuple(
                data.get("doubled_error_patterns", ["Error: Error:"])
            ),
            repeated_apology_patterns=tuple(
                data.get("repeated_apology_patterns", [r"I'm sorry.*I'm sorry"])
            ),
        )


@dataclass(frozen=True)
class HealthConfig:
    """Thresholds for conversation health checks."""
    error_indicators: Tuple[str, ...] = ("error", "sorry, i encountered")
    max_error_messages: int = 5
    repetition_window: int = 10
    repetition_min_messages: int = 5
    repetition_prefix_chars: int = 50
    repetition_ratio: float = 0.5
    reset_multiplier: float = 1.5

    def to_dict(self) -> Dict:
        return {
            "error_indicators": list(self.error_indicators),
            "max_error_messages": self.max_error_messages,
            "repetition_window": self.repetition_window,
            "repetition_min_messages": self.repetition_min_messages,
            "repetition_prefix_chars": self.repetition_prefix_chars,
            "repetition_ratio": self.repetition_ratio,
            "reset_multiplier": self.reset_multiplier,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "HealthConfig":
        return cls(
            error_indicators=tuple(
                data.get("error_indicators", ["error", "sorry, i encountered"])
            ),
            max_error_messages=data.get("max_error_messages", 5),
            repetition_window=data.get("repetition_window", 10),
            repetition_min_messages=data.get("repetition_min_messages", 5),
            repetition_prefix_chars=data.get("repetition_prefix_chars", 50),
            repetition_ratio=data.get("repetition_ratio", 0.5),
            reset_multiplier=data.get("reset_multiplier", 1.5),
        )


@dataclass(frozen=True)
class ResetConfig:
    """Reset controller settings.

    Essential markers identify system messages that survive a reset:
    fetched-data blocks, permission context and conversation state.
    """
    digest_chars: int = 200
    essential_markers: Tuple[str, ...] = (
        "[DATA FETCHED",
        "USER PERMISSIONS",
        "CONVERSATION STATE",
    )

    def to_dict(self) -> Dict:
        return {
            "digest_chars": self.digest_chars,
            "essential_markers": list(self.essential_markers),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ResetConfig":
        return cls(
            digest_chars=data.get("digest_chars", 200),
            essential_markers=tuple(
                data.get("essential_markers", list(cls.essential_markers))
            ),
        )


@dataclass(frozen=True)
class ConversationConfig:
    """Top-level conversation management configuration.

    min_message_quality is reserved: no algorithm reads it yet. It is
    kept so existing config files round-trip unchanged.
    """
    max_recent_messages: int = 20
    summarize_after: int = 30
    max_total_messages: int = 50
    max_message_tokens: int = 500
    max_context_tokens: int = 32000
    min_message_quality: float = 0.3
    chars_per_token: int = 4
    quality: QualityConfig = field(default_factory=QualityConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    reset: ResetConfig = field(default_factory=ResetConfig)

    def to_dict(self) -> Dict:
        return {
            "max_recent_messages": self.max_recent_messages,
            "summarize_after": self.summarize_after,
            "max_total_messages": self.max_total_messages,
            "max_message_tokens": self.max_message_tokens,
            "max_context_tokens": self.max_context_tokens,
            "min_message_quality": self.min_message_quality,
            "chars_per_token": self.chars_per_token,
            "quality": self.quality.to_dict(),
            "health": self.health.to_dict(),
            "reset": self.reset.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ConversationConfig":
        if not isinstance(data, dict):
            raise ConfigError("Config must be a JSON object")
        return cls(
            max_recent_messages=data.get("max_recent_messages", 20),
            summarize_after=data.get("summarize_after", 30),
            max_total_messages=data.get("max_total_messages", 50),
            max_message_tokens=data.get("max_message_tokens", 500),
            max_context_tokens=data.get("max_context_tokens", 32000),
            min_message_quality=data.get("min_message_quality", 0.3),
            chars_per_token=data.get("chars_per_token", 4),
            quality=QualityConfig.from_dict(_section(data, "quality")),
            health=HealthConfig.from_dict(_section(data, "health")),
            reset=ResetConfig.from_dict(_section(data, "reset")),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "ConversationConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config in {path} must be a JSON object")
        return cls.from_dict(data)


# ============================================================================
# LOADING
# ============================================================================

def load_conversation_config(config_path: Optional[str] = None) -> ConversationConfig:
    """
    Load conversation configuration.

    Resolution order: explicit path, then the CONVO_CORE_CONFIG
    environment variable, then built-in defaults.

    Args:
        config_path: Optional path to a JSON config file

    Returns:
        ConversationConfig
    """
    path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return ConversationConfig()

    config = ConversationConfig.from_file(path)
    logger.info("Loaded conversation config from %s", path)
    return config


_config: Optional[ConversationConfig] = None


def get_config() -> ConversationConfig:
    """Get or create the process-wide configuration."""
    global _config
    if _config is None:
        _config = load_conversation_config()
    return _config
