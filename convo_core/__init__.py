"""
CONVO_CORE
==========

Bounded conversation-context manager for LLM-driven assistants.

Features:
- Quality filtering of redundant and low-value messages
- Sliding window with an extractive summary of older turns
- Health detection and hard reset of degraded conversations
- Immutable, file-loadable configuration

Usage:
    from convo_core import ConversationManager, ChatMessage

    manager = ConversationManager()
    result = manager.manage(history, "any update on ticket 10119?")
    prompt_messages = result.managed_messages
"""

__version__ = "1.0.0"

# Models
from .models import (
    Role,
    Suggestion,
    ChatMessage,
    HealthReport,
    ManagementResult,
    KeyInfo,
    coerce_messages,
)

# Configuration
from .config import (
    ConfigError,
    ConversationConfig,
    QualityConfig,
    HealthConfig,
    ResetConfig,
    get_config,
    load_conversation_config,
)

# Context management
from .context import (
    ConversationManager,
    manage_conversation,
    EntityExtractor,
    Extraction,
    HeuristicExtractor,
    estimate_tokens,
    estimate_conversation_tokens,
    clean_conversation,
    summarize,
    extract_key_info,
    assess,
    apply_window,
    reset_conversation,
)

__all__ = [
    # Version
    '__version__',

    # Models
    'Role',
    'Suggestion',
    'ChatMessage',
    'HealthReport',
    'ManagementResult',
    'KeyInfo',
    'coerce_messages',

    # Configuration
    'ConfigError',
    'ConversationConfig',
    'QualityConfig',
    'HealthConfig',
    'ResetConfig',
    'get_config',
    'load_conversation_config',

    # Context management
    'ConversationManager',
    'manage_conversation',
    'EntityExtractor',
    'Extraction',
    'HeuristicExtractor',
    'estimate_tokens',
    'estimate_conversation_tokens',
    'clean_conversation',
    'summarize',
    'extract_key_info',
    'assess',
    'apply_window',
    'reset_conversation',
]
