"""
CONTEXT MANAGEMENT MODULE
=========================

Keeps a chat conversation within its token budget.

Features:
- Token estimation (approximate)
- Quality filtering of redundant and low-value messages
- Extractive digests of older turns
- Health detection (size, tokens, errors, repetition)
- Sliding window with a single summary message
- Hard reset to essential context
"""

from .tokens import estimate_tokens, estimate_conversation_tokens
from .quality import clean_conversation, is_low_quality_message
from .extraction import EntityExtractor, Extraction, HeuristicExtractor
from .summary import summarize, extract_key_info
from .health import assess
from .window import apply_window, build_summary_message
from .reset import reset_conversation, build_reset_message, select_essential_messages
from .manager import ConversationManager, manage_conversation

__all__ = [
    'estimate_tokens',
    'estimate_conversation_tokens',
    'clean_conversation',
    'is_low_quality_message',
    'EntityExtractor',
    'Extraction',
    'HeuristicExtractor',
    'summarize',
    'extract_key_info',
    'assess',
    'apply_window',
    'build_summary_message',
    'reset_conversation',
    'build_reset_message',
    'select_essential_messages',
    'ConversationManager',
    'manage_conversation',
]
