"""
WINDOW_MANAGER
==============

Sliding window over conversation history.

When a conversation grows past the summarize threshold or the token
budget, this module:
1. Keeps every system message intact
2. Keeps the most recent N non-system messages verbatim
3. Folds everything older into a single summary message

Below both thresholds the cleaned conversation passes through unchanged.
"""

import logging
from typing import List, Optional, Sequence

from ..config import ConversationConfig
from ..models import ChatMessage, Role
from .extraction import EntityExtractor
from .quality import clean_conversation
from .summary import summarize
from .tokens import estimate_conversation_tokens, estimate_tokens

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "[CONVERSATION SUMMARY - Earlier context]"


def build_summary_message(old_messages: Sequence[ChatMessage], digest: str) -> ChatMessage:
    """Create the synthetic message standing in for older turns."""
    return ChatMessage.synthetic(
        f"{SUMMARY_HEADER}:\n{digest}\n\n"
        f"This summary represents {len(old_messages)} previous messages that have "
        f"been condensed to preserve context while managing conversation length.",
        is_summary=True,
    )


def apply_window(
    messages: Sequence[ChatMessage],
    incoming_text: str,
    config: ConversationConfig,
    extractor: Optional[EntityExtractor] = None
) -> List[ChatMessage]:
    """
    Apply the sliding window to a conversation.

    Args:
        messages: Conversation history
        incoming_text: The new user message (counted against the budget)
        config: Conversation configuration
        extractor: Entity extractor for the digest

    Returns:
        System messages, then at most one summary message, then the
        most recent non-system messages
    """
    cleaned = clean_conversation(messages, config)
    total_tokens = (
        estimate_conversation_tokens(cleaned, config.chars_per_token)
        + estimate_tokens(incoming_text, config.chars_per_token)
    )

    if len(cleaned) <= config.summarize_after and total_tokens <= config.max_context_tokens:
        return cleaned

    logger.info(
        "Applying sliding window: %d messages, %d tokens",
        len(cleaned), total_tokens,
    )

    system_messages = [m for m in cleaned if m.role == Role.SYSTEM]
    rest = [m for m in cleaned if m.role != Role.SYSTEM]

    keep = config.max_recent_messages
    recent = rest[-keep:] if keep > 0 else []
    old = rest[:len(rest) - len(recent)]

    result = list(system_messages)
    if old:
        result.append(build_summary_message(old, summarize(old, extractor)))
    result.extend(recent)

    logger.info("After sliding window: %d messages (%d summarized)", len(result), len(old))
    return result
