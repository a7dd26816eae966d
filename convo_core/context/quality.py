"""
QUALITY_FILTER
==============

Removes redundant or low-value messages and truncates oversized ones.

Decisions are made in a single left-to-right pass, and only against
messages already kept, never against the full original list. System
messages are always kept.
"""

import re
from typing import List, Sequence, Set, Tuple

from ..config import ConversationConfig
from ..models import ChatMessage, Role
from .tokens import estimate_tokens


def is_low_quality_message(
    message: ChatMessage,
    kept: Sequence[ChatMessage],
    config: ConversationConfig
) -> bool:
    """
    Check if a message is redundant or low-quality.

    Args:
        message: Candidate message
        kept: Messages kept so far
        config: Conversation configuration

    Returns:
        True if the message should be dropped
    """
    if message.role == Role.SYSTEM:
        return False

    content = message.content
    quality = config.quality

    if len(content.strip()) < quality.min_content_length:
        return True

    if any(m.role == message.role and m.content == content for m in kept):
        return True

    if any(pattern in content for pattern in quality.doubled_error_patterns):
        return True

    return any(
        re.search(pattern, content, re.IGNORECASE)
        for pattern in quality.repeated_apology_patterns
    )


def clean_conversation(
    messages: Sequence[ChatMessage],
    config: ConversationConfig
) -> List[ChatMessage]:
    """
    Clean redundant or low-quality messages from a conversation.

    Order is preserved; the output is never longer than the input.
    Running it twice gives the same result as running it once.

    Args:
        messages: Conversation to clean
        config: Conversation configuration

    Returns:
        New list of kept (possibly truncated) messages
    """
    quality = config.quality
    max_chars = config.max_message_tokens * config.chars_per_token
    cleaned: List[ChatMessage] = []
    seen: Set[Tuple[Role, str]] = set()

    for msg in messages:
        if msg.role == Role.SYSTEM:
            cleaned.append(msg)
            continue

        if is_low_quality_message(msg, cleaned, config):
            continue

        fingerprint = (msg.role, msg.content[:quality.fingerprint_chars])
        if fingerprint in seen:
            continue
        seen.add(fingerprint)

        if estimate_tokens(msg.content, config.chars_per_token) > config.max_message_tokens:
            truncated = msg.content[:max_chars] + quality.truncation_marker
            cleaned.append(msg.model_copy(update={"content": truncated}))
            continue

        cleaned.append(msg)

    return cleaned
