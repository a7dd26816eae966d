"""
Hard compaction of a conversation that is beyond saving.

Keeps only the essential system messages (fetched data, permissions,
conversation state) and appends one reset marker carrying a digest of
the discarded history.
"""

from typing import List, Optional, Sequence

from ..config import ConversationConfig
from ..models import ChatMessage, Role
from .extraction import EntityExtractor
from .summary import summarize

RESET_HEADER = "[CONVERSATION RESET]"


def build_reset_message(previous_context: Optional[str], config: ConversationConfig) -> ChatMessage:
    """Create the reset marker, embedding a truncated digest if given."""
    if previous_context:
        digest = previous_context[:config.reset.digest_chars]
        content = (
            f"{RESET_HEADER}: The previous conversation was reset due to "
            f"length/complexity. Starting fresh. Previous context summary: {digest}..."
        )
    else:
        content = f"{RESET_HEADER}: Starting a fresh conversation."
    return ChatMessage.synthetic(content)


def select_essential_messages(
    messages: Sequence[ChatMessage],
    config: ConversationConfig
) -> List[ChatMessage]:
    """System messages carrying one of the essential markers, in order."""
    markers = config.reset.essential_markers
    return [
        msg for msg in messages
        if msg.role == Role.SYSTEM and any(marker in msg.content for marker in markers)
    ]


def reset_conversation(
    messages: Sequence[ChatMessage],
    incoming_text: str,
    config: ConversationConfig,
    extractor: Optional[EntityExtractor] = None
) -> List[ChatMessage]:
    """
    Collapse a conversation to its essential context plus a reset marker.

    The digest covers the entire unfiltered history. incoming_text is
    not part of the digest.
    """
    digest = summarize(messages, extractor)
    essential = select_essential_messages(messages, config)
    return essential + [build_reset_message(digest, config)]
