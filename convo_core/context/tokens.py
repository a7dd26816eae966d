"""
Token estimation.

Uses a simple heuristic: ~4 characters per token for English text.
Used for budgeting only, never for exact accounting.
"""

import math
from typing import Iterable, Optional

from ..models import ChatMessage

CHARS_PER_TOKEN = 4


def estimate_tokens(text: Optional[str], chars_per_token: int = CHARS_PER_TOKEN) -> int:
    """
    Approximate token count for text.

    Args:
        text: Text to count tokens for (None counts as empty)
        chars_per_token: Average characters per token

    Returns:
        ceil(len(text) / chars_per_token)
    """
    if not text:
        return 0
    return math.ceil(len(text) / chars_per_token)


def estimate_conversation_tokens(
    messages: Iterable[ChatMessage],
    chars_per_token: int = CHARS_PER_TOKEN
) -> int:
    """Sum of per-message content estimates."""
    return sum(estimate_tokens(msg.content, chars_per_token) for msg in messages)
