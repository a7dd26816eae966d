"""
HEALTH_DETECTOR
===============

Classifies a conversation snapshot as healthy or messy.

Every check runs; the report carries the union of triggered reasons.
The suggestion escalates to a reset only when the conversation is far
past its limits (reset_multiplier times the configured maximum).
"""

from typing import Sequence

from ..config import ConversationConfig
from ..models import ChatMessage, HealthReport, Suggestion
from .tokens import estimate_conversation_tokens


def count_error_messages(messages: Sequence[ChatMessage], config: ConversationConfig) -> int:
    """Count messages containing an error or apology-for-error indicator."""
    indicators = [i.lower() for i in config.health.error_indicators]
    return sum(
        1 for msg in messages
        if any(indicator in msg.content.lower() for indicator in indicators)
    )


def is_repetitive(messages: Sequence[ChatMessage], config: ConversationConfig) -> bool:
    """True if the tail of the conversation keeps repeating itself.

    Compares content prefixes over the last repetition_window messages;
    empty contents are ignored.
    """
    health = config.health
    prefixes = [
        msg.content[:health.repetition_prefix_chars]
        for msg in messages[-health.repetition_window:]
        if msg.content
    ]
    if len(prefixes) <= health.repetition_min_messages:
        return False
    return len(set(prefixes)) / len(prefixes) < health.repetition_ratio


def assess(messages: Sequence[ChatMessage], config: ConversationConfig) -> HealthReport:
    """
    Detect whether a conversation has become too messy.

    Args:
        messages: Full, unfiltered conversation
        config: Conversation configuration

    Returns:
        HealthReport with reasons and a continue/summarize/reset suggestion
    """
    health = config.health
    reasons = []
    count = len(messages)
    tokens = estimate_conversation_tokens(messages, config.chars_per_token)

    if count > config.max_total_messages:
        reasons.append(f"Too many messages ({count} > {config.max_total_messages})")

    if tokens > config.max_context_tokens:
        reasons.append(f"Token budget exceeded ({tokens} > {config.max_context_tokens})")

    error_count = count_error_messages(messages, config)
    if error_count > health.max_error_messages:
        reasons.append(f"Too many error messages ({error_count})")

    if is_repetitive(messages, config):
        reasons.append("Repetitive messages detected")

    if not reasons:
        return HealthReport(is_messy=False, reasons=[], suggestion=Suggestion.CONTINUE)

    if (count > config.max_total_messages * health.reset_multiplier
            or tokens > config.max_context_tokens * health.reset_multiplier):
        suggestion = Suggestion.RESET
    else:
        suggestion = Suggestion.SUMMARIZE

    return HealthReport(is_messy=True, reasons=reasons, suggestion=suggestion)
