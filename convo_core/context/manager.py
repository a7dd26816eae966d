"""
CONVERSATION_MANAGER
====================

Single entry point for conversation context management.

For each incoming message:
1. Assess the health of the raw history
2. If it is far past its limits, reset it to essential context
3. Otherwise apply the sliding window and clean the result once more

The manager is a pure transform: it never stores the conversation
between calls. The caller owns the history and supplies it every time.
"""

import logging
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..config import ConversationConfig, get_config
from ..models import (
    ChatMessage,
    HealthReport,
    KeyInfo,
    ManagementResult,
    Suggestion,
    coerce_messages,
)
from ..observability import report_event
from .extraction import EntityExtractor, HeuristicExtractor
from .health import assess
from .quality import clean_conversation
from .reset import reset_conversation
from .summary import extract_key_info, summarize
from .tokens import estimate_conversation_tokens
from .window import apply_window

logger = logging.getLogger(__name__)

MessagesInput = Iterable[Union[ChatMessage, dict]]


class ConversationManager:
    """
    Keeps a conversation within its message and token budgets.

    Thresholds come from the injected ConversationConfig; entity and
    topic extraction from the injected EntityExtractor.
    """

    def __init__(
        self,
        config: Optional[ConversationConfig] = None,
        extractor: Optional[EntityExtractor] = None
    ):
        """
        Initialize conversation manager.

        Args:
            config: Immutable configuration (process-wide config if None)
            extractor: Entity extractor (HeuristicExtractor if None)
        """
        self.config = config or get_config()
        self.extractor = extractor or HeuristicExtractor()
        self.call_count = 0
        self.window_count = 0
        self.reset_count = 0
        self._stats_lock = Lock()

    def assess(self, messages: MessagesInput) -> HealthReport:
        """Classify the health of a conversation."""
        return assess(coerce_messages(messages), self.config)

    def clean(self, messages: MessagesInput) -> List[ChatMessage]:
        """Drop low-quality messages and truncate oversized ones."""
        return clean_conversation(coerce_messages(messages), self.config)

    def apply_window(self, messages: MessagesInput, incoming_text: str = "") -> List[ChatMessage]:
        """Fold older turns into a summary when over the thresholds."""
        return apply_window(coerce_messages(messages), incoming_text, self.config, self.extractor)

    def reset(self, messages: MessagesInput, incoming_text: str = "") -> List[ChatMessage]:
        """Collapse a conversation to essential context plus a reset marker."""
        return reset_conversation(coerce_messages(messages), incoming_text, self.config, self.extractor)

    def summarize(self, messages: MessagesInput) -> str:
        return summarize(coerce_messages(messages), self.extractor)

    def key_info(self, messages: MessagesInput) -> KeyInfo:
        return extract_key_info(coerce_messages(messages), self.extractor)

    def manage(self, messages: MessagesInput, incoming_text: str = "") -> ManagementResult:
        """
        Apply all cleanup, summarization and reset strategies.

        Args:
            messages: Conversation history, oldest first
            incoming_text: The new user message

        Returns:
            ManagementResult with the managed messages and health warnings
        """
        history = coerce_messages(messages)
        incoming_text = incoming_text or ""
        self._increment("call_count")

        report = assess(history, self.config)
        if report.is_messy:
            logger.warning("Conversation detected as messy: %s", "; ".join(report.reasons))

        if report.suggestion == Suggestion.RESET:
            managed = reset_conversation(history, incoming_text, self.config, self.extractor)
            self._increment("reset_count")
            logger.warning(
                "Conversation reset: %d messages -> %d", len(history), len(managed)
            )
            self._report("conversation_reset", history, managed)
            return ManagementResult(
                managed_messages=managed,
                was_reset=True,
                was_summarized=False,
                warnings=list(report.reasons),
            )

        windowed = apply_window(history, incoming_text, self.config, self.extractor)
        was_summarized = any(msg.is_summary for msg in windowed)
        managed = clean_conversation(windowed, self.config)

        if was_summarized:
            self._increment("window_count")
            self._report("context_windowed", history, managed)

        return ManagementResult(
            managed_messages=managed,
            was_reset=False,
            was_summarized=was_summarized,
            warnings=list(report.reasons),
        )

    def _increment(self, counter: str) -> None:
        # One manager is shared across the API threadpool
        with self._stats_lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def _report(
        self,
        name: str,
        before: Sequence[ChatMessage],
        after: Sequence[ChatMessage]
    ) -> None:
        chars_per_token = self.config.chars_per_token
        report_event(name, {
            "messages_before": len(before),
            "messages_after": len(after),
            "tokens_before": estimate_conversation_tokens(before, chars_per_token),
            "tokens_after": estimate_conversation_tokens(after, chars_per_token),
        })

    def get_stats(self) -> Dict[str, Any]:
        """Get management statistics."""
        with self._stats_lock:
            calls, windowed, resets = self.call_count, self.window_count, self.reset_count
        return {
            "max_recent_messages": self.config.max_recent_messages,
            "summarize_after": self.config.summarize_after,
            "max_total_messages": self.config.max_total_messages,
            "max_context_tokens": self.config.max_context_tokens,
            "calls": calls,
            "windowed": windowed,
            "resets": resets,
        }


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def manage_conversation(
    messages: MessagesInput,
    incoming_text: str = "",
    config: Optional[ConversationConfig] = None
) -> ManagementResult:
    """
    Manage a conversation with a one-off ConversationManager.

    Args:
        messages: Conversation history
        incoming_text: The new user message
        config: Optional configuration

    Returns:
        ManagementResult
    """
    return ConversationManager(config=config).manage(messages, incoming_text)
