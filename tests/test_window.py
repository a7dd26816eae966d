"""
tests/test_window.py
Sliding window: pass-through below thresholds, digest above them.
"""

from collections import Counter

from convo_core.config import ConversationConfig
from convo_core.context.quality import clean_conversation
from convo_core.context.window import SUMMARY_HEADER, apply_window
from convo_core.models import Role
from tests.conftest import alternating, msg


def _system_contents(messages):
    return Counter(m.content for m in messages if m.role == Role.SYSTEM and not m.is_summary)


class TestPassThrough:

    def test_below_thresholds_equals_clean(self, config):
        messages = alternating(30) + [msg("user", "hi")]
        assert apply_window(messages, "next question", config) == clean_conversation(messages, config)

    def test_cleaning_can_bring_under_threshold(self, config):
        # 31 raw messages, one of them too short to keep
        messages = alternating(30) + [msg("user", "ok")]
        result = apply_window(messages, "", config)
        assert not any(m.is_summary for m in result)
        assert len(result) == 30

    def test_incoming_text_counts_against_budget(self):
        config = ConversationConfig(max_context_tokens=50)
        messages = alternating(4)
        assert not any(m.is_summary for m in apply_window(messages, "", config))

        windowed = apply_window(messages, "q" * 400, ConversationConfig(
            max_context_tokens=50, max_recent_messages=2,
        ))
        assert sum(1 for m in windowed if m.is_summary) == 1


class TestWindowing:

    def test_thirty_five_short_messages(self, config):
        # 35 alternating messages of about 20 characters each
        messages = alternating(35, template="Short line number {i:02d}")
        result = apply_window(messages, "what next", config)

        summaries = [m for m in result if m.is_summary]
        assert len(summaries) == 1
        assert result[0] is summaries[0]
        assert result[1:] == messages[-20:]

    def test_summary_message_content(self, config):
        messages = alternating(35)
        summary = apply_window(messages, "", config)[0]
        assert summary.role == Role.SYSTEM
        assert summary.timestamp is not None
        assert summary.content.startswith(SUMMARY_HEADER + ":\n")
        assert "This summary represents 15 previous messages" in summary.content
        assert "Total exchanges: 7." in summary.content

    def test_system_messages_first_and_preserved(self, config):
        messages = (
            [msg("system", "You are a service desk assistant")]
            + alternating(20)
            + [msg("system", "[DATA FETCHED FROM IVANTI] ticket 10119")]
            + alternating(20, template="Later message {i} about stuff")
        )
        result = apply_window(messages, "", config)

        assert result[0].content == "You are a service desk assistant"
        assert result[1].content.startswith("[DATA FETCHED FROM IVANTI]")
        assert result[2].is_summary
        assert _system_contents(result) == _system_contents(messages)
        assert result[3:] == messages[-20:]

    def test_at_most_one_extra_message(self, config):
        messages = [msg("system", "context block")] + alternating(45)
        result = apply_window(messages, "", config)
        assert len(result) <= len(messages) + 1
        assert sum(1 for m in result if m.is_summary) == 1

    def test_no_summary_when_nothing_old(self):
        config = ConversationConfig(summarize_after=5)
        messages = [msg("system", f"system note {i}") for i in range(10)] + alternating(4)
        result = apply_window(messages, "", config)
        assert not any(m.is_summary for m in result)
        assert result == messages

    def test_input_order_of_recent_tail_kept(self, config):
        messages = alternating(40)
        result = apply_window(messages, "", config)
        assert [m.content for m in result[1:]] == [m.content for m in messages[20:]]
