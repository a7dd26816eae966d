"""
tests/test_health.py
Conversation health classification.
"""

from convo_core.config import ConversationConfig, HealthConfig
from convo_core.context.health import assess, count_error_messages, is_repetitive
from convo_core.models import Suggestion
from tests.conftest import alternating, msg


class TestAssess:

    def test_healthy(self, config):
        report = assess(alternating(10), config)
        assert report.is_messy is False
        assert report.reasons == []
        assert report.suggestion == Suggestion.CONTINUE

    def test_empty_is_healthy(self, config):
        assert assess([], config).suggestion == Suggestion.CONTINUE

    def test_too_many_messages_summarize(self, config):
        report = assess(alternating(60), config)
        assert report.is_messy is True
        assert report.reasons == ["Too many messages (60 > 50)"]
        assert report.suggestion == Suggestion.SUMMARIZE

    def test_far_too_many_messages_reset(self, config):
        report = assess(alternating(80), config)
        assert report.suggestion == Suggestion.RESET

    def test_exactly_one_and_a_half_times_is_not_reset(self, config):
        report = assess(alternating(75), config)
        assert report.suggestion == Suggestion.SUMMARIZE

    def test_token_budget(self):
        config = ConversationConfig(max_context_tokens=100)
        messages = [msg("user", f"{i} " + "y" * 200) for i in range(2)]
        report = assess(messages, config)
        assert report.reasons[0].startswith("Token budget exceeded (")
        # 102 tokens > 100 but not above 150
        assert report.suggestion == Suggestion.SUMMARIZE

    def test_token_budget_reset(self):
        config = ConversationConfig(max_context_tokens=100)
        report = assess([msg("user", "z" * 1000)], config)
        assert report.suggestion == Suggestion.RESET

    def test_too_many_errors(self, config):
        messages = [msg("assistant", f"An error occurred on step {i}") for i in range(6)]
        report = assess(messages, config)
        assert "Too many error messages (6)" in report.reasons

    def test_five_errors_tolerated(self, config):
        messages = [msg("assistant", f"An error occurred on step {i}") for i in range(5)]
        assert "Too many error messages (5)" not in assess(messages, config).reasons

    def test_reasons_are_union_in_order(self):
        config = ConversationConfig(max_total_messages=5, max_context_tokens=10)
        messages = [msg("assistant", "Sorry, I encountered a problem") for _ in range(8)]
        report = assess(messages, config)
        assert report.reasons == [
            "Too many messages (8 > 5)",
            "Token budget exceeded (64 > 10)",
            "Too many error messages (8)",
            "Repetitive messages detected",
        ]
        assert report.suggestion == Suggestion.RESET


class TestErrorCount:

    def test_case_insensitive(self, config):
        messages = [msg("assistant", "ERROR in lookup"), msg("assistant", "sorry, I Encountered x")]
        assert count_error_messages(messages, config) == 2

    def test_custom_indicators(self):
        config = ConversationConfig(health=HealthConfig(error_indicators=("oops",)))
        messages = [msg("assistant", "Oops!"), msg("assistant", "error")]
        assert count_error_messages(messages, config) == 1


class TestRepetition:

    def test_repetitive_tail(self, config):
        messages = [msg("user", "same question again")] * 8 + [msg("user", "different")]
        assert is_repetitive(messages, config) is True

    def test_needs_more_than_five(self, config):
        messages = [msg("user", "same question again")] * 5
        assert is_repetitive(messages, config) is False

    def test_prefix_comparison(self, config):
        base = "p" * 50
        messages = [msg("user", base + str(i)) for i in range(6)]
        assert is_repetitive(messages, config) is True

    def test_empty_contents_ignored(self, config):
        messages = [msg("user", "")] * 10
        assert is_repetitive(messages, config) is False

    def test_only_last_window_counts(self, config):
        messages = [msg("user", "repeat me please")] * 20 + alternating(10)
        assert is_repetitive(messages, config) is False

    def test_half_distinct_is_not_repetitive(self, config):
        messages = alternating(3) * 2
        assert is_repetitive(messages, config) is False
