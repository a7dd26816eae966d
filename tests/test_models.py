"""
tests/test_models.py
Boundary resolution of chat messages.
"""

import pytest
from pydantic import ValidationError

from convo_core.models import ChatMessage, Role, coerce_messages


class TestChatMessage:

    def test_missing_content_is_empty(self):
        message = ChatMessage.model_validate({"role": "user"})
        assert message.content == ""

    def test_none_content_is_empty(self):
        message = ChatMessage.model_validate({"role": "assistant", "content": None})
        assert message.content == ""

    def test_missing_timestamp_stays_none(self):
        message = ChatMessage(role=Role.USER, content="hello there")
        assert message.timestamp is None
        assert message.is_summary is False

    def test_is_summary_alias(self):
        message = ChatMessage.model_validate(
            {"role": "system", "content": "digest", "isSummary": True}
        )
        assert message.is_summary is True

    def test_synthetic_is_stamped_system(self):
        message = ChatMessage.synthetic("marker", is_summary=True)
        assert message.role == Role.SYSTEM
        assert message.timestamp is not None
        assert message.is_summary is True

    def test_frozen(self):
        message = ChatMessage(role=Role.USER, content="hello there")
        with pytest.raises(ValidationError):
            message.content = "changed"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatMessage.model_validate({"role": "tool", "content": "x"})


class TestCoerceMessages:

    def test_mixed_inputs(self):
        existing = ChatMessage(role=Role.USER, content="hello there")
        result = coerce_messages([existing, {"role": "assistant", "content": "hi back"}])
        assert result[0] is existing
        assert result[1].role == Role.ASSISTANT
        assert result[1].content == "hi back"

    def test_empty(self):
        assert coerce_messages([]) == []
