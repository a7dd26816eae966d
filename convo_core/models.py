"""
Pydantic models for conversation management.

ChatMessage is resolved once at the boundary: absent content becomes
an empty string and absent timestamps stay None, so the components
never have to check for missing fields.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============ ENUMS ============

class Role(str, Enum):
    """Message provenance."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Suggestion(str, Enum):
    """What the caller should do with a conversation."""
    CONTINUE = "continue"
    SUMMARIZE = "summarize"
    RESET = "reset"


# ============ MESSAGES ============

class ChatMessage(BaseModel):
    """A single chat turn."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Role
    content: str = ""
    timestamp: Optional[datetime] = None
    is_summary: bool = Field(default=False, alias="isSummary")

    @field_validator("content", mode="before")
    @classmethod
    def _content_or_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value

    @classmethod
    def synthetic(cls, content: str, is_summary: bool = False) -> "ChatMessage":
        """Build a system message stamped with the current time."""
        return cls(
            role=Role.SYSTEM,
            content=content,
            timestamp=datetime.now(timezone.utc),
            is_summary=is_summary,
        )


def coerce_messages(items: Iterable[Union[ChatMessage, dict]]) -> List[ChatMessage]:
    """Resolve raw message dicts into ChatMessage instances."""
    return [
        item if isinstance(item, ChatMessage) else ChatMessage.model_validate(item)
        for item in items
    ]


# ============ RESULTS ============

class HealthReport(BaseModel):
    """Classification of a conversation snapshot."""
    is_messy: bool = False
    reasons: List[str] = Field(default_factory=list)
    suggestion: Suggestion = Suggestion.CONTINUE


class ManagementResult(BaseModel):
    """Output of ConversationManager.manage()."""
    managed_messages: List[ChatMessage] = Field(default_factory=list)
    was_reset: bool = False
    was_summarized: bool = False
    warnings: List[str] = Field(default_factory=list)


class KeyInfo(BaseModel):
    """Quick-reference facts from the tail of a conversation."""
    current_topic: Optional[str] = None
    mentioned_identifiers: List[str] = Field(default_factory=list)
    mentioned_names: List[str] = Field(default_factory=list)
    recent_actions: List[str] = Field(default_factory=list)
