"""
SUMMARY_EXTRACTOR
=================

Extractive digest of a message sequence.

Mines user messages for topics, identifiers, names and short queries,
and assistant messages for coarse action labels, then assembles a
compact, deterministic text that keeps continuity once older turns are
dropped from the window.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..models import ChatMessage, KeyInfo, Role
from .extraction import EntityExtractor, HeuristicExtractor

MAX_IDENTIFIERS = 5
MAX_NAMES = 3
MAX_RECENT_ITEMS = 3
QUERY_MIN_CHARS = 10
QUERY_MAX_CHARS = 200
QUERY_KEEP_CHARS = 100
KEY_INFO_WINDOW = 10

# (required substrings, any-of substrings, label) for assistant messages
ACTION_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...], str], ...] = (
    ((), ("created",), "Created record(s)"),
    ((), ("updated", "modified"), "Updated record(s)"),
    (("incident",), ("found",), "Retrieved data"),
)

# Assistant verb -> short action name used by extract_key_info
KEY_INFO_ACTIONS: Dict[str, str] = {
    "created": "created",
    "updated": "updated",
    "found": "searched",
}


def _action_labels(content: str) -> List[str]:
    lowered = content.lower()
    labels = []
    for required, any_of, label in ACTION_RULES:
        if all(r in lowered for r in required) and any(a in lowered for a in any_of):
            labels.append(label)
    return labels


def _capped(items: List[str], limit: int) -> str:
    text = ", ".join(items[:limit])
    if len(items) > limit:
        text += "..."
    return text


def summarize(
    messages: Sequence[ChatMessage],
    extractor: Optional[EntityExtractor] = None
) -> str:
    """
    Create a digest of a conversation.

    Args:
        messages: Messages to summarize
        extractor: Entity extractor (HeuristicExtractor by default)

    Returns:
        Period-separated digest, always ending with the exchange count
    """
    extractor = extractor or HeuristicExtractor()

    topics: Dict[str, None] = {}
    identifiers: Dict[str, None] = {}
    names: Dict[str, None] = {}
    queries: List[str] = []
    actions: List[str] = []

    for msg in messages:
        content = msg.content
        if msg.role == Role.USER:
            found = extractor.extract(content)
            topics.update(dict.fromkeys(found.topics))
            identifiers.update(dict.fromkeys(found.identifiers))
            names.update(dict.fromkeys(found.names))

            if QUERY_MIN_CHARS < len(content) < QUERY_MAX_CHARS:
                queries.append(content[:QUERY_KEEP_CHARS])
        elif msg.role == Role.ASSISTANT:
            actions.extend(_action_labels(content))

    parts = []
    if topics:
        parts.append(f"Topics discussed: {', '.join(topics)}")
    if identifiers:
        parts.append(f"Identifiers mentioned: {_capped(list(identifiers), MAX_IDENTIFIERS)}")
    if names:
        parts.append(f"Names mentioned: {_capped(list(names), MAX_NAMES)}")
    if queries:
        recent = queries[-MAX_RECENT_ITEMS:]
        parts.append("Recent queries: " + "; ".join(f'"{q}"' for q in recent))
    if actions:
        parts.append("Actions taken: " + "; ".join(actions[-MAX_RECENT_ITEMS:]))
    parts.append(f"Total exchanges: {len(messages) // 2}")

    return ". ".join(parts) + "."


def extract_key_info(
    messages: Sequence[ChatMessage],
    extractor: Optional[EntityExtractor] = None
) -> KeyInfo:
    """
    Extract quick-reference facts from the last few messages.

    Identifiers and names are collected from every role; actions only
    from assistant messages. The current topic is the first topic of
    the most recent user message.
    """
    extractor = extractor or HeuristicExtractor()
    recent = list(messages[-KEY_INFO_WINDOW:])

    identifiers: Dict[str, None] = {}
    names: Dict[str, None] = {}
    actions: Dict[str, None] = {}

    for msg in recent:
        found = extractor.extract(msg.content)
        identifiers.update(dict.fromkeys(found.identifiers))
        names.update(dict.fromkeys(found.names))

        if msg.role == Role.ASSISTANT:
            for verb, action in KEY_INFO_ACTIONS.items():
                if verb in msg.content:
                    actions[action] = None

    current_topic = None
    last_user = next((m for m in reversed(recent) if m.role == Role.USER), None)
    if last_user is not None:
        topics = extractor.extract(last_user.content).topics
        if topics:
            current_topic = topics[0]

    return KeyInfo(
        current_topic=current_topic,
        mentioned_identifiers=list(identifiers),
        mentioned_names=list(names),
        recent_actions=list(actions),
    )
