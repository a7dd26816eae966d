"""
Entity and topic extraction.

The summary extractor only depends on the EntityExtractor protocol, so
the heuristic regex implementation here can be replaced by a better one
without touching how digests are composed.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

# Topic tag -> keywords, checked in order against lower-cased text.
DEFAULT_TOPIC_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "incidents": ("ticket", "incident"),
    "users": ("user", "employee"),
    "creation": ("create",),
    "updates": ("update", "edit"),
    "search": ("search", "find"),
}

IDENTIFIER_PATTERN = re.compile(r"#?(\d{5,})")
NAME_PATTERN = re.compile(r"\b([A-Z][a-z]+ [A-Z][a-z]+)\b")


@dataclass
class Extraction:
    """Entities found in one piece of text, in order of first sighting."""
    identifiers: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)


class EntityExtractor(Protocol):
    """Anything that can pull identifiers, names and topics out of text."""

    def extract(self, text: str) -> Extraction:
        ...


class HeuristicExtractor:
    """
    Regex and keyword based extractor.

    - identifiers: runs of 5+ digits, optionally prefixed with '#'
    - names: two consecutive capitalized words
    - topics: keyword substring presence
    """

    def __init__(self, topic_keywords: Optional[Dict[str, Tuple[str, ...]]] = None):
        self.topic_keywords = topic_keywords or DEFAULT_TOPIC_KEYWORDS

    def extract(self, text: str) -> Extraction:
        if not text:
            return Extraction()

        lowered = text.lower()
        return Extraction(
            identifiers=_unique(IDENTIFIER_PATTERN.findall(text)),
            names=_unique(NAME_PATTERN.findall(text)),
            topics=[
                topic for topic, keywords in self.topic_keywords.items()
                if any(keyword in lowered for keyword in keywords)
            ],
        )


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))
