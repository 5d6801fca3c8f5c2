"""
Node label matching for animation steps.

A step names a node by the leading words of its rendered label. Both sides
are trimmed, lower-cased and stripped of emoji, then compared word by word:
the step's words must equal the label's first words, in order.

    "Client"        matches "🖥️ Client Browser"
    "Chat Service"  matches "Chat Service Message Handling"
    "Chat"          does not match "Channels Group Chat"
"""

import re

# Pictographs, dingbats, symbols, regional indicators, plus the joiners and
# selectors that glue multi-codepoint emoji together.
_EMOJI = re.compile(
    "["
    "\U0001f000-\U0001faff"
    "\U00002600-\U000027bf"
    "\U00002300-\U000023ff"
    "\U00002b00-\U00002bff"
    "\U000e0020-\U000e007f"
    "\u200d"
    "\u20e3"
    "\ufe0e\ufe0f"
    "]"
)


def strip_emoji(text: str) -> str:
    return _EMOJI.sub("", text)


def normalize_label(text: str) -> str:
    """Trim, lower-case and strip emoji."""
    return strip_emoji(text.strip().lower()).strip()


def tokenize(text: str) -> list[str]:
    return normalize_label(text).split()


def label_matches(query: str, candidate: str) -> bool:
    """True when ``query`` is a word-for-word prefix of ``candidate``.

    An empty query (blank or emoji-only) matches nothing.
    """
    query_words = tokenize(query)
    if not query_words:
        return False
    candidate_words = tokenize(candidate)
    if len(query_words) > len(candidate_words):
        return False
    return candidate_words[: len(query_words)] == query_words
