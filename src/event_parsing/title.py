"""Title extraction for parsed events."""

import re

_WHITESPACE = re.compile(r"\s+")
_FIRST_SENTENCE = re.compile(r"^[^.!?]+[.!?]?")

MAX_TITLE_LENGTH = 60
MAX_SENTENCE_LENGTH = 100
MIN_WORD_BREAK = 30
ELLIPSIS = "..."


def extract_title(text: str) -> str:
    """
    Derive a short label from free text.

    Short text is used as-is. Longer text falls back to its first sentence,
    then to a 60 character cut at a word boundary.
    """
    cleaned = _WHITESPACE.sub(" ", text).strip()
    if len(cleaned) <= MAX_TITLE_LENGTH:
        return cleaned

    sentence = _FIRST_SENTENCE.match(cleaned)
    if sentence and len(sentence.group(0)) <= MAX_SENTENCE_LENGTH:
        return sentence.group(0).strip()

    truncated = cleaned[:MAX_TITLE_LENGTH]
    last_space = truncated.rfind(" ")
    if last_space >= MIN_WORD_BREAK:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS
