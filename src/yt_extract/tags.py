"""Tag cleanup for keywords attached to extracted videos."""
from __future__ import annotations

import re

MAX_TAGS = 15
MIN_TAG_LENGTH = 2
MAX_TAG_LENGTH = 30

STOP_WORDS = {
    "en": {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
        "do", "does", "did", "will", "would", "could", "should",
    },
    "es": {
        "el", "la", "de", "que", "y", "a", "en", "un", "es", "se", "no", "te", "lo",
        "le", "da", "su", "por", "son", "con", "para", "al", "del", "las", "los",
    },
    "fr": {
        "le", "de", "et", "à", "un", "il", "être", "en", "avoir", "que", "pour",
        "dans", "ce", "son", "une", "sur", "avec", "ne", "se", "pas", "tout",
    },
}

_LATIN_RE = re.compile(r"^[a-zA-Z0-9\s\-_]+$")
# letters and digits from any script, plus whitespace, "-" and "_"
_UNICODE_RE = re.compile(r"^(?:[^\W_]|[\s\-_])+$")


def is_stop_word(word: str, language: str) -> bool:
    return word.lower() in STOP_WORDS.get(language, ())


def _is_valid(tag: str, language: str) -> bool:
    return (
        MIN_TAG_LENGTH <= len(tag) <= MAX_TAG_LENGTH
        and not is_stop_word(tag, language)
        and bool(_LATIN_RE.match(tag) or _UNICODE_RE.match(tag))
    )


def _capitalize(tag: str) -> str:
    if _LATIN_RE.match(tag):
        return " ".join(word[:1].upper() + word[1:] for word in tag.split(" "))
    return tag.strip()


def normalize_and_filter_tags(tags: list[str], language: str = "en") -> list[str]:
    """
    Lowercase, drop stop words and junk, title-case Latin tags, dedupe in
    first-seen order and keep at most ``MAX_TAGS``.
    """
    cleaned = (tag.lower().strip() for tag in tags)
    kept = [_capitalize(tag) for tag in cleaned if _is_valid(tag, language)]
    return list(dict.fromkeys(kept))[:MAX_TAGS]
