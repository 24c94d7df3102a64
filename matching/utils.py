import hashlib
import logging
import math
import re
from typing import Any, Iterable, List

logger = logging.getLogger(__name__)

_WORD_STRIP_CHARS = ".,;:!?()[]{}\"'/"


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Bound value to [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input.

    Python's round() uses banker's rounding (round(68.5) == 68), which would
    make overall scores drift by one point on exact halves.
    """
    return int(math.floor(value + 0.5))


def to_string_list(value: Any) -> List[str]:
    """
    Normalize a single value or a list of values into a list of non-empty strings.

    Strings containing commas are split, so "Berlin, Paris" becomes
    ["Berlin", "Paris"]. None and empty values yield [].
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        items = [value]

    result = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            result.append(text)
    return result


def split_keywords(raw: Any) -> List[str]:
    """Split comma-separated free text into lowercase keywords."""
    return [k.lower() for k in to_string_list(raw)]


def tokenize(text: str) -> List[str]:
    """Whitespace tokenization with surrounding punctuation removed."""
    words = []
    for raw_word in re.split(r"\s+", text.lower()):
        word = raw_word.strip(_WORD_STRIP_CHARS)
        if word:
            words.append(word)
    return words


def contains_term(text: str, term: str) -> bool:
    """
    Check whether term occurs in text on word boundaries.

    Short synonyms such as "ts" or "it" would otherwise hit inside unrelated
    words ("results", "with").
    """
    if not term:
        return False
    pattern = r"(?<![a-z0-9])" + re.escape(term) + r"(?![a-z0-9])"
    return re.search(pattern, text) is not None


def normalize_slug(value: str) -> str:
    """Lowercase and collapse whitespace/underscores into hyphens."""
    return re.sub(r"[\s_]+", "-", value.strip().lower())


class JobFingerprinter:
    """
    Pure logic for creating deterministic fingerprints for deduplication.
    """

    @staticmethod
    def calculate(company: str, title: str, location_text: str) -> str:
        """
        Create a deterministic hash of the core immutable fields.
        Formula: SHA256(lowercase(Company) + lowercase(JobTitle) + lowercase(City/Location))
        """
        raw_string = f"{(company or '').lower().strip()}|{(title or '').lower().strip()}|{(location_text or '').lower().strip()}"
        return hashlib.sha256(raw_string.encode('utf-8')).hexdigest()
