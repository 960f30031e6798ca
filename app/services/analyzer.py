import hashlib
import re
from collections import Counter
from typing import Dict

from app.schemas.string import StringProperties

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    # surrogatepass keeps lone surrogates hashable instead of raising
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def normalize(text: str) -> str:
    """Lowercase and strip everything outside [a-z0-9]"""
    return _NON_ALPHANUMERIC.sub("", text.lower())


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, alphanumerics only)"""
    cleaned = normalize(text)
    return cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct lowercase characters, punctuation and spaces included"""
    return len(set(text.lower()))


def count_words(text: str) -> int:
    # Splits on the literal space: "a  b" has three words, "" has one.
    return len(text.split(" "))


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character (case-sensitive)"""
    return dict(Counter(text))


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=get_character_frequency(value),
    )
