from datetime import datetime, timezone
from typing import List, Optional

from app.schemas.string import StringRecord
from app.services.analyzer import analyze_string, compute_sha256
from app.store import Predicate, StringStore


def create_string_analysis(store: StringStore, value: str) -> StringRecord:
    """Analyze a value and store it; raises Conflict if already present"""
    properties = analyze_string(value)

    record = StringRecord(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=datetime.now(timezone.utc),
    )
    return store.insert(record)


def get_string_by_value(store: StringStore, value: str) -> StringRecord:
    """Get string analysis by value"""
    return store.get(compute_sha256(value))


def delete_string(store: StringStore, value: str) -> None:
    """Delete string analysis by value"""
    store.delete(compute_sha256(value))


def value_contains(substring: str) -> Predicate:
    """Case-insensitive substring test against the raw value"""
    needle = substring.lower()
    return lambda record: needle in record.value.lower()


def frequency_map_contains(character: str) -> Predicate:
    """Lowercased character occurs at least once in the frequency map"""
    key = character.lower()
    return lambda record: record.properties.character_frequency_map.get(key, 0) > 0


def build_predicate(
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    contains: Optional[Predicate] = None,
) -> Predicate:
    """AND together every supplied constraint"""
    checks: List[Predicate] = []

    if is_palindrome is not None:
        checks.append(lambda r: r.properties.is_palindrome == is_palindrome)

    if min_length is not None:
        checks.append(lambda r: r.properties.length >= min_length)

    if max_length is not None:
        checks.append(lambda r: r.properties.length <= max_length)

    if word_count is not None:
        checks.append(lambda r: r.properties.word_count == word_count)

    if contains is not None:
        checks.append(contains)

    return lambda record: all(check(record) for check in checks)


def get_all_strings(
    store: StringStore,
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    contains_character: Optional[str] = None,
) -> List[StringRecord]:
    """Get all strings with optional filters (substring character match)"""
    return store.scan(build_predicate(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains=value_contains(contains_character) if contains_character is not None else None,
    ))


def get_strings_by_parsed_filters(store: StringStore, filters: dict) -> List[StringRecord]:
    """Apply natural-language filters (frequency-map character match)"""
    character = filters.get("contains_character")
    return store.scan(build_predicate(
        is_palindrome=filters.get("is_palindrome"),
        min_length=filters.get("min_length"),
        max_length=filters.get("max_length"),
        word_count=filters.get("word_count"),
        contains=frequency_map_contains(character) if character is not None else None,
    ))
