"""
Tests for the HTTP endpoints.
"""

from urllib.parse import quote

from fastapi.testclient import TestClient

from app.main import app
from app.services.analyzer import compute_sha256
from app.store import get_store


def values(response):
    return [item["value"] for item in response.json()["data"]]


class TestCreateString:
    """POST /strings"""

    def test_create_returns_record(self, client):
        response = client.post("/strings", json={"value": "Racecar!"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == compute_sha256("Racecar!")
        assert body["value"] == "Racecar!"
        assert body["created_at"]
        assert body["properties"] == {
            "length": 8,
            "is_palindrome": True,
            "unique_characters": 5,
            "word_count": 1,
            "sha256_hash": compute_sha256("Racecar!"),
            "character_frequency_map": {"R": 1, "a": 2, "c": 2, "e": 1, "r": 1, "!": 1},
        }

    def test_duplicate_conflicts(self, client):
        assert client.post("/strings", json={"value": "twice"}).status_code == 201

        response = client.post("/strings", json={"value": "twice"})

        assert response.status_code == 409
        assert response.json() == {"error": "Conflict", "message": "String already exists in the system"}

    def test_empty_string_is_accepted(self, client):
        response = client.post("/strings", json={"value": ""})

        assert response.status_code == 201
        assert response.json()["properties"]["word_count"] == 1

    def test_missing_value(self, client):
        response = client.post("/strings", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request", "message": 'Missing "value" field in request body'}

    def test_null_value_is_missing(self, client):
        assert client.post("/strings", json={"value": None}).status_code == 400

    def test_non_string_value(self, client):
        response = client.post("/strings", json={"value": 123})

        assert response.status_code == 422
        assert response.json()["error"] == "Unprocessable Entity"

    def test_malformed_json(self, client):
        response = client.post(
            "/strings", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    def test_lone_surrogate_rejected(self, client):
        response = client.post(
            "/strings", content=b'{"value": "\\ud800"}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert response.json() == {
            "error": "Unprocessable Entity",
            "message": 'Invalid "value" (must be valid Unicode text)',
        }
        assert client.get("/strings").json()["count"] == 0

    def test_paired_surrogates_accepted(self, client):
        response = client.post(
            "/strings", content=b'{"value": "\\ud83d\\ude00"}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 201
        assert response.json()["value"] == "\U0001F600"


class TestGetAndDelete:
    """GET and DELETE /strings/{string_value}"""

    def test_get_by_url_encoded_value(self, seeded_client):
        response = seeded_client.get(f"/strings/{quote('hello world')}")

        assert response.status_code == 200
        assert response.json()["value"] == "hello world"
        assert response.json()["properties"]["word_count"] == 2

    def test_get_missing(self, client):
        response = client.get("/strings/ghost")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "String does not exist in the system"}

    def test_delete_then_get(self, seeded_client):
        response = seeded_client.delete("/strings/racecar")

        assert response.status_code == 204
        assert response.content == b""
        assert seeded_client.get("/strings/racecar").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/strings/ghost").status_code == 404

    def test_insert_twice_after_delete(self, client):
        client.post("/strings", json={"value": "cycle"})
        client.delete("/strings/cycle")

        assert client.post("/strings", json={"value": "cycle"}).status_code == 201

    def test_value_with_slash(self, client):
        assert client.post("/strings", json={"value": "a/b"}).status_code == 201

        response = client.get(f"/strings/{quote('a/b', safe='')}")
        assert response.status_code == 200
        assert response.json()["value"] == "a/b"

        assert client.delete(f"/strings/{quote('a/b', safe='')}").status_code == 204
        assert client.get(f"/strings/{quote('a/b', safe='')}").status_code == 404

    def test_natural_language_route_not_captured(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language", params={"query": "strings containing the letter z"}
        )

        assert response.status_code == 200
        assert "interpreted_query" in response.json()


class TestListStrings:
    """GET /strings"""

    def test_no_filters(self, seeded_client):
        response = seeded_client.get("/strings")

        assert response.status_code == 200
        assert response.json()["count"] == 7
        assert response.json()["filters_applied"] == {}

    def test_exact_length_window(self, seeded_client):
        response = seeded_client.get("/strings", params={"min_length": 5, "max_length": 5})

        assert values(response) == ["Level", "zebra", "abcde"]
        assert all(item["properties"]["length"] == 5 for item in response.json()["data"])

    def test_combined_filters(self, seeded_client):
        response = seeded_client.get("/strings", params={"is_palindrome": "true", "word_count": 1})

        assert values(response) == ["racecar", "Level", "noon"]
        assert response.json()["filters_applied"] == {"is_palindrome": True, "word_count": 1}

    def test_contains_character_is_substring(self, seeded_client):
        response = seeded_client.get("/strings", params={"contains_character": "CAR"})

        assert values(response) == ["racecar", "Was it a car or a cat I saw"]

    def test_invalid_parameter(self, seeded_client):
        response = seeded_client.get("/strings", params={"min_length": "five"})

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request", "message": "Invalid query parameter values or types"}

    def test_invalid_boolean(self, seeded_client):
        assert seeded_client.get("/strings", params={"is_palindrome": "maybe"}).status_code == 400


class TestNaturalLanguageFilter:
    """GET /strings/filter-by-natural-language"""

    def test_letter_z(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language?query=strings%20containing%20the%20letter%20z"
        )

        assert response.status_code == 200
        body = response.json()
        assert values(response) == ["zebra"]
        assert body["count"] == 1
        assert body["interpreted_query"] == {
            "original": "strings containing the letter z",
            "parsed_filters": {"contains_character": "z"},
        }

    def test_single_word_palindromes(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language", params={"query": "All Single Word Palindromic Strings"}
        )

        assert values(response) == ["racecar", "Level", "noon"]
        assert response.json()["interpreted_query"]["original"] == "All Single Word Palindromic Strings"

    def test_longer_than_ten(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language", params={"query": "strings longer than 10 characters"}
        )

        assert values(response) == ["hello world", "Was it a car or a cat I saw"]

    def test_first_vowel(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language",
            params={"query": "palindromic strings that contain the first vowel"},
        )

        assert values(response) == ["racecar", "Was it a car or a cat I saw"]

    def test_unrecognized_query(self, seeded_client):
        response = seeded_client.get(
            "/strings/filter-by-natural-language", params={"query": "strings with vowels"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request", "message": "Unable to parse natural language query"}

    def test_missing_query(self, client):
        response = client.get("/strings/filter-by-natural-language")

        assert response.status_code == 400
        assert response.json()["message"] == 'Missing "query" parameter'


class TestServiceEndpoints:
    """Root, health and error masking."""

    def test_root(self, client):
        assert "POST /strings" in client.get("/").json()["endpoints"]

    def test_health_counts_strings(self, seeded_client):
        body = seeded_client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["total_strings"] == 7

    def test_unknown_route(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "Endpoint not found"}

    def test_unexpected_error_is_masked(self):
        class BrokenStore:
            def scan(self, predicate=None):
                raise RuntimeError("disk on fire")

        app.dependency_overrides[get_store] = lambda: BrokenStore()
        try:
            with TestClient(app, raise_server_exceptions=False) as c:
                response = c.get("/strings")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "message": "Something went wrong!"}
