"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from app.main import app

API = "/api/v1"


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestAnalyzeEndpoint:
    """Test suite for /analyze."""

    def test_breaks_vigenere(self, client, lemon_ciphertext, english_text):
        response = client.post(f"{API}/analyze", json={"ciphertext": lemon_ciphertext})

        assert response.status_code == 200
        body = response.json()
        assert body["reduced_key"] == "LEMON"
        assert body["plaintext"] == english_text.upper()
        assert body["best_key_length"] % 5 == 0
        assert len(body["key_length_scores"]) == 15
        assert body["kasiski"]["common_factors"][0][0] == 5
        assert body["explanations"]
        assert body["id"] is not None

    def test_forced_key_length(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/analyze",
            json={"ciphertext": lemon_ciphertext, "key_length": 5},
        )

        body = response.json()
        assert body["key_length"] == 5
        assert body["key"] == "LEMON"
        assert [c["letter"] for c in body["columns"]] == list("LEMON")

    def test_invalid_key_length(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/analyze",
            json={"ciphertext": lemon_ciphertext, "key_length": 0},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "InvalidKeyLengthError"
        assert body["details"]["key_length"] == 0

    def test_key_length_above_bound(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/analyze",
            json={"ciphertext": lemon_ciphertext, "max_key_length": 99},
        )

        assert response.status_code == 400

    def test_zero_search_bound(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/analyze",
            json={"ciphertext": lemon_ciphertext, "max_key_length": 0},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidKeyLengthError"

    def test_no_letters(self, client):
        response = client.post(f"{API}/analyze", json={"ciphertext": "1234 !!"})

        assert response.status_code == 200
        body = response.json()
        assert body["key"] == ""
        assert body["best_key_length"] is None


class TestDecryptEndpoint:
    """Test suite for /decrypt."""

    def test_decrypt_with_key(self, client):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "LXFOPVEFRNHR", "cipher_type": "vigenere", "key": "LEMON"},
        )

        assert response.status_code == 200
        assert response.json()["plaintext"] == "ATTACKATDAWN"

    def test_decrypt_without_key(self, client, lemon_ciphertext, english_text):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": lemon_ciphertext, "cipher_type": "vigenere"},
        )

        body = response.json()
        assert body["key_used"] == "LEMON"
        assert body["plaintext"] == english_text.upper()

    def test_invalid_key(self, client):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "LXFOPVEFRNHR", "cipher_type": "vigenere", "key": "L3MON"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidKeyError"

    def test_numeric_string_option(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/decrypt",
            json={
                "ciphertext": lemon_ciphertext,
                "cipher_type": "vigenere",
                "options": {"key_length": "5"},
            },
        )

        assert response.status_code == 200
        assert response.json()["key_used"] == "LEMON"

    @pytest.mark.parametrize(
        "options",
        [{"key_length": "five"}, {"top": 0}, {"unknown": 1}],
    )
    def test_invalid_options(self, client, lemon_ciphertext, options):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": lemon_ciphertext, "cipher_type": "vigenere", "options": options},
        )

        assert response.status_code == 422

    def test_zero_key_length_option(self, client, lemon_ciphertext):
        response = client.post(
            f"{API}/decrypt",
            json={
                "ciphertext": lemon_ciphertext,
                "cipher_type": "vigenere",
                "options": {"key_length": 0},
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidKeyLengthError"

    def test_nothing_to_break(self, client):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "1234", "cipher_type": "caesar"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "AnalysisError"


class TestEncryptEndpoint:
    """Test suite for /encrypt."""

    def test_encrypt_with_key(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "attack at dawn", "cipher_type": "vigenere", "key": "LEMON"},
        )

        assert response.status_code == 200
        assert response.json()["ciphertext"] == "LXFOPV EF RNHR"

    def test_encrypt_random_key(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "HELLO", "cipher_type": "caesar"},
        )

        body = response.json()
        assert 1 <= int(body["key_used"]) <= 25


class TestHistoryEndpoint:
    """Test suite for /history."""

    def test_history_lists_analyses(self, client, lemon_ciphertext):
        created = client.post(f"{API}/analyze", json={"ciphertext": lemon_ciphertext}).json()

        response = client.get(f"{API}/history", params={"page_size": 100})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] >= 1
        assert created["id"] in [item["id"] for item in body["items"]]

    def test_history_detail(self, client, lemon_ciphertext):
        created = client.post(f"{API}/analyze", json={"ciphertext": lemon_ciphertext}).json()

        response = client.get(f"{API}/history/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["reduced_key"] == "LEMON"
        assert body["ciphertext"] == lemon_ciphertext

    def test_history_missing(self, client):
        response = client.get(f"{API}/history/999999")

        assert response.status_code == 404


def test_health(client):
    assert client.get(f"{API}/health").json() == {"status": "ok"}
