"""Tests for Authorization header construction."""

import base64

import pytest

from wbglance.api.auth import build_auth_header


def _decode(header: str) -> str:
    assert header.startswith("Basic ")
    return base64.b64decode(header[len("Basic ") :]).decode("utf-8")


@pytest.mark.parametrize(
    "raw",
    [
        "0123456789abcdef0123456789abcdef01234567",
        "  padded-key\n",
        "\tkey with inner space\t",
        "ключ-юникод",
    ],
)
def test_header_decodes_to_api_user_and_trimmed_key(raw):
    """Test that the header is Basic auth for user 'api' and the trimmed key."""
    assert _decode(build_auth_header(raw)) == "api:" + raw.strip()


def test_known_value():
    """Test a fixed key against a precomputed header."""
    assert build_auth_header("secret") == "Basic YXBpOnNlY3JldA=="


def test_empty_key_still_produces_header():
    """Test that blank keys produce a well-formed header instead of raising."""
    assert build_auth_header("") == build_auth_header("   ")
    assert _decode(build_auth_header("   ")) == "api:"
