"""Tests for the form/query codec used by every hubIC request."""

import string

from hubix.auth.primitives.query import (
    decode_query,
    decode_url_query,
    encode_form,
    first_value,
)


class TestEncodeForm:
    def test_pairs_are_joined_in_order(self):
        # Act
        body = encode_form([("login", "user"), ("action", "accepted")])

        # Assert
        assert body == b"login=user&action=accepted"

    def test_reserved_characters_are_percent_encoded(self):
        # Act
        body = encode_form(
            [("user_pwd", "p@ss w&rd=1"), ("redirect_uri", "https://a/b?c")]
        )

        # Assert
        assert body == (
            b"user_pwd=p%40ss+w%26rd%3D1&redirect_uri=https%3A%2F%2Fa%2Fb%3Fc"
        )

    def test_empty_sequence_encodes_to_empty_body(self):
        assert encode_form([]) == b""


class TestDecodeQuery:
    def test_duplicate_keys_are_preserved_in_encounter_order(self):
        # Act
        pairs = decode_query("state=first&code=C1&state=second")

        # Assert
        assert pairs == [("state", "first"), ("code", "C1"), ("state", "second")]
        assert first_value(pairs, "state") == "first"

    def test_blank_values_are_kept(self):
        assert decode_query("error=&code=C1") == [("error", ""), ("code", "C1")]

    def test_first_value_returns_none_for_absent_key(self):
        assert first_value([("code", "C1")], "error") is None

    def test_decode_url_query_reads_only_the_query_string(self):
        # Act
        pairs = decode_url_query("https://x/callback?code=C1&state=S1#fragment")

        # Assert
        assert pairs == [("code", "C1"), ("state", "S1")]

    def test_round_trip_preserves_printable_pairs(self):
        # Arrange
        pairs = [
            ("oauth", "123"),
            ("credentials", "r"),
            ("login", "user+tag@example.com"),
            ("user_pwd", string.punctuation + " " + string.ascii_letters),
            ("login", "second"),
        ]

        # Act
        decoded = decode_query(encode_form(pairs).decode("ascii"))

        # Assert
        assert decoded == pairs
        assert first_value(decoded, "login") == "user+tag@example.com"
