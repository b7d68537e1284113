"""Tests for Base32 decoding and encoding."""

import base64

import pytest

from base32 import b32decode, b32encode, is_valid_secret


class TestDecode:

    @pytest.mark.parametrize("encoded,expected", [
        ("", b""),
        ("MY======", b"f"),
        ("MZXQ====", b"fo"),
        ("MZXW6===", b"foo"),
        ("MZXW6YQ=", b"foob"),
        ("MZXW6YTB", b"fooba"),
        ("MZXW6YTBOI======", b"foobar"),
    ])
    def test_rfc4648_vectors(self, encoded, expected):
        assert b32decode(encoded) == expected

    def test_unpadded(self):
        assert b32decode("MZXW6YTBOI") == b"foobar"

    def test_case_insensitive(self):
        assert b32decode("mzxw6ytboi") == b"foobar"

    def test_skips_characters_outside_alphabet(self):
        assert b32decode("MZXW 6YTB-OI") == b"foobar"
        assert b32decode("MZXW1 6YTB8OI") == b"foobar"

    def test_only_invalid_characters(self):
        assert b32decode("0189!") == b""

    def test_leftover_bits_are_dropped(self):
        # 3 characters = 15 bits -> one byte, 7 bits discarded
        assert b32decode("MZX") == b"f"

    def test_rfc_test_secret(self):
        assert b32decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ") == b"12345678901234567890"


class TestEncode:

    @pytest.mark.parametrize("data", [b"", b"f", b"fo", b"foo", b"foob", b"fooba", b"foobar",
                                      bytes(range(256))])
    def test_matches_stdlib(self, data):
        assert b32encode(data) == base64.b32encode(data).decode("ascii")

    def test_unpadded(self):
        assert b32encode(b"foobar", padding=False) == "MZXW6YTBOI"

    @pytest.mark.parametrize("length", [1, 5, 10, 20, 32, 33])
    def test_decode_reverses_encode(self, length):
        data = bytes((i * 37 + 11) % 256 for i in range(length))
        assert b32decode(b32encode(data)) == data
        assert b32decode(b32encode(data, padding=False)) == data


class TestIsValidSecret:

    def test_valid(self):
        assert is_valid_secret("JBSWY3DPEHPK3PXP")
        assert is_valid_secret("jbsw y3dp ehpk 3pxp")
        assert is_valid_secret("MZXW6YQ=")

    def test_invalid(self):
        assert not is_valid_secret("")
        assert not is_valid_secret("====")
        assert not is_valid_secret("JBSWY3DP!")
        assert not is_valid_secret("0123")
        assert not is_valid_secret(None)
        # Decodes to zero bytes
        assert not is_valid_secret("A")
