"""Tests for base64 field decoding."""

from __future__ import annotations

import base64

from kds.decoding import decode_fields, decode_value
from kds.models import DECODE_FAILED_MARKER


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


class TestDecodeValue:
    def test_valid_base64_text(self):
        assert decode_value(_b64(b"hunter2")) == ("hunter2", True)

    def test_bytes_input(self):
        assert decode_value(_b64(b"hello").encode("ascii")) == ("hello", True)

    def test_empty_and_none(self):
        assert decode_value("") == ("", True)
        assert decode_value(None) == ("", True)

    def test_invalid_base64_returns_raw(self):
        assert decode_value("not base64!") == ("not base64!", False)

    def test_non_text_value_is_a_decode_failure(self):
        assert decode_value(123) == ("123", False)

    def test_non_utf8_payload_is_a_decode_failure(self):
        raw = _b64(b"\xff\xfe\x00")

        assert decode_value(raw) == (raw, False)

    def test_multiline_value_keeps_newlines(self):
        text, ok = decode_value(_b64(b"line one\nline two"))

        assert ok
        assert text == "line one\nline two"


class TestDecodeFields:
    def test_mixed_fields_annotate_only_failures(self):
        data = decode_fields({"good": _b64(b"secret"), "bad": "%%%"})

        assert data == {"good": "secret", "bad": f"%%% {DECODE_FAILED_MARKER}"}

    def test_none_mapping_is_empty(self):
        assert decode_fields(None) == {}
