"""Tests for the conversion facade (decode/encode by format name).

WHY: The facade is the one place every caller goes through. It decides
which codec runs and which exception type a failure surfaces as, so the
CLI and HTTP service can map errors without knowing any library.

HOW: Coroutines are driven with asyncio.run. Round-trip tests use the
product catalogue from conftest.py for each lossless format.

RULES:
- Unknown formats never reach a codec
- Library failures surface as DecodeError / EncodingError with the
  original exception chained
"""

import asyncio
import json

import pytest

import any_json
from any_json import (
    ConversionError,
    DecodeError,
    EncodingError,
    MissingFormatError,
    UnknownFormatError,
)
from any_json.codecs.base import BaseCodec
from any_json.codecs.json_codec import JsonCodec
from any_json.core.converter import Converter
from any_json.core.registry import CodecRegistry

LOSSLESS_FORMATS = ["json", "json5", "yaml", "hjson", "cson"]


class _ExplodingCodec(BaseCodec):
    """Codec that records calls and always fails."""

    def __init__(self):
        self.calls = 0

    @property
    def name(self):
        return "boom"

    async def decode(self, text):
        self.calls += 1
        raise RuntimeError("decode exploded")

    async def encode(self, value):
        self.calls += 1
        raise RuntimeError("encode exploded")


class TestRoundTrip:
    """decode(encode(v, f), f) == v for the lossless formats."""

    @pytest.mark.parametrize("format_name", LOSSLESS_FORMATS)
    def test_product_set_round_trips(self, converter, product_set, format_name):
        async def round_trip():
            encoded = await converter.encode(product_set, format_name)
            return await converter.decode(encoded, format_name)

        assert asyncio.run(round_trip()) == product_set

    @pytest.mark.parametrize("format_name", LOSSLESS_FORMATS)
    def test_object_round_trips(self, converter, format_name):
        value = {"name": "any-json", "enabled": True, "retries": 3, "nothing": None}

        async def round_trip():
            encoded = await converter.encode(value, format_name)
            return await converter.decode(encoded, format_name)

        assert asyncio.run(round_trip()) == value

    def test_module_level_functions_use_default_converter(self):
        text = asyncio.run(any_json.encode({"a": 1}, "json"))
        assert asyncio.run(any_json.decode(text, "json")) == {"a": 1}


class TestFormatResolution:

    def test_leading_dot_and_case_are_ignored(self, converter):
        assert asyncio.run(converter.decode('{"a": 1}', ".JSON")) == {"a": 1}

    def test_yml_is_not_an_alias_here(self, converter):
        with pytest.raises(UnknownFormatError):
            asyncio.run(converter.decode("a: 1", "yml"))

    @pytest.mark.parametrize("format_name", [None, "", "."])
    def test_missing_format(self, converter, format_name):
        with pytest.raises(MissingFormatError, match="Missing format!"):
            asyncio.run(converter.decode("{}", format_name))
        with pytest.raises(MissingFormatError):
            asyncio.run(converter.encode({}, format_name))

    def test_unknown_format_keeps_original_name(self, converter):
        with pytest.raises(UnknownFormatError) as info:
            asyncio.run(converter.encode({}, "Docx"))
        assert info.value.format_name == "Docx"
        assert str(info.value) == "Unknown format Docx!"

    def test_unknown_format_never_touches_a_codec(self):
        codec = _ExplodingCodec()
        converter = Converter(CodecRegistry([codec]))
        with pytest.raises(UnknownFormatError):
            asyncio.run(converter.decode("x", "nope"))
        assert codec.calls == 0

    def test_errors_share_a_base_class(self):
        for error in (MissingFormatError, UnknownFormatError, DecodeError, EncodingError):
            assert issubclass(error, ConversionError)


class TestFailureWrapping:
    """Library exceptions surface as the facade's error types."""

    def test_decode_error_carries_cause(self, converter):
        with pytest.raises(DecodeError) as info:
            asyncio.run(converter.decode('{"a": ', "json"))
        error = info.value
        assert error.format_name == "json"
        assert isinstance(error.cause, json.JSONDecodeError)
        assert error.__cause__ is error.cause
        assert "line 1" in str(error)

    @pytest.mark.parametrize(
        "format_name, text",
        [
            ("yaml", "a: [1, 2"),
            ("toml", "a = "),
            ("xml", "<a><b></a>"),
            ("json5", "{a: }"),
        ],
    )
    def test_malformed_input_is_a_decode_error(self, converter, format_name, text):
        with pytest.raises(DecodeError):
            asyncio.run(converter.decode(text, format_name))

    def test_generic_codec_failures_are_wrapped(self):
        converter = Converter(CodecRegistry([_ExplodingCodec()]))
        with pytest.raises(DecodeError, match="decode exploded"):
            asyncio.run(converter.decode("x", "boom"))
        with pytest.raises(EncodingError, match="encode exploded") as info:
            asyncio.run(converter.encode({}, "boom"))
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_encoding_errors_pass_through_unchanged(self, converter):
        with pytest.raises(EncodingError, match="CSV encoding requires the object be an array."):
            asyncio.run(converter.encode({"a": 1}, "csv"))

    def test_unserializable_value_is_an_encoding_error(self, converter):
        with pytest.raises(EncodingError):
            asyncio.run(converter.encode({"a": object()}, "json"))


class TestConverterProperties:

    def test_formats_lists_registry(self):
        converter = Converter(CodecRegistry([JsonCodec()]))
        assert converter.formats == ["json"]

    def test_codec_for(self, converter):
        assert converter.codec_for(".Yaml").name == "yaml"
