"""Unit tests for the text codecs (JSON, JSON5, YAML, TOML, XML, ...).

WHY: Each codec wraps a third-party library with a few house rules:
comment stripping for JSON, four-space indentation, plain dict output,
and explicit rejection of values a format cannot express. These tests
pin those rules down per codec.

HOW: Codecs are instantiated directly and driven with asyncio.run; the
facade is not involved except where error wrapping matters.
"""

import asyncio
import collections
import datetime

import pytest
import yaml

from any_json.codecs.cson_codec import CsonCodec
from any_json.codecs.hjson_codec import HjsonCodec
from any_json.codecs.json5_codec import Json5Codec
from any_json.codecs.json_codec import JsonCodec, strip_json_comments
from any_json.codecs.toml_codec import TomlCodec
from any_json.codecs.xml_codec import XmlCodec
from any_json.codecs.yaml_codec import YamlCodec
from any_json.core.errors import DecodeError, EncodingError
from any_json.core.values import to_plain


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class TestStripJsonComments:
    """strip_json_comments() blanks comments outside string literals."""

    def test_line_comment(self):
        text = '{"a": 1} // trailing'
        assert strip_json_comments(text) == '{"a": 1} ' + " " * len("// trailing")

    def test_block_comment_keeps_newlines(self):
        text = '{/* one\ntwo */"a": 1}'
        stripped = strip_json_comments(text)
        assert stripped.count("\n") == 1
        assert len(stripped) == len(text)

    def test_markers_inside_strings_are_kept(self):
        text = '{"url": "http://example.com/*x*/"}'
        assert strip_json_comments(text) == text

    def test_escaped_quote_does_not_end_string(self):
        text = '{"a": "say \\"//hi\\""}'
        assert strip_json_comments(text) == text

    def test_unterminated_block_comment_blanks_rest(self):
        assert strip_json_comments("1 /* never closed").strip() == "1"


class TestJsonCodec:

    def test_decodes_commented_json(self):
        text = """{
            // the answer
            "answer": 42, /* inline */ "ok": true
        }"""
        assert asyncio.run(JsonCodec().decode(text)) == {"answer": 42, "ok": True}

    def test_encodes_with_four_space_indent(self):
        result = asyncio.run(JsonCodec().encode({"key": 1}))
        assert result == '{\n    "key": 1\n}'

    def test_keeps_non_ascii(self):
        result = asyncio.run(JsonCodec().encode({"city": "Göteborg"}))
        assert "Göteborg" in result

    def test_dates_become_iso_strings(self):
        result = asyncio.run(JsonCodec().encode({"day": datetime.date(2024, 2, 29)}))
        assert '"2024-02-29"' in result

    def test_accepts_bytes_with_bom(self):
        data = '\ufeff{"a": 1}'.encode("utf-8")
        assert asyncio.run(JsonCodec().decode(data)) == {"a": 1}


    def test_trailing_comma_is_rejected(self, converter):
        with pytest.raises(DecodeError, match="Could not decode json"):
            asyncio.run(converter.decode('{"a": 1,}', "json"))
        assert asyncio.run(converter.decode('{"a": 1,}', "json5")) == {"a": 1}

    def test_single_quotes_are_rejected(self):
        with pytest.raises(ValueError):
            asyncio.run(JsonCodec().decode("{'a': 1} // note"))

# ---------------------------------------------------------------------------
# JSON5, HJSON, CSON, YAML
# ---------------------------------------------------------------------------


class TestJson5Codec:

    def test_decodes_relaxed_syntax(self):
        text = "{unquoted: 'single', trailing: [1, 2,], hex: 0x10}"
        result = asyncio.run(Json5Codec().decode(text))
        assert result == {"unquoted": "single", "trailing": [1, 2], "hex": 16}

    def test_encode_uses_unquoted_keys_and_no_trailing_commas(self):
        result = asyncio.run(Json5Codec().encode({"key": [1, 2]}))
        assert result.startswith("{\n    key: ")
        assert ",\n}" not in result
        assert ",\n    ]" not in result


class TestHjsonCodec:

    def test_decodes_to_plain_dicts(self):
        text = "{\n  key: value\n  list: [\n    1\n    2\n  ]\n}"
        result = asyncio.run(HjsonCodec().decode(text))
        assert result == {"key": "value", "list": [1, 2]}
        assert type(result) is dict

    def test_decoded_value_can_be_safe_dumped_as_yaml(self):
        decoded = asyncio.run(HjsonCodec().decode("{\n  a: {\n    b: 1\n  }\n}"))
        assert yaml.safe_load(yaml.safe_dump(decoded)) == {"a": {"b": 1}}


class TestCsonCodec:

    def test_decodes_cson(self):
        result = asyncio.run(CsonCodec().decode("name: 'x'\nnested:\n  n: 1\n"))
        assert result == {"name": "x", "nested": {"n": 1}}
        assert type(result) is dict


class TestYamlCodec:

    def test_preserves_key_order(self):
        result = asyncio.run(YamlCodec().encode({"zeta": 1, "alpha": 2}))
        assert result.index("zeta") < result.index("alpha")

    def test_refuses_python_tags(self):
        with pytest.raises(yaml.YAMLError):
            asyncio.run(YamlCodec().decode("!!python/object/apply:os.system ['true']"))


# ---------------------------------------------------------------------------
# TOML
# ---------------------------------------------------------------------------


class TestTomlCodec:

    def test_round_trips_tables(self):
        value = {"title": "demo", "owner": {"name": "Tom", "admin": True}}

        async def round_trip():
            codec = TomlCodec()
            return await codec.decode(await codec.encode(value))

        assert asyncio.run(round_trip()) == value

    def test_rejects_top_level_array(self):
        with pytest.raises(EncodingError, match="table"):
            asyncio.run(TomlCodec().encode([{"a": 1}]))

    def test_rejects_top_level_scalar(self):
        with pytest.raises(EncodingError):
            asyncio.run(TomlCodec().encode("just text"))


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------


class TestXmlCodec:

    def test_decodes_attributes_and_repeated_elements(self):
        text = '<shop id="7"><item>a</item><item>b</item></shop>'
        result = asyncio.run(XmlCodec().decode(text))
        assert result == {"shop": {"@id": "7", "item": ["a", "b"]}}
        assert type(result["shop"]) is dict

    def test_single_key_mapping_is_the_root(self):
        result = asyncio.run(XmlCodec().encode({"shop": {"name": "x"}}))
        assert "<shop>" in result
        assert "<root>" not in result
        assert result.startswith("<?xml")

    def test_list_is_wrapped_in_root_items(self):
        result = asyncio.run(XmlCodec().encode([1, 2]))
        assert "<root>" in result
        assert result.count("<item>") == 2

    def test_multi_key_mapping_is_wrapped_in_root(self):
        result = asyncio.run(XmlCodec().encode({"a": "1", "b": "2"}))
        decoded = asyncio.run(XmlCodec().decode(result))
        assert decoded == {"root": {"a": "1", "b": "2"}}

    def test_nested_lists_become_nested_items(self):
        result = asyncio.run(XmlCodec().encode([[1, 2], [3]]))
        assert "[1, 2]" not in result
        decoded = asyncio.run(XmlCodec().decode(result))
        assert decoded == {"root": {"item": [{"item": ["1", "2"]}, {"item": "3"}]}}

    def test_nested_lists_inside_mappings(self):
        result = asyncio.run(XmlCodec().encode({"grid": {"rows": [["a"], ["b", "c"]]}}))
        decoded = asyncio.run(XmlCodec().decode(result))
        assert decoded == {"grid": {"rows": [{"item": "a"}, {"item": ["b", "c"]}]}}


class TestToPlain:

    def test_rebuilds_nested_ordered_dicts(self):
        value = collections.OrderedDict([("b", collections.OrderedDict(c=(1, 2))), ("a", 1)])
        plain = to_plain(value)
        assert plain == {"b": {"c": [1, 2]}, "a": 1}
        assert type(plain) is dict and type(plain["b"]) is dict
        assert list(plain) == ["b", "a"]


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------


class TestDecodedDates:
    """Parsers that produce date objects hand back ISO-8601 strings."""

    def test_yaml_date(self):
        assert asyncio.run(YamlCodec().decode("when: 2024-01-02\n")) == {"when": "2024-01-02"}

    def test_yaml_timestamp(self):
        result = asyncio.run(YamlCodec().decode("at: 2024-01-02 03:04:05\n"))
        assert result == {"at": "2024-01-02T03:04:05"}

    def test_toml_date(self):
        assert asyncio.run(TomlCodec().decode("day = 2024-01-02\n")) == {"day": "2024-01-02"}

    def test_to_plain_renders_nested_dates(self):
        value = {"days": [datetime.date(2024, 1, 2)], "at": datetime.time(3, 4)}
        assert to_plain(value) == {"days": ["2024-01-02"], "at": "03:04:00"}

    @pytest.mark.parametrize(
        "format_name", ["json", "json5", "hjson", "cson", "yaml", "toml", "ini", "xml"]
    )
    def test_yaml_date_encodes_to_every_text_format(self, converter, format_name):
        async def convert():
            value = await converter.decode("when: 2024-01-02\n", "yaml")
            return await converter.encode(value, format_name)

        assert "2024-01-02" in asyncio.run(convert())

    def test_yaml_date_encodes_to_csv(self, converter):
        async def convert():
            value = await converter.decode("when: 2024-01-02\n", "yaml")
            return await converter.encode([value], "csv")

        assert asyncio.run(convert()) == "when\n2024-01-02\n"

    @pytest.mark.parametrize("format_name", ["json5", "hjson", "cson"])
    def test_encoders_accept_date_objects(self, converter, format_name):
        result = asyncio.run(converter.encode({"day": datetime.date(2024, 2, 29)}, format_name))
        assert "2024-02-29" in result
