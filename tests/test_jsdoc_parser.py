"""Tests for the tree-sitter JSDoc parser."""

import textwrap
from pathlib import Path

import pytest

from src.parsers.jsdoc_parser import JSDocParser

ADD_DAYS_SOURCE = textwrap.dedent("""\
    var parse = require('../parse/index.js')

    /**
     * @category Day Helpers
     * @summary Add the specified number of days to the given date.
     *
     * @description
     * Add the specified number of days to the given date.
     *
     * @param {Date|String|Number} date - the date to be changed
     * @param {Number} amount - the amount of days to be added
     * @returns {Date} the new date with the days added
     *
     * @example
     * // Add 10 days to 1 September 2014:
     * var result = addDays(new Date(2014, 8, 1), 10)
     * //=> Thu Sep 11 2014 00:00:00
     */
    function addDays (dirtyDate, dirtyAmount) {
      var date = parse(dirtyDate)
      date.setDate(date.getDate() + Number(dirtyAmount))
      return date
    }

    module.exports = addDays
""")


@pytest.fixture
def parser() -> JSDocParser:
    """Create a JSDocParser instance for testing."""
    return JSDocParser()


class TestParseSource:
    """Tests for parsing JS source strings."""

    def test_empty_source(self, parser: JSDocParser) -> None:
        assert parser.parse_source("") == []

    def test_source_without_jsdoc(self, parser: JSDocParser) -> None:
        source = "// plain comment\nfunction hello() { return 42; }\n"
        assert parser.parse_source(source) == []

    def test_full_record(self, parser: JSDocParser) -> None:
        records = parser.parse_source(ADD_DAYS_SOURCE, "src/addDays/index.js")
        assert len(records) == 1
        record = records[0]
        assert record["name"] == "addDays"
        assert record["kind"] == "function"
        assert record["category"] == "Day Helpers"
        assert record["summary"] == (
            "Add the specified number of days to the given date."
        )
        assert record["description"] == record["summary"]

    def test_params_use_documented_names(self, parser: JSDocParser) -> None:
        record = parser.parse_source(ADD_DAYS_SOURCE)[0]
        params = record["params"]
        assert [p["name"] for p in params] == ["date", "amount"]
        assert params[0]["type"] == {"names": ["Date", "String", "Number"]}
        assert params[0]["description"] == "the date to be changed"
        assert "optional" not in params[0]

    def test_returns_and_examples(self, parser: JSDocParser) -> None:
        record = parser.parse_source(ADD_DAYS_SOURCE)[0]
        assert record["returns"] == [
            {
                "type": {"names": ["Date"]},
                "description": "the new date with the days added",
            }
        ]
        assert len(record["examples"]) == 1
        assert "addDays(new Date(2014, 8, 1), 10)" in record["examples"][0]

    def test_meta(self, parser: JSDocParser) -> None:
        record = parser.parse_source(ADD_DAYS_SOURCE, "src/addDays/index.js")[0]
        assert record["meta"]["filename"] == "index.js"
        assert record["meta"]["path"] == "src/addDays"
        assert record["meta"]["lineno"] == 19


class TestParams:
    """Tests for @param parsing."""

    def test_optional_and_nested(self, parser: JSDocParser) -> None:
        source = textwrap.dedent("""\
            /**
             * @category Common Helpers
             * @summary Format the date.
             * @param {Date} date - the original date
             * @param {String} [format='YYYY-MM-DD'] - the format string
             * @param {Object} [options] - the object with options
             * @param {Object} [options.locale=enLocale] - the locale object
             */
            function format (dirtyDate, formatStr, options) {}
        """)
        params = parser.parse_source(source)[0]["params"]
        assert [p["name"] for p in params] == [
            "date",
            "format",
            "options",
            "options.locale",
        ]
        assert params[1]["optional"] is True
        assert params[1]["defaultvalue"] == "'YYYY-MM-DD'"
        assert params[3]["defaultvalue"] == "enLocale"

    def test_optional_type_suffix(self, parser: JSDocParser) -> None:
        source = "/**\n * @param {Number=} amount - how many\n */\nfunction f(a) {}\n"
        param = parser.parse_source(source)[0]["params"][0]
        assert param["optional"] is True
        assert param["type"] == {"names": ["Number"]}

    def test_no_params_key_when_undocumented(self, parser: JSDocParser) -> None:
        source = "/**\n * @summary Now.\n */\nfunction now() {}\n"
        assert "params" not in parser.parse_source(source)[0]


class TestNameResolution:
    """Tests for resolving the documented declaration."""

    def test_exported_function(self, parser: JSDocParser) -> None:
        source = "/**\n * Helper.\n */\nexport function helper() {}\n"
        assert parser.parse_source(source)[0]["name"] == "helper"

    def test_default_export(self, parser: JSDocParser) -> None:
        source = "/**\n * Helper.\n */\nexport default function subDays() {}\n"
        assert parser.parse_source(source)[0]["name"] == "subDays"

    def test_arrow_function(self, parser: JSDocParser) -> None:
        source = "/**\n * Multiply.\n */\nconst multiply = (a, b) => a * b;\n"
        record = parser.parse_source(source)[0]
        assert record["name"] == "multiply"
        assert record["description"] == "Multiply."

    def test_class_kind(self, parser: JSDocParser) -> None:
        source = "/**\n * A range.\n */\nclass Range {}\n"
        assert parser.parse_source(source)[0]["kind"] == "class"

    def test_name_tag_wins(self, parser: JSDocParser) -> None:
        source = "/**\n * @name isValid\n */\nfunction isValidImpl() {}\n"
        assert parser.parse_source(source)[0]["name"] == "isValid"

    def test_skips_plain_comment_before_declaration(self, parser: JSDocParser) -> None:
        source = "/**\n * Doc.\n */\n// eslint-disable-line\nfunction later() {}\n"
        assert parser.parse_source(source)[0]["name"] == "later"

    def test_unnamed_block_skipped(self, parser: JSDocParser) -> None:
        source = "/**\n * License header.\n */\n\n/**\n * Doc.\n */\nfunction f() {}\n"
        records = parser.parse_source(source)
        assert [r["name"] for r in records] == ["f"]

    def test_private_block_skipped(self, parser: JSDocParser) -> None:
        source = "/**\n * @private\n */\nfunction internal() {}\n"
        assert parser.parse_source(source) == []


class TestParseFile:
    """Tests for parsing files from disk."""

    def test_parse_file(self, parser: JSDocParser, tmp_path: Path) -> None:
        js_file = tmp_path / "index.js"
        js_file.write_text(ADD_DAYS_SOURCE)
        records = parser.parse_file(str(js_file))
        assert records[0]["name"] == "addDays"

    def test_typescript_file(self, parser: JSDocParser, tmp_path: Path) -> None:
        ts_file = tmp_path / "index.ts"
        ts_file.write_text(
            "/**\n * @param {Date} date - the date\n */\n"
            "export function isToday(date: Date): boolean { return true; }\n"
        )
        records = parser.parse_file(str(ts_file))
        assert records[0]["name"] == "isToday"

    def test_missing_file(self, parser: JSDocParser) -> None:
        with pytest.raises(FileNotFoundError):
            parser.parse_file("/nonexistent/index.js")
