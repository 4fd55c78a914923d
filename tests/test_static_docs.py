"""Tests for loading and injecting static documents."""

import asyncio
from pathlib import Path

import pytest

from src.generators.doc_entry import build_doc_entry
from src.generators.grouper import UnknownCategoryError, group_docs
from src.generators.static_docs import inject_static_docs, load_static_docs
from src.parsers.structure import DocEntry, StaticDoc
from src.utils.config import LibraryConfig


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """A project root holding two Markdown documents."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "getting_started.md").write_text("# Getting Started\n", encoding="utf-8")
    (docs / "i18n.md").write_text("# I18n: übersetzt\n", encoding="utf-8")
    return tmp_path


def _descriptor(url_id: str, category: str, path: str) -> dict:
    return {
        "type": "markdown",
        "urlId": url_id,
        "category": category,
        "title": url_id,
        "path": path,
    }


class TestLoadStaticDocs:
    """Tests for load_static_docs."""

    def test_reads_content(self, docs_root: Path) -> None:
        descriptors = [_descriptor("I18n", "General", "docs/i18n.md")]
        static_docs = asyncio.run(load_static_docs(descriptors, docs_root))
        assert static_docs[0].content == "# I18n: übersetzt\n"
        assert static_docs[0].category == "General"

    def test_descriptor_order(self, docs_root: Path) -> None:
        descriptors = [
            _descriptor("I18n", "General", "docs/i18n.md"),
            _descriptor("Getting-Started", "General", "docs/getting_started.md"),
        ]
        static_docs = asyncio.run(load_static_docs(descriptors, docs_root))
        assert [d.metadata["urlId"] for d in static_docs] == ["I18n", "Getting-Started"]

    def test_to_dict_merges_descriptor(self, docs_root: Path) -> None:
        descriptor = _descriptor("I18n", "General", "docs/i18n.md")
        static_doc = asyncio.run(load_static_docs([descriptor], docs_root))[0]
        data = static_doc.to_dict()
        assert data["content"] == "# I18n: übersetzt\n"
        assert data["urlId"] == "I18n"
        assert data["path"] == "docs/i18n.md"
        assert list(data)[0] == "content"

    def test_missing_file(self, docs_root: Path) -> None:
        descriptors = [_descriptor("Missing", "General", "docs/missing.md")]
        with pytest.raises(FileNotFoundError):
            asyncio.run(load_static_docs(descriptors, docs_root))


class TestInjectStaticDocs:
    """Tests for inject_static_docs."""

    def test_appended_after_source_entries(self, docs_root: Path) -> None:
        entry = build_doc_entry(
            {"name": "isValid", "category": "General"}, LibraryConfig()
        )
        grouped = group_docs([entry], ["General", "Day Helpers"])
        descriptors = [
            _descriptor("Getting-Started", "General", "docs/getting_started.md")
        ]

        result = asyncio.run(inject_static_docs(grouped, descriptors, docs_root))

        items = result["General"]
        assert isinstance(items[0], DocEntry)
        assert isinstance(items[1], StaticDoc)
        assert result["Day Helpers"] == []

    def test_unknown_category(self, docs_root: Path) -> None:
        grouped = group_docs([], ["Day Helpers"])
        descriptors = [_descriptor("I18n", "General", "docs/i18n.md")]
        with pytest.raises(UnknownCategoryError):
            asyncio.run(inject_static_docs(grouped, descriptors, docs_root))

    def test_no_descriptors(self, docs_root: Path) -> None:
        grouped = group_docs([], ["General"])
        result = asyncio.run(inject_static_docs(grouped, [], docs_root))
        assert result == {"General": []}
