"""Data models for representing extracted documentation.

Defines dataclasses for source files, usage snippets, assembled doc
entries and static documents. These models form the shared vocabulary
between the extractor, the generators and the JSON writer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

USAGE_TABS = ("commonjs", "umd", "es2015")


@dataclass(frozen=True)
class SourceFile:
    """A source file scheduled for extraction.

    Attributes:
        name: Name of the documented unit (e.g. 'addDays').
        path: Path relative to the project root.
        full_path: Absolute path used to read the file.
    """

    name: str
    path: str
    full_path: str


@dataclass(frozen=True)
class UsageSnippet:
    """A single usage example for one module-loading convention."""

    title: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "code": self.code}


@dataclass(frozen=True)
class DocEntry:
    """Assembled documentation entry for one documented function.

    Attributes:
        url_id: URL-safe identifier of the entry.
        category: Name of the group the entry belongs to.
        title: Display title.
        description: Short description (the record summary).
        content: The raw extracted record, unmodified.
        args: Parameter tree, or None when nothing is documented.
        usage: Usage snippets keyed by module-loading convention.
        syntax: One-line call signature.
        usage_tabs: Order in which usage snippets are presented.
        type: Entry kind, always 'jsdoc' for source-derived entries.
    """

    url_id: str
    category: Optional[str]
    title: str
    description: Optional[str]
    content: dict[str, Any]
    args: Optional[list[dict[str, Any]]]
    usage: dict[str, UsageSnippet]
    syntax: str
    usage_tabs: tuple[str, ...] = USAGE_TABS
    type: str = "jsdoc"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape consumed by the docs website.

        Returns:
            Dictionary representation of this entry.
        """
        return {
            "type": self.type,
            "urlId": self.url_id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "args": self.args,
            "usage": {key: snippet.to_dict() for key, snippet in self.usage.items()},
            "usageTabs": list(self.usage_tabs),
            "syntax": self.syntax,
        }


@dataclass(frozen=True)
class StaticDoc:
    """A free-form document loaded verbatim from disk.

    Attributes:
        category: Name of the group the document is appended to.
        content: Full text of the document.
        metadata: All descriptor fields (type, urlId, title, path, ...).
    """

    category: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Descriptor fields take precedence over the loaded content.

        Returns:
            Dictionary representation of this document.
        """
        return {"content": self.content, **self.metadata}

    @classmethod
    def from_descriptor(cls, descriptor: dict[str, Any], content: str) -> StaticDoc:
        """Build a StaticDoc from a configured descriptor.

        Args:
            descriptor: Static document descriptor from the docs config.
            content: Text read from the descriptor's path.

        Returns:
            A new StaticDoc instance.
        """
        return cls(
            category=descriptor["category"], content=content, metadata=dict(descriptor)
        )
