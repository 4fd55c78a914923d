"""Groups documentation entries into the configured categories."""

import logging
from typing import Any, Union

from src.parsers.structure import DocEntry, StaticDoc

logger = logging.getLogger(__name__)

GroupedDocs = dict[str, list[Union[DocEntry, StaticDoc]]]


class UnknownCategoryError(LookupError):
    """Raised when a documented item names a category missing from the config."""

    def __init__(self, item: str, category: Any, groups: list[str]) -> None:
        super().__init__(
            f"{item} belongs to category {category!r}, which is not one of the "
            f"configured groups: {', '.join(groups)}"
        )
        self.item = item
        self.category = category


def build_groups_template(groups: list[str]) -> GroupedDocs:
    """Map every configured group to an empty list, in configured order.

    Seeding the mapping up front fixes the order of the groups and keeps
    groups that receive no entries.
    """
    return {group: [] for group in groups}


def group_docs(entries: list[DocEntry], groups: list[str]) -> GroupedDocs:
    """Group entries by category.

    Args:
        entries: Assembled entries, in extraction order.
        groups: Configured category names, in display order.

    Returns:
        Ordered mapping of category to entries; entries keep their
        relative input order.

    Raises:
        UnknownCategoryError: If an entry's category is not configured.
    """
    grouped = build_groups_template(groups)
    for entry in entries:
        if entry.category not in grouped:
            raise UnknownCategoryError(entry.url_id, entry.category, groups)
        grouped[entry.category].append(entry)

    logger.info("Grouped %d entries into %d categories", len(entries), len(grouped))
    return grouped
