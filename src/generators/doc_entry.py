"""Assembles raw JSDoc records into documentation entries.

Adds the identifiers, usage snippets and syntax string the docs
website renders for each documented function.
"""

import logging
import re
from typing import Any, Optional

from src.generators.params_tree import params_to_tree
from src.parsers.structure import DocEntry, UsageSnippet
from src.utils.config import LibraryConfig

logger = logging.getLogger(__name__)

# Acronym runs, capitalized words, lowercase runs and digit runs
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def snake_case(name: str) -> str:
    """Convert a camelCase name to a lowercase underscore-delimited name.

    >>> snake_case("addDays")
    'add_days'
    >>> snake_case("getISOWeek")
    'get_iso_week'
    """
    return "_".join(word.lower() for word in _WORD_RE.findall(name))


def generate_usage(name: str, library: LibraryConfig) -> dict[str, UsageSnippet]:
    """Build the usage snippets for each supported module format.

    Args:
        name: Name of the documented function.
        library: Package and global names of the documented library.

    Returns:
        Snippets keyed by 'commonjs', 'umd' and 'es2015'.
    """
    file_name = snake_case(name)
    return {
        "commonjs": UsageSnippet(
            title="CommonJS",
            code=f"var {name} = require('{library.package}/{file_name}')",
        ),
        "umd": UsageSnippet(
            title="UMD",
            code=f"var {name} = {library.global_name}.{name}",
        ),
        "es2015": UsageSnippet(
            title="ES 2015",
            code=f"import {name} from '{library.package}/{file_name}'",
        ),
    }


def generate_syntax_string(name: str, args: Optional[list[dict[str, Any]]]) -> str:
    """Build a call signature such as ``format(date, [format], [options])``.

    Only top-level arguments are listed; optional ones are bracketed.
    """
    args_string = ", ".join(
        f"[{arg['name']}]" if arg.get("optional") else arg["name"]
        for arg in args or []
    )
    return f"{name}({args_string})"


def build_doc_entry(record: dict[str, Any], library: LibraryConfig) -> DocEntry:
    """Convert one raw JSDoc record into a DocEntry.

    Args:
        record: Raw record from the comment extractor.
        library: Naming of the documented library.

    Returns:
        The assembled entry. The record itself is kept, unmodified,
        as the entry's content.
    """
    name = record["name"]
    args = params_to_tree(record.get("params"))

    return DocEntry(
        url_id=name,
        category=record.get("category"),
        title=name,
        description=record.get("summary"),
        content=record,
        args=args,
        usage=generate_usage(name, library),
        syntax=generate_syntax_string(name, args),
    )


def build_doc_entries(
    records: list[dict[str, Any]], library: LibraryConfig
) -> list[DocEntry]:
    """Assemble every record, preserving order."""
    entries = [build_doc_entry(record, library) for record in records]
    logger.info("Assembled %d documentation entries", len(entries))
    return entries
