"""JSDoc comment parser using tree-sitter.

Finds top-level JSDoc blocks in JavaScript and TypeScript source files,
resolves the declaration each block documents, and converts the block's
tags into raw documentation records (plain JSON-compatible dicts).
"""

import logging
import re
from pathlib import Path
from typing import Any, Optional

import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(tsjs.language())
_TS_LANGUAGE = tree_sitter.Language(tsts.language_typescript())

# Declarations and expressions whose name is held in the "name" field
_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "function_expression",
    "function",
    "class",
}
_VARIABLE_DECLARATIONS = {
    "lexical_declaration",
    "variable_declaration",
}

_TAG_RE = re.compile(r"^@(\w+)\s*(.*)$")
_TYPED_RE = re.compile(r"^(?:\{(?P<type>[^}]*)\}\s*)?(?P<rest>.*)$", re.DOTALL)
_PARAM_RE = re.compile(
    r"^(?P<name>\[[^\]]*\]|\S+)\s*(?:-\s+)?(?P<description>.*)$", re.DOTALL
)


class JSDocParser:
    """Extracts documentation records from JSDoc comments.

    Each record mirrors the shape produced by JSDoc tooling: name,
    kind, category, summary, description, a flat ``params`` list (dotted
    names for nested properties), returns, exceptions, examples and
    source location metadata. Keys are omitted when a tag is absent.
    """

    def parse_file(self, file_path: str) -> list[dict[str, Any]]:
        """Parse a JavaScript or TypeScript file into documentation records.

        Args:
            file_path: Path to the JS/TS file to parse.

        Returns:
            Records in source order.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = path.read_text(encoding="utf-8")
        typescript = path.suffix in (".ts", ".tsx")
        return self.parse_source(source, file_path, typescript=typescript)

    def parse_source(
        self,
        source: str,
        file_path: str = "<string>",
        typescript: bool = False,
    ) -> list[dict[str, Any]]:
        """Parse a JS/TS source string into documentation records.

        Args:
            source: JavaScript or TypeScript source code.
            file_path: Optional file path recorded in each record's meta.
            typescript: Whether to use the TypeScript grammar.

        Returns:
            Records in source order.
        """
        parser = tree_sitter.Parser(_TS_LANGUAGE if typescript else _JS_LANGUAGE)
        source_bytes = source.encode("utf-8")
        tree = parser.parse(source_bytes)

        records = []
        for child in tree.root_node.children:
            if child.type != "comment":
                continue
            text = self._node_text(child, source_bytes)
            if not text.startswith("/**"):
                continue
            record = self._build_record(text, child, source_bytes, file_path)
            if record:
                records.append(record)

        logger.debug("Parsed %s: %d documented items", file_path, len(records))
        return records

    def _build_record(
        self,
        raw: str,
        comment: tree_sitter.Node,
        source_bytes: bytes,
        file_path: str,
    ) -> Optional[dict[str, Any]]:
        """Build a record from one JSDoc block.

        Returns:
            The record, or None for private blocks and blocks whose
            name cannot be resolved.
        """
        lead, tags = self._split_tags(self._clean_jsdoc(raw))
        if any(tag == "private" for tag, _ in tags):
            return None

        declaration = self._documented_node(comment)
        tag_values = {tag: body for tag, body in tags}
        name = tag_values.get("name") or self._declaration_name(
            declaration, source_bytes
        )
        if not name:
            logger.debug(
                "Skipping unnamed JSDoc block at line %d", comment.start_point.row + 1
            )
            return None

        kind = tag_values.get("kind")
        if not kind:
            kind = "class" if self._is_class(declaration) else "function"

        record: dict[str, Any] = {
            "id": name,
            "longname": name,
            "name": name,
            "kind": kind,
            "scope": "global",
        }

        description = tag_values.get("description") or lead
        if description:
            record["description"] = description
        for key in ("summary", "category"):
            if tag_values.get(key):
                record[key] = tag_values[key]

        params = [
            self._parse_param(body)
            for tag, body in tags
            if tag in ("param", "arg", "argument")
        ]
        if params:
            record["params"] = params

        returns = [
            self._parse_typed(body)
            for tag, body in tags
            if tag in ("returns", "return")
        ]
        if returns:
            record["returns"] = returns

        exceptions = [
            self._parse_typed(body)
            for tag, body in tags
            if tag in ("throws", "exception")
        ]
        if exceptions:
            record["exceptions"] = exceptions

        examples = [body for tag, body in tags if tag == "example"]
        if examples:
            record["examples"] = examples

        anchor = declaration or comment
        path = Path(file_path)
        record["meta"] = {
            "lineno": anchor.start_point.row + 1,
            "filename": path.name,
            "path": str(path.parent),
        }
        return record

    def _split_tags(self, text: str) -> tuple[str, list[tuple[str, str]]]:
        """Split cleaned JSDoc text into leading prose and (tag, body) pairs.

        A tag's body runs until the next line starting with '@'.
        """
        lead_lines: list[str] = []
        tags: list[tuple[str, list[str]]] = []
        for line in text.split("\n"):
            match = _TAG_RE.match(line)
            if match:
                tags.append((match.group(1), [match.group(2)]))
            elif tags:
                tags[-1][1].append(line)
            else:
                lead_lines.append(line)

        return (
            "\n".join(lead_lines).strip(),
            [(tag, "\n".join(lines).strip()) for tag, lines in tags],
        )

    def _parse_type(self, type_expr: str) -> dict[str, list[str]]:
        """Convert a type expression such as '(Date|Number)' to type names."""
        type_expr = type_expr.strip().strip("()")
        names = [name.strip() for name in type_expr.split("|")]
        return {"names": [name for name in names if name]}

    def _parse_typed(self, body: str) -> dict[str, Any]:
        """Parse a '{Type} description' tag body (@returns, @throws)."""
        match = _TYPED_RE.match(body)
        result: dict[str, Any] = {}
        if match.group("type"):
            result["type"] = self._parse_type(match.group("type"))
        description = match.group("rest").strip()
        if description:
            result["description"] = description
        return result

    def _parse_param(self, body: str) -> dict[str, Any]:
        """Parse a '@param {Type} [name=default] - description' tag body.

        A parameter is optional when its name is bracketed or its type
        ends with '='. Nested properties keep their dotted names.
        """
        typed = _TYPED_RE.match(body)
        type_expr = typed.group("type")
        optional = False
        param: dict[str, Any] = {}

        if type_expr:
            if type_expr.endswith("="):
                optional = True
                type_expr = type_expr[:-1]
            param["type"] = self._parse_type(type_expr)

        match = _PARAM_RE.match(typed.group("rest").strip())
        name = match.group("name") if match else ""
        default_value = None
        if name.startswith("[") and name.endswith("]"):
            optional = True
            name = name[1:-1].strip()
            if "=" in name:
                name, default_value = (part.strip() for part in name.split("=", 1))

        description = match.group("description").strip() if match else ""
        if description:
            param["description"] = description
        param["name"] = name
        if optional:
            param["optional"] = True
        if default_value is not None:
            param["defaultvalue"] = default_value
        return param

    def _documented_node(self, comment: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        """Return the declaration following a JSDoc block.

        Plain comments between the block and the declaration are skipped;
        another JSDoc block ends the search.
        """
        node = comment.next_named_sibling
        while node is not None and node.type == "comment":
            if node.text.startswith(b"/**"):
                return None
            node = node.next_named_sibling
        return node

    def _declaration_name(
        self, node: Optional[tree_sitter.Node], source_bytes: bytes
    ) -> Optional[str]:
        """Resolve the name declared by a node, if any.

        Handles function and class declarations, exported declarations
        and ``const name = () => ...`` style variable declarations.
        """
        if node is None:
            return None

        if node.type in _NAMED_DECLARATIONS:
            name_node = node.child_by_field_name("name")
            return self._node_text(name_node, source_bytes) if name_node else None

        if node.type in _VARIABLE_DECLARATIONS:
            for decl in self._iter_children_of_type(node, "variable_declarator"):
                name_node = decl.child_by_field_name("name")
                if name_node:
                    return self._node_text(name_node, source_bytes)
            return None

        if node.type == "export_statement":
            for child in node.named_children:
                name = self._declaration_name(child, source_bytes)
                if name:
                    return name

        return None

    def _is_class(self, node: Optional[tree_sitter.Node]) -> bool:
        if node is None:
            return False
        if node.type == "export_statement":
            return any(c.type == "class_declaration" for c in node.named_children)
        return node.type == "class_declaration"

    def _clean_jsdoc(self, raw: str) -> str:
        """Clean a raw JSDoc comment string.

        Removes comment delimiters and leading asterisks.

        Args:
            raw: Raw JSDoc comment string including delimiters.

        Returns:
            Cleaned documentation text.
        """
        text = raw.strip()
        if text.startswith("/**"):
            text = text[3:]
        if text.endswith("*/"):
            text = text[:-2]
        cleaned = []
        for line in text.split("\n"):
            line = line.strip()
            if line.startswith("* "):
                line = line[2:]
            elif line == "*":
                line = ""
            cleaned.append(line)
        return "\n".join(cleaned).strip()

    def _node_text(self, node: tree_sitter.Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8")

    def _iter_children_of_type(
        self, node: tree_sitter.Node, type_name: str
    ) -> list[tree_sitter.Node]:
        return [c for c in node.children if c.type == type_name]
