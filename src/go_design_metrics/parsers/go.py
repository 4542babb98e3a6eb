"""Go source parser built on tree-sitter.

Only the parts of a file that package metrics need are extracted: the package
clause, the import paths and the top-level declarations with enough shape to
tell an interface from a struct from a standalone function.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ..core.exceptions import ParsingError

if TYPE_CHECKING:
    from tree_sitter import Node


class DeclarationKind(StrEnum):
    INTERFACE = "interface"
    STRUCT = "struct"
    FUNCTION = "function"
    METHOD = "method"
    OTHER = "other"


@dataclass(frozen=True)
class GoDeclaration:
    """A top-level declaration of a Go file."""

    name: str
    kind: DeclarationKind
    line: int


@dataclass
class GoSourceFile:
    """Declarations extracted from a single Go file."""

    path: Path
    package_name: str = ""
    imports: list[str] = field(default_factory=list)
    declarations: list[GoDeclaration] = field(default_factory=list)
    error_line: int | None = None

    @property
    def has_syntax_error(self) -> bool:
        return self.error_line is not None

    def raise_for_syntax_error(self) -> None:
        """Raise ParsingError if the file was parsed with syntax errors."""
        if self.error_line is None:
            return
        raise ParsingError(
            f"failed to parse file {self.path}: "
            f"syntax error near line {self.error_line}",
            context={
                "phase": "analysis",
                "file": str(self.path),
                "line": self.error_line,
            },
        )


class GoSourceParser:
    """Go parser with lazily initialized tree-sitter support.

    A tree-sitter parser must not be shared between threads; use
    `get_thread_parser()` to get one instance per thread.
    """

    def __init__(self) -> None:
        self._parser = None
        self._initialized = False

    def _ensure_parser_initialized(self) -> None:
        """Ensure tree-sitter parser is initialized (lazy loading)."""
        if not self._initialized:
            from tree_sitter_language_pack import get_parser

            self._parser = get_parser("go")
            self._initialized = True
            logger.debug("Go tree-sitter parser initialized")

    def parse_file(self, file_path: Path, strict: bool = True) -> GoSourceFile:
        """Parse a Go file.

        Args:
            file_path: Go source file
            strict: Raise on syntax errors instead of recording them in
                `GoSourceFile.error_line`

        Raises:
            ParsingError: If the file cannot be read, or has syntax errors
                in strict mode
        """
        try:
            content = Path(file_path).read_bytes()
        except OSError as e:
            raise ParsingError(
                f"failed to read file {file_path}: {e}",
                context={"phase": "analysis", "file": str(file_path)},
            ) from e
        return self.parse_content(content, file_path, strict=strict)

    def parse_content(
        self, content: bytes, file_path: Path, strict: bool = True
    ) -> GoSourceFile:
        """Parse Go source bytes.

        Raises:
            ParsingError: If the source has syntax errors and `strict` is set
        """
        self._ensure_parser_initialized()
        tree = self._parser.parse(content)
        root = tree.root_node

        source = self._extract_source_file(root, Path(file_path))
        if root.has_error:
            source.error_line = _first_error_line(root)
        if strict:
            source.raise_for_syntax_error()
        return source

    def _extract_source_file(self, root: Node, file_path: Path) -> GoSourceFile:
        source = GoSourceFile(path=file_path)

        for node in root.named_children:
            node_type = node.type
            if node_type == "package_clause":
                source.package_name = self._get_package_name(node)
            elif node_type == "import_declaration":
                for path in self._extract_imports(node):
                    if path not in source.imports:
                        source.imports.append(path)
            elif node_type == "function_declaration":
                source.declarations.append(
                    self._declaration(node, DeclarationKind.FUNCTION)
                )
            elif node_type == "method_declaration":
                source.declarations.append(
                    self._declaration(node, DeclarationKind.METHOD)
                )
            elif node_type == "type_declaration":
                source.declarations.extend(self._extract_type_declaration(node))
            # const/var declarations and comments are not counted

        return source

    def _get_package_name(self, node: Node) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return child.text.decode("utf-8")
        return ""

    def _extract_imports(self, node: Node) -> list[str]:
        """Extract import paths from an import declaration.

        Handles single imports, parenthesized import lists, aliased, dot and
        blank imports.
        """
        paths = []
        for child in node.named_children:
            if child.type == "import_spec":
                specs = [child]
            elif child.type == "import_spec_list":
                specs = [c for c in child.named_children if c.type == "import_spec"]
            else:
                continue

            for spec in specs:
                path_node = spec.child_by_field_name("path")
                if path_node is not None:
                    paths.append(path_node.text.decode("utf-8").strip('"`'))
        return paths

    def _extract_type_declaration(self, node: Node) -> list[GoDeclaration]:
        """Extract type specs, grouped or not, from a type declaration."""
        declarations = []
        for child in node.named_children:
            if child.type == "type_spec":
                type_node = child.child_by_field_name("type")
                kind = DeclarationKind.OTHER
                if type_node is not None and type_node.type == "interface_type":
                    kind = DeclarationKind.INTERFACE
                elif type_node is not None and type_node.type == "struct_type":
                    kind = DeclarationKind.STRUCT
                declarations.append(self._declaration(child, kind))
            elif child.type == "type_alias":
                declarations.append(self._declaration(child, DeclarationKind.OTHER))
        return declarations

    def _declaration(self, node: Node, kind: DeclarationKind) -> GoDeclaration:
        name_node = node.child_by_field_name("name")
        name = name_node.text.decode("utf-8") if name_node is not None else "unknown"
        return GoDeclaration(name=name, kind=kind, line=node.start_point[0] + 1)


def _first_error_line(node: Node) -> int:
    """Return the 1-based line of the first ERROR or missing node."""
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error_line(child)
    return node.start_point[0] + 1


_thread_state = threading.local()


def get_thread_parser() -> GoSourceParser:
    """Return the Go parser owned by the calling thread."""
    parser = getattr(_thread_state, "parser", None)
    if parser is None:
        parser = GoSourceParser()
        _thread_state.parser = parser
    return parser
