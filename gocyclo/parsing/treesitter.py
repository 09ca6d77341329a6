from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import tree_sitter_go
from tree_sitter import Language, Parser

from gocyclo.core.exceptions import ParseError

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

GO_EXTENSIONS = {".go"}

FUNCTION_NODE_TYPES = {"function_declaration", "method_declaration"}
LITERAL_NODE_TYPES = {"func_literal"}


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: object

    @property
    def root(self):
        return self.tree.root_node

    @property
    def package(self) -> str:
        for child in self.root.named_children:
            if child.type != "package_clause":
                continue
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return node_text(self, ident)
        return ""


def is_go_file(path: str) -> bool:
    return Path(path).suffix.lower() in GO_EXTENSIONS


def new_parser() -> Parser:
    # Parsers hold mutable state; each worker builds its own.
    return Parser(GO_LANGUAGE)


def parse_source(source: bytes, path: str = "<source>", parser: Optional[Parser] = None) -> ParsedFile:
    """Parse Go source bytes, raising ParseError when the tree contains syntax errors."""
    parser = parser or new_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        line, column = _first_error_point(tree.root_node)
        raise ParseError(path, f"syntax error at {line}:{column}")
    return ParsedFile(path=path, source=source, tree=tree)


def parse_file(path: str, parser: Optional[Parser] = None) -> ParsedFile:
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(path, exc.strerror or str(exc)) from exc
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"invalid UTF-8 at byte {exc.start}") from exc
    logger.debug("parsing %s (%d bytes)", path, len(source))
    return parse_source(source, path, parser)


def iter_nodes(node, skip: Iterable[str] = ()) -> Iterable[object]:
    """Pre-order walk of ``node``; subtrees rooted at a type in ``skip`` are not entered.

    The starting node itself is always yielded and entered.
    """
    skip = frozenset(skip)
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(
            child for child in reversed(current.children)
            if child.type not in skip
        )


def node_text(parsed: ParsedFile, node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error_point(root) -> tuple[int, int]:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1, node.start_point[1] + 1
    return root.start_point[0] + 1, root.start_point[1] + 1
