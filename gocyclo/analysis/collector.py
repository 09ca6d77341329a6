from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Union

from gocyclo.analysis.complexity import complexity
from gocyclo.config import AnalysisConfig
from gocyclo.core.exceptions import ParseError
from gocyclo.core.results import AnalysisResult, FileError
from gocyclo.core.stats import Position, Stat, Stats
from gocyclo.parsing.treesitter import (
    FUNCTION_NODE_TYPES,
    LITERAL_NODE_TYPES,
    ParsedFile,
    new_parser,
    node_text,
    parse_file,
    parse_source,
)
from gocyclo.utils.files import PathFilter, iter_go_files, regex_filter

logger = logging.getLogger(__name__)

IGNORE_DIRECTIVE = "//gocyclo:ignore"
BAD_RECEIVER = "BADRECV"
# Name prefix the Go runtime gives to literals declared at package level.
PACKAGE_SCOPE = "glob."


class FunctionCollector:
    """
    Measures every top-level function and method in a set of Go files.

    Files matching ``path_filter`` are skipped before they are read. Files
    that cannot be parsed are recorded as ``FileError`` entries and do not
    stop the run. With ``include_literals`` each function literal is also
    measured as its own entry.
    """

    def __init__(
        self,
        path_filter: Optional[PathFilter] = None,
        include_literals: bool = False,
        max_workers: int = 4,
    ):
        self.path_filter = path_filter
        self.include_literals = include_literals
        self.max_workers = max_workers

    def is_excluded(self, path: str) -> bool:
        return self.path_filter is not None and self.path_filter(path)

    def collect(self, paths: Iterable[str]) -> AnalysisResult:
        result = AnalysisResult()
        candidates = []
        for path in paths:
            if self.is_excluded(path):
                logger.debug("ignoring %s", path)
                result.files_excluded += 1
                continue
            candidates.append(path)

        # map() keeps submission order and the with-block waits for every
        # task, so aggregation below never sees a partial result.
        if len(candidates) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._collect_path, candidates))
        else:
            outcomes = [self._collect_path(path) for path in candidates]

        stats: List[Stat] = []
        for outcome in outcomes:
            if isinstance(outcome, FileError):
                result.errors.append(outcome)
                continue
            stats.extend(outcome)
            result.files_analyzed += 1
        result.stats = Stats(stats)

        if result.all_failed:
            logger.warning("none of the %d file(s) could be parsed", len(result.errors))
        return result

    def _collect_path(self, path: str) -> Union[List[Stat], FileError]:
        try:
            parsed = parse_file(path, new_parser())
        except ParseError as exc:
            logger.warning("skipping %s", exc)
            return FileError(path=path, message=exc.reason)
        return self.collect_parsed(parsed)

    def collect_parsed(self, parsed: ParsedFile) -> List[Stat]:
        package = parsed.package
        stats: List[Stat] = []
        glob_literals = 0
        for node in parsed.root.named_children:
            if node.type not in FUNCTION_NODE_TYPES:
                if self.include_literals:
                    for literal in outermost_literals(node):
                        glob_literals += 1
                        name = f"{PACKAGE_SCOPE}.func{glob_literals}"
                        stats.extend(self._literal_stats(parsed, package, literal, name))
                continue
            if has_ignore_directive(parsed, node):
                logger.debug("%s:%d: skipped by directive", parsed.path, node.start_point[0] + 1)
                continue
            name = function_name(parsed, node)
            stats.append(_stat(parsed, package, name, node))
            if self.include_literals:
                for index, literal in enumerate(outermost_literals(node), start=1):
                    stats.extend(self._literal_stats(parsed, package, literal, f"{name}.func{index}"))
        return stats

    def _literal_stats(self, parsed: ParsedFile, package: str, literal, name: str) -> Iterable[Stat]:
        yield _stat(parsed, package, name, literal)
        for index, inner in enumerate(outermost_literals(literal), start=1):
            yield from self._literal_stats(parsed, package, inner, f"{name}.{index}")


def collect(
    parsed_files: Iterable[ParsedFile],
    path_filter: Optional[PathFilter] = None,
    include_literals: bool = False,
) -> Stats:
    """Measure already-parsed files, in the order given."""
    collector = FunctionCollector(path_filter=path_filter, include_literals=include_literals)
    stats: List[Stat] = []
    for parsed in parsed_files:
        if collector.is_excluded(parsed.path):
            continue
        stats.extend(collector.collect_parsed(parsed))
    return Stats(stats)


def analyze(config: AnalysisConfig) -> AnalysisResult:
    """Resolve ``config.paths`` into Go files and measure them."""
    collector = FunctionCollector(
        path_filter=regex_filter(config.ignore),
        include_literals=config.include_literals,
        max_workers=config.max_workers,
    )
    return collector.collect(iter_go_files(config.paths))


def analyze_source(source: str, path: str = "<source>", include_literals: bool = False) -> Stats:
    """Measure Go source held in memory. Raises ParseError on invalid source."""
    parsed = parse_source(source.encode("utf-8"), path)
    return collect([parsed], include_literals=include_literals)


def function_name(parsed: ParsedFile, decl) -> str:
    """``Name`` for functions, ``(T).Name`` or ``(*T).Name`` for methods."""
    name = node_text(parsed, decl.child_by_field_name("name"))
    if decl.type != "method_declaration":
        return name
    return f"({receiver_string(parsed, decl.child_by_field_name('receiver'))}).{name}"


def receiver_string(parsed: ParsedFile, receiver) -> str:
    if receiver is None:
        return BAD_RECEIVER
    params = [c for c in receiver.named_children if c.type == "parameter_declaration"]
    if len(params) != 1:
        return BAD_RECEIVER
    return _type_string(parsed, params[0].child_by_field_name("type"))


def _type_string(parsed: ParsedFile, node) -> str:
    if node is None:
        return BAD_RECEIVER
    if node.type == "type_identifier":
        return node_text(parsed, node)
    if node.type == "pointer_type":
        return "*" + _type_string(parsed, _first_named(node))
    if node.type == "generic_type":
        # T[K, V] is reported as T
        return _type_string(parsed, node.child_by_field_name("type") or _first_named(node))
    if node.type == "parenthesized_type":
        return _type_string(parsed, _first_named(node))
    return BAD_RECEIVER


def _first_named(node):
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def has_ignore_directive(parsed: ParsedFile, decl) -> bool:
    """True when the comment block directly above ``decl`` holds the ignore directive."""
    expected_row = decl.start_point[0] - 1
    node = decl.prev_named_sibling
    while node is not None and node.type == "comment" and node.end_point[0] == expected_row:
        if node_text(parsed, node).strip() == IGNORE_DIRECTIVE:
            return True
        expected_row = node.start_point[0] - 1
        node = node.prev_named_sibling
    return False


def outermost_literals(node) -> Iterable[object]:
    """Function literals below ``node`` that are not nested in another literal."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.type in LITERAL_NODE_TYPES:
            yield current
            continue
        stack.extend(reversed(current.children))


def _stat(parsed: ParsedFile, package: str, name: str, node) -> Stat:
    row, column = node.start_point[0], node.start_point[1]
    return Stat(
        package=package,
        function=name,
        complexity=complexity(node.child_by_field_name("body")),
        position=Position(path=parsed.path, line=row + 1, column=column + 1),
    )
