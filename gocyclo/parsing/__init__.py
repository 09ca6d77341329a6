from gocyclo.parsing.treesitter import ParsedFile, iter_nodes, node_text, parse_file, parse_source

__all__ = [
    "ParsedFile",
    "iter_nodes",
    "node_text",
    "parse_file",
    "parse_source",
]
