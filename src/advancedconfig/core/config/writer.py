"""Comment-aware YAML emitting and comment recovery.

PyYAML drops comments on load and cannot emit them, so documents are written
here key by key: every comment is placed as ``#`` lines directly above its
entry, at the entry's indentation. When a file is read back, :func:`scan_comments`
walks the composed node tree to find the line of each mapping key and picks
up the comment block sitting right above it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Set

import yaml

INDENT = 2


def _dump_options() -> Dict[str, Any]:
    return {
        "default_flow_style": False,
        "allow_unicode": True,
        "sort_keys": False,
        "width": 4096,
    }


def _header(key: Any) -> str:
    # "key: {}" -> "key:" keeps PyYAML's quoting rules for the key itself.
    dumped = yaml.safe_dump({key: {}}, **_dump_options()).rstrip("\n")
    return dumped[: -len(" {}")]


def _comment_lines(comment: str, pad: str) -> List[str]:
    return [f"{pad}# {line}".rstrip() for line in (comment.splitlines() or [""])]


def _emit(
    lines: List[str],
    mapping: Mapping[Any, Any],
    comments: Mapping[str, str],
    prefix: str,
    indent: int,
) -> None:
    pad = " " * indent
    for key, value in mapping.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        comment = comments.get(path)
        if comment is not None:
            lines.extend(_comment_lines(comment, pad))
        if isinstance(value, dict) and value:
            lines.append(pad + _header(key))
            _emit(lines, value, comments, path, indent + INDENT)
            continue
        dumped = yaml.safe_dump({key: value}, **_dump_options())
        lines.extend(pad + line for line in dumped.splitlines())


def dump_document(data: Mapping[Any, Any], comments: Mapping[str, str]) -> str:
    """Serialize nested ``data`` to YAML with ``comments`` keyed by dotted path."""
    lines: List[str] = []
    _emit(lines, data, comments, "", 0)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def _collect_key_lines(node: yaml.MappingNode, prefix: str, out: Dict[str, int]) -> None:
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        path = f"{prefix}.{key_node.value}" if prefix else key_node.value
        out[path] = key_node.start_mark.line
        # Flow mappings share one line with their parent, so their keys carry no comments.
        if isinstance(value_node, yaml.MappingNode) and not value_node.flow_style:
            _collect_key_lines(value_node, path, out)


def _collect_scalar_lines(node: yaml.Node, source: List[str], out: Set[int], seen: Set[int]) -> None:
    # Lines spanned by multi-line scalars are content, even when they start with "#".
    if id(node) in seen:
        return
    seen.add(id(node))
    if isinstance(node, yaml.ScalarNode):
        start, end = node.start_mark.line, node.end_mark.line
        if end > start:
            # Block scalars end at the start of the following line.
            if end >= len(source) or not source[end][: node.end_mark.column].strip():
                end -= 1
            out.update(range(start, end + 1))
    elif isinstance(node, yaml.MappingNode):
        for key_node, value_node in node.value:
            _collect_scalar_lines(key_node, source, out, seen)
            _collect_scalar_lines(value_node, source, out, seen)
    elif isinstance(node, yaml.SequenceNode):
        for item in node.value:
            _collect_scalar_lines(item, source, out, seen)


def _strip_marker(line: str) -> str:
    text = line.strip()[1:]
    if text.startswith(" "):
        text = text[1:]
    return text.rstrip()


def scan_comments(text: str) -> Dict[str, str]:
    """Map each dotted key path to the comment block written above it."""
    root = yaml.compose(text, Loader=yaml.SafeLoader)
    if not isinstance(root, yaml.MappingNode):
        return {}

    key_lines: Dict[str, int] = {}
    _collect_key_lines(root, "", key_lines)

    source = text.splitlines()
    scalar_lines: Set[int] = set()
    _collect_scalar_lines(root, source, scalar_lines, set())

    comments: Dict[str, str] = {}
    for path, line_no in key_lines.items():
        collected: List[str] = []
        index = line_no - 1
        while index >= 0 and index not in scalar_lines:
            stripped = source[index].strip()
            if stripped.startswith("#"):
                collected.append(_strip_marker(source[index]))
            elif stripped:
                break
            index -= 1
        if collected:
            comments[path] = "\n".join(reversed(collected))
    return comments
