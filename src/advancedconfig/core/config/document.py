"""In-memory backing document for a YAML config file.

A :class:`ConfigDocument` holds the parsed file as nested dicts plus a
``path -> comment`` table. :class:`ConfigSection` is a view on one nested
mapping; every section operation takes a dotted path relative to the section.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .errors import ConfigFormatError
from .writer import dump_document, scan_comments

COMMENT_IDENTIFIER = "_COMMENT_"

_MISSING = object()


@dataclass
class DocumentOptions:
    copy_defaults: bool = False
    path_separator: str = "."


def _normalize_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _normalize_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_normalize_keys(item) for item in value]
    return value


def _merge_missing(target: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in defaults.items():
        if key not in target:
            target[key] = copy.deepcopy(value)
        elif isinstance(target[key], dict) and isinstance(value, dict):
            _merge_missing(target[key], value)
    return target


class ConfigSection:
    """A view on the mapping stored at ``current_path`` of a document."""

    def __init__(self, root: "ConfigDocument", path: str = ""):
        self._root = root
        self._path = path

    @property
    def current_path(self) -> str:
        return self._path

    @property
    def root(self) -> "ConfigDocument":
        return self._root

    @property
    def name(self) -> str:
        return self._path.rsplit(self._root.options.path_separator, 1)[-1]

    def _full(self, path: str) -> str:
        if not self._path:
            return path
        if not path:
            return self._path
        return f"{self._path}{self._root.options.path_separator}{path}"

    def contains(self, path: str, ignore_defaults: bool = False) -> bool:
        full = self._full(path)
        if self._root._lookup(self._root._data, full)[0]:
            return True
        return not ignore_defaults and self._root._lookup(self._root._defaults, full)[0]

    def get(self, path: str, default: Any = _MISSING) -> Any:
        """
        Read the value at ``path``.

        Without an explicit ``default`` the document defaults are consulted,
        then ``None``. Mappings and lists are returned as copies.
        """
        full = self._full(path)
        found, value = self._root._lookup(self._root._data, full)
        if not found:
            if default is not _MISSING:
                return default
            found, value = self._root._lookup(self._root._defaults, full)
            if not found:
                return None
        return copy.deepcopy(value)

    def set(self, path: str, value: Any) -> None:
        """Write ``value`` at ``path``; ``None`` removes the entry."""
        full = self._full(path)
        if full.endswith(COMMENT_IDENTIFIER):
            self._root.set_comment(full[: -len(COMMENT_IDENTIFIER)], value)
            return
        if value is None:
            self._root._remove(full)
            return
        if isinstance(value, ConfigSection):
            value = value.to_dict()
        self._root._assign(self._root._data, full, _normalize_keys(copy.deepcopy(value)))

    def create_section(self, path: str) -> "ConfigSection":
        full = self._full(path)
        self._root._assign(self._root._data, full, {})
        return ConfigSection(self._root, full)

    def get_section(self, path: str) -> Optional["ConfigSection"]:
        if not self.is_section(path):
            return None
        return ConfigSection(self._root, self._full(path))

    def is_section(self, path: str) -> bool:
        found, value = self._root._lookup(self._root._data, self._full(path))
        return found and isinstance(value, dict)

    def keys(self, deep: bool = False) -> List[str]:
        found, node = self._root._lookup(self._root._data, self._path)
        if not found or not isinstance(node, dict):
            return []
        if not deep:
            return list(node.keys())
        separator = self._root.options.path_separator
        result: List[str] = []

        def walk(mapping: Dict[str, Any], prefix: str) -> None:
            for key, value in mapping.items():
                path = f"{prefix}{separator}{key}" if prefix else key
                result.append(path)
                if isinstance(value, dict):
                    walk(value, path)

        walk(node, "")
        return result

    def get_comment(self, path: str) -> Optional[str]:
        return self._root._comments.get(self._full(path))

    def set_comment(self, path: str, text: Optional[str]) -> None:
        full = self._full(path)
        if text is None:
            self._root._comments.pop(full, None)
        else:
            self._root._comments[full] = str(text)

    def to_dict(self) -> Dict[str, Any]:
        found, node = self._root._lookup(self._root._data, self._path)
        if not found or not isinstance(node, dict):
            return {}
        return copy.deepcopy(node)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self._path!r})"


class ConfigDocument(ConfigSection):
    """Root section of a parsed config file."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, comments: Optional[Dict[str, str]] = None):
        self.options = DocumentOptions()
        self._data: Dict[str, Any] = _normalize_keys(data or {})
        self._comments: Dict[str, str] = dict(comments or {})
        self._defaults: Dict[str, Any] = {}
        super().__init__(self, "")
        self._clean_loaded_entries(self._data, "")

    @classmethod
    def load(cls, file_path: Union[str, Path]) -> "ConfigDocument":
        text = Path(file_path).read_text(encoding="utf-8")
        try:
            return cls.load_from_string(text)
        except ConfigFormatError as exc:
            raise ConfigFormatError(f"{file_path}: {exc.message}") from exc

    @classmethod
    def load_from_string(cls, text: str) -> "ConfigDocument":
        try:
            data = yaml.safe_load(text)
            comments = scan_comments(text)
        except yaml.YAMLError as exc:
            raise ConfigFormatError(f"Invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigFormatError(
                f"Expected a mapping at the document root, got {type(data).__name__}."
            )
        return cls(data, comments)

    def save(self, file_path: Union[str, Path]) -> None:
        target = Path(file_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.save_to_string(), encoding="utf-8")

    def save_to_string(self) -> str:
        data = copy.deepcopy(self._data)
        if self.options.copy_defaults:
            _merge_missing(data, self._defaults)
        return dump_document(data, self._comments)

    def add_default(self, path: str, value: Any) -> None:
        self._assign(self._defaults, path, _normalize_keys(copy.deepcopy(value)))

    @property
    def comments(self) -> Dict[str, str]:
        return dict(self._comments)

    def _split(self, path: str) -> List[str]:
        return path.split(self.options.path_separator)

    def _lookup(self, tree: Dict[str, Any], path: str) -> Tuple[bool, Any]:
        if not path:
            return True, tree
        cursor: Any = tree
        for part in self._split(path):
            if not isinstance(cursor, dict) or part not in cursor:
                return False, None
            cursor = cursor[part]
        return True, cursor

    def _assign(self, tree: Dict[str, Any], path: str, value: Any) -> None:
        parts = self._split(path)
        cursor = tree
        for part in parts[:-1]:
            if not isinstance(cursor.get(part), dict):
                cursor[part] = {}
            cursor = cursor[part]
        cursor[parts[-1]] = value

    def _remove(self, path: str) -> None:
        parts = self._split(path)
        found, parent = self._lookup(self._data, self.options.path_separator.join(parts[:-1]))
        if found and isinstance(parent, dict):
            parent.pop(parts[-1], None)
        prefix = path + self.options.path_separator
        for key in [k for k in self._comments if k == path or k.startswith(prefix)]:
            del self._comments[key]

    def _clean_loaded_entries(self, mapping: Dict[str, Any], prefix: str) -> None:
        # Older files carry comments as "<key>_COMMENT_" siblings; those are never data.
        # Empty entries ("port:") load as None, which counts as absent like set(path, None).
        separator = self.options.path_separator
        for key in list(mapping):
            value = mapping[key]
            path = f"{prefix}{separator}{key}" if prefix else key
            if key.endswith(COMMENT_IDENTIFIER):
                del mapping[key]
                if value is not None:
                    self._comments[path[: -len(COMMENT_IDENTIFIER)]] = str(value)
                self._comments.pop(path, None)
            elif value is None:
                del mapping[key]
            elif isinstance(value, dict):
                self._clean_loaded_entries(value, path)
