"""Configuration registry and helpers."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import typing

from .colors import DEFAULT_ALT_COLOR_CHAR, translate_alternate_color_codes
from .parsers import ConfigParser

CONFIG_METADATA_KEY = "advancedconfig"


@dataclass(frozen=True)
class PathMetadata:
    """Path annotation attached to a dataclass field by :func:`config_field`."""

    path: str
    comment: Optional[str] = None
    translate_colors: bool = False


@dataclass(frozen=True)
class ConfigField:
    """A value kept in sync with one path of the backing document."""

    name: str
    path: str
    value_type: Optional[type] = None
    default: Any = None
    comment: Optional[str] = None
    translate_colors: bool = False
    getter: Optional[Callable[[], Any]] = None
    setter: Optional[Callable[[Any], None]] = None
    owner: Optional[type] = None  # record class for dataclass-declared fields

    def effective_default(self) -> Any:
        """Current default, colour-translated when the field asks for it."""
        value = self.getter() if self.getter is not None else copy.deepcopy(self.default)
        if self.translate_colors and isinstance(value, str):
            value = translate_alternate_color_codes(DEFAULT_ALT_COLOR_CHAR, value)
        return value


def config_field(
    path: str,
    default: Any = dataclasses.MISSING,
    *,
    default_factory: Any = dataclasses.MISSING,
    comment: Optional[str] = None,
    translate_colors: bool = False,
    **kwargs: Any,
) -> Any:
    """
    Declare a dataclass field bound to ``path``.

    Used in place of :func:`dataclasses.field` on a config record::

        @dataclass(frozen=True)
        class Messages:
            greeting: str = config_field("messages.greet", "&aHello",
                                         comment="Greeting message",
                                         translate_colors=True)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[CONFIG_METADATA_KEY] = PathMetadata(path, comment, translate_colors)
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs
    )


def _resolve_type(annotation: Any) -> Optional[type]:
    if isinstance(annotation, type):
        return annotation
    origin = typing.get_origin(annotation)
    if origin is Union:
        # Optional[X] binds like X
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return _resolve_type(args[0]) if len(args) == 1 else None
    if isinstance(origin, type):
        return origin
    return None


def _field_default(field: dataclasses.Field) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return None


def record_fields(record_cls: type) -> List[ConfigField]:
    """Bound fields of a config record, in declaration order."""
    try:
        hints = typing.get_type_hints(record_cls)
    except (NameError, TypeError):
        hints = {}
    result: List[ConfigField] = []
    for field in dataclasses.fields(record_cls):
        meta = field.metadata.get(CONFIG_METADATA_KEY)
        if meta is None:
            continue
        # Private fields and fields the constructor cannot set are not bindable.
        if not field.init or field.name.startswith("_"):
            continue
        result.append(
            ConfigField(
                name=field.name,
                path=meta.path,
                value_type=_resolve_type(hints.get(field.name, field.type)),
                default=_field_default(field),
                comment=meta.comment,
                translate_colors=meta.translate_colors,
                owner=record_cls,
            )
        )
    return result


class ConfigRegistry:
    """
    Bound fields and custom parsers for one config file.

    Config records are dataclasses whose fields are declared with
    :func:`config_field`; single values can also be bound directly with
    :meth:`bind` and a getter/setter pair. Fields are processed in
    registration order, then declaration order within a record.
    """

    def __init__(self) -> None:
        self._order: List[Union[type, ConfigField]] = []
        self._parsers: Dict[type, ConfigParser] = {}

    def register_configuration(self, record_cls: type) -> None:
        """Register a config record class; registering it again is a no-op."""
        if not (isinstance(record_cls, type) and dataclasses.is_dataclass(record_cls)):
            raise TypeError(f"Config records must be dataclasses, got {record_cls!r}")
        if record_cls not in self._order:
            self._order.append(record_cls)

    def bind(
        self,
        path: str,
        *,
        default: Any = None,
        value_type: Optional[type] = None,
        comment: Optional[str] = None,
        translate_colors: bool = False,
        getter: Optional[Callable[[], Any]] = None,
        setter: Optional[Callable[[Any], None]] = None,
        name: Optional[str] = None,
    ) -> ConfigField:
        """Bind a single value to ``path`` through an accessor pair."""
        if value_type is None and default is not None:
            value_type = type(default)
        field = ConfigField(
            name=name or path,
            path=path,
            value_type=value_type,
            default=default,
            comment=comment,
            translate_colors=translate_colors,
            getter=getter,
            setter=setter,
        )
        self._order.append(field)
        return field

    def register_config_parser(self, value_type: type, parser: ConfigParser) -> None:
        """Use ``parser`` for every field declared as ``value_type``; last write wins."""
        self._parsers[value_type] = parser

    def get_parser(self, value_type: Optional[type]) -> Optional[ConfigParser]:
        if value_type is None:
            return None
        return self._parsers.get(value_type)

    @property
    def configurations(self) -> Tuple[type, ...]:
        return tuple(entry for entry in self._order if isinstance(entry, type))

    @property
    def parsers(self) -> Dict[type, ConfigParser]:
        return dict(self._parsers)

    def fields(self) -> List[ConfigField]:
        result: List[ConfigField] = []
        for entry in self._order:
            if isinstance(entry, ConfigField):
                result.append(entry)
            else:
                result.extend(record_fields(entry))
        return result


def unflatten(dotmap: Dict[str, Any]) -> Dict[str, Any]:
    """Convert dotpath map to nested dict."""
    nested: Dict[str, Any] = {}
    for key, value in dotmap.items():
        parts = key.split(".")
        cursor = nested
        for part in parts[:-1]:
            if part not in cursor or not isinstance(cursor[part], dict):
                cursor[part] = {}
            cursor = cursor[part]
        cursor[parts[-1]] = value
    return nested
