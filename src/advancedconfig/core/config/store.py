"""
Config store: one YAML file bound to the fields of a registry.

The store is either uninitialized (no document yet) or loaded. The first
call that needs the document creates the directory and an empty file if
necessary, then parses it. :meth:`ConfigStore.load_configuration` walks
every bound field: missing entries get their default written (and the file
saved straight away), present entries are read back. The result is a new
:class:`LoadedConfig` holding one immutable record instance per registered
config class.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from advancedconfig.core.utils.logger import (
    log_configuration_change,
    log_debug,
    log_file_operation,
    log_info,
)

from .coercion import coerce
from .comments import replace_comments
from .document import ConfigDocument
from .errors import ConfigError, ConfigFieldError
from .parsers import ConfigParser
from .registry import ConfigField, ConfigRegistry, unflatten

CONFIG_EXTENSION = ".yml"

R = TypeVar("R")


@dataclass(frozen=True)
class LoadedConfig:
    """Snapshot produced by one load pass."""

    records: Mapping[type, Any]
    values: Mapping[str, Any]

    def get(self, record_cls: Type[R]) -> R:
        return self.records[record_cls]

    def as_dict(self) -> Dict[str, Any]:
        return unflatten(dict(self.values))


class ConfigStore:
    """
    Owns one config file and keeps the registry's fields in sync with it.

    Args:
        base_dir: Host-supplied data directory
        file_name: File name without extension
        file_path: Optional directory relative to ``base_dir``
        registry: Registry holding the bound fields; a new one if omitted
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        file_name: str,
        file_path: str = "",
        registry: Optional[ConfigRegistry] = None,
    ):
        self.base_dir = Path(base_dir)
        self.file_name = file_name
        self.file_path = file_path
        self.registry = registry if registry is not None else ConfigRegistry()
        self._config_file: Optional[Path] = None
        self._document: Optional[ConfigDocument] = None
        self._loaded: Optional[LoadedConfig] = None

    def register_configuration(self, record_cls: type) -> None:
        self.registry.register_configuration(record_cls)

    def register_config_parser(self, value_type: type, parser: ConfigParser) -> None:
        self.registry.register_config_parser(value_type, parser)

    def bind(self, path: str, **kwargs: Any) -> ConfigField:
        return self.registry.bind(path, **kwargs)

    @property
    def directory(self) -> Path:
        return self.base_dir / self.file_path

    @property
    def config_file(self) -> Path:
        return self.directory / f"{self.file_name}{CONFIG_EXTENSION}"

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    @property
    def loaded(self) -> Optional[LoadedConfig]:
        return self._loaded

    def get_config(self) -> ConfigDocument:
        """
        Return the backing document, creating and parsing the file on first use.

        Raises:
            OSError: If the directory or file cannot be created or read
            ConfigFormatError: If the file is not a YAML mapping
        """
        if self._document is None or self._config_file is None:
            self.directory.mkdir(parents=True, exist_ok=True)
            config_file = self.config_file
            if not config_file.exists():
                config_file.touch()
                log_file_operation("create", str(config_file), True)

            document = ConfigDocument.load(config_file)
            document.options.copy_defaults = True
            self._config_file = config_file
            self._document = document
        return self._document

    def save_config(self) -> None:
        document = self.get_config()
        document.save(self._config_file)
        log_debug("store", "Saved config", str(self._config_file))

    def reload_config(self) -> LoadedConfig:
        """Drop the in-memory document and run the full load pass again."""
        self._config_file = None
        self._document = None
        log_info("store", f"Reloading {self.config_file}")
        return self.load_configuration()

    def load_configuration(self) -> LoadedConfig:
        """
        Bind every registered field to the file.

        Returns:
            The freshly loaded records and values

        Raises:
            ConfigFieldError: If any field cannot be read, written or
                published; the rest of the pass is abandoned
        """
        previous = self._loaded.values if self._loaded is not None else {}
        values: Dict[str, Any] = {}
        record_values: Dict[type, Dict[str, Any]] = {}

        for field in self.registry.fields():
            document = self.get_config()
            parser = self.registry.get_parser(field.value_type)
            default = field.effective_default()

            if not document.contains(field.path) and default is not None:
                value = self._apply_default(document, field, parser, default)
            else:
                value = self._read_field(document, field, parser, default)

            self._publish(field, value)
            if field.path in previous and previous[field.path] != value:
                log_configuration_change(field.path, previous[field.path], value)
            values[field.path] = value
            if field.owner is not None:
                record_values.setdefault(field.owner, {})[field.name] = value

        records = {
            record_cls: self._build_record(record_cls, record_values.get(record_cls, {}))
            for record_cls in self.registry.configurations
        }
        self._loaded = LoadedConfig(
            records=MappingProxyType(records), values=MappingProxyType(values)
        )
        self.replace_comments()
        log_info("store", f"Loaded {len(values)} config values", str(self.config_file))
        return self._loaded

    def get(self, record_cls: Type[R]) -> R:
        """Return the record instance from the last load pass."""
        if self._loaded is None:
            raise ConfigError("Configuration has not been loaded yet")
        return self._loaded.get(record_cls)

    def replace_comments(self) -> bool:
        """Rewrite synthetic comment keys left in the file; no-op before first load."""
        if self._config_file is None:
            return False
        return replace_comments(self._config_file)

    def _apply_default(
        self,
        document: ConfigDocument,
        field: ConfigField,
        parser: Optional[ConfigParser],
        default: Any,
    ) -> Any:
        if field.comment is not None:
            document.set_comment(field.path, field.comment)
        if parser is not None:
            section = document.create_section(field.path)
            try:
                parser.serialize(section, default)
            except Exception as exc:
                raise ConfigFieldError(
                    f"Parser {type(parser).__name__} failed to write {field.name}: {exc}",
                    field.path,
                ) from exc
        else:
            document.set(field.path, default)
        self.save_config()
        log_info("store", f"Wrote default for {field.path}", str(self._config_file))
        return default

    def _read_field(
        self,
        document: ConfigDocument,
        field: ConfigField,
        parser: Optional[ConfigParser],
        default: Any,
    ) -> Any:
        if parser is None:
            return coerce(document.get(field.path, default), field)

        section = document.get_section(field.path)
        if section is None:
            if document.contains(field.path, ignore_defaults=True):
                raise ConfigFieldError(
                    f"Expected a section for {field.name}, found a plain value",
                    field.path,
                )
            return default
        try:
            return parser.deserialize(section)
        except Exception as exc:
            raise ConfigFieldError(
                f"Parser {type(parser).__name__} failed to read {field.name}: {exc}",
                field.path,
            ) from exc

    def _publish(self, field: ConfigField, value: Any) -> None:
        if field.setter is None:
            return
        try:
            field.setter(value)
        except Exception as exc:
            raise ConfigFieldError(f"Could not set {field.name}: {exc}", field.path) from exc

    def _build_record(self, record_cls: type, kwargs: Dict[str, Any]) -> Any:
        try:
            return record_cls(**kwargs)
        except TypeError as exc:
            raise ConfigFieldError(f"Could not build {record_cls.__name__}: {exc}") from exc
