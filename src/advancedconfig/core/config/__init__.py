"""Field registry, backing document and config store."""

from .colors import translate_alternate_color_codes
from .comments import replace_comments
from .document import COMMENT_IDENTIFIER, ConfigDocument, ConfigSection, DocumentOptions
from .errors import ConfigError, ConfigFieldError, ConfigFormatError
from .parsers import ConfigParser, DataclassParser, MappingParser
from .registry import (
    ConfigField,
    ConfigRegistry,
    config_field,
    unflatten,
)
from .store import CONFIG_EXTENSION, ConfigStore, LoadedConfig

__all__ = [
    "COMMENT_IDENTIFIER",
    "CONFIG_EXTENSION",
    "ConfigDocument",
    "ConfigError",
    "ConfigField",
    "ConfigFieldError",
    "ConfigFormatError",
    "ConfigParser",
    "ConfigRegistry",
    "ConfigSection",
    "ConfigStore",
    "DataclassParser",
    "DocumentOptions",
    "LoadedConfig",
    "MappingParser",
    "config_field",
    "replace_comments",
    "translate_alternate_color_codes",
    "unflatten",
]
