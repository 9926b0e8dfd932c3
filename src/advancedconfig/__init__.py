"""
advancedconfig - YAML config files bound to plain Python records

Plugins declare their settings as dataclasses whose fields carry a dotted
path, an optional comment and an optional colour-code flag. A ConfigStore
creates the file on first use, writes any missing entry with its default and
comment, and reads present entries back into fresh record instances.

Key Features:
- Lazy file creation under a host-supplied data directory
- Defaults materialised with comments that survive every reload
- Custom parsers for values stored as whole sections
- '&' colour code translation for message defaults
"""

__version__ = "0.1.0"

from advancedconfig.core.config import (
    ConfigDocument,
    ConfigError,
    ConfigField,
    ConfigFieldError,
    ConfigFormatError,
    ConfigParser,
    ConfigRegistry,
    ConfigSection,
    ConfigStore,
    DataclassParser,
    LoadedConfig,
    MappingParser,
    config_field,
)

__all__ = [
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
    "LoadedConfig",
    "MappingParser",
    "config_field",
]
