"""
Custom value parsers.

A parser stores a value that has no natural scalar form as a section of
the document and builds it back from that section. Parsers are looked up by
the exact declared type of a bound field; fields without one are read and
written as raw YAML values.
"""

from abc import ABC, abstractmethod
import dataclasses
from typing import Any, Dict, Generic, Type, TypeVar

from .document import ConfigSection

T = TypeVar("T")


class ConfigParser(ABC, Generic[T]):
    """Serializer/deserializer between one value type and a document section."""

    @abstractmethod
    def deserialize(self, section: ConfigSection) -> T:
        """
        Build a value from ``section``.

        Args:
            section: Section holding the stored value

        Returns:
            The reconstructed value
        """

    @abstractmethod
    def serialize(self, section: ConfigSection, value: T) -> None:
        """
        Write ``value`` into ``section``.

        Args:
            section: Freshly created, empty section at the field's path
            value: Value to store
        """


class DataclassParser(ConfigParser[T]):
    """Stores a dataclass instance as one key per dataclass field."""

    def __init__(self, dataclass_type: Type[T]):
        if not dataclasses.is_dataclass(dataclass_type):
            raise TypeError(f"{dataclass_type!r} is not a dataclass")
        self.dataclass_type = dataclass_type

    def deserialize(self, section: ConfigSection) -> T:
        kwargs: Dict[str, Any] = {}
        for field in dataclasses.fields(self.dataclass_type):
            if field.init and section.contains(field.name, ignore_defaults=True):
                kwargs[field.name] = section.get(field.name)
        return self.dataclass_type(**kwargs)

    def serialize(self, section: ConfigSection, value: T) -> None:
        for key, item in dataclasses.asdict(value).items():
            section.set(key, item)


class MappingParser(ConfigParser[Dict[str, Any]]):
    """Stores a dict as a section, one key per entry."""

    def deserialize(self, section: ConfigSection) -> Dict[str, Any]:
        return section.to_dict()

    def serialize(self, section: ConfigSection, value: Dict[str, Any]) -> None:
        for key, item in value.items():
            section.set(str(key), item)
