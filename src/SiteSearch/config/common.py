"""Typed access to one section of the raw YAML mapping.

Every accessor names the full dotted key (``search.max_results``) in its
error: ``TypeError`` for a wrong type, ``ValueError`` for a missing or
invalid value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

_MISSING = object()


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """A named config section with typed getters.

    Attributes:
        name: Section key in the root mapping, used as the error prefix.
        values: Raw section mapping.
    """

    name: str
    values: Mapping[str, Any]

    @classmethod
    def from_root(cls, raw: Mapping[str, Any], name: str) -> ConfigSection:
        """Return section `name` of the root mapping.

        Raises:
            ValueError: If the section is missing.
            TypeError: If the section is not a mapping.
        """
        section = raw.get(name)
        if section is None:
            raise ValueError(f"Missing required config: {name}")
        if not isinstance(section, Mapping):
            raise TypeError(f"{name} must be an object")
        return cls(name=name, values=section)

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def get_str(self, field: str, default: Any = _MISSING) -> str:
        value = self._get(field, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(field)} must be a string")
        return value

    def get_bool(self, field: str, default: Any = _MISSING) -> bool:
        value = self._get(field, default)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(field)} must be a boolean")
        return value

    def get_int(self, field: str, default: Any = _MISSING) -> int:
        """Integer field; booleans are rejected even though they subclass int."""
        value = self._get(field, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(field)} must be an integer")
        return value

    def get_number(self, field: str, default: Any = _MISSING) -> float:
        value = self._get(field, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{self.key(field)} must be a number")
        return float(value)

    def get_str_list(self, field: str, default: Any = _MISSING) -> list[str]:
        value = self._get(field, default)
        if not isinstance(value, list):
            raise TypeError(f"{self.key(field)} must be a list")
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{self.key(field)}[{idx}] must be a string")
        return list(value)

    def _get(self, field: str, default: Any) -> Any:
        if field in self.values:
            return self.values[field]
        if default is _MISSING:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return default


def check_non_empty(value: str, config_key: str) -> None:
    """Raise ValueError when a string option is empty or whitespace-only."""
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")
