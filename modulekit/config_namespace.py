"""Strict reader over one descriptor document with consumed-keys tracking."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_MISSING = object()

logger = logging.getLogger(__name__)


def _join_path(parent: str, key: str) -> str:
    if not parent:
        return key
    return f"{parent}.{key}"


@dataclass
class ConfigNamespace:
    """Small helper for descriptor parsing with consumed-keys enforcement."""

    data: Mapping[str, Any]
    path: str
    _consumed: set[str] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def from_document(cls, document: Any, *, path: str) -> "ConfigNamespace":
        if not isinstance(document, Mapping):
            raise TypeError(
                f"{path or '<root>'} must be a mapping (type={type(document).__name__})"
            )
        return cls(dict(document), path=path)

    def _consume(self, key: str) -> None:
        self._consumed.add(key)

    def key_path(self, key: str) -> str:
        return _join_path(self.path, key.strip())

    def consumed_keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._consumed))

    def unconsumed_keys(self) -> tuple[str, ...]:
        return tuple(sorted(str(k) for k in self.data.keys() if k not in self._consumed))

    def assert_consumed(self) -> None:
        unknown = list(self.unconsumed_keys())
        if unknown:
            path = self.path or "<root>"
            consumed = ", ".join(self.consumed_keys()) or "<none>"
            raise ValueError(
                f"Unknown config keys under {path}: {', '.join(unknown)} (consumed: {consumed})"
            )

    def get_optional(self, key: str) -> Any:
        return self._get_raw(key, default=None)

    def _get_raw(self, key: str, *, default: Any) -> Any:
        if not isinstance(key, str) or not key.strip():
            raise TypeError("ConfigNamespace key must be a non-empty string")
        normalized = key.strip()

        if normalized not in self.data:
            if default is _MISSING:
                raise ValueError(f"Missing required config key: {_join_path(self.path, normalized)}")
            self._consume(normalized)
            return default

        self._consume(normalized)
        return self.data.get(normalized)

    def get_str(
        self,
        key: str,
        *,
        default: str | None | object = _MISSING,
        allow_empty: bool = False,
    ) -> str | None:
        if default is not _MISSING and default is not None and not isinstance(default, str):
            raise TypeError(f"{self.key_path(key)} default must be a string or None")

        raw = self._get_raw(key, default=default)
        if raw is None:
            return None

        if not isinstance(raw, str):
            raise TypeError(f"{self.key_path(key)} must be a string (type={type(raw).__name__})")
        value = raw.strip()
        if not value and not allow_empty:
            raise ValueError(f"{self.key_path(key)} cannot be empty")
        return value

    def get_optional_str_array(self, key: str) -> list[str] | None:
        """Read an optional array of strings.

        Returns None when the key is absent, null, or malformed (not a list, or
        a list with non-string items). Malformed values are logged and ignored.
        Items are returned exactly as written.
        """

        raw = self._get_raw(key, default=None)
        if raw is None:
            return None

        if not isinstance(raw, (list, tuple)):
            logger.warning(
                "Ignoring %s: expected a list of strings (type=%s)",
                self.key_path(key),
                type(raw).__name__,
            )
            return None

        items: list[str] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, str):
                logger.warning(
                    "Ignoring %s: item [%d] must be a string (type=%s)",
                    self.key_path(key),
                    idx,
                    type(item).__name__,
                )
                return None
            items.append(item)
        return items
