from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from modulekit.codec import decode_array, encode_array
from modulekit.descriptor import ModuleDescriptor
from modulekit.platforms import DEFAULT_PLATFORMS, PlatformResolver
from modulekit.policy import BuildRequest, EligibilityDecision, explain_eligibility
from modulekit.validation import validate

MODULES_KEY = "Modules"

logger = logging.getLogger(__name__)


@dataclass
class PluginDescriptor:
    """A plugin or project document owning a list of module descriptors.

    Keys other than `Modules` are kept verbatim in `extra` so that a document can
    be decoded and written back without losing unrelated settings.
    """

    modules: list[ModuleDescriptor] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        seen: set[str] = set()
        duplicates: list[str] = []
        for module in self.modules:
            if module.name in seen and module.name not in duplicates:
                duplicates.append(module.name)
            seen.add(module.name)
        if duplicates:
            where = f" in {self.source}" if self.source else ""
            raise ValueError(f"Duplicate module names{where}: {', '.join(duplicates)}")

    @classmethod
    def from_dict(
        cls,
        document: Mapping[str, Any],
        *,
        platforms: PlatformResolver = DEFAULT_PLATFORMS,
        strict: bool = False,
        source: str | None = None,
    ) -> "PluginDescriptor":
        if not isinstance(document, Mapping):
            raise TypeError(f"Plugin document must be a mapping (type={type(document).__name__})")

        modules = decode_array(
            document.get(MODULES_KEY),
            platforms=platforms,
            strict=strict,
            path=MODULES_KEY,
        )
        extra = {key: value for key, value in document.items() if key != MODULES_KEY}
        logger.debug("Decoded %d module(s) from %s", len(modules), source or "<document>")
        return cls(modules=modules, extra=extra, source=source)

    def to_dict(self) -> dict[str, Any]:
        out = dict(self.extra)
        encoded = encode_array(self.modules)
        if encoded is not None:
            out[MODULES_KEY] = encoded
        return out

    def module_names(self) -> tuple[str, ...]:
        return tuple(module.name for module in self.modules)

    def get(self, name: str) -> ModuleDescriptor:
        for module in self.modules:
            if module.name == name:
                return module
        available = ", ".join(self.module_names()) or "<none>"
        raise ValueError(f"Unknown module: {name} (available: {available})")

    def validate(self) -> list[str]:
        messages: list[str] = []
        for module in self.modules:
            messages.extend(validate(module, source=self.source))
        return messages

    def evaluate(
        self, request: BuildRequest, *, names: Sequence[str] | None = None
    ) -> list[tuple[ModuleDescriptor, EligibilityDecision]]:
        """Explain eligibility for every module, or only for `names` in the given order."""

        modules = [self.get(name) for name in names] if names else self.modules
        return [(module, explain_eligibility(module, request)) for module in modules]
