from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Iterable, Protocol


@dataclass(frozen=True, eq=False)
class TargetPlatform:
    """A platform name. Equality and hashing ignore case."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise TypeError("TargetPlatform.name must be a non-empty string")
        object.__setattr__(self, "name", self.name.strip())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TargetPlatform):
            return NotImplemented
        return self.name.lower() == other.name.lower()

    def __hash__(self) -> int:
        return hash(self.name.lower())

    def __str__(self) -> str:
        return self.name


class PlatformResolver(Protocol):
    def try_parse(self, name: str) -> TargetPlatform | None:
        """Resolve a platform name, or return None when it is not recognised."""


@dataclass(frozen=True)
class PlatformRegistry:
    """Immutable set of platforms known to the host environment."""

    _by_key: dict[str, TargetPlatform]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "PlatformRegistry":
        entries: dict[str, TargetPlatform] = {}
        for name in names:
            platform = TargetPlatform(name)
            key = platform.name.lower()
            if key in entries:
                raise ValueError(f"Duplicate platform name: {platform.name}")
            entries[key] = platform
        return cls(_by_key=entries)

    def extend(self, names: Iterable[str]) -> "PlatformRegistry":
        return PlatformRegistry.from_names([*self.available(), *names])

    def available(self) -> tuple[str, ...]:
        return tuple(platform.name for platform in self._by_key.values())

    def try_parse(self, name: str) -> TargetPlatform | None:
        if not isinstance(name, str):
            return None
        return self._by_key.get(name.strip().lower())

    def get(self, name: str) -> TargetPlatform:
        platform = self.try_parse(name)
        if platform is None:
            available = ", ".join(self.available()) or "<none>"
            raise ValueError(f"Unknown platform: {name} (available: {available})")
        return platform

    def suggest(self, name: str, *, limit: int = 3) -> tuple[str, ...]:
        key = (name or "").strip()
        if not key:
            return ()
        by_lower = {platform.lower(): platform for platform in self.available()}
        matches = difflib.get_close_matches(key.lower(), list(by_lower), n=limit)
        return tuple(by_lower[match] for match in matches)


DEFAULT_PLATFORM_NAMES: tuple[str, ...] = (
    "Win32",
    "Win64",
    "HoloLens",
    "Mac",
    "XboxOne",
    "PS4",
    "IOS",
    "Android",
    "HTML5",
    "Linux",
    "LinuxAArch64",
    "AllDesktop",
    "TVOS",
    "Switch",
    "Lumin",
)

DEFAULT_PLATFORMS = PlatformRegistry.from_names(DEFAULT_PLATFORM_NAMES)


def canonical_platform(
    value: TargetPlatform | str, *, platforms: PlatformResolver = DEFAULT_PLATFORMS
) -> TargetPlatform:
    """Return the registry spelling of `value`, or `value` itself when it is not registered."""

    name = value.name if isinstance(value, TargetPlatform) else value
    resolved = platforms.try_parse(name)
    if resolved is not None:
        return resolved
    return value if isinstance(value, TargetPlatform) else TargetPlatform(value)
