from __future__ import annotations

from collections.abc import Iterable

from modulekit.platforms import DEFAULT_PLATFORMS, PlatformRegistry, TargetPlatform
from modulekit.policy import BuildRequest
from modulekit.targets import parse_target_configuration, parse_target_type


def platform_registry(extra_platforms: Iterable[str] | None = None) -> PlatformRegistry:
    """Return the default registry, extended with any host-specific platform names."""

    names = [name for name in (extra_platforms or ()) if name and name.strip()]
    if not names:
        return DEFAULT_PLATFORMS
    return DEFAULT_PLATFORMS.extend(names)


def resolve_platform(name: str, *, platforms: PlatformRegistry = DEFAULT_PLATFORMS) -> TargetPlatform:
    try:
        return platforms.get(name)
    except ValueError as exc:
        suggestions = platforms.suggest(name)
        if not suggestions:
            raise
        raise ValueError(f"Unknown platform: {name!r} (did you mean: {', '.join(suggestions)})") from exc


def parse_build_request(
    *,
    platform: str,
    configuration: str,
    target_type: str,
    target_name: str | None = None,
    developer_tools: bool = False,
    cooked: bool = False,
    platforms: PlatformRegistry = DEFAULT_PLATFORMS,
) -> BuildRequest:
    """Build a BuildRequest from user-facing strings, failing fast on unknown names."""

    return BuildRequest(
        platform=resolve_platform(platform, platforms=platforms),
        configuration=parse_target_configuration(configuration, path="--configuration"),
        target_name=(target_name or "").strip(),
        target_type=parse_target_type(target_type, path="--target-type"),
        developer_tools_enabled=bool(developer_tools),
        cooked_data_required=bool(cooked),
    )
