"""Closed vocabularies describing build targets and module hosting.

Values are canonical names as written in descriptor documents. Parsing is
case-insensitive and always returns the canonical spelling.
"""

from __future__ import annotations

from typing import Literal, TypeAlias, get_args

TargetType: TypeAlias = Literal["Game", "Editor", "Client", "Server", "Program"]

TargetConfiguration: TypeAlias = Literal[
    "Unknown",
    "Debug",
    "DebugGame",
    "Development",
    "Shipping",
    "Test",
]

ModuleHostType: TypeAlias = Literal[
    "Default",
    "Runtime",
    "RuntimeNoCommandlet",
    "RuntimeAndProgram",
    "CookedOnly",
    "UncookedOnly",
    "Developer",
    "DeveloperTool",
    "Editor",
    "EditorNoCommandlet",
    "EditorAndProgram",
    "Program",
    "ServerOnly",
    "ClientOnly",
    "ClientOnlyNoCommandlet",
]

ModuleLoadingPhase: TypeAlias = Literal[
    "Default",
    "PostDefault",
    "PreDefault",
    "EarliestPossible",
    "PostConfigInit",
    "PostSplashScreen",
    "PreEarlyLoadingScreen",
    "PreLoadingScreen",
    "PostEngineInit",
    "None",
]

TARGET_TYPES: tuple[str, ...] = get_args(TargetType)
TARGET_CONFIGURATIONS: tuple[str, ...] = get_args(TargetConfiguration)
MODULE_HOST_TYPES: tuple[str, ...] = get_args(ModuleHostType)
MODULE_LOADING_PHASES: tuple[str, ...] = get_args(ModuleLoadingPhase)

DEFAULT_LOADING_PHASE: ModuleLoadingPhase = "Default"

# Deprecated host category; see modulekit.validation.
DEPRECATED_HOST_TYPE: ModuleHostType = "Developer"


def _canonical_lookup(values: tuple[str, ...]) -> dict[str, str]:
    return {value.lower(): value for value in values}


_TARGET_TYPES_BY_KEY = _canonical_lookup(TARGET_TYPES)
_TARGET_CONFIGURATIONS_BY_KEY = _canonical_lookup(TARGET_CONFIGURATIONS)
_HOST_TYPES_BY_KEY = _canonical_lookup(MODULE_HOST_TYPES)
_LOADING_PHASES_BY_KEY = _canonical_lookup(MODULE_LOADING_PHASES)


def _try_parse(raw: object, lookup: dict[str, str]) -> str | None:
    if not isinstance(raw, str):
        return None
    return lookup.get(raw.strip().lower())


def try_parse_target_type(raw: object) -> TargetType | None:
    return _try_parse(raw, _TARGET_TYPES_BY_KEY)  # type: ignore[return-value]


def try_parse_target_configuration(raw: object) -> TargetConfiguration | None:
    return _try_parse(raw, _TARGET_CONFIGURATIONS_BY_KEY)  # type: ignore[return-value]


def try_parse_host_type(raw: object) -> ModuleHostType | None:
    return _try_parse(raw, _HOST_TYPES_BY_KEY)  # type: ignore[return-value]


def try_parse_loading_phase(raw: object) -> ModuleLoadingPhase | None:
    return _try_parse(raw, _LOADING_PHASES_BY_KEY)  # type: ignore[return-value]


def parse_target_type(raw: object, *, path: str = "target_type") -> TargetType:
    value = try_parse_target_type(raw)
    if value is None:
        raise ValueError(f"{path} must be one of: {', '.join(TARGET_TYPES)} (got {raw!r})")
    return value


def parse_target_configuration(raw: object, *, path: str = "configuration") -> TargetConfiguration:
    value = try_parse_target_configuration(raw)
    if value is None:
        raise ValueError(
            f"{path} must be one of: {', '.join(TARGET_CONFIGURATIONS)} (got {raw!r})"
        )
    return value
