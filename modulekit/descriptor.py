from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from modulekit.errors import InvalidDescriptor
from modulekit.filters import FilterList
from modulekit.platforms import TargetPlatform, canonical_platform
from modulekit.targets import (
    DEFAULT_LOADING_PHASE,
    MODULE_HOST_TYPES,
    MODULE_LOADING_PHASES,
    TARGET_CONFIGURATIONS,
    TARGET_TYPES,
    ModuleHostType,
    ModuleLoadingPhase,
    TargetConfiguration,
    TargetType,
    try_parse_host_type,
    try_parse_loading_phase,
    try_parse_target_configuration,
    try_parse_target_type,
)


def _platform_entry(value: Any) -> TargetPlatform:
    if isinstance(value, TargetPlatform) or (isinstance(value, str) and value.strip()):
        return canonical_platform(value)
    raise InvalidDescriptor(f"platform entries must be non-empty strings (got {value!r})")


def _target_entry(value: Any) -> TargetType:
    parsed = try_parse_target_type(value)
    if parsed is None:
        raise InvalidDescriptor(
            f"target entries must be one of: {', '.join(TARGET_TYPES)} (got {value!r})"
        )
    return parsed


def _configuration_entry(value: Any) -> TargetConfiguration:
    parsed = try_parse_target_configuration(value)
    if parsed is None:
        raise InvalidDescriptor(
            f"configuration entries must be one of: {', '.join(TARGET_CONFIGURATIONS)} (got {value!r})"
        )
    return parsed


def _program_entry(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidDescriptor(f"program entries must be strings (got {value!r})")
    return value


def _dependency_entry(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidDescriptor(f"additional dependencies must be strings (got {value!r})")
    return value


_FILTER_FIELDS: dict[str, Callable[[Any], Any]] = {
    "platform_allow_list": _platform_entry,
    "platform_deny_list": _platform_entry,
    "target_allow_list": _target_entry,
    "target_deny_list": _target_entry,
    "target_configuration_allow_list": _configuration_entry,
    "target_configuration_deny_list": _configuration_entry,
    "program_allow_list": _program_entry,
    "program_deny_list": _program_entry,
}


@dataclass
class ModuleDescriptor:
    """Declarative description of a buildable module.

    Only `name` and `host_type` are required. Filter fields accept `None`
    (unrestricted), a `FilterList`, or any iterable of entries; assignments are
    normalised so entries always hold canonical values. `name` cannot be
    reassigned once set.
    """

    name: str
    host_type: ModuleHostType
    loading_phase: ModuleLoadingPhase = DEFAULT_LOADING_PHASE
    platform_allow_list: FilterList[TargetPlatform] = field(default_factory=FilterList.unrestricted)
    platform_deny_list: FilterList[TargetPlatform] = field(default_factory=FilterList.unrestricted)
    target_allow_list: FilterList[TargetType] = field(default_factory=FilterList.unrestricted)
    target_deny_list: FilterList[TargetType] = field(default_factory=FilterList.unrestricted)
    target_configuration_allow_list: FilterList[TargetConfiguration] = field(
        default_factory=FilterList.unrestricted
    )
    target_configuration_deny_list: FilterList[TargetConfiguration] = field(
        default_factory=FilterList.unrestricted
    )
    program_allow_list: FilterList[str] = field(default_factory=FilterList.unrestricted)
    program_deny_list: FilterList[str] = field(default_factory=FilterList.unrestricted)
    additional_dependencies: tuple[str, ...] = ()

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "name":
            if "name" in self.__dict__:
                raise AttributeError("ModuleDescriptor.name is immutable")
            if not isinstance(value, str) or not value.strip():
                raise InvalidDescriptor("ModuleDescriptor.name must be a non-empty string")
            value = value.strip()
        elif key == "host_type":
            parsed = try_parse_host_type(value)
            if parsed is None:
                raise InvalidDescriptor(
                    f"ModuleDescriptor.host_type must be one of: {', '.join(MODULE_HOST_TYPES)} "
                    f"(got {value!r})"
                )
            value = parsed
        elif key == "loading_phase":
            parsed = try_parse_loading_phase(value)
            if parsed is None:
                raise InvalidDescriptor(
                    f"ModuleDescriptor.loading_phase must be one of: {', '.join(MODULE_LOADING_PHASES)} "
                    f"(got {value!r})"
                )
            value = parsed
        elif key in _FILTER_FIELDS:
            try:
                value = FilterList.coerce(value).map(_FILTER_FIELDS[key])
            except TypeError as exc:
                raise InvalidDescriptor(f"ModuleDescriptor.{key}: {exc}") from exc
        elif key == "additional_dependencies":
            if value is None:
                value = ()
            if isinstance(value, str):
                raise InvalidDescriptor("ModuleDescriptor.additional_dependencies must be a list of strings")
            value = tuple(_dependency_entry(item) for item in value)
        object.__setattr__(self, key, value)
