"""Module descriptor <-> document codec.

Documents are plain mappings/lists as produced by a JSON or YAML parser. The
codec performs no I/O.

The platform allow list is written whenever it is restricted, as an explicit
empty array when it has no entries ("allowed on no platform"). Every other list
is written only when it has entries.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from modulekit.config_namespace import ConfigNamespace
from modulekit.descriptor import ModuleDescriptor
from modulekit.errors import MissingRequiredField
from modulekit.filters import FilterList
from modulekit.platforms import DEFAULT_PLATFORMS, PlatformResolver, TargetPlatform
from modulekit.targets import (
    DEFAULT_LOADING_PHASE,
    MODULE_HOST_TYPES,
    MODULE_LOADING_PHASES,
    try_parse_host_type,
    try_parse_loading_phase,
    try_parse_target_configuration,
    try_parse_target_type,
)

logger = logging.getLogger(__name__)

KEY_NAME = "Name"
KEY_TYPE = "Type"
KEY_LOADING_PHASE = "LoadingPhase"
KEY_PLATFORM_ALLOW = "WhitelistPlatforms"
KEY_PLATFORM_DENY = "BlacklistPlatforms"
KEY_TARGET_ALLOW = "WhitelistTargets"
KEY_TARGET_DENY = "BlacklistTargets"
KEY_CONFIGURATION_ALLOW = "WhitelistTargetConfigurations"
KEY_CONFIGURATION_DENY = "BlacklistTargetConfigurations"
KEY_PROGRAM_ALLOW = "WhitelistPrograms"
KEY_PROGRAM_DENY = "BlacklistPrograms"
KEY_ADDITIONAL_DEPENDENCIES = "AdditionalDependencies"


def _required_str(ns: ConfigNamespace, key: str) -> str:
    try:
        value = ns.get_str(key)
    except (TypeError, ValueError) as exc:
        raise MissingRequiredField(key, str(exc)) from exc
    if value is None:
        raise MissingRequiredField(key, f"Missing required config key: {ns.key_path(key)}")
    return value


def _decode_resolved_list(
    ns: ConfigNamespace,
    key: str,
    *,
    resolve: Callable[[str], Any],
    kind: str,
    module_name: str,
) -> FilterList[Any]:
    names = ns.get_optional_str_array(key)
    if names is None:
        return FilterList.unrestricted()

    resolved: list[Any] = []
    for name in names:
        value = resolve(name)
        if value is None:
            logger.warning(
                "Unknown %s %s while parsing %s for module descriptor %s",
                kind,
                name,
                key,
                module_name,
            )
            continue
        resolved.append(value)
    # Kept restricted even when every entry was dropped.
    return FilterList.of(*resolved)


def _decode_str_list(ns: ConfigNamespace, key: str) -> FilterList[str]:
    return FilterList.coerce(ns.get_optional_str_array(key))


def decode(
    document: Any,
    *,
    platforms: PlatformResolver = DEFAULT_PLATFORMS,
    strict: bool = False,
    path: str = "",
) -> ModuleDescriptor:
    """Build a ModuleDescriptor from one module document.

    Raises:
        MissingRequiredField: if `Name` or `Type` is absent or unparseable.
        ValueError: in strict mode, if the document has unknown keys.
    """

    try:
        ns = ConfigNamespace.from_document(document, path=path)
    except TypeError as exc:
        raise MissingRequiredField(KEY_NAME, str(exc)) from exc

    name = _required_str(ns, KEY_NAME)
    raw_type = _required_str(ns, KEY_TYPE)
    host_type = try_parse_host_type(raw_type)
    if host_type is None:
        raise MissingRequiredField(
            KEY_TYPE,
            f"{ns.key_path(KEY_TYPE)} must be one of: {', '.join(MODULE_HOST_TYPES)} "
            f"(got {raw_type!r}, module {name})",
        )

    descriptor = ModuleDescriptor(name, host_type)

    raw_phase = ns.get_optional(KEY_LOADING_PHASE)
    if raw_phase is not None:
        phase = try_parse_loading_phase(raw_phase)
        if phase is None:
            logger.warning(
                "Unknown loading phase %r for module descriptor %s (expected one of: %s); using %s",
                raw_phase,
                name,
                ", ".join(MODULE_LOADING_PHASES),
                DEFAULT_LOADING_PHASE,
            )
        else:
            descriptor.loading_phase = phase

    descriptor.platform_allow_list = _decode_resolved_list(
        ns, KEY_PLATFORM_ALLOW, resolve=platforms.try_parse, kind="platform", module_name=name
    )
    descriptor.platform_deny_list = _decode_resolved_list(
        ns, KEY_PLATFORM_DENY, resolve=platforms.try_parse, kind="platform", module_name=name
    )
    descriptor.target_allow_list = _decode_resolved_list(
        ns, KEY_TARGET_ALLOW, resolve=try_parse_target_type, kind="target type", module_name=name
    )
    descriptor.target_deny_list = _decode_resolved_list(
        ns, KEY_TARGET_DENY, resolve=try_parse_target_type, kind="target type", module_name=name
    )
    descriptor.target_configuration_allow_list = _decode_resolved_list(
        ns,
        KEY_CONFIGURATION_ALLOW,
        resolve=try_parse_target_configuration,
        kind="target configuration",
        module_name=name,
    )
    descriptor.target_configuration_deny_list = _decode_resolved_list(
        ns,
        KEY_CONFIGURATION_DENY,
        resolve=try_parse_target_configuration,
        kind="target configuration",
        module_name=name,
    )
    descriptor.program_allow_list = _decode_str_list(ns, KEY_PROGRAM_ALLOW)
    descriptor.program_deny_list = _decode_str_list(ns, KEY_PROGRAM_DENY)
    descriptor.additional_dependencies = ns.get_optional_str_array(KEY_ADDITIONAL_DEPENDENCIES) or ()

    if strict:
        ns.assert_consumed()
    else:
        unknown = ns.unconsumed_keys()
        if unknown:
            logger.debug("Ignoring unknown keys for module descriptor %s: %s", name, ", ".join(unknown))

    return descriptor


def decode_array(
    documents: Any,
    *,
    platforms: PlatformResolver = DEFAULT_PLATFORMS,
    strict: bool = False,
    path: str = "Modules",
) -> list[ModuleDescriptor]:
    if documents is None:
        return []
    if not isinstance(documents, (list, tuple)):
        raise TypeError(f"{path} must be a list (type={type(documents).__name__})")
    return [
        decode(document, platforms=platforms, strict=strict, path=f"{path}[{idx}]")
        for idx, document in enumerate(documents)
    ]


def _platform_names(entries: Iterable[TargetPlatform]) -> list[str]:
    return [platform.name for platform in entries]


def encode(descriptor: ModuleDescriptor) -> dict[str, Any]:
    out: dict[str, Any] = {
        KEY_NAME: descriptor.name,
        KEY_TYPE: descriptor.host_type,
        KEY_LOADING_PHASE: descriptor.loading_phase,
    }
    # Restricted-but-empty must survive: it disables the module on every platform.
    if descriptor.platform_allow_list.is_restricted:
        out[KEY_PLATFORM_ALLOW] = _platform_names(descriptor.platform_allow_list)
    if descriptor.platform_deny_list.has_entries:
        out[KEY_PLATFORM_DENY] = _platform_names(descriptor.platform_deny_list)
    if descriptor.target_allow_list.has_entries:
        out[KEY_TARGET_ALLOW] = list(descriptor.target_allow_list)
    if descriptor.target_deny_list.has_entries:
        out[KEY_TARGET_DENY] = list(descriptor.target_deny_list)
    if descriptor.target_configuration_allow_list.has_entries:
        out[KEY_CONFIGURATION_ALLOW] = list(descriptor.target_configuration_allow_list)
    if descriptor.target_configuration_deny_list.has_entries:
        out[KEY_CONFIGURATION_DENY] = list(descriptor.target_configuration_deny_list)
    if descriptor.program_allow_list.has_entries:
        out[KEY_PROGRAM_ALLOW] = list(descriptor.program_allow_list)
    if descriptor.program_deny_list.has_entries:
        out[KEY_PROGRAM_DENY] = list(descriptor.program_deny_list)
    if descriptor.additional_dependencies:
        out[KEY_ADDITIONAL_DEPENDENCIES] = list(descriptor.additional_dependencies)
    return out


def encode_array(descriptors: Sequence[ModuleDescriptor] | None) -> list[dict[str, Any]] | None:
    """Encode a module list; None means the owner should omit the field."""

    if not descriptors:
        return None
    return [encode(descriptor) for descriptor in descriptors]
