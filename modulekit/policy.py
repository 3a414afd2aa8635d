"""Module eligibility policy.

`is_eligible` decides whether a module descriptor participates in a build. It
is pure and total: it never raises for a well-formed descriptor and never
performs I/O.

Checks run in a fixed order and the first failing check decides:

1. platform allow list (a restricted empty list excludes every platform)
2. platform deny list
3. target type allow list (empty means unrestricted)
4. target type deny list
5. target configuration allow list (empty means unrestricted)
6. target configuration deny list
7. program allow/deny lists, only for Program targets; a non-empty program
   allow list decides on its own and skips the host type check
8. host type
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from modulekit.descriptor import ModuleDescriptor
from modulekit.platforms import TargetPlatform, canonical_platform
from modulekit.targets import (
    MODULE_HOST_TYPES,
    ModuleHostType,
    TargetConfiguration,
    TargetType,
)

DecisionRule = Literal[
    "platform_allow",
    "platform_deny",
    "target_allow",
    "target_deny",
    "configuration_allow",
    "configuration_deny",
    "program_allow",
    "program_deny",
    "host_type",
]


@dataclass(frozen=True)
class BuildRequest:
    platform: TargetPlatform
    configuration: TargetConfiguration
    target_name: str
    target_type: TargetType
    developer_tools_enabled: bool = False
    cooked_data_required: bool = False

    def __post_init__(self) -> None:
        platform = self.platform
        if isinstance(platform, TargetPlatform) or (isinstance(platform, str) and platform.strip()):
            object.__setattr__(self, "platform", canonical_platform(platform))


@dataclass(frozen=True)
class EligibilityDecision:
    eligible: bool
    rule: DecisionRule
    detail: str


HostTypeCheck = Callable[[BuildRequest], bool]

_HOST_TYPE_CHECKS: dict[str, HostTypeCheck | None] = {
    "Default": None,
    "Runtime": lambda r: r.target_type != "Program",
    "RuntimeNoCommandlet": lambda r: r.target_type != "Program",
    "RuntimeAndProgram": lambda r: True,
    "CookedOnly": lambda r: r.cooked_data_required,
    "UncookedOnly": lambda r: not r.cooked_data_required,
    "Developer": lambda r: r.target_type in ("Editor", "Program"),
    "DeveloperTool": lambda r: r.developer_tools_enabled,
    "Editor": lambda r: r.target_type == "Editor",
    "EditorNoCommandlet": lambda r: r.target_type == "Editor",
    "EditorAndProgram": lambda r: r.target_type in ("Editor", "Program"),
    "Program": lambda r: r.target_type == "Program",
    "ServerOnly": lambda r: r.target_type not in ("Program", "Client"),
    "ClientOnly": lambda r: r.target_type not in ("Program", "Server"),
    "ClientOnlyNoCommandlet": lambda r: r.target_type not in ("Program", "Server"),
}

if set(_HOST_TYPE_CHECKS) != set(MODULE_HOST_TYPES):
    raise RuntimeError(
        "Host type checks out of sync with ModuleHostType: "
        f"missing={sorted(set(MODULE_HOST_TYPES) - set(_HOST_TYPE_CHECKS))} "
        f"extra={sorted(set(_HOST_TYPE_CHECKS) - set(MODULE_HOST_TYPES))}"
    )


def host_type_allows(host_type: ModuleHostType, request: BuildRequest) -> bool:
    """Return True if a module of `host_type` can be loaded by the requested target."""

    check = _HOST_TYPE_CHECKS.get(host_type)
    if check is None:
        return False
    return bool(check(request))


def explain_eligibility(descriptor: ModuleDescriptor, request: BuildRequest) -> EligibilityDecision:
    platform = request.platform
    target_type = request.target_type
    configuration = request.configuration

    if descriptor.platform_allow_list.rejects(platform, empty_restricts=True):
        return EligibilityDecision(False, "platform_allow", f"platform {platform} is not in the allow list")
    if platform in descriptor.platform_deny_list:
        return EligibilityDecision(False, "platform_deny", f"platform {platform} is in the deny list")

    if descriptor.target_allow_list.rejects(target_type, empty_restricts=False):
        return EligibilityDecision(False, "target_allow", f"target type {target_type} is not in the allow list")
    if target_type in descriptor.target_deny_list:
        return EligibilityDecision(False, "target_deny", f"target type {target_type} is in the deny list")

    if descriptor.target_configuration_allow_list.rejects(configuration, empty_restricts=False):
        return EligibilityDecision(
            False, "configuration_allow", f"configuration {configuration} is not in the allow list"
        )
    if configuration in descriptor.target_configuration_deny_list:
        return EligibilityDecision(
            False, "configuration_deny", f"configuration {configuration} is in the deny list"
        )

    if target_type == "Program":
        # An explicit program allow list admits the module regardless of host type.
        if descriptor.program_allow_list.has_entries:
            if request.target_name in descriptor.program_allow_list:
                return EligibilityDecision(
                    True, "program_allow", f"program {request.target_name} is in the allow list"
                )
            return EligibilityDecision(
                False, "program_allow", f"program {request.target_name} is not in the allow list"
            )
        if request.target_name in descriptor.program_deny_list:
            return EligibilityDecision(
                False, "program_deny", f"program {request.target_name} is in the deny list"
            )

    allowed = host_type_allows(descriptor.host_type, request)
    verb = "allows" if allowed else "does not allow"
    return EligibilityDecision(
        allowed,
        "host_type",
        f"host type {descriptor.host_type} {verb} {target_type} targets",
    )


def is_eligible(
    descriptor: ModuleDescriptor,
    platform: TargetPlatform | str,
    configuration: TargetConfiguration,
    target_name: str,
    target_type: TargetType,
    developer_tools_enabled: bool,
    cooked_data_required: bool,
) -> bool:
    """Return True if `descriptor` is part of the described build."""

    request = BuildRequest(
        platform=platform,  # type: ignore[arg-type]
        configuration=configuration,
        target_name=target_name,
        target_type=target_type,
        developer_tools_enabled=developer_tools_enabled,
        cooked_data_required=cooked_data_required,
    )
    return explain_eligibility(descriptor, request).eligible
