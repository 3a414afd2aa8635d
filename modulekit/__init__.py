"""Module eligibility kernel (descriptor model, document codec, build policy).

This package is intentionally independent of `module_gate`. File loading,
plugin documents and reporting live in the consuming application.
"""

from modulekit.codec import decode, decode_array, encode, encode_array
from modulekit.descriptor import ModuleDescriptor
from modulekit.errors import DescriptorError, InvalidDescriptor, MissingRequiredField
from modulekit.filters import FilterList
from modulekit.platforms import (
    DEFAULT_PLATFORMS,
    PlatformRegistry,
    PlatformResolver,
    TargetPlatform,
    canonical_platform,
)
from modulekit.policy import BuildRequest, EligibilityDecision, explain_eligibility, is_eligible
from modulekit.targets import (
    MODULE_HOST_TYPES,
    MODULE_LOADING_PHASES,
    TARGET_CONFIGURATIONS,
    TARGET_TYPES,
    ModuleHostType,
    ModuleLoadingPhase,
    TargetConfiguration,
    TargetType,
)
from modulekit.validation import validate

__all__ = [
    "BuildRequest",
    "DEFAULT_PLATFORMS",
    "DescriptorError",
    "EligibilityDecision",
    "FilterList",
    "InvalidDescriptor",
    "MODULE_HOST_TYPES",
    "MODULE_LOADING_PHASES",
    "MissingRequiredField",
    "ModuleDescriptor",
    "ModuleHostType",
    "ModuleLoadingPhase",
    "PlatformRegistry",
    "PlatformResolver",
    "TARGET_CONFIGURATIONS",
    "TARGET_TYPES",
    "TargetConfiguration",
    "TargetPlatform",
    "TargetType",
    "canonical_platform",
    "decode",
    "decode_array",
    "encode",
    "encode_array",
    "explain_eligibility",
    "is_eligible",
    "validate",
]
