from __future__ import annotations

import logging

from modulekit.descriptor import ModuleDescriptor
from modulekit.targets import DEPRECATED_HOST_TYPE

logger = logging.getLogger(__name__)

DEVELOPER_DEPRECATION_MESSAGE = (
    "The 'Developer' module type has been deprecated. Use 'DeveloperTool' for modules that can be "
    "loaded by game/client/server targets in non-shipping configurations, or 'UncookedOnly' for "
    "modules that should only be loaded by uncooked editor and program targets (eg. modules "
    "containing blueprint nodes)"
)


def validate(descriptor: ModuleDescriptor, *, source: str | None = None) -> list[str]:
    """Log diagnostics for deprecated module settings and return them.

    Never mutates the descriptor and never raises for a well-formed one.
    """

    messages: list[str] = []
    if descriptor.host_type == DEPRECATED_HOST_TYPE:
        prefix = f"{source}: " if source else ""
        messages.append(f"{prefix}module {descriptor.name}: {DEVELOPER_DEPRECATION_MESSAGE}")

    for message in messages:
        logger.warning("%s", message)
    return messages
