from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from modulekit.descriptor import ModuleDescriptor
from modulekit.platforms import TargetPlatform
from modulekit.policy import BuildRequest, explain_eligibility
from modulekit.targets import TARGET_CONFIGURATIONS, TARGET_TYPES

logger = logging.getLogger(__name__)

# "Unknown" is not a buildable configuration.
DEFAULT_MATRIX_CONFIGURATIONS: tuple[str, ...] = tuple(
    configuration for configuration in TARGET_CONFIGURATIONS if configuration != "Unknown"
)


def matrix_column(target_type: str, configuration: str) -> str:
    return f"{target_type}/{configuration}"


def build_eligibility_matrix(
    modules: Sequence[ModuleDescriptor],
    *,
    platform: TargetPlatform,
    target_name: str = "",
    developer_tools: bool = False,
    cooked: bool = False,
    target_types: Sequence[str] = TARGET_TYPES,
    configurations: Sequence[str] = DEFAULT_MATRIX_CONFIGURATIONS,
) -> pd.DataFrame:
    """
    Evaluate every module against every (target type, configuration) pair.

    Returns a boolean DataFrame indexed by module name with one column per pair,
    named `<TargetType>/<Configuration>`, in the order given.
    """

    columns = [
        (target_type, configuration)
        for target_type in target_types
        for configuration in configurations
    ]

    data: dict[str, list[bool]] = {matrix_column(t, c): [] for t, c in columns}
    for module in modules:
        for target_type, configuration in columns:
            request = BuildRequest(
                platform=platform,
                configuration=configuration,  # type: ignore[arg-type]
                target_name=target_name,
                target_type=target_type,  # type: ignore[arg-type]
                developer_tools_enabled=developer_tools,
                cooked_data_required=cooked,
            )
            data[matrix_column(target_type, configuration)].append(
                explain_eligibility(module, request).eligible
            )

    index = pd.Index([module.name for module in modules], name="module")
    df = pd.DataFrame(data, index=index, columns=[matrix_column(t, c) for t, c in columns], dtype=bool)
    logger.debug("Built eligibility matrix: %d module(s) x %d column(s)", len(df.index), len(df.columns))
    return df


def render_matrix(df: pd.DataFrame) -> str:
    if df.empty:
        return "(no modules)"
    return df.apply(lambda column: column.map({True: "yes", False: "-"})).to_string()


def write_matrix_csv(df: pd.DataFrame, path: str) -> None:
    df.to_csv(path, index=True, encoding="utf-8")
