from __future__ import annotations

import json
import logging
from typing import TextIO

from module_gate.app.matrix import build_eligibility_matrix, render_matrix, write_matrix_csv
from module_gate.foundation.config_io import load_document, write_document
from module_gate.framework.plugin import PluginDescriptor
from module_gate.framework.request import parse_build_request, platform_registry, resolve_platform
from modulekit.platforms import DEFAULT_PLATFORMS, PlatformRegistry

logger = logging.getLogger(__name__)


def load_plugin(
    path: str, *, strict: bool = False, platforms: PlatformRegistry = DEFAULT_PLATFORMS
) -> PluginDescriptor:
    document, meta = load_document(path)
    logger.info("Loaded descriptor document (%s): %s", meta["mode"], ", ".join(meta["paths"]))
    return PluginDescriptor.from_dict(document, platforms=platforms, strict=strict, source=meta["paths"][0])


def run_check(
    path: str,
    *,
    platform: str,
    configuration: str,
    target_type: str,
    target_name: str | None,
    developer_tools: bool,
    cooked: bool,
    strict: bool,
    out: TextIO,
    modules: list[str] | None = None,
    extra_platforms: list[str] | None = None,
) -> int:
    platforms = platform_registry(extra_platforms)
    request = parse_build_request(
        platform=platform,
        configuration=configuration,
        target_type=target_type,
        target_name=target_name,
        developer_tools=developer_tools,
        cooked=cooked,
        platforms=platforms,
    )
    plugin = load_plugin(path, strict=strict, platforms=platforms)
    results = plugin.evaluate(request, names=modules)
    if not results:
        out.write("(no modules)\n")
        return 0

    width = max(len(module.name) for module, _decision in results)
    for module, decision in results:
        status = "included" if decision.eligible else "excluded"
        out.write(f"{module.name.ljust(width)}  {status:<8}  [{decision.rule}] {decision.detail}\n")
    return 0


def run_matrix(
    path: str,
    *,
    platform: str,
    target_name: str | None,
    developer_tools: bool,
    cooked: bool,
    strict: bool,
    csv_path: str | None,
    out: TextIO,
    extra_platforms: list[str] | None = None,
) -> int:
    platforms = platform_registry(extra_platforms)
    resolved_platform = resolve_platform(platform, platforms=platforms)
    plugin = load_plugin(path, strict=strict, platforms=platforms)
    df = build_eligibility_matrix(
        plugin.modules,
        platform=resolved_platform,
        target_name=(target_name or "").strip(),
        developer_tools=developer_tools,
        cooked=cooked,
    )
    out.write(render_matrix(df) + "\n")
    if csv_path:
        write_matrix_csv(df, csv_path)
        logger.info("Wrote eligibility matrix CSV: %s", csv_path)
    return 0


def run_validate(
    path: str, *, strict: bool, out: TextIO, extra_platforms: list[str] | None = None
) -> int:
    plugin = load_plugin(path, strict=strict, platforms=platform_registry(extra_platforms))
    messages = plugin.validate()
    for message in messages:
        out.write(f"warning: {message}\n")
    out.write(f"{len(plugin.modules)} module(s), {len(messages)} warning(s)\n")
    return 0


def run_normalize(
    path: str,
    *,
    output: str | None,
    strict: bool,
    out: TextIO,
    extra_platforms: list[str] | None = None,
) -> int:
    plugin = load_plugin(path, strict=strict, platforms=platform_registry(extra_platforms))
    document = plugin.to_dict()
    if output:
        write_document(output, document)
        logger.info("Wrote normalized descriptor: %s", output)
        return 0
    out.write(json.dumps(document, indent=4) + "\n")
    return 0
