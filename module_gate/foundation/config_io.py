from __future__ import annotations

import json
import os
from pathlib import Path
from collections.abc import Mapping
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")
MODULES_LIST_KEY = "Modules"
MODULE_NAME_KEY = "Name"


def _load_mapping(path: str) -> dict[str, Any]:
    suffix = Path(path).suffix.lower()
    try:
        with open(path, "r", encoding="utf-8-sig") as handle:
            if suffix in YAML_SUFFIXES:
                payload = yaml.safe_load(handle)
            else:
                payload = json.load(handle)
    except FileNotFoundError:
        raise
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Descriptor file must contain a mapping: {path}")
    return dict(payload)


def _kind(value: Any) -> str:
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "list"
    return "value"


def _merge_modules(base: list[Any], overlay: list[Any], *, path: str) -> list[Any]:
    """Patch base module documents by Name; unknown names are appended."""

    merged = list(base)
    positions = {
        module[MODULE_NAME_KEY]: idx
        for idx, module in enumerate(merged)
        if isinstance(module, Mapping) and isinstance(module.get(MODULE_NAME_KEY), str)
    }
    for idx, patch in enumerate(overlay):
        item_path = f"{path}[{idx}]"
        name = patch.get(MODULE_NAME_KEY) if isinstance(patch, Mapping) else None
        if not isinstance(name, str):
            raise ValueError(f"Invalid overlay at {item_path}: module entries need a {MODULE_NAME_KEY}")
        if name in positions:
            merged[positions[name]] = _merge_overlay(merged[positions[name]], patch, path=item_path)
        else:
            positions[name] = len(merged)
            merged.append(dict(patch))
    return merged


def _merge_overlay(base: Any, overlay: Any, *, path: str) -> Any:
    base_kind, overlay_kind = _kind(base), _kind(overlay)
    if base_kind != overlay_kind:
        raise ValueError(
            f"Invalid overlay at {path or '<root>'}: cannot replace a {base_kind} with a {overlay_kind}"
        )
    if base_kind == "list":
        if path == MODULES_LIST_KEY:
            return _merge_modules(list(base), list(overlay), path=path)
        return list(overlay)
    if base_kind == "value":
        return overlay

    merged: dict[str, Any] = dict(base)
    for key, value in overlay.items():
        child_path = f"{path}.{key}" if path else str(key)
        if value is None:
            # null in an overlay removes the key
            merged.pop(key, None)
        elif merged.get(key) is None:
            merged[key] = value
        else:
            merged[key] = _merge_overlay(merged[key], value, path=child_path)
    return merged


def local_overlay_path(path: str) -> str:
    """Return the `<stem>.local<suffix>` sibling of a descriptor file."""

    p = Path(path)
    return str(p.with_name(f"{p.stem}.local{p.suffix}"))


def load_document(path: str | os.PathLike[str]) -> tuple[dict[str, Any], dict[str, Any]]:
    """
    Load a JSON or YAML descriptor document, merging a local overlay when present.

    Returns (document, meta) where meta records the mode and loaded paths.
    """

    expanded = os.path.abspath(os.path.expandvars(os.path.expanduser(str(path))))
    if not os.path.exists(expanded):
        raise FileNotFoundError(f"Missing descriptor file: {expanded}")

    document = _load_mapping(expanded)
    loaded_paths = [expanded]
    mode = "base"

    overlay_path = local_overlay_path(expanded)
    if os.path.exists(overlay_path):
        overlay = _load_mapping(overlay_path)
        document = _merge_overlay(document, overlay, path="")
        loaded_paths.append(overlay_path)
        mode = "base+local"

    return document, {"mode": mode, "paths": loaded_paths}


def write_document(path: str | os.PathLike[str], document: Mapping[str, Any]) -> None:
    suffix = Path(path).suffix.lower()
    with open(path, "w", encoding="utf-8") as handle:
        if suffix in YAML_SUFFIXES:
            yaml.safe_dump(dict(document), handle, sort_keys=False)
        else:
            json.dump(document, handle, indent=4)
            handle.write("\n")
