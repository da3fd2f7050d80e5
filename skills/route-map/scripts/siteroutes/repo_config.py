from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from route_model import FrameworkInfo, FrameworkName

from .constants import (
    FRAMEWORK_CONFIG_FILES,
    FRAMEWORK_PACKAGES,
    MANIFEST_FILE,
    ROUTEMAP_CONFIG_FILES,
)
from .probe import path_exists, read_json


def load_repo_config(repo: Path, warnings: List[str]) -> Tuple[Dict[str, object], Optional[str]]:
    for filename in ROUTEMAP_CONFIG_FILES:
        path = repo / filename
        if not path.exists():
            continue
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            warnings.append(f"Failed to parse {filename}: {exc}")
            return {}, filename
        if not isinstance(payload, dict):
            warnings.append(f"Invalid {filename}: expected a JSON object")
            return {}, filename
        workers = payload.get("workers")
        config: Dict[str, object] = {
            "exclude_dirs": normalize_str_list(payload.get("exclude_dirs")),
            "workers": workers if isinstance(workers, int) and not isinstance(workers, bool) else None,
        }
        return config, filename
    return {}, None


def normalize_str_list(value: Any) -> List[str]:
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def manifest_dependencies(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    deps: Dict[str, Any] = {}
    for section in ("dependencies", "devDependencies"):
        value = data.get(section)
        if isinstance(value, dict):
            deps.update(value)
    return deps


def detect_framework(repo: Path) -> FrameworkInfo:
    """Classify the project from package.json, then from config file names.

    Raises ManifestParseError when package.json exists but is not valid JSON.
    """
    package_json = repo / MANIFEST_FILE
    if path_exists(package_json):
        deps = manifest_dependencies(read_json(package_json))
        for package, name in FRAMEWORK_PACKAGES:
            if package in deps:
                version = deps[package]
                return FrameworkInfo(name, version if isinstance(version, str) else None)

    for filenames, name in FRAMEWORK_CONFIG_FILES:
        if any(path_exists(repo / filename) for filename in filenames):
            return FrameworkInfo(name)

    return FrameworkInfo(FrameworkName.UNKNOWN)
