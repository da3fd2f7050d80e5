from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Optional

DIST_NAME = "route-map"
FALLBACK_VERSION = "1.0.0"


def resolve_project_path(value: str, *, cwd: Optional[Path] = None) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return (cwd or Path.cwd()) / path


def parse_workers(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    return max(1, int(value))


def package_version() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION
