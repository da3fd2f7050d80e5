from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from utils import ToolState, run_cmd

from .constants import EXCLUDE_DIRS


class ManifestParseError(ValueError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path.name}: {reason}")
        self.path = path


def path_exists(path: Path | str) -> bool:
    return os.path.exists(path)


def read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestParseError(path, str(exc)) from exc


def _strip_dot_prefix(line: str) -> str:
    line = line.strip().replace("\\", "/")
    while line.startswith("./"):
        line = line[2:]
    return line


def _keep(rel: str, extensions: Sequence[str], exclude_dirs: Sequence[str]) -> bool:
    parts = rel.split("/")
    if any(part.startswith(".") for part in parts):
        return False
    if any(part in exclude_dirs for part in parts[:-1]):
        return False
    return rel.endswith(tuple(extensions))


def list_source_files(
    root: Path,
    extensions: Sequence[str],
    *,
    exclude_dirs: Sequence[str] = EXCLUDE_DIRS,
    warnings: Optional[List[str]] = None,
    tools: Optional[ToolState] = None,
) -> List[str]:
    """Sorted root-relative posix paths of files ending in ``extensions``.

    Hidden entries and ``exclude_dirs`` are skipped. ``fd`` and ``rg`` are
    tried first when a ToolState is supplied; the walk fallback gives the
    same answer.
    """
    tool_warnings: List[str] = warnings if warnings is not None else []
    if tools is not None:
        fd_cmd = ["fd", "--type", "f", "--no-ignore"]
        for ext in extensions:
            fd_cmd.extend(["--extension", ext.lstrip(".")])
        for exclude in exclude_dirs:
            fd_cmd.extend(["--exclude", exclude])
        result = run_cmd(fd_cmd, cwd=root, warnings=tool_warnings, tools=tools, capture=True)
        if result and result.returncode == 0:
            return _collect(result.stdout.splitlines(), extensions, exclude_dirs)
        if result is not None and result.returncode != 0:
            tool_warnings.append("fd failed; falling back to rg")

        rg_cmd = ["rg", "--files", "--no-ignore"]
        for ext in extensions:
            rg_cmd.extend(["-g", f"*{ext}"])
        for exclude in exclude_dirs:
            rg_cmd.extend(["-g", f"!**/{exclude}/**"])
        result = run_cmd(rg_cmd, cwd=root, warnings=tool_warnings, tools=tools, capture=True)
        # rg exits 1 when nothing matched.
        if result and result.returncode in (0, 1):
            return _collect(result.stdout.splitlines(), extensions, exclude_dirs)
        if result is not None:
            tool_warnings.append("rg failed; falling back to Python file walk")
    return list_source_files_fallback(root, extensions, exclude_dirs=exclude_dirs)


def _collect(lines: Iterable[str], extensions: Sequence[str], exclude_dirs: Sequence[str]) -> List[str]:
    files = [_strip_dot_prefix(line) for line in lines if line.strip()]
    return sorted({rel for rel in files if _keep(rel, extensions, exclude_dirs)})


def list_source_files_fallback(
    root: Path,
    extensions: Sequence[str],
    *,
    exclude_dirs: Sequence[str] = EXCLUDE_DIRS,
) -> List[str]:
    files: List[str] = []
    for current, dirs, filenames in os.walk(root):
        dirs[:] = [d for d in dirs if d not in exclude_dirs and not d.startswith(".")]
        for filename in filenames:
            full = Path(current) / filename
            if full.is_symlink():
                continue
            try:
                rel = full.relative_to(root).as_posix()
            except ValueError:
                continue
            if _keep(rel, extensions, exclude_dirs):
                files.append(rel)
    return sorted(set(files))
