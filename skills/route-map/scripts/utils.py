from __future__ import annotations

import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set, TypeVar

T = TypeVar("T")


@dataclass
class ToolState:
    missing: Set[str] = field(default_factory=set)


def progress(message: str, done: bool = False) -> None:
    """Print a progress message to stderr (doesn't interfere with stdout output)."""
    if done:
        print(f"  [done] {message}", file=sys.stderr)
    else:
        print(f"  [....] {message}", file=sys.stderr)


def warn(message: str, warnings: Optional[List[str]] = None) -> None:
    """Report a recoverable problem on stderr and keep it in ``warnings``."""
    print(f"  [warn] {message}", file=sys.stderr)
    if warnings is not None:
        warnings.append(message)


def run_cmd(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path],
    warnings: List[str],
    tools: ToolState,
    capture: bool = True,
) -> Optional[subprocess.CompletedProcess]:
    tool = cmd[0]
    if tool in tools.missing:
        return None
    try:
        return subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            check=False,
            text=True,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
        )
    except FileNotFoundError:
        tools.missing.add(tool)
        warnings.append(f"Missing tool: {tool}")
        return None


def run_deferred(tasks: Sequence[Callable[[], T]], *, workers: int = 1) -> List[T]:
    """Run zero-argument tasks and return their results in submission order."""
    if not tasks:
        return []
    if workers and workers > 1 and len(tasks) > 1:
        max_workers = max(1, min(int(workers), len(tasks)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(task) for task in tasks]
            return [future.result() for future in futures]
    return [task() for task in tasks]
