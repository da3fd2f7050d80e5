from __future__ import annotations

import re
from typing import Optional

from .constants import APP_SPECIAL_BASENAMES

SOURCE_SUFFIX_RE = re.compile(r"\.(tsx|ts|jsx|js)$")

# Catch-all alternatives come first so `[...slug]` never reads as `:...slug`.
DYNAMIC_SEGMENT_RE = re.compile(
    r"\[\[\.\.\.(?P<optional>[^\]]+)\]\]"
    r"|\[\.\.\.(?P<spread>[^\]]+)\]"
    r"|\[(?P<name>[^\]]+)\]"
)


def _segment_replacement(match: "re.Match[str]") -> str:
    if match.group("name") is not None:
        return ":" + match.group("name")
    return "*"


def normalize_dynamic_segments(route: str) -> str:
    return DYNAMIC_SEGMENT_RE.sub(_segment_replacement, route)


def strip_source_suffix(path: str) -> str:
    return SOURCE_SUFFIX_RE.sub("", path.replace("\\", "/"))


def app_path_to_route(file_path: str) -> Optional[str]:
    """Map a path under ``app/`` to its route; special files name their directory."""
    route = strip_source_suffix(file_path)

    head, _, last = route.rpartition("/")
    if last in APP_SPECIAL_BASENAMES:
        route = head

    route = normalize_dynamic_segments(route)

    if route == "index":
        route = "/"
    elif not route.startswith("/"):
        route = "/" + route

    return route or "/"


def pages_path_to_route(file_path: str) -> Optional[str]:
    route = strip_source_suffix(file_path)

    if route == "index":
        return "/"

    return "/" + normalize_dynamic_segments(route)
