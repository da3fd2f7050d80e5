from __future__ import annotations

from .ast_extract import (
    SourceParseError,
    collect_import_bindings,
    extract_routes_from_source,
    has_router_signal,
    parse_source,
)
from .constants import (
    APP_SPECIAL_BASENAMES,
    EXCLUDE_DIRS,
    ROUTER_SIGNAL_TOKENS,
    SOURCE_EXTENSIONS,
)
from .conventions import app_path_to_route, normalize_dynamic_segments, pages_path_to_route
from .imports import resolve_component, resolve_import_path
from .probe import (
    ManifestParseError,
    list_source_files,
    list_source_files_fallback,
    path_exists,
    read_json,
    read_source,
)
from .repo_config import detect_framework, load_repo_config
from .core import (
    ExtractOptions,
    extract_nextjs_routes,
    extract_react_router_routes,
    extract_site_routes,
    extract_vite_routes,
    merge_repo_config,
)
