from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Tuple

from route_model import ExtractionResult, FrameworkName, RouteInfo, path_flags
from utils import ToolState, progress, warn

from .ast_extract import SourceParseError, extract_routes_from_source, has_router_signal
from .constants import APP_ROUTER_DIR, EXCLUDE_DIRS, PAGES_ROUTER_DIR, SOURCE_EXTENSIONS
from .conventions import app_path_to_route, pages_path_to_route
from .probe import list_source_files, path_exists, read_source
from .repo_config import detect_framework, load_repo_config


@dataclass
class ExtractOptions:
    workers: Optional[int] = None
    exclude_dirs: Tuple[str, ...] = EXCLUDE_DIRS
    external_tools: bool = True


@dataclass
class ExtractionRun:
    root: Path
    options: ExtractOptions
    result: ExtractionResult
    tools: Optional[ToolState] = None

    @property
    def workers(self) -> int:
        return self.options.workers or 1


def merge_repo_config(options: ExtractOptions, config: Dict[str, object]) -> ExtractOptions:
    extra_dirs = [name for name in config.get("exclude_dirs") or [] if name not in options.exclude_dirs]
    workers = options.workers
    if workers is None and isinstance(config.get("workers"), int):
        workers = config["workers"]  # type: ignore[assignment]
    return replace(
        options,
        exclude_dirs=tuple(options.exclude_dirs) + tuple(extra_dirs),
        workers=workers,
    )


def convention_routes(
    run: ExtractionRun,
    router_dir: str,
    convert: Callable[[str], Optional[str]],
) -> List[RouteInfo]:
    base = run.root / router_dir
    files = list_source_files(
        base,
        SOURCE_EXTENSIONS,
        exclude_dirs=(),
        warnings=run.result.warnings,
        tools=run.tools,
    )
    routes: List[RouteInfo] = []
    for rel in files:
        route_path = convert(rel)
        if not route_path:
            continue
        component = f"{router_dir}/{rel}"
        routes.append(
            RouteInfo(
                path=route_path,
                component=component,
                resolved_component_path=component,
                **path_flags(route_path),
            )
        )
    return routes


def extract_nextjs_routes(run: ExtractionRun) -> List[RouteInfo]:
    routes: List[RouteInfo] = []
    if path_exists(run.root / APP_ROUTER_DIR):
        routes.extend(convention_routes(run, APP_ROUTER_DIR, app_path_to_route))
    if path_exists(run.root / PAGES_ROUTER_DIR):
        routes.extend(convention_routes(run, PAGES_ROUTER_DIR, pages_path_to_route))
    progress(f"Found {len(routes)} file-system routes", done=True)
    return routes


def declaration_routes(run: ExtractionRun, *, dedupe: bool) -> List[RouteInfo]:
    progress("Scanning source files for router declarations...")
    files = list_source_files(
        run.root,
        SOURCE_EXTENSIONS,
        exclude_dirs=run.options.exclude_dirs,
        warnings=run.result.warnings,
        tools=run.tools,
    )
    warnings = run.result.warnings
    routes: List[RouteInfo] = []
    seen: Set[Tuple[str, str]] = set()
    for rel in files:
        full_path = run.root / rel
        try:
            content = read_source(full_path)
        except OSError as exc:
            warn(f"Failed to read {rel}: {exc}", warnings)
            continue
        if not has_router_signal(content):
            continue
        try:
            file_routes = extract_routes_from_source(
                str(full_path),
                content,
                str(run.root),
                workers=run.workers,
            )
        except SourceParseError as exc:
            warn(f"Error parsing file {rel}: {exc}", warnings)
            continue
        for route in file_routes:
            if dedupe:
                key = (route.path, route.component or "no-component")
                if key in seen:
                    continue
                seen.add(key)
            routes.append(route)
    progress(f"Found {len(routes)} declared routes in {len(files)} files", done=True)
    return routes


def extract_react_router_routes(run: ExtractionRun) -> List[RouteInfo]:
    return declaration_routes(run, dedupe=True)


def extract_vite_routes(run: ExtractionRun) -> List[RouteInfo]:
    # A bundler has no routing convention of its own; scan for declarations
    # but keep duplicates.
    return declaration_routes(run, dedupe=False)


def unsupported_framework(run: ExtractionRun) -> List[RouteInfo]:
    run.result.errors.append("Unsupported or unknown framework")
    return []


FRAMEWORK_HANDLERS: Dict[FrameworkName, Callable[[ExtractionRun], List[RouteInfo]]] = {
    FrameworkName.NEXTJS: extract_nextjs_routes,
    FrameworkName.VITE: extract_vite_routes,
    FrameworkName.REACT_ROUTER_DOM: extract_react_router_routes,
    FrameworkName.UNKNOWN: unsupported_framework,
}


def extract_site_routes(project_path: str | Path, options: Optional[ExtractOptions] = None) -> ExtractionResult:
    """Detect the project's framework and collect its routes.

    Never raises: a missing project, an unknown framework and unexpected
    failures are all reported through ``ExtractionResult.errors``.
    """
    result = ExtractionResult()
    try:
        if not path_exists(project_path):
            result.errors.append(f"Project path does not exist: {project_path}")
            return result

        root = Path(project_path).resolve()
        config, _ = load_repo_config(root, result.warnings)
        opts = merge_repo_config(options or ExtractOptions(), config)

        result.framework = detect_framework(root)
        progress(f"Detected framework: {result.framework.name.value}")

        run = ExtractionRun(
            root=root,
            options=opts,
            result=result,
            tools=ToolState() if opts.external_tools else None,
        )
        result.routes = FRAMEWORK_HANDLERS[result.framework.name](run)
    except Exception as exc:
        result.errors.append(f"Error during extraction: {exc}")
    return result
