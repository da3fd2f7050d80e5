#!/usr/bin/env python3
"""Route mapper CLI: detect a front-end framework and list its routes."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from route_model import ExtractionResult, RouteInfo
from siteroutes import ExtractOptions, extract_site_routes
from utils import progress
from .config import package_version, parse_workers, resolve_project_path

RULE_WIDTH = 60


def route_lines(route: RouteInfo, label: str, indent: str = "") -> List[str]:
    lines = [f"{indent}{label} {route.path}"]
    detail = indent + "   "
    if route.component:
        lines.append(f"{detail}component: {route.component}")
    if route.resolved_component_path and route.resolved_component_path != route.component:
        lines.append(f"{detail}resolved: {route.resolved_component_path}")
    imported = route.imported_component
    if imported:
        lines.append(f"{detail}imported: {imported.name} from {imported.path}")
        if imported.full_path and imported.full_path != imported.path:
            lines.append(f"{detail}file: {imported.full_path}")
    if route.dynamic:
        lines.append(f"{detail}dynamic: yes")
    if route.catch_all:
        lines.append(f"{detail}catch-all: yes")
    if route.children:
        lines.append(f"{detail}children: {len(route.children)}")
        for idx, child in enumerate(route.children, start=1):
            lines.extend(route_lines(child, f"{label}{idx}.", detail))
    return lines


def format_result(result: ExtractionResult) -> str:
    lines: List[str] = ["=" * RULE_WIDTH, "Route Extraction Results", "=" * RULE_WIDTH]
    lines.append(f"framework: {result.framework.name.value}")
    if result.framework.version:
        lines.append(f"version: {result.framework.version}")
    lines.append(f"routes found: {len(result.routes)}")

    if result.routes:
        lines.append("-" * RULE_WIDTH)
        for idx, route in enumerate(result.routes, start=1):
            lines.extend(route_lines(route, f"{idx}."))
            lines.append("")

    if result.warnings:
        lines.append("[WARNINGS]")
        lines.extend(f"- {warning}" for warning in result.warnings)
    if result.errors:
        lines.append("[ERRORS]")
        lines.extend(f"x {error}" for error in result.errors)
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="route-map",
        description="Extract routes from React projects (Next.js, Vite, React Router DOM)",
    )
    parser.add_argument("project_path", nargs="?", help="Path to the project directory")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Output results in JSON format")
    output.add_argument("--pretty", action="store_true", help="Pretty print the results (default)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to resolve component imports (default: config or 1)",
    )
    parser.add_argument(
        "--no-external-tools",
        action="store_true",
        help="List files with the Python walker instead of fd/rg",
    )
    parser.add_argument("--version", "-v", action="store_true", help="Show version information")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"route-map v{package_version()}")
        return 0

    if not args.project_path:
        print("Error: Project path is required", file=sys.stderr)
        print("Use --help for usage information", file=sys.stderr)
        return 2

    project = resolve_project_path(args.project_path)
    if not args.json:
        progress(f"Analyzing project at: {project}")

    options = ExtractOptions(
        workers=parse_workers(args.workers),
        external_tools=not args.no_external_tools,
    )
    result = extract_site_routes(project, options)

    if args.json:
        print(result.to_json())
    else:
        print(format_result(result))
    return 1 if result.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
