from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ast_grep_py import SgNode, SgRoot

from route_model import ImportedComponent, RouteInfo, path_flags, relative_posix
from utils import run_deferred

from .constants import (
    LANG_BY_SUFFIX,
    ROUTE_ELEMENT_NAME,
    ROUTER_FACTORY_NAME,
    ROUTER_SIGNAL_TOKENS,
)
from .imports import ImportBindings, resolve_component

JSX_ELEMENT_KINDS = ("jsx_element", "jsx_self_closing_element")
TAG_IDENTIFIER_KINDS = ("identifier", "jsx_identifier")

PendingResolution = Tuple[RouteInfo, Callable[[], Optional[ImportedComponent]]]


class SourceParseError(ValueError):
    def __init__(self, path: str, line: int, column: int) -> None:
        super().__init__(f"syntax error at {path}:{line}:{column}")
        self.path = path
        self.line = line
        self.column = column


@dataclass
class FileContext:
    file_path: str
    project_root: str
    bindings: ImportBindings
    pending: List[PendingResolution] = field(default_factory=list)

    @property
    def component(self) -> str:
        return relative_posix(self.file_path, self.project_root)


def has_router_signal(content: str) -> bool:
    return any(token in content for token in ROUTER_SIGNAL_TOKENS)


def named_children(node: SgNode) -> List[SgNode]:
    return [child for child in node.children() if child.is_named() and child.kind() != "comment"]


def unwrap_parens(node: Optional[SgNode]) -> Optional[SgNode]:
    while node is not None and node.kind() == "parenthesized_expression":
        inner = named_children(node)
        node = inner[0] if inner else None
    return node


def string_value(node: Optional[SgNode]) -> Optional[str]:
    if node is None or node.kind() != "string":
        return None
    text = node.text()
    if len(text) >= 2 and text[0] in {"'", '"'} and text[-1] == text[0]:
        return text[1:-1]
    return None


def is_missing_token(node: SgNode) -> bool:
    # Recovery inserts zero-width leaves for absent closers such as `)` or `}`.
    if node.children() or node.text():
        return False
    span = node.range()
    return (span.start.line, span.start.column) == (span.end.line, span.end.column)


def first_syntax_error(root: SgNode) -> Optional[SgNode]:
    """First ``ERROR`` node or recovered missing token, in document order."""
    stack = list(reversed(root.children()))
    while stack:
        node = stack.pop()
        if node.kind() == "ERROR" or is_missing_token(node):
            return node
        stack.extend(reversed(node.children()))
    return None


def parse_source(content: str, path: str) -> SgNode:
    lang = LANG_BY_SUFFIX.get(Path(path).suffix.lower(), "tsx")
    root = SgRoot(content, lang).root()
    error = first_syntax_error(root)
    if error is not None:
        start = error.range().start
        raise SourceParseError(path, start.line + 1, start.column + 1)
    return root


def collect_import_bindings(root: SgNode) -> ImportBindings:
    """Map every default and named import's local name to its module."""
    bindings: ImportBindings = {}
    for statement in root.find_all(kind="import_statement"):
        source = string_value(statement.field("source"))
        if source is None:
            continue
        for clause in statement.children():
            if clause.kind() != "import_clause":
                continue
            for part in named_children(clause):
                if part.kind() == "identifier":
                    bindings[part.text()] = source
                elif part.kind() == "named_imports":
                    for spec in named_children(part):
                        if spec.kind() != "import_specifier":
                            continue
                        local = spec.field("alias")
                        if local is None:
                            local = spec.field("name")
                        if local is not None and local.kind() == "identifier":
                            bindings[local.text()] = source
    return bindings


def element_tag_name(node: SgNode) -> Optional[str]:
    owner = node.field("open_tag") if node.kind() == "jsx_element" else node
    name = owner.field("name") if owner is not None else None
    if name is None or name.kind() not in TAG_IDENTIFIER_KINDS:
        return None
    return name.text()


def jsx_attributes(node: SgNode) -> List[Tuple[str, Optional[SgNode]]]:
    owner = node.field("open_tag") if node.kind() == "jsx_element" else node
    if owner is None:
        return []
    attributes: List[Tuple[str, Optional[SgNode]]] = []
    for attr in owner.children():
        if attr.kind() != "jsx_attribute":
            continue
        parts = named_children(attr)
        if not parts or parts[0].kind() == "jsx_namespace_name":
            continue
        attributes.append((parts[0].text(), parts[1] if len(parts) > 1 else None))
    return attributes


def container_expression(value: Optional[SgNode]) -> Optional[SgNode]:
    if value is None or value.kind() != "jsx_expression":
        return None
    inner = named_children(value)
    return unwrap_parens(inner[0]) if inner else None


def element_component_name(node: Optional[SgNode]) -> Optional[str]:
    if node is None or node.kind() not in JSX_ELEMENT_KINDS:
        return None
    return element_tag_name(node)


def new_route(ctx: FileContext) -> RouteInfo:
    return RouteInfo(path="/", component=ctx.component, children=[])


def apply_path(route: RouteInfo, value: Optional[str]) -> None:
    if not value:
        return
    route.path = value
    flags = path_flags(value)
    route.dynamic = flags["dynamic"]
    route.catch_all = flags["catch_all"]


def defer_component(route: RouteInfo, name: Optional[str], ctx: FileContext) -> None:
    # Resolution probes the disk, so it is queued and run after the walk.
    if not name or name not in ctx.bindings:
        return
    task = partial(resolve_component, name, ctx.bindings, ctx.file_path, ctx.project_root)
    ctx.pending.append((route, task))


def route_from_jsx_element(node: SgNode, ctx: FileContext) -> RouteInfo:
    route = new_route(ctx)
    for name, value in jsx_attributes(node):
        if name == "path":
            apply_path(route, string_value(value))
        elif name == "component":
            expr = container_expression(value)
            if expr is not None and expr.kind() == "identifier":
                defer_component(route, expr.text(), ctx)
        elif name == "element":
            defer_component(route, element_component_name(container_expression(value)), ctx)
    return route


def route_from_object(node: SgNode, ctx: FileContext) -> RouteInfo:
    route = new_route(ctx)
    for prop in named_children(node):
        if prop.kind() == "shorthand_property_identifier":
            # `{ component }` binds the key to the identifier of the same name.
            if prop.text() == "component":
                defer_component(route, prop.text(), ctx)
            continue
        if prop.kind() != "pair":
            continue
        key = prop.field("key")
        value = unwrap_parens(prop.field("value"))
        if key is None or value is None or key.kind() != "property_identifier":
            continue
        name = key.text()
        if name == "path":
            apply_path(route, string_value(value))
        elif name == "component" and value.kind() == "identifier":
            defer_component(route, value.text(), ctx)
        elif name == "element":
            defer_component(route, element_component_name(value), ctx)
        elif name == "children" and value.kind() == "array":
            route.children = routes_from_array(value, ctx)
    return route


def routes_from_array(node: SgNode, ctx: FileContext) -> List[RouteInfo]:
    return [route_from_object(item, ctx) for item in named_children(node) if item.kind() == "object"]


def routes_from_router_call(node: SgNode, ctx: FileContext) -> List[RouteInfo]:
    arguments = node.field("arguments")
    items = named_children(arguments) if arguments is not None else []
    if not items or items[0].kind() != "array":
        return []
    return routes_from_array(items[0], ctx)


def is_router_factory_call(node: SgNode) -> bool:
    callee = node.field("function")
    return callee is not None and callee.kind() == "identifier" and callee.text() == ROUTER_FACTORY_NAME


def resolve_pending(pending: List[PendingResolution], *, workers: int = 1) -> None:
    results = run_deferred([task for _, task in pending], workers=workers)
    # Applied in submission order so the last matching attribute wins.
    for (route, _), imported in zip(pending, results):
        if imported is None:
            continue
        route.imported_component = imported
        route.resolved_component_path = imported.full_path


def extract_routes_from_source(
    file_path: str,
    content: str,
    project_root: str,
    *,
    workers: int = 1,
) -> List[RouteInfo]:
    """Routes declared in one source file.

    JSX ``<Route>`` matches come first in document order, followed by the
    ``createBrowserRouter`` matches. Raises SourceParseError for files that
    do not parse.
    """
    root = parse_source(content, file_path)
    ctx = FileContext(file_path=file_path, project_root=project_root, bindings=collect_import_bindings(root))

    jsx_routes: List[RouteInfo] = []
    config_routes: List[RouteInfo] = []
    for node in root.find_all(
        any=[
            {"kind": "jsx_element"},
            {"kind": "jsx_self_closing_element"},
            {"kind": "call_expression"},
        ]
    ):
        if node.kind() in JSX_ELEMENT_KINDS:
            if element_tag_name(node) == ROUTE_ELEMENT_NAME:
                jsx_routes.append(route_from_jsx_element(node, ctx))
        elif is_router_factory_call(node):
            config_routes.extend(routes_from_router_call(node, ctx))

    resolve_pending(ctx.pending, workers=workers)
    return jsx_routes + config_routes
