from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FrameworkName(str, Enum):
    NEXTJS = "nextjs"
    VITE = "vite"
    REACT_ROUTER_DOM = "react-router-dom"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FrameworkInfo:
    name: FrameworkName
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name.value}
        if self.version is not None:
            payload["version"] = self.version
        return payload


UNKNOWN_FRAMEWORK = FrameworkInfo(FrameworkName.UNKNOWN)


@dataclass
class ImportedComponent:
    name: str
    path: str
    full_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "path": self.path}
        if self.full_path is not None:
            payload["fullPath"] = self.full_path
        return payload


@dataclass
class RouteInfo:
    path: str
    component: Optional[str] = None
    children: Optional[List["RouteInfo"]] = None
    dynamic: bool = False
    catch_all: bool = False
    resolved_component_path: Optional[str] = None
    imported_component: Optional[ImportedComponent] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"path": self.path}
        if self.component is not None:
            payload["component"] = self.component
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        payload["dynamic"] = self.dynamic
        payload["catchAll"] = self.catch_all
        if self.resolved_component_path is not None:
            payload["resolvedComponentPath"] = self.resolved_component_path
        if self.imported_component is not None:
            payload["importedComponent"] = self.imported_component.to_dict()
        return payload


@dataclass
class ExtractionResult:
    framework: FrameworkInfo = UNKNOWN_FRAMEWORK
    routes: List[RouteInfo] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "framework": self.framework.to_dict(),
            "routes": [route.to_dict() for route in self.routes],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=True, indent=indent)


def path_flags(route_path: str) -> Dict[str, bool]:
    """Derive ``dynamic``/``catch_all`` from a normalized route path."""
    catch_all = "*" in route_path
    return {"dynamic": catch_all or ":" in route_path, "catch_all": catch_all}


def relative_posix(path: str, root: str) -> str:
    """Project-relative form of ``path`` with forward slashes."""
    return os.path.relpath(path, root).replace(os.sep, "/")
