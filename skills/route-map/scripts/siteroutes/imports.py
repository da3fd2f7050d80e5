from __future__ import annotations

import os
from typing import Dict, Optional, Sequence

from route_model import ImportedComponent, relative_posix

from .constants import SOURCE_EXTENSIONS, SOURCE_ROOT_PREFIXES
from .probe import path_exists

ImportBindings = Dict[str, str]


def resolve_import_path(
    module: str,
    importer: str,
    project_root: str,
    *,
    exts: Sequence[str] = SOURCE_EXTENSIONS,
) -> str:
    """Resolve an import specifier to a project-relative path.

    Relative specifiers without an extension are probed on disk; when no
    candidate exists the first extension is assumed. Root-anchored specifiers
    are joined to the project root as-is. Package names come back unchanged.
    """
    if module.startswith("."):
        base = os.path.dirname(importer)
        target = os.path.normpath(os.path.join(base, module))
        if not os.path.splitext(module)[1]:
            for ext in exts:
                candidate = f"{target}{ext}"
                if path_exists(candidate):
                    return relative_posix(candidate, project_root)
            return relative_posix(f"{target}{exts[0]}", project_root)
        return relative_posix(target, project_root)

    if module.startswith(SOURCE_ROOT_PREFIXES):
        target = os.path.normpath(os.path.join(project_root, module.lstrip("/")))
        return relative_posix(target, project_root)

    return module


def resolve_component(
    name: str,
    bindings: ImportBindings,
    importer: str,
    project_root: str,
) -> Optional[ImportedComponent]:
    module = bindings.get(name)
    if not module:
        return None
    full_path = resolve_import_path(module, importer, project_root)
    return ImportedComponent(name=name, path=module, full_path=full_path)
