from __future__ import annotations

from typing import Dict, Tuple

from route_model import FrameworkName

# Probe order for extensionless relative imports.
SOURCE_EXTENSIONS: Tuple[str, ...] = (".tsx", ".ts", ".jsx", ".js")

EXCLUDE_DIRS: Tuple[str, ...] = ("node_modules", "dist", "build")

MANIFEST_FILE = "package.json"

# Checked in order; the first declared dependency decides the framework.
FRAMEWORK_PACKAGES: Tuple[Tuple[str, FrameworkName], ...] = (
    ("next", FrameworkName.NEXTJS),
    ("vite", FrameworkName.VITE),
    ("react-router-dom", FrameworkName.REACT_ROUTER_DOM),
)

FRAMEWORK_CONFIG_FILES: Tuple[Tuple[Tuple[str, ...], FrameworkName], ...] = (
    (("next.config.js", "next.config.ts"), FrameworkName.NEXTJS),
    (("vite.config.js", "vite.config.ts"), FrameworkName.VITE),
)

ROUTEMAP_CONFIG_FILES: Tuple[str, ...] = (".routemap.json", "routemap.json")

APP_ROUTER_DIR = "app"
PAGES_ROUTER_DIR = "pages"

APP_SPECIAL_BASENAMES = frozenset({"page", "layout", "loading", "error", "not-found"})

ROUTER_SIGNAL_TOKENS: Tuple[str, ...] = ("react-router-dom", "BrowserRouter", "Routes")

ROUTE_ELEMENT_NAME = "Route"
ROUTER_FACTORY_NAME = "createBrowserRouter"

SOURCE_ROOT_PREFIXES: Tuple[str, ...] = ("/", "src/")

LANG_BY_SUFFIX: Dict[str, str] = {
    ".tsx": "tsx",
    ".ts": "tsx",
    ".jsx": "tsx",
    ".js": "tsx",
}
