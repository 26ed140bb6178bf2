from __future__ import annotations

import logging
import runpy
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from routegen.domain.models import Route
from routegen.errors import RouteTableError, RouteTableNotFoundError

logger = logging.getLogger(__name__)

ROUTES_VAR = "ROUTES"


@contextmanager
def project_import_path(root: Path) -> Iterator[None]:
    """Make the project's packages importable (root and root/src) while loading."""
    root = root.resolve()
    extra = [str(p) for p in (root, root / "src") if p.is_dir()]
    added = [p for p in extra if p not in sys.path]
    sys.path[:0] = added
    try:
        yield
    finally:
        for p in added:
            if p in sys.path:
                sys.path.remove(p)


def load_route_table(routes_file: Path) -> list[Route]:
    """
    Execute a routes file and flatten its ``ROUTES`` mapping:

        ROUTES = {
            "GET": {"/items/{itemId}/view": "app.routes.items.ItemViewRoute"},
            "POST": {"/login": LoginRoute},
        }
    """
    if not routes_file.is_file():
        raise RouteTableNotFoundError(routes_file)

    try:
        namespace = runpy.run_path(str(routes_file), run_name="routegen_routes")
    except Exception as exc:
        raise RouteTableError(f"Failed to load {routes_file}: {type(exc).__name__}: {exc}") from exc
    if ROUTES_VAR not in namespace:
        raise RouteTableError(f"{routes_file} does not define {ROUTES_VAR}")

    routes = flatten_routes(namespace[ROUTES_VAR])
    logger.debug("Loaded %d route(s) from %s", len(routes), routes_file)
    return routes


def flatten_routes(table: Any) -> list[Route]:
    """method -> path -> handler mapping -> ordered Route list (method group, then path)."""
    if not isinstance(table, Mapping):
        raise RouteTableError(f"{ROUTES_VAR} must be a mapping of method -> path -> handler")

    out: list[Route] = []
    for method, by_path in table.items():
        if not isinstance(by_path, Mapping):
            raise RouteTableError(f"{ROUTES_VAR}[{method!r}] must be a mapping of path -> handler")
        for path, handler in by_path.items():
            try:
                out.append(
                    Route(
                        method=method,
                        path=str(path),
                        handler=handler_identifier(handler),
                        handler_ref=handler if isinstance(handler, type) else None,
                    )
                )
            except ValidationError as exc:
                raise RouteTableError(f"Invalid route {method} {path}: {exc}") from exc
    return out


def handler_identifier(handler: Any) -> str:
    if isinstance(handler, type):
        return f"{handler.__module__}.{handler.__qualname__}"
    return str(handler)
