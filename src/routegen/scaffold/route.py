from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from routegen.errors import InvalidRouteNameError, OutputDirectoryError, RouteFileExistsError

_ROUTE_NAME = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")

ROUTE_TEMPLATE = '''from __future__ import annotations

from typing import Any

from routegen.framework.handler import RouteHandler
from routegen.framework.response import ApiResponse


class {class_name}(RouteHandler):
    def validation_rules(self) -> dict[str, Any]:
        return {{}}

    def process(self) -> ApiResponse:
        # return ApiResponse(status="ok", message="", data=[])
        raise NotImplementedError("Not Implemented")
'''


@dataclass(frozen=True)
class ScaffoldResult:
    class_name: str
    path: Path
    created_dir: bool


def route_class_name(route_name: str) -> str:
    """user-login -> UserLoginRoute"""
    if not _ROUTE_NAME.match(route_name or ""):
        raise InvalidRouteNameError(
            f"Invalid route name {route_name!r} (use kebab-case, e.g. user-login)"
        )
    return "".join(part.capitalize() for part in route_name.split("-")) + "Route"


def route_file_name(route_name: str) -> str:
    """user-login -> user_login.py"""
    return route_name.replace("-", "_") + ".py"


def scaffold_route(route_name: str, routes_dir: Path) -> ScaffoldResult:
    class_name = route_class_name(route_name)
    path = routes_dir / route_file_name(route_name)

    created_dir = False
    if not routes_dir.is_dir():
        try:
            routes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(routes_dir, exc.strerror or str(exc)) from exc
        created_dir = True

    if path.exists():
        raise RouteFileExistsError(path)

    path.write_text(ROUTE_TEMPLATE.format(class_name=class_name), encoding="utf-8")
    return ScaffoldResult(class_name=class_name, path=path, created_dir=created_dir)
