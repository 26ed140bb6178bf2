from __future__ import annotations

from pathlib import Path


class RouteGenError(Exception):
    """Base class for errors that abort a routegen command."""


class RouteTableError(RouteGenError):
    pass


class RouteTableNotFoundError(RouteTableError):
    def __init__(self, path: Path):
        super().__init__(f"routes file not found at {path}")
        self.path = path


class OutputDirectoryError(RouteGenError):
    def __init__(self, path: Path, reason: str = ""):
        msg = f"Failed to create output directory: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.path = path


class ScaffoldError(RouteGenError):
    pass


class InvalidRouteNameError(ScaffoldError):
    pass


class RouteFileExistsError(ScaffoldError):
    def __init__(self, path: Path):
        super().__init__(f"Route file already exists: {path}")
        self.path = path
