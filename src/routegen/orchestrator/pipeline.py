from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from routegen.codegen.builder import build_client_module
from routegen.codegen.typescript import render_client
from routegen.domain.models import GeneratorSettings, Route
from routegen.errors import OutputDirectoryError
from routegen.routes.table import load_route_table, project_import_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateResult:
    routes: list[Route]
    bindings: int
    interfaces: int
    skipped: list[Route]
    warnings: list[str]
    output_path: str


def load_routes(settings: GeneratorSettings) -> list[Route]:
    with project_import_path(settings.resolved_root()):
        return load_route_table(settings.resolved_routes_file())


def run_generate(settings: GeneratorSettings) -> GenerateResult:
    """
    Route table -> TypeScript client file.

    Fatal: missing route table, output directory that cannot be created.
    Everything route-specific is a warning on the result.
    """
    root = settings.resolved_root()
    output = settings.resolved_output()

    # handlers are imported lazily while building, so the project stays importable
    with project_import_path(root):
        routes = load_route_table(settings.resolved_routes_file())
        logger.debug("Generating client for %d route(s)", len(routes))
        build = build_client_module(routes)

    code = render_client(build.module)
    write_output(output, code)

    return GenerateResult(
        routes=routes,
        bindings=len(build.module.bindings),
        interfaces=len(build.module.interfaces),
        skipped=build.skipped,
        warnings=build.warnings,
        output_path=str(output),
    )


def write_output(path: Path, code: str) -> None:
    # single non-atomic write; a failure mid-write leaves a partial file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(path.parent, exc.strerror or str(exc)) from exc
    path.write_text(code, encoding="utf-8")
