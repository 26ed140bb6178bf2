from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

from routegen.codegen.model import BindingDecl, ClientModule, InterfaceDecl, PropertyDecl
from routegen.codegen.naming import extract_path_params, route_function_name, unique_name
from routegen.codegen.types import field_ts_type
from routegen.domain.models import Route
from routegen.introspect.contracts import extract_contract_types, find_contract, locate_handler
from routegen.introspect.shapes import describe_annotation, is_shape, reflect_shape, shape_id

logger = logging.getLogger(__name__)


@dataclass
class ClientBuildResult:
    module: ClientModule
    skipped: list[Route] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class InterfaceCollector:
    """
    Depth-first expansion of shapes into interface declarations.

    One collector lives for one generation run; its seen set guarantees each
    shape is declared once, and nested shapes are declared before the shapes
    that use them. Self and mutual references terminate because a shape is
    marked seen before its fields are expanded.
    """

    def __init__(self, warnings: Optional[list[str]] = None) -> None:
        self.seen: set[str] = set()
        self.declarations: list[InterfaceDecl] = []
        self.warnings: list[str] = warnings if warnings is not None else []

    def collect(self, shape: Any) -> None:
        if not is_shape(shape):
            return

        sid = shape_id(shape)
        if sid in self.seen:
            return
        self.seen.add(sid)

        fields = reflect_shape(shape)
        if not fields:
            msg = f"Shape {shape.__name__} has no constructor fields; no interface emitted"
            logger.warning(msg)
            self.warnings.append(msg)
            return

        for f in fields:
            if f.unresolved:
                self.warnings.append(
                    f"Could not resolve the type of {shape.__name__}.{f.name}; emitted as any"
                )
            if f.shape is not None:
                self.collect(f.shape)

        logger.debug("Declaring interface %s (%d fields)", shape.__name__, len(fields))
        self.declarations.append(
            InterfaceDecl(
                name=shape.__name__,
                properties=tuple(
                    PropertyDecl(
                        name=f.name,
                        ts_type=field_ts_type(f),
                        optional=f.optional,
                        nullable=f.nullable,
                    )
                    for f in fields
                ),
                source_id=sid,
            )
        )


def ts_type_name(annotation: Any) -> str:
    """Client-side name for a request/response annotation."""
    return field_ts_type(describe_annotation("", annotation))


def build_client_module(routes: Iterable[Route]) -> ClientBuildResult:
    """
    Route table -> ClientModule (no IO).

    Routes whose handler has no contract, or whose contract does not declare
    request/response types, are skipped with a warning; the rest still build.
    """
    module = ClientModule()
    result = ClientBuildResult(module=module)
    collector = InterfaceCollector(warnings=result.warnings)
    used_names: dict[str, int] = {}

    def warn(route: Route, msg: str) -> None:
        text = f"{msg} for {route.method} {route.path}"
        logger.warning(text)
        result.warnings.append(text)
        result.skipped.append(route)

    for route in routes:
        handler = locate_handler(route)
        contract = find_contract(handler) if handler is not None else None
        if contract is None:
            warn(route, "No contract found")
            continue

        types = extract_contract_types(contract)
        if types is None:
            warn(route, "Could not extract types from contract")
            continue

        collector.collect(_shape_of(types.request))
        collector.collect(_shape_of(types.response))

        binding = _binding_for(route, types.request, types.response)
        name = unique_name(binding.name, used_names)
        if name != binding.name:
            text = f"Binding name {binding.name} already used; {route.method} {route.path} renamed to {name}"
            logger.warning(text)
            result.warnings.append(text)
            binding = replace(binding, name=name)
        module.bindings.append(binding)

    module.interfaces.extend(collector.declarations)
    return result


def _shape_of(annotation: Any) -> Optional[type]:
    return describe_annotation("", annotation).shape


def _binding_for(route: Route, request: Any, response: Any) -> BindingDecl:
    method = route.method.upper()
    return BindingDecl(
        name=route_function_name(route.path, method),
        method=method,
        path=route.path,
        path_params=tuple(extract_path_params(route.path)),
        response_type=ts_type_name(response),
        request_type=ts_type_name(request) if method != "GET" else None,
    )
