from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class PropertyDecl:
    name: str
    ts_type: str
    optional: bool = False
    nullable: bool = False


@dataclass(frozen=True)
class InterfaceDecl:
    name: str
    properties: Tuple[PropertyDecl, ...]
    source_id: str = ""     # module.qualname of the reflected shape


@dataclass(frozen=True)
class BindingDecl:
    name: str
    method: str
    path: str
    path_params: Tuple[str, ...]
    response_type: str
    request_type: Optional[str] = None    # None for GET

    @property
    def has_body(self) -> bool:
        return self.method != "GET"


@dataclass
class ClientModule:
    """Structured output of one generation run, rendered by a formatter."""

    interfaces: list[InterfaceDecl] = field(default_factory=list)
    bindings: list[BindingDecl] = field(default_factory=list)
