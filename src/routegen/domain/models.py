from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


class Route(BaseModel):
    """One entry of the flattened route table."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    handler: str

    # Set when the route table referenced the handler class itself.
    handler_ref: Optional[Any] = Field(default=None, exclude=True, repr=False)

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class GeneratorSettings(BaseModel):
    root: Path = Path(".")
    routes_file: Path = Path("src/config/routes.py")
    output: Path = Path("client/api.ts")

    def resolved_root(self) -> Path:
        return self.root.expanduser().resolve()

    def resolved_routes_file(self) -> Path:
        return _against(self.resolved_root(), self.routes_file)

    def resolved_output(self) -> Path:
        return _against(self.resolved_root(), self.output)


def _against(root: Path, p: Path) -> Path:
    p = p.expanduser()
    return p if p.is_absolute() else root / p
