from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """JSON envelope for every server response. Generated clients return ``data``."""

    status: str = "ok"
    message: str = ""
    data: Any = None
