from pathlib import Path
import textwrap

import pytest

from routegen.domain.models import GeneratorSettings
from routegen.errors import OutputDirectoryError, RouteTableError, RouteTableNotFoundError
from routegen.orchestrator.pipeline import run_generate


def write(p: Path, s: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")


def make_project(root: Path, pkg: str) -> None:
    write(root / "src" / pkg / "__init__.py", "")
    write(
        root / "src" / pkg / "dtos.py",
        """
        from __future__ import annotations

        from dataclasses import dataclass
        from typing import Optional


        @dataclass
        class Profile:
            bio: str
            avatar: Optional[str] = None


        @dataclass
        class LoginRequest:
            username: str
            password: str
            remember: bool = False


        @dataclass
        class User:
            id: int
            name: str
            profile: Profile


        @dataclass
        class LoginResponse:
            token: str
            user: User


        @dataclass
        class ItemQuery:
            id: str


        @dataclass
        class ItemView:
            id: str
            price: float
            owner: User
        """,
    )
    write(
        root / "src" / pkg / "routes.py",
        f"""
        from __future__ import annotations

        from abc import ABC, abstractmethod

        from routegen.framework.handler import RouteHandler
        from {pkg}.dtos import ItemQuery, ItemView, LoginRequest, LoginResponse


        class LoginContract(ABC):
            @abstractmethod
            def execute(self, request: LoginRequest) -> LoginResponse: ...


        class ItemViewContract(ABC):
            @abstractmethod
            def execute(self, request: ItemQuery) -> ItemView: ...


        class LoginRoute(RouteHandler, LoginContract):
            def execute(self, request: LoginRequest) -> LoginResponse:
                raise NotImplementedError


        class ItemViewRoute(RouteHandler, ItemViewContract):
            def execute(self, request: ItemQuery) -> ItemView:
                raise NotImplementedError


        class HealthRoute(RouteHandler):
            pass
        """,
    )
    write(
        root / "src" / "config" / "routes.py",
        f"""
        from {pkg}.routes import ItemViewRoute

        ROUTES = {{
            "GET": {{
                "/items/{{itemId}}/view": ItemViewRoute,
                "/health": "{pkg}.routes.HealthRoute",
            }},
            "POST": {{
                "/login": "{pkg}.routes:LoginRoute",
            }},
        }}
        """,
    )


def test_generate_writes_client(tmp_path: Path):
    root = tmp_path / "proj"
    make_project(root, "pipeline_app_a")

    result = run_generate(GeneratorSettings(root=root))

    out = root / "client" / "api.ts"
    assert Path(result.output_path) == root.resolve() / "client" / "api.ts"
    assert out.exists()

    assert [r.path for r in result.routes] == ["/items/{itemId}/view", "/health", "/login"]
    assert result.bindings == 2
    assert [r.path for r in result.skipped] == ["/health"]
    assert any("/health" in w for w in result.warnings)

    code = out.read_text(encoding="utf-8")
    assert "async itemView(itemId: string): Promise<ItemView>" in code
    assert "async postLogin(data: LoginRequest): Promise<LoginResponse>" in code
    assert "  remember?: boolean;\n" in code
    assert "  avatar?: string | null;\n" in code

    # User is reachable from both routes but declared once, after its own dependency
    assert code.count("export interface User {") == 1
    assert code.count("export interface Profile {") == 1
    assert code.index("export interface Profile {") < code.index("export interface User {")
    assert code.index("export interface User {") < code.index("export interface ItemView {")


def test_generate_is_idempotent(tmp_path: Path):
    root = tmp_path / "proj"
    make_project(root, "pipeline_app_b")

    out = tmp_path / "web" / "src" / "api" / "client.ts"
    settings = GeneratorSettings(root=root, output=out)

    run_generate(settings)
    first = out.read_bytes()
    run_generate(settings)
    assert out.read_bytes() == first


def test_generate_missing_route_table(tmp_path: Path):
    with pytest.raises(RouteTableNotFoundError):
        run_generate(GeneratorSettings(root=tmp_path))
    assert not (tmp_path / "client").exists()


def test_generate_route_table_without_routes_var(tmp_path: Path):
    write(tmp_path / "src" / "config" / "routes.py", "OTHER = {}\n")
    with pytest.raises(RouteTableError):
        run_generate(GeneratorSettings(root=tmp_path))


def test_generate_output_directory_error(tmp_path: Path):
    root = tmp_path / "proj"
    make_project(root, "pipeline_app_c")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OutputDirectoryError):
        run_generate(GeneratorSettings(root=root, output=blocker / "api.ts"))


def test_generate_skips_handler_module_raising_on_import(tmp_path: Path):
    root = tmp_path / "proj"
    make_project(root, "pipeline_app_d")
    write(
        root / "src" / "pipeline_app_d" / "broken.py",
        """
        raise RuntimeError("boom")
        """,
    )
    write(
        root / "src" / "config" / "routes.py",
        """
        ROUTES = {
            "GET": {"/broken": "pipeline_app_d.broken.BrokenRoute"},
            "POST": {"/login": "pipeline_app_d.routes.LoginRoute"},
        }
        """,
    )

    result = run_generate(GeneratorSettings(root=root))

    assert [r.path for r in result.skipped] == ["/broken"]
    assert result.bindings == 1
    code = (root / "client" / "api.ts").read_text(encoding="utf-8")
    assert "async postLogin(data: LoginRequest): Promise<LoginResponse>" in code


def test_generate_route_table_raising_is_route_table_error(tmp_path: Path):
    write(
        tmp_path / "src" / "config" / "routes.py",
        """
        raise ValueError("bad config")
        """,
    )
    with pytest.raises(RouteTableError, match="ValueError: bad config"):
        run_generate(GeneratorSettings(root=tmp_path))
    assert not (tmp_path / "client").exists()


def test_generate_route_table_syntax_error_is_route_table_error(tmp_path: Path):
    write(tmp_path / "src" / "config" / "routes.py", "ROUTES = {\n")
    with pytest.raises(RouteTableError, match="SyntaxError"):
        run_generate(GeneratorSettings(root=tmp_path))
