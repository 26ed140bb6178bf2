from pathlib import Path
import runpy

import pytest

from routegen.errors import InvalidRouteNameError, RouteFileExistsError
from routegen.framework.handler import RouteHandler
from routegen.framework.response import ApiResponse
from routegen.scaffold.route import route_class_name, route_file_name, scaffold_route


def test_route_class_and_file_names():
    assert route_class_name("user-login") == "UserLoginRoute"
    assert route_class_name("health") == "HealthRoute"
    assert route_file_name("user-login") == "user_login.py"


@pytest.mark.parametrize("bad", ["", "User-Login", "user_login", "-login", "login-", "1login"])
def test_route_class_name_rejects_non_kebab_case(bad: str):
    with pytest.raises(InvalidRouteNameError):
        route_class_name(bad)


def test_scaffold_route_creates_dir_and_file(tmp_path: Path):
    routes_dir = tmp_path / "routes"
    result = scaffold_route("user-login", routes_dir)

    assert result.created_dir
    assert result.class_name == "UserLoginRoute"
    assert result.path == routes_dir / "user_login.py"

    text = result.path.read_text(encoding="utf-8")
    assert "class UserLoginRoute(RouteHandler):" in text
    assert "def validation_rules(self) -> dict[str, Any]:" in text
    assert "raise NotImplementedError" in text

    namespace = runpy.run_path(str(result.path))
    handler = namespace["UserLoginRoute"]()
    assert isinstance(handler, RouteHandler)
    assert handler.validation_rules() == {}
    with pytest.raises(NotImplementedError):
        handler.process()


def test_scaffold_route_refuses_to_overwrite(tmp_path: Path):
    scaffold_route("user-login", tmp_path)
    before = (tmp_path / "user_login.py").read_text(encoding="utf-8")

    with pytest.raises(RouteFileExistsError):
        scaffold_route("user-login", tmp_path)

    assert (tmp_path / "user_login.py").read_text(encoding="utf-8") == before


def test_api_response_envelope_defaults():
    env = ApiResponse(data={"id": 1})
    assert env.model_dump() == {"status": "ok", "message": "", "data": {"id": 1}}
