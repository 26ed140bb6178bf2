from __future__ import annotations


class RouteHandler:
    """
    Marker base class for route handlers.

    A handler subclasses this marker plus exactly one contract: an abstract class
    declaring ``execute(self, request: <Request>) -> <Response>``.

        class LoginContract(ABC):
            @abstractmethod
            def execute(self, request: LoginRequest) -> LoginResponse: ...

        class LoginRoute(RouteHandler, LoginContract):
            def execute(self, request: LoginRequest) -> LoginResponse:
                ...
    """
