from __future__ import annotations

import importlib
import inspect
import logging
from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, Optional

from routegen.domain.models import Route
from routegen.framework.handler import RouteHandler
from routegen.introspect.shapes import is_stdlib_class, resolve_annotations

logger = logging.getLogger(__name__)

ENTRY_METHOD = "execute"


@dataclass(frozen=True)
class ContractTypes:
    request: Any
    response: Any


def locate_handler(route: Route) -> Optional[type]:
    if isinstance(route.handler_ref, type):
        return route.handler_ref
    return load_handler(route.handler)


def load_handler(identifier: str) -> Optional[type]:
    """
    Import a handler class from ``package.module.ClassName`` or
    ``package.module:ClassName``. Returns None when it cannot be located.
    """
    identifier = (identifier or "").strip()
    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
    else:
        module_name, _, attr_path = identifier.rpartition(".")
    if not module_name or not attr_path:
        return None

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        logger.debug("Cannot import %s: %s", module_name, exc)
        return None
    except Exception as exc:
        # broken handler module: skip its route, keep the batch
        logger.warning("Importing %s failed: %s: %s", module_name, type(exc).__name__, exc)
        return None

    for part in attr_path.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            return None

    return obj if isinstance(obj, type) else None


def find_contract(handler: Any) -> Optional[type]:
    """
    Return the first contract in the handler's MRO.

    A contract is an abstract base (ABC or Protocol) that is neither the
    RouteHandler marker nor a standard-library base such as ABC or Generic.
    """
    if not isinstance(handler, type):
        return None

    for base in handler.__mro__[1:]:
        if base is RouteHandler or is_stdlib_class(base):
            continue
        if isinstance(base, ABCMeta):
            return base
    return None


def extract_contract_types(contract: type) -> Optional[ContractTypes]:
    """
    Read request/response shapes off the contract's entry method:
    first parameter after ``self`` is the request, the return annotation is the response.
    """
    method = getattr(contract, ENTRY_METHOD, None)
    if method is None or not callable(method):
        return None

    try:
        sig = inspect.signature(method)
    except (TypeError, ValueError):
        return None

    params = list(sig.parameters.values())
    if not isinstance(inspect.getattr_static(contract, ENTRY_METHOD), staticmethod):
        params = params[1:]  # self
    if not params:
        return None

    hints, unresolved = resolve_annotations(method)

    first = params[0]
    if first.name in unresolved or "return" in unresolved:
        logger.warning("Unresolved request/response annotation on %s.%s", contract.__qualname__, ENTRY_METHOD)
        return None
    request = hints.get(first.name, first.annotation)
    response = hints.get("return", sig.return_annotation)

    if request is inspect.Parameter.empty or response is inspect.Signature.empty:
        return None

    return ContractTypes(request=request, response=response)
