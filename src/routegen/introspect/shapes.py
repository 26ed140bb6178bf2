from __future__ import annotations

import inspect
import logging
import sys
import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ForwardRef, Optional, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_LIST_ORIGINS = (list, set, frozenset)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class ShapeField:
    """One constructor parameter of a shape (DTO)."""

    name: str
    type_name: str          # "int", "str", "list", "Any" or a class name
    nullable: bool = False
    optional: bool = False
    shape: Optional[type] = None   # set when the declared (item) type is itself a shape
    is_list: bool = False          # list[X]: type_name/shape describe X
    item_nullable: bool = False    # list[Optional[X]]
    unresolved: bool = False       # annotation could not be evaluated; emitted as any

    @property
    def is_nested_shape(self) -> bool:
        return self.shape is not None


def shape_id(shape: type) -> str:
    return f"{shape.__module__}.{shape.__qualname__}"


def is_shape(tp: Any) -> bool:
    """
    A shape is any user-defined class: dataclasses, pydantic models, plain classes.
    Builtins, stdlib classes and enums are not. Whether a shape has fields is
    decided by reflect_shape.
    """
    if not isinstance(tp, type):
        return False
    return not (is_stdlib_class(tp) or issubclass(tp, Enum))


def reflect_shape(shape: Any) -> list[ShapeField]:
    """
    Return the ordered field list of a shape, read from its constructor.

    A class without a constructor of its own yields an empty list, as does
    anything whose signature cannot be read.
    """
    if not isinstance(shape, type) or shape.__init__ is object.__init__:
        return []

    try:
        sig = inspect.signature(shape)
    except (TypeError, ValueError):
        logger.debug("No readable constructor signature for %s", shape.__qualname__)
        return []

    hints, unresolved = _type_hints(shape)

    fields: list[ShapeField] = []
    for param in sig.parameters.values():
        if param.kind in _VARIADIC:
            continue
        optional = param.default is not inspect.Parameter.empty
        if param.name in unresolved:
            logger.warning(
                "Cannot resolve annotation of %s.%s; emitting it as any", shape.__qualname__, param.name
            )
            fields.append(ShapeField(name=param.name, type_name="any", optional=optional, unresolved=True))
            continue
        annotation = hints.get(param.name, param.annotation)
        fields.append(describe_annotation(param.name, annotation, optional=optional))
    return fields


def describe_annotation(name: str, annotation: Any, optional: bool = False) -> ShapeField:
    if annotation is inspect.Parameter.empty:
        return ShapeField(name=name, type_name="any", optional=optional)

    tp, nullable = unwrap_optional(annotation)

    item = _list_item(tp)
    if item is not None:
        item, item_nullable = unwrap_optional(item)
        return ShapeField(
            name=name,
            type_name=type_name(item),
            nullable=nullable,
            optional=optional,
            shape=item if is_shape(item) else None,
            is_list=True,
            item_nullable=item_nullable,
        )

    return ShapeField(
        name=name,
        type_name=type_name(tp),
        nullable=nullable,
        optional=optional,
        shape=tp if is_shape(tp) else None,
    )


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Optional[X] / X | None -> (X, True). Other unions collapse to Any."""
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_none = [a for a in args if a is not type(None)]
        nullable = len(non_none) != len(args)
        if len(non_none) == 1:
            return non_none[0], nullable
        return Any, nullable
    return annotation, False


def type_name(tp: Any) -> str:
    if tp is Any:
        return "Any"
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, str):
        return tp
    if isinstance(tp, ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, type):
        return tp.__name__
    origin = get_origin(tp)
    if isinstance(origin, type):
        return origin.__name__
    return "Any"


def _list_item(tp: Any) -> Optional[Any]:
    origin = get_origin(tp)
    args = get_args(tp)
    if origin in _LIST_ORIGINS and len(args) == 1:
        return args[0]
    # tuple[X, ...]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    return None


def resolve_annotations(
    target: Any,
    localns: Optional[dict[str, Any]] = None,
) -> tuple[dict[str, Any], set[str]]:
    """
    Evaluate the annotations of a class or function.

    get_type_hints gives up on the whole object when one annotation fails
    (e.g. a name imported only under TYPE_CHECKING). In that case each
    annotation is evaluated on its own against the globals of the module that
    declares it; the names that still fail are returned as unresolved.
    """
    try:
        return get_type_hints(target), set()
    except (NameError, TypeError, AttributeError, SyntaxError) as exc:
        logger.debug("Resolving annotations of %r one by one: %s", target, exc)

    hints: dict[str, Any] = {}
    unresolved: set[str] = set()
    for name, annotation, globalns in _raw_annotations(target):
        holder = type("_Annotation", (), {"__annotations__": {name: annotation}})
        try:
            hints[name] = get_type_hints(holder, globalns, localns)[name]
            unresolved.discard(name)
        except (NameError, TypeError, AttributeError, SyntaxError):
            hints.pop(name, None)
            unresolved.add(name)
    return hints, unresolved


def _module_globals(obj: Any) -> dict[str, Any]:
    module = sys.modules.get(getattr(obj, "__module__", "") or "")
    return dict(vars(module)) if module is not None else {}


def _raw_annotations(target: Any) -> list[tuple[str, Any, dict[str, Any]]]:
    """(name, annotation, declaring module globals); subclasses override bases."""
    owners = list(reversed(target.__mro__)) if isinstance(target, type) else [target]
    out: list[tuple[str, Any, dict[str, Any]]] = []
    for owner in owners:
        try:
            annotations = inspect.get_annotations(owner)
        except NameError:
            continue
        globalns = getattr(owner, "__globals__", None) or _module_globals(owner)
        out.extend((name, ann, globalns) for name, ann in annotations.items())
    return out


def _type_hints(shape: type) -> tuple[dict[str, Any], set[str]]:
    localns = {shape.__name__: shape}

    hints: dict[str, Any] = {}
    unresolved: set[str] = set()
    for target in (shape, shape.__init__):
        resolved, failed = resolve_annotations(target, localns)
        hints.update(resolved)
        unresolved |= failed
    hints.pop("return", None)
    return hints, unresolved - set(hints)


def is_stdlib_class(tp: type) -> bool:
    top = (tp.__module__ or "").split(".")[0]
    return top in sys.stdlib_module_names
