from __future__ import annotations

from routegen.introspect.shapes import ShapeField

# server-side primitive name -> TypeScript name; anything else passes through
SERVER_TO_TS_TYPES: dict[str, str] = {
    "int": "number",
    "integer": "number",
    "float": "number",
    "double": "number",
    "bool": "boolean",
    "boolean": "boolean",
    "str": "string",
    "string": "string",
    "list": "any[]",
    "tuple": "any[]",
    "set": "any[]",
    "frozenset": "any[]",
    "array": "any[]",
    "Any": "any",
    "any": "any",
    "object": "any",
    "mixed": "any",
    "dict": "Record<string, any>",
    "None": "null",
    "NoneType": "null",
}


def map_type(name: str) -> str:
    return SERVER_TO_TS_TYPES.get(name, name)


def field_ts_type(field: ShapeField) -> str:
    ts = field.shape.__name__ if field.shape is not None else map_type(field.type_name)
    if field.is_list:
        if field.item_nullable:
            ts = f"{ts} | null"
        if " " in ts:
            ts = f"({ts})"
        ts = f"{ts}[]"
    return ts
