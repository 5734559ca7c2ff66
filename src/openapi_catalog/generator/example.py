"""Example synthesizer — turns a schema node into a representative JSON text.

Synthesis is shallow: only the top-level properties of a schema are
written out. Nested objects and arrays become empty placeholders.
"""

import json
from enum import Enum
from typing import Any

from pydantic import ValidationError

from openapi_catalog.parser.document import Schema

EMPTY_OBJECT = "{}"


class SchemaKind(str, Enum):
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, declared: str | list[str] | None) -> "SchemaKind":
        """Map a declared schema type onto a kind.

        OpenAPI 3.1 allows a list of types; the first one other than
        "null" decides.
        """
        if isinstance(declared, list):
            declared = next((t for t in declared if t != "null"), None)
        try:
            return cls(declared)
        except ValueError:
            return cls.UNKNOWN


TYPE_DEFAULTS = {
    SchemaKind.INTEGER: "0",
    SchemaKind.NUMBER: "0",
    SchemaKind.BOOLEAN: "false",
    SchemaKind.ARRAY: "[]",
    SchemaKind.OBJECT: "{}",
    SchemaKind.STRING: '""',
    SchemaKind.UNKNOWN: '""',
}


def synthesize(schema: Schema | dict | None) -> str:
    """Build an example JSON text for a schema node. Never raises."""
    if isinstance(schema, dict):
        try:
            schema = Schema.model_validate(schema)
        except ValidationError:
            return EMPTY_OBJECT
    if not isinstance(schema, Schema):
        return EMPTY_OBJECT

    if schema.example is not None:
        return format_example(schema.example)

    if not schema.properties:
        return EMPTY_OBJECT

    lines = [f"  {json.dumps(name, ensure_ascii=False)} : {_property_value(prop)}" for name, prop in schema.properties.items()]
    return "{\n" + ",\n".join(lines) + "\n}"


def format_example(value: Any) -> str:
    """Render an explicit example as JSON text (strings quoted, the rest bare)."""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return EMPTY_OBJECT


def format_value(value: Any) -> str:
    """Plain text form of an example, as used for parameter examples."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list)) or value is None:
        return format_example(value)
    return str(value)


def _property_value(prop: Schema | None) -> str:
    if prop is None:
        return TYPE_DEFAULTS[SchemaKind.UNKNOWN]
    if prop.example is not None:
        return format_example(prop.example)
    return TYPE_DEFAULTS[SchemaKind.of(prop.type)]
