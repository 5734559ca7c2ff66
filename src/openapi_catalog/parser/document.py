"""Typed model of the parts of an OpenAPI document the catalogue reads.

Only the fields the walker needs are declared; everything else in the
source document is ignored. Swagger 2.0 shapes are folded into their
OpenAPI 3 equivalents while validating, so the walker sees one model.

Path items are kept raw on the document and validated one at a time by
`OpenApiDocument.path_item`, so one malformed path cannot hide the rest.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

JSON_MEDIA_TYPE = "application/json"

# Swagger 2.0 parameter locations that describe the body, not a parameter.
BODY_LOCATIONS = ("body", "formData")


def _text(value: Any) -> Any:
    """Coerce a scalar key or name to text; leave anything else to validation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _schema_or_none(value: Any) -> Any:
    # OpenAPI 3.1 allows `true` / `false` as a whole schema.
    return None if isinstance(value, bool) else value


class _Node(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class Schema(_Node):
    """A schema node: declared type, ordered properties and an example."""

    type: str | list[str] | None = None
    properties: dict[str, "Schema | None"] | None = None
    items: "Schema | None" = None
    example: Any = None
    ref: str | None = Field(default=None, alias="$ref")

    @field_validator("properties", mode="before")
    @classmethod
    def _property_map(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_text(name): _schema_or_none(prop) for name, prop in value.items()}
        return value

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, value: Any) -> Any:
        return _schema_or_none(value)


Schema.model_rebuild()


class MediaType(_Node):
    schema_: Schema | None = Field(default=None, alias="schema")

    @field_validator("schema_", mode="before")
    @classmethod
    def _schema(cls, value: Any) -> Any:
        return _schema_or_none(value)


class RequestBody(_Node):
    description: str | None = None
    required: bool | None = None
    content: dict[str, MediaType] | None = None


class Response(_Node):
    description: str | None = None
    content: dict[str, MediaType] | None = None

    @model_validator(mode="before")
    @classmethod
    def _swagger2_schema(cls, data: Any) -> Any:
        # Swagger 2.0 puts the body schema directly on the response.
        if isinstance(data, dict) and "schema" in data and "content" not in data:
            data = dict(data)
            data["content"] = {JSON_MEDIA_TYPE: {"schema": data.pop("schema")}}
        return data


class Parameter(_Node):
    name: str | None = None
    location: str | None = Field(default=None, alias="in")
    required: bool | None = None
    description: str | None = None
    schema_: Schema | None = Field(default=None, alias="schema")
    example: Any = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> Any:
        return _text(value)

    @field_validator("schema_", mode="before")
    @classmethod
    def _schema(cls, value: Any) -> Any:
        return _schema_or_none(value)

    @model_validator(mode="before")
    @classmethod
    def _swagger2_inline_type(cls, data: Any) -> Any:
        # Swagger 2.0 non-body parameters declare type/items/example inline.
        if isinstance(data, dict) and "schema" not in data and "type" in data:
            data = dict(data)
            inline = {key: data.pop(key) for key in ("type", "items", "format", "enum") if key in data}
            if "x-example" in data:
                inline["example"] = data["x-example"]
            data["schema"] = inline
        return data


class Operation(_Node):
    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response | None] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_text(tag) for tag in value]
        return value

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_codes(cls, value: Any) -> Any:
        # YAML reads an unquoted 200 as an int.
        if isinstance(value, dict):
            return {str(code): resp for code, resp in value.items()}
        return value

    @model_validator(mode="before")
    @classmethod
    def _swagger2_body(cls, data: Any) -> Any:
        # Swagger 2.0 carries the request body as `in: body` (JSON) or
        # `in: formData` (form fields, not catalogued) parameters.
        if not isinstance(data, dict):
            return data
        params = data.get("parameters")
        if not isinstance(params, list):
            return data
        body = [p for p in params if isinstance(p, dict) and p.get("in") in BODY_LOCATIONS]
        if not body:
            return data
        data = dict(data)
        data["parameters"] = [p for p in params if p not in body]
        json_body = next((p for p in body if p.get("in") == "body"), None)
        if json_body is not None and "requestBody" not in data:
            data["requestBody"] = {
                "description": json_body.get("description"),
                "required": json_body.get("required"),
                "content": {JSON_MEDIA_TYPE: {"schema": json_body.get("schema")}},
            }
        return data


class PathItem(_Node):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    patch: Operation | None = None
    head: Operation | None = None
    options: Operation | None = None
    trace: Operation | None = None

    def operation(self, method: str) -> Operation | None:
        """Return the operation defined for an HTTP method, if any."""
        return getattr(self, method.lower(), None)


class OpenApiDocument(_Node):
    openapi: str | None = None
    swagger: str | None = None
    paths: dict[str, Any] | None = None

    @field_validator("openapi", "swagger", mode="before")
    @classmethod
    def _version_text(cls, value: Any) -> Any:
        # `swagger: 2.0` unquoted is a float in YAML.
        return _text(value)

    @field_validator("paths", mode="before")
    @classmethod
    def _path_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_text(path): item for path, item in value.items()}
        return value

    @property
    def version(self) -> str | None:
        return self.openapi or self.swagger

    def path_item(self, path: str) -> PathItem | None:
        """Validate and return the path item declared for a path.

        Raises pydantic.ValidationError when that one path is malformed.
        """
        item = (self.paths or {}).get(path)
        if item is None or isinstance(item, PathItem):
            return item
        return PathItem.model_validate(item)
