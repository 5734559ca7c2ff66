"""Detect the format of contract text and load it into the document model."""

import json
import re

import yaml
from pydantic import ValidationError

from .document import OpenApiDocument


class ContractParseError(ValueError):
    """Raised when contract text cannot be read as an OpenAPI document."""


class ContractLoader(yaml.SafeLoader):
    """SafeLoader that reads only true/false as booleans.

    Plain SafeLoader follows YAML 1.1 and turns keys such as `on`, `off`,
    `yes` and `no` into booleans, which mangles property and parameter names.
    """


ContractLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ContractLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def detect_format(text: str) -> str:
    """Detect the serialization of contract text.

    Returns: 'json' or 'yaml'.
    """
    if text.lstrip().startswith("{"):
        try:
            json.loads(text)
            return "json"
        except (json.JSONDecodeError, ValueError):
            pass
    return "yaml"


def load_document(text: str, fmt: str = "auto") -> OpenApiDocument | None:
    """Parse YAML or JSON contract text into an OpenApiDocument.

    Blank text yields None. Anything that is not a mapping with an
    `openapi` or `swagger` version key raises ContractParseError. Path
    items are validated later, one at a time, by the walker.
    """
    if not text or not text.strip():
        return None

    if fmt == "auto":
        fmt = detect_format(text)

    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = yaml.load(text, Loader=ContractLoader)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ContractParseError(f"invalid {fmt.upper()}: {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ContractParseError(f"expected a mapping at the document root, got {type(data).__name__}")
    if "openapi" not in data and "swagger" not in data:
        raise ContractParseError("missing 'openapi' or 'swagger' version key")

    try:
        return OpenApiDocument.model_validate(data)
    except ValidationError as e:
        raise ContractParseError(f"malformed document: {e.error_count()} error(s), first at {error_location(e)}") from e


def error_location(error: ValidationError) -> str:
    """Dotted location of the first error in a ValidationError."""
    loc = error.errors()[0]["loc"]
    return ".".join(str(part) for part in loc) or "<root>"
