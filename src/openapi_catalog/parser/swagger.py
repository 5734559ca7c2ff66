"""OpenAPI / Swagger contract walker.

Walks the path table of a parsed document and builds one EndpointRecord
per (path, method) pair, with example payloads for JSON bodies.
Extraction is best-effort: failures are logged and degrade to whatever
was collected, never raised to the caller.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from openapi_catalog.generator.example import format_value, synthesize
from .base import EndpointRecord, ExtractionResult, ExtractionStatus, ParameterRecord
from .detect import ContractParseError, error_location, load_document
from .document import JSON_MEDIA_TYPE, MediaType, OpenApiDocument, Operation, Parameter

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
SUCCESS_STATUS_CODES = ("200", "201", "202", "204")


def parse_contract(text: str, fmt: str = "auto") -> ExtractionResult:
    """Load YAML or JSON contract text and extract its endpoints."""
    try:
        document = load_document(text, fmt=fmt)
    except ContractParseError as e:
        logger.error("Failed to parse OpenAPI contract: %s", e)
        return ExtractionResult(status=ExtractionStatus.DEGRADED, error=str(e))
    return walk_document(document)


def parse_contract_file(file_path: Path, fmt: str = "auto") -> ExtractionResult:
    """Read a contract file (UTF-8) and extract its endpoints."""
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read OpenAPI contract %s: %s", file_path, e)
        return ExtractionResult(status=ExtractionStatus.DEGRADED, error=str(e))
    return parse_contract(text, fmt=fmt)


def extract_endpoints(document: OpenApiDocument | dict | None) -> list[EndpointRecord]:
    """Return the endpoint catalogue of a parsed document."""
    return walk_document(document).endpoints


def walk_document(document: OpenApiDocument | dict | None) -> ExtractionResult:
    """Walk a parsed document, reporting how the pass went alongside the endpoints.

    A malformed path is logged and skipped; the result is then DEGRADED but
    still carries the endpoints of every other path, in declared order.
    """
    endpoints: list[EndpointRecord] = []
    errors: list[str] = []

    try:
        if isinstance(document, dict):
            document = OpenApiDocument.model_validate(document)

        if document is None or not document.paths:
            logger.warning("OpenAPI contract is empty or has no paths")
            return ExtractionResult(status=ExtractionStatus.EMPTY)

        for path in document.paths:
            try:
                path_item = document.path_item(path)
            except ValidationError as e:
                logger.error("Skipping malformed path %s: %s", path, e)
                errors.append(f"{path}: {e.error_count()} error(s), first at {error_location(e)}")
                continue
            if path_item is None:
                continue
            for method in SUPPORTED_METHODS:
                operation = path_item.operation(method)
                if operation is None:
                    continue
                endpoints.append(_build_endpoint(path, method, operation))
                logger.debug("Extracted endpoint: %s %s", method, path)

        logger.info("Extracted %d endpoints from OpenAPI contract", len(endpoints))
    except (ValidationError, AttributeError, TypeError, ValueError) as e:
        logger.error("Failed to walk OpenAPI contract: %s", e, exc_info=True)
        return ExtractionResult(status=ExtractionStatus.DEGRADED, endpoints=endpoints, error=str(e))

    if errors:
        return ExtractionResult(status=ExtractionStatus.DEGRADED, endpoints=endpoints, error="; ".join(errors))
    return ExtractionResult(status=ExtractionStatus.OK, endpoints=endpoints)


def _build_endpoint(path: str, method: str, operation: Operation) -> EndpointRecord:
    return EndpointRecord(
        method=method,
        path=path,
        summary=operation.summary or "",
        description=operation.description,
        operation_id=operation.operation_id,
        tags=tuple(operation.tags or ()),
        parameters=tuple(_parse_parameter(p) for p in operation.parameters or ()),
        request_body_example=_request_body_example(operation),
        response_example=_response_example(operation),
    )


def _parse_parameter(param: Parameter) -> ParameterRecord:
    schema = param.schema_
    param_type = "string"
    if schema is not None and schema.type:
        param_type = schema.type if isinstance(schema.type, str) else _first_type(schema.type)

    # The parameter's own example wins over the one on its schema.
    example = param.example
    if example is None and schema is not None:
        example = schema.example

    return ParameterRecord(
        name=param.name,
        location=param.location,
        required=bool(param.required),
        description=param.description,
        type=param_type,
        example=format_value(example) if example is not None else None,
    )


def _first_type(types: list[str]) -> str:
    return next((t for t in types if t != "null"), "string")


def _request_body_example(operation: Operation) -> str | None:
    body = operation.request_body
    if body is None:
        return None
    return _json_example(body.content)


def _response_example(operation: Operation) -> str | None:
    responses = operation.responses or {}
    for code in SUCCESS_STATUS_CODES:
        response = responses.get(code)
        if response is None:
            continue
        example = _json_example(response.content)
        if example is not None:
            return example
    return None


def _json_example(content: dict[str, MediaType] | None) -> str | None:
    """Synthesize the application/json schema of a content map, if there is one."""
    media = (content or {}).get(JSON_MEDIA_TYPE)
    if media is None or media.schema_ is None:
        return None
    return synthesize(media.schema_)
