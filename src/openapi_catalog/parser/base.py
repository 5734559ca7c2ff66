"""Catalogue records produced by the contract walker.

Every extraction pass builds these once and hands them to the caller;
they are frozen so consumers can share them freely.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ParameterRecord(_Record):
    """A single operation parameter (query, path, header, or cookie)."""

    name: str | None
    location: str | None  # query / path / header / cookie; None for an unresolved $ref
    required: bool = False
    description: str | None = None
    type: str = "string"
    example: str | None = None


class EndpointRecord(_Record):
    """One (path, method) pair of the contract."""

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /users/{id}
    summary: str = ""
    description: str | None = None
    operation_id: str | None = None
    tags: tuple[str, ...] = ()
    parameters: tuple[ParameterRecord, ...] = ()
    request_body_example: str | None = None
    response_example: str | None = None


class ExtractionStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"  # no document, or a document without paths
    DEGRADED = "degraded"  # failed part way; endpoints hold what was accumulated


class ExtractionResult(BaseModel):
    """Outcome of one extraction pass."""

    model_config = ConfigDict(frozen=True)

    status: ExtractionStatus
    endpoints: list[EndpointRecord] = []
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK

    @property
    def degraded(self) -> bool:
        return self.status is ExtractionStatus.DEGRADED
