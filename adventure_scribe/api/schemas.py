"""
Request and Response Schemas
============================
Pydantic models for the editor backend API. Field names are snake_case in
Python and camelCase on the wire, matching the editor frontend.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateBody(CamelModel):
    """Body of a generation request.

    Everything is optional here so the router can answer missing or
    out-of-range values with its own 400 responses.
    """

    content_type: Optional[str] = None
    prompt: Optional[str] = None
    provider: Optional[str] = None
    party_level: Optional[int] = None
    party_size: Optional[int] = None


class GenerateResult(BaseModel):
    """Generation response envelope."""

    success: bool
    data: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    provider: Optional[str] = None


class ProvidersData(BaseModel):
    providers: list[str]
    default: Optional[str] = None


class ProvidersResult(BaseModel):
    success: bool = True
    data: ProvidersData


class ExpandBody(CamelModel):
    """Body of an expansion request."""

    text: str
    resolve_timeout_ms: Optional[int] = Field(default=None, gt=0)


class FailureOut(CamelModel):
    name: str
    argument: Optional[str] = None
    reason: str
    detail: str = ""


class ExpandResult(CamelModel):
    """Expansion response: rewritten text plus directives left in place."""

    new_text: str
    applied_count: int
    directive_count: int
    failures: list[FailureOut] = Field(default_factory=list)


class CommandOut(CamelModel):
    name: str
    kind: str
    strategy: str
    description: str
    usage: str


class CommandsResult(BaseModel):
    commands: list[CommandOut]
