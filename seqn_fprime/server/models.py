"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One request and one response model per endpoint. Diagnostics are
serialized with the host editor's ``from``/``to`` field names through
pydantic aliases.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- ``dictionary`` fields take the same JSON document the CLI loads
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from seqn_fprime.converters.base import Diagnostic


class DiagnosticModel(BaseModel):
    """A positional message over the submitted sequence text."""

    model_config = ConfigDict(populate_by_name=True)

    start: int = Field(alias="from", description="Start offset (inclusive).")
    end: int = Field(alias="to", description="End offset (exclusive).")
    message: str = Field(description="Human-readable message.")
    severity: str = Field(description="'error', 'warning', or 'info'.")

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> DiagnosticModel:
        return cls.model_validate(diagnostic.to_dict())


class ToFprimeRequest(BaseModel):
    sequence: str = Field(description="SeqN sequence text.")
    sequence_name: str = Field(default="sequence", description="Name used in log messages.")
    dictionary: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON command dictionary used to group repeat arguments.",
    )


class ToFprimeResponse(BaseModel):
    text: str = Field(description="FPrime (FPP) sequence text.")
    warnings: List[DiagnosticModel] = Field(
        default_factory=list,
        description="Arguments dropped during conversion.",
    )


class ToSeqnRequest(BaseModel):
    text: str = Field(description="FPrime (FPP) sequence text.")


class ToSeqnResponse(BaseModel):
    text: str = Field(description="SeqN sequence text.")


class LintRequest(BaseModel):
    sequence: str = Field(description="SeqN sequence text.")
    dictionary: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON command dictionary (accepted for parity; not used by the time-tag checks).",
    )


class LintResponse(BaseModel):
    diagnostics: List[DiagnosticModel] = Field(description="Diagnostics in document order.")


class FormatsResponse(BaseModel):
    input_format: str = Field(description="Name of the input format handler.")
    output_formats: List[str] = Field(description="Names of the output format handlers.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
