"""FastAPI application exposing the converters over HTTP.

WHY: Ground tools that are not the sequence editor (web dashboards,
pipelines, curl) need the same conversions and lint checks without
embedding Python. FastAPI provides request validation and OpenAPI docs.

HOW: A single FastAPI app exposes conversion, lint, format listing, and
health endpoints. Requests carry the sequence text and, optionally, a
JSON command dictionary which is validated per request. The SeqN
input and lint handlers go through the adaptation descriptor, the same
boundary the editor uses. /convert/to-fprime calls emit_fprime
directly because the descriptor returns text only and the response
also carries the dropped-argument warnings.

RULES:
- Conversions never fail on malformed sequences; they return text,
  warnings, or diagnostics
- An invalid dictionary is a 422 with the validation message
- Error responses use the ErrorResponse schema
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException

from seqn_fprime import __version__
from seqn_fprime.adapters.adaptation import build_adaptation
from seqn_fprime.config import API_HOST, API_PORT
from seqn_fprime.converters.to_fprime import emit_fprime
from seqn_fprime.core.dictionary import CommandDictionary, DictionaryError, parse_command_dictionary
from seqn_fprime.core.parser import parse
from seqn_fprime.server.models import (
    DiagnosticModel,
    ErrorResponse,
    FormatsResponse,
    HealthResponse,
    LintRequest,
    LintResponse,
    ToFprimeRequest,
    ToFprimeResponse,
    ToSeqnRequest,
    ToSeqnResponse,
)

logger = logging.getLogger(__name__)

adaptation = build_adaptation()

app = FastAPI(
    title="SeqN / FPrime Sequence Converter API",
    description=(
        "Convert spacecraft command sequences between SeqN and FPrime (FPP) "
        "notation and lint SeqN time tags for FPrime compatibility."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_dictionary(data: Optional[Dict[str, Any]]) -> Optional[CommandDictionary]:
    """Validate an inline dictionary, raising HTTP 422 when it is malformed."""
    if data is None:
        return None
    try:
        return parse_command_dictionary(data)
    except DictionaryError as exc:
        logger.warning("Rejected command dictionary: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints: Conversion
# ---------------------------------------------------------------------------


@app.post(
    "/convert/to-fprime",
    response_model=ToFprimeResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["convert"],
    summary="Convert SeqN to FPrime",
    description="Parse a SeqN sequence and emit one FPrime line per command or comment.",
)
async def convert_to_fprime(request: ToFprimeRequest) -> ToFprimeResponse:
    dictionary = _load_dictionary(request.dictionary)
    conversion = emit_fprime(parse(request.sequence), request.sequence, dictionary)
    if conversion.warnings:
        logger.info(
            "Converted %s with %d dropped argument(s)",
            request.sequence_name,
            len(conversion.warnings),
        )
    return ToFprimeResponse(
        text=conversion.text,
        warnings=[DiagnosticModel.from_diagnostic(w) for w in conversion.warnings],
    )


@app.post(
    "/convert/to-seqn",
    response_model=ToSeqnResponse,
    tags=["convert"],
    summary="Convert FPrime to SeqN",
    description="Rewrite FPrime text line by line into SeqN notation.",
)
async def convert_to_seqn(request: ToSeqnRequest) -> ToSeqnResponse:
    text = await adaptation.input_format.to_input_format(request.text)
    return ToSeqnResponse(text=text)


# ---------------------------------------------------------------------------
# Endpoints: Lint
# ---------------------------------------------------------------------------


@app.post(
    "/lint",
    response_model=LintResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["lint"],
    summary="Lint SeqN time tags",
    description="Report commands whose time tags FPrime cannot express.",
)
async def lint_sequence(request: LintRequest) -> LintResponse:
    dictionary = _load_dictionary(request.dictionary)
    tree = parse(request.sequence)
    diagnostics = adaptation.input_format.linter([], dictionary, None, tree.top_node)
    return LintResponse(diagnostics=[DiagnosticModel.from_diagnostic(d) for d in diagnostics])


# ---------------------------------------------------------------------------
# Endpoints: Formats and health
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=FormatsResponse,
    tags=["formats"],
    summary="List format handlers",
)
async def list_formats() -> FormatsResponse:
    return FormatsResponse(
        input_format=adaptation.input_format.name,
        output_formats=[descriptor.name for descriptor in adaptation.output_format],
    )


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the seqn-fprime-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
