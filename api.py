"""
Roman Validator — FastAPI Server
================================

RESTful API for converting and validating Roman numerals.

Endpoints:
    POST /decode            Decode (and validate) a numeral
    POST /encode            Encode an integer in 1..3999
    GET  /numerals          Page through the canonical numeral table
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from roman_validator import __version__
from roman_validator.config import get_default_flags
from roman_validator.encoder import encode_result
from roman_validator.models import DecodeError, DecodeResult
from roman_validator.pipeline import DecodePipeline

load_dotenv()


# ─── Application Lifespan (pre-warm pipeline) ───────────────────────

_pipeline: DecodePipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Pre-warm the pipeline (load numerals.txt, resolve default flags) on startup."""
    global _pipeline  # noqa: PLW0603
    get_default_flags()
    _pipeline = DecodePipeline()
    yield
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Roman Validator API",
    description=(
        "Strict Roman numeral conversion for 1..3999. "
        "Decoding enforces the composition rules and, on request, "
        "explains exactly which rule a numeral breaks."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class DecodeRequest(BaseModel):
    """Request body for the /decode endpoint. Omitted flags use the server defaults."""

    numeral: str = Field(
        ...,
        max_length=64,
        description="The numeral to decode.",
        json_schema_extra={"example": "MCMXCIV"},
    )
    ignore_case: Optional[bool] = None
    strict: Optional[bool] = None
    explain: Optional[bool] = None
    zero: Optional[bool] = None

    def options(self) -> dict[str, Any]:
        return self.model_dump(exclude={"numeral"}, exclude_none=True)


class DecodeResponse(BaseModel):
    """Outcome of decoding one numeral."""

    numeral: str
    is_valid: bool
    value: Optional[int] = None
    error: Optional[DecodeError] = None

    model_config = {"json_schema_extra": {"example": {
        "numeral": "CMC",
        "is_valid": False,
        "value": None,
        "error": {
            "kind": "VALUE_GREATER_THAN_SUBTRACTION",
            "message": (
                "once a value has been subtracted from another, no further numeral "
                "or pair may match or exceed the subtracted value, but encountered "
                "C (100) after having previously subtracted 100 (in CM)"
            ),
            "details": {"token": "C", "value": 100, "delta": 100, "subtracted_in": "CM"},
        },
    }}}


class EncodeRequest(BaseModel):
    """Request body for the /encode endpoint."""

    value: int = Field(
        ...,
        strict=True,
        description="The integer to encode. Booleans, floats and strings are refused.",
        json_schema_extra={"example": 1994},
    )


class EncodeResponse(BaseModel):
    value: int
    numeral: Optional[str] = None
    error: Optional[DecodeError] = None


class NumeralPair(BaseModel):
    value: int
    numeral: str


class NumeralPage(BaseModel):
    total: int
    offset: int
    limit: int
    items: list[NumeralPair]


class HealthResponse(BaseModel):
    status: str
    version: str
    numerals_loaded: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> DecodePipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


def _build_response(result: DecodeResult) -> DecodeResponse:
    """Convert the internal DecodeResult to the API response schema."""
    return DecodeResponse(
        numeral=result.numeral,
        is_valid=result.ok,
        value=result.value,
        error=result.error,
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/decode",
    summary="Decode a Roman numeral",
    tags=["Conversion"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def decode_numeral(request: DecodeRequest) -> DecodeResponse:
    """Decode a numeral into its integer value.

    Invalid numerals still return 200:
    - **is_valid**: `true` if the numeral decoded
    - **value**: the integer value, when valid
    - **error**: kind and message of the first broken rule (generic unless `explain`)
    """
    pipeline = _get_pipeline()
    flags = get_default_flags().override(**request.options())
    return _build_response(pipeline.run(request.numeral, flags))


@app.post(
    "/encode",
    summary="Encode an integer as a Roman numeral",
    tags=["Conversion"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def encode_integer(request: EncodeRequest) -> EncodeResponse:
    """Encode an integer in 1..3999. Out-of-range values report INVALID_INTEGER."""
    pipeline = _get_pipeline()
    result = encode_result(request.value, pipeline.table)
    return EncodeResponse(value=request.value, numeral=result.numeral, error=result.error)


@app.get(
    "/numerals",
    summary="List canonical numerals",
    tags=["Conversion"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def list_numerals(
    offset: int = Query(0, ge=0, description="Number of entries to skip."),
    limit: int = Query(100, ge=1, le=1000, description="Maximum entries to return."),
) -> NumeralPage:
    """Page through the (value, numeral) table in ascending order."""
    pipeline = _get_pipeline()
    pairs = pipeline.table.pairs()
    items = [NumeralPair(value=v, numeral=n) for v, n in pairs[offset:offset + limit]]
    return NumeralPage(total=len(pairs), offset=offset, limit=limit, items=items)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    pipeline = _get_pipeline()
    return HealthResponse(
        status="healthy",
        version=__version__,
        numerals_loaded=len(pipeline.table),
    )
