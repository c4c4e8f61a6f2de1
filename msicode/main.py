"""msicode microservice -- FastAPI application.

Endpoints:
    POST /encode        -- Encode digits to PNG image
    POST /encode/svg    -- Encode digits to SVG string
    POST /decode        -- Decode one binarized scanline
    POST /checksum      -- Compute the modulo-10 check digit
    GET  /health        -- Health check
"""

from __future__ import annotations

from typing import Literal

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .checksum import append_check_digit, compute_check_digit
from .decoder import NotFoundError, decode_row
from .encoder import encode
from .renderer import DEFAULT_MARGIN, render_png, render_svg
from .scanline import Scanline

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

SERVICE_NAME = "msicode"
SERVICE_VERSION = "0.1.0"

# Longest scanline accepted by /decode, in samples
MAX_ROW_LENGTH = 100_000

app = FastAPI(
    title=SERVICE_NAME,
    description="MSI (Modified Plessey) barcode encoder/decoder",
    version=SERVICE_VERSION,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class EncodeRequest(BaseModel):
    """Request body for /encode and /encode/svg."""

    contents: str = Field(
        ...,
        min_length=1,
        max_length=80,
        description="Digits to encode",
        examples=["1234567"],
    )
    append_check_digit: bool = Field(
        default=False,
        description="Append the modulo-10 check digit before encoding",
    )
    width: int = Field(
        default=0,
        ge=0,
        le=4096,
        description="Preferred image width in pixels (0 = minimal)",
    )
    height: int = Field(
        default=80,
        ge=1,
        le=2048,
        description="Image height in pixels",
    )
    margin: int = Field(
        default=DEFAULT_MARGIN,
        ge=0,
        le=200,
        description="Total quiet-zone modules around the barcode",
    )
    color: str = Field(
        default="#000000",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Bar colour",
    )


class DecodeRequest(BaseModel):
    """Request body for /decode."""

    row: str = Field(
        ...,
        min_length=1,
        max_length=MAX_ROW_LENGTH,
        pattern=r"^[01]+$",
        description="Binarized scanline, '1' = bar, '0' = space",
        examples=["000000000011010010010010010010000000000"],
    )
    row_number: int = Field(
        default=0,
        ge=0,
        description="Row index, used only for result coordinates",
    )
    use_check_digit: bool = Field(
        default=False,
        description="Verify the last digit as a modulo-10 check digit",
    )


class DecodeResponse(BaseModel):
    """Response body for /decode."""

    text: str | None = Field(
        description="Decoded digits, or null if nothing was decoded",
    )
    status: Literal["decoded", "not_found", "check_digit_mismatch"] = Field(
        description="Outcome of the decode",
    )
    row_number: int = Field(
        description="Row index the result refers to",
    )
    left_x: float | None = Field(
        default=None,
        description="Midpoint of the start pattern",
    )
    right_x: float | None = Field(
        default=None,
        description="Midpoint of the end pattern",
    )
    error: str | None = Field(
        default=None,
        description="Error message if decode failed",
    )


class ChecksumRequest(BaseModel):
    """Request body for /checksum."""

    digits: str = Field(
        ...,
        min_length=1,
        max_length=80,
        pattern=r"^[0-9]+$",
        description="Digits without check digit",
    )


class ChecksumResponse(BaseModel):
    """Response body for /checksum."""

    check_digit: int
    full: str


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


def _pattern_for(request: EncodeRequest) -> list[bool]:
    contents = request.contents
    if request.append_check_digit:
        contents = append_check_digit(contents)
    return encode(contents)


@app.post(
    "/encode",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG-encoded barcode"},
        422: {"description": "Invalid input"},
    },
)
async def encode_png(request: EncodeRequest) -> Response:
    """Encode digits into an MSI barcode PNG image."""
    try:
        pattern = _pattern_for(request)
        png_bytes = render_png(
            pattern, request.width, request.height, request.margin, request.color
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/encode/svg",
    response_class=Response,
    responses={
        200: {
            "content": {"image/svg+xml": {}},
            "description": "SVG-encoded barcode",
        },
        422: {"description": "Invalid input"},
    },
)
async def encode_svg_endpoint(request: EncodeRequest) -> Response:
    """Encode digits into an MSI barcode SVG image."""
    try:
        pattern = _pattern_for(request)
        svg_content = render_svg(
            pattern, request.width, request.height, request.margin, request.color
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.post("/decode", response_model=DecodeResponse)
async def decode_endpoint(request: DecodeRequest) -> DecodeResponse:
    """Decode an MSI barcode from one binarized scanline."""
    row = Scanline.from_string(request.row)

    try:
        result = decode_row(request.row_number, row, use_check_digit=request.use_check_digit)
    except NotFoundError as e:
        logger.debug("decode_not_found", row=request.row_number, reason=str(e))
        return DecodeResponse(
            text=None,
            status="not_found",
            row_number=request.row_number,
            error=str(e),
        )

    if result is None:
        return DecodeResponse(
            text=None,
            status="check_digit_mismatch",
            row_number=request.row_number,
            error="Check digit does not match",
        )

    return DecodeResponse(
        text=result.text,
        status="decoded",
        row_number=result.row_number,
        left_x=result.left.x,
        right_x=result.right.x,
    )


@app.post("/checksum", response_model=ChecksumResponse)
async def checksum_endpoint(request: ChecksumRequest) -> ChecksumResponse:
    """Compute the modulo-10 check digit for a digit string."""
    check_digit = compute_check_digit(request.digits)
    return ChecksumResponse(check_digit=check_digit, full=f"{request.digits}{check_digit}")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )
