"""FastAPI application exposing the converter over HTTP.

WHY: Scripts and tools that cannot shell out to the CLI (n8n flows, web
front-ends, other services) still need to turn a YAML upload into JSON
or a JSON array into a spreadsheet. FastAPI gives request validation and
OpenAPI documentation for free.

HOW: POST /conversions takes a multipart upload plus optional format
fields, decodes it with the default converter and returns the encoded
document with the codec's media type. GET /formats lists the registry,
GET /health answers liveness probes.

RULES:
- Error responses use the ErrorResponse schema
- Missing or unknown format -> 400, decode/encode failure -> 422,
  upload larger than MAX_UPLOAD_BYTES -> 413
- The input format comes from the form field, else the upload's extension
- The output format defaults to DEFAULT_OUTPUT_FORMAT
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Annotated, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from any_json import __version__, default_converter
from any_json.config import API_HOST, API_PORT, DEFAULT_OUTPUT_FORMAT, MAX_UPLOAD_BYTES
from any_json.core.errors import (
    DecodeError,
    EncodingError,
    MissingFormatError,
    UnknownFormatError,
)
from any_json.core.formats import encoding_for, format_from_filename
from any_json.server.models import ErrorResponse, FormatInfo, HealthResponse

logger = logging.getLogger(__name__)

converter = default_converter

app = FastAPI(
    title="any-json Conversion API",
    description=(
        "Convert structured documents between JSON, JSON5, HJSON, CSON, "
        "YAML, TOML, INI, XML, CSV, XLS and XLSX. Upload a file, name the "
        "target format, and receive the converted document."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _output_filename(upload_name: Optional[str], format_name: str) -> str:
    """Name of the converted file: the upload's stem plus the new format."""
    stem = PurePath(upload_name or "").stem or "converted"
    return "{}.{}".format(stem, format_name)


async def _read_upload(file: UploadFile) -> bytes:
    """Read the upload, refusing anything larger than MAX_UPLOAD_BYTES."""
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail="Upload too large (max {} bytes).".format(MAX_UPLOAD_BYTES),
        )
    return content


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions",
    tags=["conversions"],
    summary="Convert an uploaded document",
    description=(
        "Upload a document and receive it converted to output_format. The "
        "input format is taken from input_format, or from the uploaded "
        "file's extension when omitted."
    ),
    responses={
        200: {"description": "The converted document."},
        400: {"model": ErrorResponse, "description": "Missing or unknown format"},
        413: {"model": ErrorResponse, "description": "Upload too large"},
        422: {"model": ErrorResponse, "description": "Document could not be decoded or encoded"},
    },
)
async def create_conversion(
    file: Annotated[
        UploadFile,
        File(description="Document to convert"),
    ],
    input_format: Annotated[
        Optional[str],
        Form(description="Format of the upload (e.g. 'yaml'). Defaults to the file extension."),
    ] = None,
    output_format: Annotated[
        Optional[str],
        Form(description="Format to convert to. Defaults to '{}'.".format(DEFAULT_OUTPUT_FORMAT)),
    ] = None,
) -> Response:
    source_format = input_format or format_from_filename(file.filename)
    target_format = output_format or DEFAULT_OUTPUT_FORMAT

    # Resolve both codecs before reading the body
    try:
        source_codec = converter.codec_for(source_format)
        target_codec = converter.codec_for(target_format)
    except (MissingFormatError, UnknownFormatError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    content = await _read_upload(file)

    try:
        value = await converter.decode(content, source_codec.name)
        result = await converter.encode(value, target_codec.name)
    except (DecodeError, EncodingError) as exc:
        logger.warning("Conversion of %s failed: %s", file.filename, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    filename = _output_filename(file.filename, target_codec.name)
    return Response(
        content=result,
        media_type=target_codec.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List supported formats",
    description="Returns every supported format with its encoding and media type.",
)
async def list_formats() -> List[FormatInfo]:
    return [
        FormatInfo(key=codec.name, encoding=encoding_for(codec.name), media_type=codec.media_type)
        for codec in sorted(converter.registry, key=lambda codec: codec.name)
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the any-json-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
