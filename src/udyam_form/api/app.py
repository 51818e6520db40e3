"""
HTTP API for the registration form.

Endpoints:
    GET  /health
    GET  /form-schema/{step}      static schema for a step
    GET  /scraped-schema/{step}   cached scraper output for a step
    GET  /schema/{step}           provider-resolved schema (remote -> cache -> static)
    POST /validate/{kind}         single-field format check
    POST /submit                  full submission: validate, sanitize, store
    GET  /pincode/{pincode}       state/city autofill

Usage:
    python run_server.py
    # or
    uvicorn udyam_form.api.app:create_app --factory --port 4000
"""

import logging
import time
from typing import Any

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.errors import LookupUnavailable, SinkUnavailable, UnknownStepError
from udyam_form.models.submission import SubmissionRecord
from udyam_form.schema.defaults import get_default_schema
from udyam_form.schema.provider import SchemaProvider
from udyam_form.schema.store import load_schema_document
from udyam_form.services.pincode import PincodeLookup
from udyam_form.storage.repository import SubmissionRepository
from udyam_form.validation.sanitizer import contains_markup, sanitize
from udyam_form.validation.validator import Validator

logger = logging.getLogger(__name__)

# kind -> (request body key, success message)
VALIDATION_ENDPOINTS: dict[str, tuple[str, str]] = {
    "aadhaar": ("aadhaarNumber", "Aadhaar format is valid"),
    "pan": ("panNumber", "PAN format is valid"),
    "otp": ("otp", "OTP format is valid"),
    "pincode": ("pincode", "PIN code format is valid"),
    "mobile": ("mobileNumber", "Mobile number format is valid"),
}

_UNSET: Any = object()


def _error(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def _parse_step(request: Request) -> int | None:
    try:
        return int(request.path_params["step"])
    except ValueError:
        return None


async def _read_json_object(request: Request) -> dict[str, Any] | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms) - IP: {client}"
        )
        return response


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"ok": True})


async def form_schema(request: Request) -> JSONResponse:
    step = _parse_step(request)
    try:
        schema = get_default_schema(step)
    except UnknownStepError:
        return _error("Unknown step", 404)
    return JSONResponse(schema.to_document())


async def scraped_schema(request: Request) -> JSONResponse:
    step = _parse_step(request)
    if step is None:
        return _error("Scraped schema not found", 404)
    config: UdyamFormConfig = request.app.state.config
    try:
        document = load_schema_document(step, config.schema_cache_dir)
    except FileNotFoundError:
        return _error("Scraped schema not found", 404)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read scraped schema for step {step}: {e}")
        return _error("Failed to read scraped schema", 500)
    return JSONResponse(document)


async def resolved_schema(request: Request) -> JSONResponse:
    step = _parse_step(request)
    provider: SchemaProvider = request.app.state.provider
    try:
        schema, source = await provider.resolve(step)
    except UnknownStepError:
        return _error("Unknown step", 404)
    return JSONResponse(schema.to_document(), headers={"X-Schema-Source": source})


async def validate_field(request: Request) -> JSONResponse:
    kind = request.path_params["kind"]
    if kind not in VALIDATION_ENDPOINTS:
        return _error(f"Unknown field kind: {kind}", 404)
    body_key, ok_message = VALIDATION_ENDPOINTS[kind]

    body = await _read_json_object(request)
    if body is None:
        return JSONResponse({"valid": False, "error": "Request body must be a JSON object"}, status_code=400)

    validator: Validator = request.app.state.validator
    result = validator.validate(kind, body.get(body_key), field_name=body_key)
    if result.is_valid:
        return JSONResponse({"valid": True, "message": ok_message})
    error = result.errors[0]
    return JSONResponse(
        {"valid": False, "error": error.message, "type": error.error_type.value},
        status_code=400,
    )


async def submit(request: Request) -> JSONResponse:
    body = await _read_json_object(request)
    if body is None:
        return _error("Request body must be a JSON object", 400)

    validator: Validator = request.app.state.validator
    result = validator.validate_submission(body)
    if not result.is_valid:
        logger.info(f"Submission rejected with {result.error_count} error(s)")
        return _error("Validation failed", 400, details=result.to_details())

    config: UdyamFormConfig = request.app.state.config
    record = SubmissionRecord.model_validate(result.validated_data)
    if any(isinstance(value, str) and contains_markup(value) for _, value in record):
        logger.warning("Submission contained markup; stripped before storage")
    record = sanitize(record, escape_html=config.escape_html)

    sink: SubmissionRepository | None = request.app.state.sink
    if sink is None:
        return JSONResponse(
            {
                "stored": False,
                "message": "Database not configured. Data accepted for validation only.",
                "data": record.to_payload(),
            },
            status_code=202,
        )

    try:
        submission_id = await run_in_threadpool(sink.save, record)
    except SinkUnavailable as e:
        logger.error(f"Submission not stored: {e}")
        return JSONResponse(
            {
                "stored": False,
                "message": "Submission could not be stored. Data accepted for validation only.",
                "data": record.to_payload(),
            },
            status_code=202,
        )

    return JSONResponse({
        "stored": True,
        "id": submission_id,
        "message": "Udyam registration submitted successfully",
    })


async def pincode_autofill(request: Request) -> JSONResponse:
    pincode = request.path_params["pincode"]
    validator: Validator = request.app.state.validator
    result = validator.validate("pincode", pincode)
    if not result.is_valid:
        return _error(result.error, 400)

    lookup: PincodeLookup = request.app.state.pincode_lookup
    try:
        location = await lookup.lookup(pincode)
    except LookupUnavailable:
        return _error("PIN code service unavailable", 502)
    if location is None:
        return _error("PIN code not found", 404)
    return JSONResponse({"pincode": location.pincode, "state": location.state, "city": location.city})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error("Internal server error", 500)


def create_app(
    config: UdyamFormConfig | None = None,
    provider: SchemaProvider | None = None,
    sink: SubmissionRepository | None = _UNSET,
    pincode_lookup: PincodeLookup | None = None,
    validator: Validator | None = None,
) -> Starlette:
    """
    Build the Starlette application.

    Args:
        config: Settings; defaults to the environment configuration.
        provider: Schema provider; defaults to one built from ``config``.
        sink: Persistence sink. Omit to build it from ``config``; pass
            None to run without storage.
        pincode_lookup: PIN code client; defaults to one built from ``config``.
        validator: Field/submission validator over the default registry.
    """
    config = config or get_config()
    if sink is _UNSET:
        sink = SubmissionRepository.from_config(config)

    app = Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/form-schema/{step}", form_schema, methods=["GET"]),
            Route("/scraped-schema/{step}", scraped_schema, methods=["GET"]),
            Route("/schema/{step}", resolved_schema, methods=["GET"]),
            Route("/validate/{kind}", validate_field, methods=["POST"]),
            Route("/submit", submit, methods=["POST"]),
            Route("/pincode/{pincode}", pincode_autofill, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=config.cors_origins,
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
                expose_headers=["X-Schema-Source"],
            ),
            Middleware(RequestLoggingMiddleware),
        ],
        exception_handlers={Exception: _unhandled_error},
    )
    app.state.config = config
    app.state.provider = provider or SchemaProvider.from_config(config)
    app.state.sink = sink
    app.state.pincode_lookup = pincode_lookup or PincodeLookup.from_config(config)
    app.state.validator = validator or Validator()

    if sink is None:
        logger.info("No DATABASE_URL configured; submissions will not be stored")
    return app


def run_server(config: UdyamFormConfig | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    config = config or get_config()
    logging.basicConfig(level=config.log_level)
    logger.info(f"Starting Udyam form API on {config.server_host}:{config.server_port}")
    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
    )
