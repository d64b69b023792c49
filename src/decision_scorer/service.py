"""Request handling with a transport-neutral response envelope.

``handle_comparison`` takes a decoded JSON body and always returns a
JSON-compatible dict: a success envelope with results and metadata, or an
error envelope describing what went wrong. Hosts (HTTP handlers, the CLI)
only serialize it.
"""

import time
from datetime import datetime, timezone
from typing import Any, Optional

from .app_logging import get_logger
from .engine import DecisionEngine
from .exceptions import DecisionScorerError, RequestValidationError
from .schema import ComparisonRequest
from .validation import parse_request

logger = get_logger("service")

REQUIRED_FIELDS = ["options", "constraints", "priorities"]

VALIDATION_HELP = {
    "options": "Provide an array of at least 2 options with id, name, and features",
    "constraints": "Provide an array of constraints with criteria, operator, and value",
    "priorities": (
        "Provide an array of priorities with criteria, weight (0-1), "
        "and optimization (minimize/maximize)"
    ),
    "weights": "Ensure all priority weights sum to exactly 1.0",
}

PROCESSING_HELP = (
    "Please check your input format and try again. "
    "If the problem persists, contact support."
)


def create_timestamp() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_envelope(message: str, timestamp: Optional[str] = None, **extra: Any) -> dict[str, Any]:
    """Build an error envelope; extra keys are appended after the message."""
    envelope: dict[str, Any] = {"status": "error", "message": message}
    envelope.update(extra)
    envelope["timestamp"] = timestamp or create_timestamp()
    return envelope


def success_envelope(
    results: dict[str, Any],
    request: ComparisonRequest,
    processing_time_ms: int,
    timestamp: str,
) -> dict[str, Any]:
    return {
        "status": "success",
        "timestamp": timestamp,
        "results": results,
        "metadata": {
            "processing_time_ms": processing_time_ms,
            "algorithm_used": request.settings.algorithm.value,
            "data_freshness": timestamp,
            "input_summary": {
                "options_count": len(request.options),
                "constraints_count": len(request.constraints),
                "priorities_count": len(request.priorities),
            },
        },
    }


def handle_comparison(payload: Any, engine: Optional[DecisionEngine] = None) -> dict[str, Any]:
    """Validate a request body, run the comparison and wrap the outcome.

    Args:
        payload: Decoded JSON request body
        engine: Engine to use (a default engine is created if omitted)

    Returns:
        Success or error envelope
    """
    start = time.perf_counter()
    timestamp = create_timestamp()

    if not payload:
        return error_envelope(
            "Request body is required",
            timestamp,
            required_fields=REQUIRED_FIELDS,
        )

    try:
        request = parse_request(payload)
    except RequestValidationError as e:
        logger.info("Rejected request with %d validation errors", e.error_count)
        return error_envelope(
            e.message,
            timestamp,
            errors=e.errors,
            error_count=e.error_count,
            help=VALIDATION_HELP,
        )

    engine = engine or DecisionEngine()
    try:
        result = engine.compare_request(request)
    except DecisionScorerError as e:
        logger.error("Comparison processing failed: %s", e)
        return error_envelope(
            "Internal server error during comparison processing",
            timestamp,
            help=PROCESSING_HELP,
        )

    processing_time_ms = int((time.perf_counter() - start) * 1000)
    logger.debug("Comparison completed in %d ms", processing_time_ms)
    return success_envelope(result.to_wire(), request, processing_time_ms, timestamp)
