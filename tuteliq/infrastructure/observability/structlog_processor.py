"""Structlog processors that tie log events to Tuteliq request spans."""

from typing import Any

from opentelemetry import trace

from tuteliq.infrastructure.observability.tracing import REQUEST_SPAN_NAME

# Request span attribute -> log event key
_REQUEST_SPAN_FIELDS = {
    "tuteliq.attempt": "attempt",
    "tuteliq.request_id": "request_id",
}


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add trace_id and span_id of the current span, if there is one."""
    span_context = trace.get_current_span().get_span_context()

    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def add_request_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp events logged during an HTTP attempt with its attempt and request id.

    Events such as ``usage_updated`` or ``json_container_dropped`` are emitted
    deep inside the executor without the request id in hand. Inside a
    ``tuteliq.request`` span this copies the span's ``tuteliq.attempt`` and
    ``tuteliq.request_id`` attributes onto the event. Keys the event already
    carries are left alone.

    Args:
        logger: The logger instance (unused, required by structlog API).
        method_name: The log method name (unused, required by structlog API).
        event_dict: The log event dictionary to enrich.

    Returns:
        The event dictionary, enriched when logged inside a request span.
    """
    span = trace.get_current_span()
    # Non-recording spans carry neither a name nor attributes.
    if getattr(span, "name", None) != REQUEST_SPAN_NAME:
        return event_dict

    attributes = getattr(span, "attributes", None) or {}
    for attribute, key in _REQUEST_SPAN_FIELDS.items():
        if attribute in attributes:
            event_dict.setdefault(key, attributes[attribute])

    return event_dict
