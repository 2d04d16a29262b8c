"""
JSON response decoding and shape validation.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from exchanges.binance.api import ResponseShape
from exchanges.binance.errors import ApiErrorResponseError, LogicError, ServerResponseFormatError
from exchanges.binance.transport import TransportResponse

Decoded = Union[list, dict]


def json_type_name(value: Any) -> str:
    """Name of the JSON type of a parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def parse_json(raw_body: str, *, api: Optional[str] = None) -> Any:
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ServerResponseFormatError(f"invalid JSON: {exc}", api=api) from exc


def decode(raw_body: str, expected_shape: ResponseShape, *, api: Optional[str] = None) -> Decoded:
    """
    Parse ``raw_body`` and check it is the container ``expected_shape`` demands.

    The value is returned unmodified; field level checks are left to callers.
    ``ResponseShape.CONDITIONAL`` must be resolved before decoding.
    """
    value = parse_json(raw_body, api=api)

    if expected_shape is ResponseShape.ARRAY:
        matches = isinstance(value, list)
    elif expected_shape is ResponseShape.OBJECT:
        matches = isinstance(value, dict)
    elif expected_shape is ResponseShape.CONTAINER:
        matches = isinstance(value, (list, dict))
    else:
        raise LogicError(f"Response shape {expected_shape!r} must be resolved before decoding")

    if not matches:
        raise ServerResponseFormatError(
            f"response must be {_describe(expected_shape)}, but returned: {json_type_name(value)}",
            api=api,
        )
    return value


def check_api_error(response: TransportResponse, *, api: Optional[str] = None) -> None:
    """
    Raise ``ApiErrorResponseError`` when the reply is an error.

    A reply is an error when its status is not 2xx, or when its body is a
    ``{"code": <negative int>, "msg": ...}`` payload.
    """
    try:
        payload = json.loads(response.body)
    except (json.JSONDecodeError, TypeError):
        payload = None

    has_error_fields = isinstance(payload, dict) and "code" in payload and "msg" in payload
    if has_error_fields and (not response.ok or _is_negative_code(payload["code"])):
        raise ApiErrorResponseError(
            api,
            payload["code"],
            str(payload["msg"]),
            status_code=response.status_code,
        )
    if not response.ok:
        excerpt = response.body.strip()[:200] or "<empty body>"
        raise ApiErrorResponseError(
            api,
            None,
            f"HTTP {response.status_code}: {excerpt}",
            status_code=response.status_code,
        )


def _is_negative_code(code: Any) -> bool:
    return isinstance(code, int) and not isinstance(code, bool) and code < 0


def _describe(shape: ResponseShape) -> str:
    if shape is ResponseShape.CONTAINER:
        return "an array or an object"
    return f"an {shape.value}"
