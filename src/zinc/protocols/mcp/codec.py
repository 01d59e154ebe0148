"""Envelope codec — converts between wire frames and JSON-RPC models.

A frame is one line of UTF-8 JSON.  :func:`decode` is strict about the
JSON-RPC 2.0 envelope; :func:`encode` always produces exactly one line.
"""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import ValidationError

from zinc.protocols.errors import InvalidRequestError, ParseError, ProtocolError
from zinc.protocols.mcp.models import (
    JSONRPC_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
)


def decode(frame: str | bytes) -> JsonRpcRequest:
    """Decode a single frame into a :class:`JsonRpcRequest`.

    Raises:
        ParseError: The frame is not well-formed JSON.
        InvalidRequestError: The JSON is not a valid request envelope.
    """
    try:
        text = frame.decode("utf-8") if isinstance(frame, bytes) else frame
        raw: Any = json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(str(exc)) from exc

    if isinstance(raw, list):
        raise InvalidRequestError("batch requests are not supported")
    if not isinstance(raw, dict):
        raise InvalidRequestError("request must be a JSON object")

    if raw.get("jsonrpc") != JSONRPC_VERSION:
        raise InvalidRequestError(f"unsupported jsonrpc version: {raw.get('jsonrpc')!r}")

    method = raw.get("method")
    if not isinstance(method, str):
        raise InvalidRequestError("'method' must be a string")

    if "id" in raw and not _is_valid_id(raw["id"]):
        raise InvalidRequestError("'id' must be a number, string or null")

    if "params" in raw and not isinstance(raw["params"], (dict, list)):
        raise InvalidRequestError("'params' must be an object or array")

    try:
        return JsonRpcRequest.model_validate(raw)
    except ValidationError as exc:
        raise InvalidRequestError(str(exc)) from exc


def encode(response: JsonRpcResponse) -> str:
    """Encode a response as a single newline-terminated frame.

    Only ``jsonrpc``, ``id`` and one of ``result``/``error`` are emitted;
    ``error.data`` is dropped when unset.
    """
    payload: dict[str, Any] = {"jsonrpc": response.jsonrpc, "id": response.id}
    if response.error is not None:
        payload["error"] = response.error.model_dump(exclude_none=True)
    else:
        payload["result"] = response.result
    # json.dumps escapes control characters, so the frame has no raw newlines.
    return json.dumps(payload, separators=(",", ":"), allow_nan=False) + "\n"


def make_result(request_id: RequestId, result: Any) -> JsonRpcResponse:
    """Build a success response correlated to *request_id*."""
    return JsonRpcResponse(id=request_id, result=result)


def make_error(request_id: RequestId, exc: ProtocolError) -> JsonRpcResponse:
    """Build an error response correlated to *request_id*."""
    return JsonRpcResponse(id=request_id, error=exc.to_error())


def _is_valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value is None or isinstance(value, (int, float, str))


def _reject_constant(name: str) -> Any:
    raise ParseError(f"{name} is not valid JSON")
