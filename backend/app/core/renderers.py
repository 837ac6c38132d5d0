# app/core/renderers.py
"""
Response envelope formatting.

Success payloads are nested under a per-endpoint label, e.g.
{"user": {...}} or {"profile": {...}}. A payload that already carries an
"errors" key is emitted unchanged.
"""
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

Transform = Callable[[dict], dict]


def decode_token(payload: dict) -> dict:
    """Turn a bytes-like "token" field into text."""
    token = payload.get("token")
    if isinstance(token, (bytes, bytearray, memoryview)):
        payload = {**payload, "token": bytes(token).decode("utf-8")}
    return payload


def envelope(
    data: Any,
    object_label: str = "object",
    transforms: Iterable[Transform] = (),
) -> dict:
    """
    Build the JSON-ready body for `data`.

    Args:
        data: A mapping or pydantic model; any other JSON-encodable value is
            nested as is, without transforms
        object_label: Top-level key the payload is nested under
        transforms: Callables applied in order to the payload before encoding

    Returns:
        `data` unchanged when it is an error payload, else {object_label: payload}
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if isinstance(data, Mapping) and "errors" in data:
        return jsonable_encoder(data)

    if not isinstance(data, Mapping):
        return {object_label: jsonable_encoder(data)}

    payload = dict(data)
    for transform in transforms:
        payload = transform(payload)
    return {object_label: jsonable_encoder(payload)}


def render(
    data: Any,
    object_label: str = "object",
    transforms: Iterable[Transform] = (),
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        content=envelope(data, object_label, transforms),
        status_code=status_code,
        headers=headers,
    )
