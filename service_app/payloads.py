"""Request body decoding for endpoints that accept JSON or form posts."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class InvalidJSONError(ValueError):
    """Raised when a JSON request body cannot be decoded."""


async def read_request_payload(request: Request) -> Any:
    """Decode the body as a form when posted as one, otherwise as JSON.

    A missing Content-Type is treated as JSON. An empty body decodes to ``None``.
    """
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise InvalidJSONError(str(exc)) from exc
