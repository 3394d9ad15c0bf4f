"""
Dependency wiring for the FastAPI app.

The store and authenticator are created once in ``create_app`` and
kept on ``app.state``; routes receive them through these dependencies.
"""

from __future__ import annotations

import json
import math

from fastapi import Request

from workshop_api.auth import AdminAuthenticator
from workshop_api.errors import InvalidBody
from workshop_api.store import DocumentStore


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_authenticator(request: Request) -> AdminAuthenticator:
    return request.app.state.authenticator


def _reject_constant(name: str):
    # NaN and Infinity are not JSON and cannot be rendered back.
    raise InvalidBody()


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise InvalidBody()
    return value


def _replace_lone_surrogates(value):
    """Swap unpaired surrogate escapes for U+FFFD so strings encode as UTF-8."""
    if isinstance(value, str):
        return value.encode("utf-16-le", "surrogatepass").decode(
            "utf-16-le", "replace"
        )
    if isinstance(value, dict):
        return {
            _replace_lone_surrogates(key): _replace_lone_surrogates(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_replace_lone_surrogates(item) for item in value]
    return value


async def read_document(request: Request) -> dict:
    """
    Parse the request body as a JSON object.

    Anything else (malformed JSON, arrays, scalars, null, non-finite or overflowing
    numbers) is rejected. Unpaired surrogate escapes become U+FFFD.
    """
    raw = await request.body()
    try:
        payload = json.loads(
            raw, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidBody() from exc
    if not isinstance(payload, dict):
        raise InvalidBody()
    return _replace_lone_surrogates(payload)
