"""JSON payload validation for hubIC responses.

Decoding and shape validation are kept apart so a body that is not JSON at
all (``JsonParseError``) can be told from one that lacks required fields
(``JsonShapeError``).
"""

from __future__ import annotations

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from hubix.auth.models.errors import JsonParseError, JsonShapeError
from hubix.auth.models.result import Err, Ok, Result

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_payload(body: str | bytes, model: type[ModelT]) -> Result[ModelT]:
    """Decode ``body`` as JSON and validate it against ``model``."""
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        return Err(JsonParseError(str(e)))

    try:
        return Ok(model.model_validate(data))
    except ValidationError as e:
        return Err(JsonShapeError(_summarize(e)))


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
