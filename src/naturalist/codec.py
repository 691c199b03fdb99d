"""
Wire codec: domain models <-> provider JSON bodies.

Decoding wraps pydantic validation and JSON syntax errors in ``DecodeError``;
a malformed nested element fails the whole document. Encoding sends only the
fields the caller explicitly set, under their wire names.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from naturalist.errors import DecodeError, EncodeError
from naturalist.schemas import (
    AddObservationOpt,
    FullObservation,
    SimpleObservation,
    UpdateObservationOpt,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SIMPLE_LIST = TypeAdapter(list[SimpleObservation])


# =============================================================================
# Decoding
# =============================================================================


def _load(content: bytes | str) -> Any:
    try:
        return json.loads(content)
    except (ValueError, TypeError) as exc:
        logger.debug("Response body is not JSON: %r", content[:200])
        raise DecodeError(f"invalid JSON: {exc}") from exc


def _validate(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"cannot decode {model.__name__}: {exc}") from exc


def decode_simple_observation(content: bytes | str) -> SimpleObservation:
    return _validate(SimpleObservation, _load(content))


def decode_full_observation(content: bytes | str) -> FullObservation:
    return _validate(FullObservation, _load(content))


def decode_simple_observations(content: bytes | str) -> list[SimpleObservation]:
    """Decode a JSON array of summary observations, in provider order."""
    data = _load(content)
    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
    try:
        return _SIMPLE_LIST.validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"cannot decode observation list: {exc}") from exc


def check_parses(content: bytes | str) -> None:
    """Confirm an opaque body is JSON (or empty) without keeping its shape."""
    if not content or not content.strip():
        return
    _load(content)


def decode_add_options(content: bytes | str) -> AddObservationOpt:
    """Read a create body back into options; only keys present count as set."""
    return _validate(AddObservationOpt, _load(content))


def decode_update_options(content: bytes | str, observation_id: int) -> UpdateObservationOpt:
    data = _load(content)
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    opt = _validate(UpdateObservationOpt, {**data, "id": observation_id})
    # id comes from the path, not the body
    opt.model_fields_set.discard("id")
    return opt


# =============================================================================
# Encoding
# =============================================================================


def encode_options(opt: AddObservationOpt) -> bytes:
    """
    Serialize create/update options to a JSON body.

    Only explicitly-set fields appear, so an update carries exactly what the
    caller changed; a field set to ``""`` or ``0`` is still sent. ``id`` on
    update options is never part of the body.
    """
    try:
        body = opt.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return json.dumps(body, allow_nan=False).encode("utf-8")
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        raise EncodeError(f"cannot encode {type(opt).__name__}: {exc}") from exc
