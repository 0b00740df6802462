"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Dict, Optional

from . import constants
from .messages import ClientMessage, InputMessage, JoinMessage, RespawnMessage, ServerMessage


class ProtocolError(ValueError):
    """Raised for client messages that cannot be understood."""


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProtocolError(f"{key!r} must be a string")
    return value or None


def _optional_number(payload: Dict[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    # bool is an int subclass but never a valid angle.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProtocolError(f"{key!r} must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ProtocolError(f"{key!r} is out of range") from exc
    # json.loads accepts NaN and Infinity literals.
    if not math.isfinite(number):
        raise ProtocolError(f"{key!r} must be a finite number")
    return number


def _optional_bool(payload: Dict[str, Any], key: str) -> Optional[bool]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ProtocolError(f"{key!r} must be a boolean")
    return value


def _parse_join(payload: Dict[str, Any]) -> JoinMessage:
    name = (_optional_str(payload, "name") or "").strip()[: constants.MAX_NAME_LENGTH]
    return JoinMessage(name=name or constants.DEFAULT_NAME, wallet=_optional_str(payload, "wallet"))


def _parse_input(payload: Dict[str, Any]) -> InputMessage:
    return InputMessage(angle=_optional_number(payload, "angle"), boost=_optional_bool(payload, "boost"))


def _parse_respawn(payload: Dict[str, Any]) -> RespawnMessage:
    return RespawnMessage(wallet=_optional_str(payload, "wallet"))


_PARSERS: Dict[str, Callable[[Dict[str, Any]], ClientMessage]] = {
    "join": _parse_join,
    "input": _parse_input,
    "respawn": _parse_respawn,
}


def parse_client_message(message: str | bytes) -> ClientMessage:
    """Parse a raw client ``message`` into one of the typed client messages."""

    try:
        payload = json.loads(message)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ProtocolError("Client message must be a JSON object")
    message_type = payload.get("type")
    parser = _PARSERS.get(message_type) if isinstance(message_type, str) else None
    if parser is None:
        raise ProtocolError(f"Unknown message type {message_type!r}")
    return parser(payload)


def encode_message(message: ServerMessage) -> str:
    """Encode a notification for a single client or for broadcasting."""

    return json.dumps(message.to_dict())


def encode_state(snapshot: Dict[str, Any]) -> str:
    """Encode a world snapshot for broadcasting to clients."""

    return json.dumps({"type": "state", **snapshot})
