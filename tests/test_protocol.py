from __future__ import annotations

import json

import pytest

from snakepit import constants
from snakepit.messages import InputMessage, JoinMessage, KillNotice, RespawnMessage, RoundStart
from snakepit.protocol import ProtocolError, encode_message, encode_state, parse_client_message


def test_parse_join_defaults() -> None:
    assert parse_client_message('{"type": "join"}') == JoinMessage(name=constants.DEFAULT_NAME)
    assert parse_client_message('{"type": "join", "name": "   "}') == JoinMessage(name=constants.DEFAULT_NAME)


def test_parse_join_trims_name_and_keeps_wallet() -> None:
    message = parse_client_message(json.dumps({"type": "join", "name": "  " + "x" * 40, "wallet": "ABC"}))
    assert message == JoinMessage(name="x" * constants.MAX_NAME_LENGTH, wallet="ABC")


def test_parse_join_treats_empty_wallet_as_missing() -> None:
    assert parse_client_message('{"type": "join", "name": "Al", "wallet": ""}').wallet is None


def test_parse_input_keeps_missing_fields_unset() -> None:
    assert parse_client_message('{"type": "input", "angle": 1}') == InputMessage(angle=1.0, boost=None)
    assert parse_client_message('{"type": "input", "boost": true}') == InputMessage(angle=None, boost=True)
    assert parse_client_message('{"type": "input"}') == InputMessage()


def test_parse_respawn() -> None:
    assert parse_client_message('{"type": "respawn"}') == RespawnMessage()
    assert parse_client_message(b'{"type": "respawn", "wallet": "XYZ"}') == RespawnMessage(wallet="XYZ")


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2, 3]",
        "{}",
        '{"type": "dance"}',
        '{"type": ["join"]}',
        '{"type": "input", "angle": "north"}',
        '{"type": "input", "angle": true}',
        '{"type": "input", "angle": Infinity}',
        '{"type": "input", "angle": -Infinity}',
        '{"type": "input", "angle": NaN}',
        '{"type": "input", "angle": 1' + '0' * 400 + '}',
        '{"type": "input", "angle": 1.0, "boost": "yes"}',
        '{"type": "join", "name": 42}',
        b"\xff\xfe",
    ],
)
def test_malformed_messages_are_rejected(raw) -> None:
    with pytest.raises(ProtocolError):
        parse_client_message(raw)


def test_encode_kill() -> None:
    payload = json.loads(encode_message(KillNotice(killer="A", killer_id="1", victim="B", victim_id="2")))
    assert payload == {"type": "kill", "killer": "A", "killerId": "1", "victim": "B", "victimId": "2"}


def test_encode_round_start() -> None:
    assert json.loads(encode_message(RoundStart(round=1, players=8))) == {
        "type": "roundStart",
        "round": 1,
        "players": 8,
    }


def test_encode_state_tags_the_snapshot() -> None:
    payload = json.loads(encode_state({"players": [], "roundNum": 3}))
    assert payload == {"type": "state", "players": [], "roundNum": 3}
