import pytest

from flyingchess import events


def test_every_inbound_event_has_a_parser():
    """Each inbound notification name is parsed."""
    assert set(events.PARSERS) == {
        "player_joined",
        "player_left",
        "player_ready",
        "game_started",
        "dice_rolled",
        "piece_moved",
        "game_state_update",
        "turn_changed",
        "game_over",
        "roll_again",
        "error",
    }


def test_parse_dice_rolled_defaults():
    """Missing dice_rolled flags default to False."""
    event = events.parse_event("dice_rolled", {"playerId": "p1", "value": "6"})
    assert event == events.DiceRolled("p1", 6, can_roll_again=False, no_moves=False)


def test_parse_piece_moved():
    """piece_moved keeps the move sequence in order."""
    event = events.parse_event(
        "piece_moved", {"playerId": "p1", "pieceId": 2, "moveSequence": [90, 0]}
    )
    assert event.piece_id == 2
    assert event.move_sequence == [90, 0]


def test_parse_game_state_update_without_game():
    """An empty game_state_update parses to no game."""
    assert events.parse_event("game_state_update", {}).game is None


def test_unknown_event_raises():
    """Unknown notification names raise KeyError."""
    with pytest.raises(KeyError):
        events.parse_event("teleport", {})


def test_requests_carry_game_and_player():
    """Every request carries the game and player ids."""
    for request in (
        events.join_game("g", "p"),
        events.ready("g", "p"),
        events.leave_game("g", "p"),
        events.roll_dice("g", "p"),
        events.get_game_state("g", "p"),
        events.move_piece("g", "p", 1, 4),
    ):
        name, payload = request.to_wire()
        assert name == request.name
        assert payload["gameId"] == "g"
        assert payload["playerId"] == "p"

    assert events.move_piece("g", "p", 1, 4).to_wire()[1] == {
        "gameId": "g",
        "playerId": "p",
        "pieceId": 1,
        "steps": 4,
    }
