"""
Typed event contract between the client and the game server.

Inbound notifications are parsed from ``(name, payload)`` pairs into the
dataclasses below; outbound requests are built as ``Request`` values and turned
back into ``(name, payload)`` pairs by ``Request.to_wire``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import GameState, Player


class TransportError(Exception):
    """Raised by an outbound emitter when a request could not be sent."""


# ------------------------------------------------------------
# Inbound notifications
# ------------------------------------------------------------

@dataclass
class PlayerJoined:
    player: Player
    players: list | None = None


@dataclass
class PlayerLeft:
    player_id: str
    message: str = ""


@dataclass
class PlayerReady:
    player_id: str
    is_ready: bool


@dataclass
class GameStarted:
    game_id: str
    start_player: str | None = None
    game: GameState | None = None


@dataclass
class DiceRolled:
    player_id: str
    value: int
    can_roll_again: bool = False
    no_moves: bool = False


@dataclass
class PieceMoved:
    player_id: str
    piece_id: int
    move_sequence: list = field(default_factory=list)


@dataclass
class GameStateUpdate:
    game: GameState | None


@dataclass
class TurnChanged:
    current_player_id: str
    player_name: str = ""


@dataclass
class GameOver:
    winner: dict
    message: str = ""


@dataclass
class RollAgain:
    player_id: str
    message: str = ""


@dataclass
class ServerError:
    message: str
    code: str | None = None


def _player_joined(d):
    players = d.get("players")
    return PlayerJoined(
        player=Player.from_wire(d["player"]),
        players=[Player.from_wire(p) for p in players] if players else None,
    )


def _game_started(d):
    game = d.get("game")
    return GameStarted(
        game_id=d.get("gameId"),
        start_player=d.get("startPlayer"),
        game=GameState.from_wire(game) if game else None,
    )


def _game_state_update(d):
    game = d.get("game")
    return GameStateUpdate(game=GameState.from_wire(game) if game else None)


PARSERS = {
    "player_joined": _player_joined,
    "player_left": lambda d: PlayerLeft(d["playerId"], d.get("message", "")),
    "player_ready": lambda d: PlayerReady(d["playerId"], bool(d["isReady"])),
    "game_started": _game_started,
    "dice_rolled": lambda d: DiceRolled(
        player_id=d["playerId"],
        value=int(d["value"]),
        can_roll_again=bool(d.get("canRollAgain", False)),
        no_moves=bool(d.get("noMoves", False)),
    ),
    "piece_moved": lambda d: PieceMoved(
        player_id=d["playerId"],
        piece_id=int(d["pieceId"]),
        move_sequence=[int(i) for i in d.get("moveSequence") or []],
    ),
    "game_state_update": _game_state_update,
    "turn_changed": lambda d: TurnChanged(d["currentPlayerId"], d.get("playerName", "")),
    "game_over": lambda d: GameOver(d.get("winner") or {}, d.get("message", "")),
    "roll_again": lambda d: RollAgain(d["playerId"], d.get("message", "")),
    "error": lambda d: ServerError(d.get("message", ""), d.get("code")),
}


def parse_event(name, payload):
    """Parse an inbound notification.

    Raises ``KeyError`` for an unknown event name or a missing field and
    ``ValueError`` for a malformed value.
    """
    parser = PARSERS.get(name)
    if parser is None:
        raise KeyError(f"unknown event {name!r}")
    return parser(payload or {})


# ------------------------------------------------------------
# Outbound requests
# ------------------------------------------------------------

@dataclass
class Request:
    name: str
    game_id: str | None
    player_id: str | None
    extra: dict = field(default_factory=dict)

    def to_wire(self):
        payload = {"gameId": self.game_id, "playerId": self.player_id}
        payload.update(self.extra)
        return self.name, payload


def join_game(game_id, player_id):
    return Request("join_game", game_id, player_id)


def ready(game_id, player_id):
    return Request("ready", game_id, player_id)


def leave_game(game_id, player_id):
    return Request("leave_game", game_id, player_id)


def roll_dice(game_id, player_id, cheat_value=None):
    return Request("roll_dice", game_id, player_id, {"cheatValue": cheat_value})


def move_piece(game_id, player_id, piece_id, steps):
    return Request("move_piece", game_id, player_id, {"pieceId": piece_id, "steps": steps})


def get_game_state(game_id, player_id):
    return Request("get_game_state", game_id, player_id)
