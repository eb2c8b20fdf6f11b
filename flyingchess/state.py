"""
Client-side mirror of the authoritative game state.

The server pushes camelCase JSON objects; they are parsed into the dataclasses
below and held by a single ``GameStore``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from gymnasium import logger

from .coordinates import BASE_SLOTS, coordinates_for


class GameStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class PieceStatus(str, Enum):
    BASE = "base"
    ACTIVE = "active"
    FINISHED = "finished"


PIECES = 4


@dataclass
class Piece:
    piece_id: int
    status: PieceStatus = PieceStatus.BASE
    step_index: int = BASE_SLOTS[0]
    # Derived from step_index and color, never authoritative.
    position: tuple | None = None
    direction: float | None = None

    @classmethod
    def from_wire(cls, data):
        position = data.get("position")
        if isinstance(position, dict):
            position = (position["x"], position["y"])
        return cls(
            piece_id=int(data["pieceId"]),
            status=PieceStatus(data.get("status", "base")),
            step_index=int(data.get("stepIndex", BASE_SLOTS[0])),
            position=position,
            direction=data.get("direction"),
        )


def _default_pieces():
    return [Piece(piece_id=i, step_index=BASE_SLOTS[i]) for i in range(PIECES)]


@dataclass
class Player:
    player_id: str
    name: str
    color: str
    is_ready: bool = False
    pieces: list = field(default_factory=_default_pieces)
    pieces_at_home: int = 0

    @classmethod
    def from_wire(cls, data):
        pieces = [Piece.from_wire(p) for p in data.get("pieces") or []]
        if not pieces:
            # Pre-start rosters may omit pieces; every player still owns four.
            pieces = _default_pieces()
        if len(pieces) != PIECES:
            raise ValueError(
                f"player {data.get('playerId')} has {len(pieces)} pieces, expected {PIECES}"
            )
        at_home = data.get("piecesAtHome")
        if at_home is None:
            at_home = sum(1 for p in pieces if p.status is PieceStatus.FINISHED)
        return cls(
            player_id=data["playerId"],
            name=data.get("name", ""),
            color=data["color"],
            is_ready=bool(data.get("isReady", False)),
            pieces=pieces,
            pieces_at_home=int(at_home),
        )

    def piece(self, piece_id):
        for piece in self.pieces:
            if piece.piece_id == piece_id:
                return piece
        return None


@dataclass
class GameState:
    game_id: str | None = None
    status: GameStatus | None = None
    current_turn: str | None = None
    players: list = field(default_factory=list)
    dice_value: int | None = None

    @classmethod
    def from_wire(cls, data):
        return cls(
            game_id=data.get("gameId"),
            status=GameStatus(data["status"]) if data.get("status") else None,
            current_turn=data.get("currentTurn"),
            players=[Player.from_wire(p) for p in data.get("players") or []],
            dice_value=data.get("diceValue"),
        )

    def player(self, player_id):
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None


class GameStore:
    """Owns the single GameState mirror.

    ``state`` is the live reference, not a snapshot. All reads and writes run on
    one event loop, and every operation here completes without suspending, so a
    reader never observes a half-applied notification. Callers must treat the
    returned objects as read-only.
    """

    def __init__(self):
        self._state = GameState()

    @property
    def state(self):
        return self._state

    def replace(self, new_state):
        """Swap in a whole new state, deriving cached piece positions."""
        previous = self._state
        for player in new_state.players:
            old_player = previous.player(player.player_id)
            _derive_positions(player, old_player)
        self._state = new_state

    def reset(self):
        self._state = GameState()

    def patch_dice(self, value):
        self._state.dice_value = value

    def patch_turn(self, player_id):
        self._state.current_turn = player_id

    def patch_status(self, status):
        self._state.status = GameStatus(status)

    def patch_player_ready(self, player_id, is_ready):
        player = self._state.player(player_id)
        if player is None:
            logger.warn("ready flag for unknown player %r ignored", player_id)
            return False
        player.is_ready = bool(is_ready)
        return True

    def patch_players(self, players):
        previous = self._state
        for player in players:
            _derive_positions(player, previous.player(player.player_id))
        self._state.players = list(players)


def _derive_positions(player, old_player):
    for piece in player.pieces:
        if piece.status is PieceStatus.FINISHED:
            piece.position = None
            continue
        coords = coordinates_for(player.color, piece.step_index)
        if coords is None:
            logger.warn(
                "no board coordinate for %s piece %s at step %s",
                player.color,
                piece.piece_id,
                piece.step_index,
            )
        piece.position = coords
        if piece.direction is None and old_player is not None:
            old_piece = old_player.piece(piece.piece_id)
            if old_piece is not None:
                piece.direction = old_piece.direction
