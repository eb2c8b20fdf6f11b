from .bridge import EventBridge, Notice
from .coordinates import classify, coordinates_for
from .state import GameState, GameStore, Piece, Player
from .turn_gate import GateState, TurnGate

__all__ = [
    "EventBridge",
    "GameState",
    "GameStore",
    "GateState",
    "Notice",
    "Piece",
    "Player",
    "TurnGate",
    "classify",
    "coordinates_for",
]
