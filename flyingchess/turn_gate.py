"""State machine deciding which local actions may currently be requested."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .state import GameStatus, PieceStatus


class GateState(Enum):
    IDLE = "idle"
    MUST_ROLL = "must_roll"
    MUST_MOVE = "must_move"
    AWAITING_SERVER = "awaiting_server"


class TurnGate:
    """Gates roll and move requests for the local player.

    The gate never validates move legality; it only decides whether a request
    may be sent. The server remains authoritative and may still reject it.

    ``dice_enabled`` mirrors the roll affordance shown to the user and is
    tracked separately from ``state``: after rolling a six the gate waits for a
    move while the dice stay enabled.
    """

    # Action mask layout: move piece 0-3, 4 = roll
    ROLL_ACTION = 4

    def __init__(self, store, local_player_id=None):
        self.store = store
        self.local_player_id = local_player_id
        self.reset()

    def reset(self):
        self.state = GateState.IDLE
        self.reroll_available = False
        self.dice_enabled = False
        self._before_request = None

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def _is_my_turn(self):
        game = self.store.state
        return (
            self.local_player_id is not None
            and self._is_playing()
            and game.current_turn == self.local_player_id
        )

    def _is_playing(self):
        return self.store.state.status is GameStatus.PLAYING

    def can_roll(self):
        if self.state is GateState.MUST_ROLL:
            # Disabled after a forfeited roll until the turn moves on.
            return self.dice_enabled
        return self.state is GateState.MUST_MOVE and self.reroll_available

    def can_move(self):
        return self.state is GateState.MUST_MOVE and self.store.state.dice_value is not None

    def action_mask(self):
        mask = np.zeros(5, dtype=np.int8)
        if self.can_move():
            me = self.store.state.player(self.local_player_id)
            if me is not None:
                for piece in me.pieces:
                    if piece.status is not PieceStatus.FINISHED:
                        mask[piece.piece_id] = 1
        if self.can_roll():
            mask[self.ROLL_ACTION] = 1
        return mask

    # ------------------------------------------------------------
    # Local requests
    # ------------------------------------------------------------

    def request_roll(self):
        if not self.can_roll():
            return False
        self._before_request = (self.state, self.reroll_available, self.dice_enabled)
        self.state = GateState.AWAITING_SERVER
        self.reroll_available = False
        self.dice_enabled = False
        return True

    def request_move(self):
        if not self.can_move():
            return False
        self._before_request = (self.state, self.reroll_available, self.dice_enabled)
        self.state = GateState.AWAITING_SERVER
        return True

    def request_failed(self):
        """Drop the pending request after a send failure or server rejection."""
        if self.state is not GateState.AWAITING_SERVER or self._before_request is None:
            return
        self.state, self.reroll_available, self.dice_enabled = self._before_request
        self._before_request = None

    # ------------------------------------------------------------
    # Server notifications
    # ------------------------------------------------------------

    def on_game_started(self):
        self.reset()
        if self._is_my_turn():
            self.state = GateState.MUST_ROLL
            self.dice_enabled = True

    def on_turn_changed(self, player_id):
        self._before_request = None
        self.reroll_available = False
        if player_id is not None and player_id == self.local_player_id and self._is_playing():
            self.state = GateState.MUST_ROLL
            self.dice_enabled = True
        else:
            self.state = GateState.IDLE
            self.dice_enabled = False

    def on_dice_rolled(self, player_id, can_roll_again, no_moves):
        if player_id != self.local_player_id or self.state is GateState.IDLE:
            return
        self._before_request = None
        if no_moves:
            # Turn is forfeited; the server follows up with turn_changed.
            self.state = GateState.MUST_ROLL
            self.reroll_available = False
            self.dice_enabled = False
        else:
            self.state = GateState.MUST_MOVE
            self.reroll_available = bool(can_roll_again)
            self.dice_enabled = bool(can_roll_again)

    def on_roll_again(self, player_id):
        if player_id != self.local_player_id or self.state is GateState.IDLE:
            return
        self.reroll_available = True
        self.dice_enabled = True
        if self.state is GateState.AWAITING_SERVER:
            self._before_request = None
            self.state = GateState.MUST_ROLL

    def on_game_over(self):
        self.reset()

    def sync(self):
        """Re-derive the gate after an authoritative full-state replace."""
        if not self._is_my_turn():
            if self.state is not GateState.IDLE:
                self.reset()
        elif self.state is GateState.IDLE:
            self.state = GateState.MUST_ROLL
            self.dice_enabled = True
