"""
Event bridge between the game server and the local client state.

Inbound notifications are dispatched through a table keyed by event type.
User intents are checked against the turn gate before any request is sent.
"""

from __future__ import annotations

import asyncio
from typing import NamedTuple

from gymnasium import logger

from . import events
from .animator import MovementAnimator
from .board import BoardView
from .events import TransportError, parse_event
from .scheduler import AsyncioScheduler
from .state import PIECES, GameState, GameStatus, GameStore
from .turn_gate import TurnGate


class Notice(NamedTuple):
    level: str
    message: str


class Session(NamedTuple):
    game_id: str
    player_id: str
    color: str | None = None


class EventBridge:
    def __init__(
        self,
        emit,
        store=None,
        board=None,
        scheduler=None,
        notify=None,
        step_delay=None,
        render_mode=None,
    ):
        self.emit = emit
        self.notify = notify
        self.store = store if store is not None else GameStore()
        self.board = board if board is not None else BoardView(render_mode=render_mode)
        self.scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self.gate = TurnGate(self.store)
        self.animator = MovementAnimator(
            self.store,
            self.board,
            self.scheduler,
            reconcile=self.request_state,
            step_delay=step_delay,
            on_step=self._on_animation_step,
        )

        self.session = None
        self.log_lines = []
        self.animations = set()

        self.handlers = {
            events.PlayerJoined: self._on_player_joined,
            events.PlayerLeft: self._on_player_left,
            events.PlayerReady: self._on_player_ready,
            events.GameStarted: self._on_game_started,
            events.DiceRolled: self._on_dice_rolled,
            events.PieceMoved: self._on_piece_moved,
            events.GameStateUpdate: self._on_game_state_update,
            events.TurnChanged: self._on_turn_changed,
            events.GameOver: self._on_game_over,
            events.RollAgain: self._on_roll_again,
            events.ServerError: self._on_server_error,
        }

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @property
    def player_id(self):
        return self.session.player_id if self.session else None

    def _notice(self, level, message):
        if level == "warning":
            logger.warn("%s", message)
        if self.notify is not None:
            self.notify(Notice(level, message))

    def _log(self, message):
        self.log_lines.append(message)

    def _player_name(self, player_id):
        player = self.store.state.player(player_id)
        return player.name if player else str(player_id)

    def _send(self, request):
        name, payload = request.to_wire()
        try:
            self.emit(name, payload)
        except (TransportError, OSError) as e:
            logger.error("failed to send %s: %s", name, e)
            self._notice("error", f"Request {name} failed: {e}")
            return False
        return True

    def _redraw(self):
        if self.board.render_mode is not None:
            self.board.render()

    def _on_animation_step(self, sprite):
        self._redraw()

    # ------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------

    def handle(self, name, payload):
        """Parse and apply one server notification. Returns False if dropped."""
        try:
            event = parse_event(name, payload)
        except (KeyError, ValueError, TypeError) as e:
            logger.warn("dropping %s notification: %s", name, e)
            return False
        self.dispatch(event)
        return True

    def dispatch(self, event):
        self.handlers[type(event)](event)

    def _on_player_joined(self, event):
        if event.players:
            self.store.patch_players(event.players)
        else:
            roster = [
                p for p in self.store.state.players if p.player_id != event.player.player_id
            ]
            roster.append(event.player)
            self.store.patch_players(roster)
        self._notice("success", f"{event.player.name} joined the game!")
        self._log(f"{event.player.name} joined ({event.player.color})")

    def _on_player_left(self, event):
        self._notice("info", event.message or f"{event.player_id} left the game")
        self._log(event.message or f"{event.player_id} left")

    def _on_player_ready(self, event):
        self.store.patch_player_ready(event.player_id, event.is_ready)

    def _on_game_started(self, event):
        if event.game is not None:
            game = event.game
            if game.game_id is None:
                game.game_id = event.game_id
            self.store.replace(game)
        else:
            self.store.patch_status(GameStatus.PLAYING)
            self.store.patch_turn(event.start_player)
        self.gate.on_game_started()
        self.board.render_pieces(self.store.state.players)
        self._redraw()

        self._log("Game started!")
        turn = self.store.state.current_turn
        if turn is not None:
            if turn == self.player_id:
                self._log("Your turn: roll the dice and move")
            else:
                self._log(f"Waiting for {self._player_name(turn)}")

    def _on_dice_rolled(self, event):
        self.store.patch_dice(event.value)
        self.gate.on_dice_rolled(event.player_id, event.can_roll_again, event.no_moves)
        self._log(f"{self._player_name(event.player_id)} rolled {event.value}")
        if event.no_moves:
            self._log("No moves available")
        elif event.can_roll_again and event.player_id == self.player_id:
            self._log(f"You rolled {event.value}, roll again")

    def _on_piece_moved(self, event):
        self._log(f"{self._player_name(event.player_id)} moved piece {event.piece_id + 1}")
        task = self.scheduler.spawn(
            self.animator.animate(event.player_id, event.piece_id, event.move_sequence)
        )
        self.animations.add(task)
        task.add_done_callback(self.animations.discard)

    def _on_game_state_update(self, event):
        game = event.game
        if game is None:
            return
        current = self.store.state
        if game.game_id is None:
            game.game_id = current.game_id
        if game.dice_value is None and game.current_turn == current.current_turn:
            game.dice_value = current.dice_value
        self.store.replace(game)
        self.gate.sync()
        self.board.render_pieces(game.players)
        self._redraw()

    def _on_turn_changed(self, event):
        self.store.patch_turn(event.current_player_id)
        self.store.patch_dice(None)
        self.gate.on_turn_changed(event.current_player_id)
        if event.current_player_id == self.player_id:
            self._log("Your turn: roll the dice and move")
        else:
            self._log(f"Waiting for {event.player_name or self._player_name(event.current_player_id)}")

    def _on_game_over(self, event):
        self.store.patch_status(GameStatus.FINISHED)
        self.gate.on_game_over()
        name = event.winner.get("name", "?")
        self._notice("success", event.message or f"{name} wins!")
        self._log(f"Game over! {name} wins!")

    def _on_roll_again(self, event):
        self._notice("info", event.message)
        if event.message:
            self._log(event.message)
        self.gate.on_roll_again(event.player_id)

    def _on_server_error(self, event):
        logger.error("server error %s: %s", event.code, event.message)
        self._notice("error", event.message)
        self.gate.request_failed()

    # ------------------------------------------------------------
    # Outbound intents
    # ------------------------------------------------------------

    def join(self, game_id, player_id, color=None, players=None):
        """Adopt a confirmed create/join result and announce presence."""
        if not game_id or not player_id:
            self._notice("warning", "Please fill in all fields")
            return False
        self.session = Session(game_id, player_id, color)
        self.store.replace(
            GameState(game_id=game_id, status=GameStatus.WAITING, players=list(players or []))
        )
        self.gate.local_player_id = player_id
        self.gate.reset()
        self.board.clear()
        return self._send(events.join_game(game_id, player_id))

    def set_ready(self):
        if self.session is None:
            self._notice("warning", "Join a game first")
            return False
        if self.store.state.status is not GameStatus.WAITING:
            self._notice("warning", "The game has already started")
            return False
        return self._send(events.ready(self.session.game_id, self.session.player_id))

    def leave(self):
        """Leave the game. Local state is reset even if the request fails."""
        sent = False
        if self.session is not None:
            sent = self._send(events.leave_game(self.session.game_id, self.session.player_id))
        for task in list(self.animations):
            task.cancel()
        self.animations.clear()
        self.store.reset()
        self.board.clear()
        self.gate.local_player_id = None
        self.gate.reset()
        self.session = None
        return sent

    def roll_dice(self, cheat_value=None):
        if self.session is None or self.store.state.current_turn != self.player_id:
            self._notice("warning", "Wait for your turn!")
            return False
        if not self.gate.can_roll():
            self._notice("warning", "You cannot roll right now")
            return False
        if cheat_value is not None:
            try:
                cheat_value = int(cheat_value)
            except (TypeError, ValueError):
                cheat_value = None
            if cheat_value is None or not 1 <= cheat_value <= 6:
                self._notice("warning", "Invalid value! Use 1-6")
                return False

        self.gate.request_roll()
        request = events.roll_dice(self.session.game_id, self.session.player_id, cheat_value)
        if not self._send(request):
            self.gate.request_failed()
            return False
        return True

    def move_piece(self, piece_id):
        if self.session is None or self.store.state.current_turn != self.player_id:
            self._notice("warning", "Wait for your turn!")
            return False
        if not self.gate.can_move():
            self._notice("warning", "Roll the dice first!")
            return False
        if not isinstance(piece_id, int) or not 0 <= piece_id < PIECES:
            self._notice("warning", f"Invalid piece {piece_id!r}")
            return False

        self.gate.request_move()
        request = events.move_piece(
            self.session.game_id,
            self.session.player_id,
            piece_id,
            self.store.state.dice_value,
        )
        if not self._send(request):
            self.gate.request_failed()
            return False
        return True

    def request_state(self):
        """Ask the server for a full authoritative snapshot."""
        if self.session is None:
            return False
        return self._send(events.get_game_state(self.session.game_id, self.session.player_id))

    async def wait_for_animations(self):
        while self.animations:
            results = await asyncio.gather(*self.animations, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error("animation failed: %s", result)
            self.animations.difference_update([t for t in self.animations if t.done()])
