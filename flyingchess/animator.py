"""Step-by-step movement animation for server move notifications."""

from __future__ import annotations

import asyncio

from gymnasium import logger

from .board import facing_angle
from .coordinates import coordinates_for


class MovementAnimator:
    """Walks a piece sprite through the cells of a move, one cell per delay.

    Animation is purely cosmetic. Every run ends with exactly one call to
    ``reconcile`` so the store is corrected from an authoritative snapshot;
    sprites are never written back into the store.
    """

    STEP_DELAY = 0.3

    def __init__(self, store, board, scheduler, reconcile, step_delay=None, on_step=None):
        self.store = store
        self.board = board
        self.scheduler = scheduler
        self.reconcile = reconcile
        self.step_delay = self.STEP_DELAY if step_delay is None else step_delay
        self.on_step = on_step

    async def animate(self, player_id, piece_id, move_sequence):
        player = self.store.state.player(player_id)
        if player is None:
            logger.warn("move for unknown player %r, requesting full state", player_id)
            self.reconcile()
            return

        sprite = self.board.sprite(player.color, piece_id)
        if sprite is None:
            # Piece not on the board yet or a previous update was missed.
            self.reconcile()
            return

        cancelled = False
        try:
            for step_index in move_sequence:
                coords = coordinates_for(player.color, step_index)
                if coords is None:
                    logger.warn(
                        "no coordinate for %s step %s, skipping", player.color, step_index
                    )
                    continue

                x, y = coords
                rotation = facing_angle(sprite.x, sprite.y, x, y)
                if rotation is not None:
                    sprite.direction = rotation
                sprite.place(step_index, x, y)
                sprite.offset = (0, 0)
                if self.on_step is not None:
                    self.on_step(sprite)

                await self.scheduler.schedule(self.step_delay)
        except asyncio.CancelledError:
            cancelled = True
            raise
        finally:
            if not cancelled:
                self.reconcile()
