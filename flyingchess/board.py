"""
Rendered board: one sprite per visible piece, drawn with pygame.

Sprites hold only cosmetic state (pixel position, facing, stacking offset).
They are rebuilt from the store on every authoritative update.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import pygame
from gymnasium import logger

from .coordinates import BOARD_SIZE, GRID_SIZE, classify, is_base_slot
from .state import PieceStatus

COLOR_RGB = {
    "red": (231, 76, 60),
    "green": (46, 204, 113),
    "blue": (52, 152, 219),
    "yellow": (241, 196, 15),
}
NEUTRAL_RGB = (127, 140, 141)

CELL_RGB = {
    "empty": (255, 255, 255),
    "home": (236, 240, 241),
}

PIECE_SIZE = 20
STACK_SPACING = 8


@dataclass
class PieceSprite:
    player_id: str
    color: str
    piece_id: int
    step_index: int
    x: float
    y: float
    direction: float | None = None
    in_base: bool = False
    offset: tuple = (0, 0)

    @property
    def key(self):
        return (self.color, self.piece_id)

    def place(self, step_index, x, y):
        self.step_index = step_index
        self.x = x
        self.y = y
        self.in_base = is_base_slot(step_index)


def stack_offset(index, group_size):
    """Pixel shift for the index-th piece sharing a cell with others."""
    if group_size <= 1:
        return (0, 0)
    return (
        (index % 2) * STACK_SPACING - STACK_SPACING // 2,
        (index // 2) * STACK_SPACING - STACK_SPACING // 2,
    )


def facing_angle(x1, y1, x2, y2):
    """Sprite rotation in degrees for moving from (x1, y1) to (x2, y2).

    Sprites point up by default, hence the 90 degree offset. Returns None when
    the two points coincide, meaning the previous facing should be kept.
    """
    if x1 == x2 and y1 == y2:
        return None
    return float(np.degrees(np.arctan2(y2 - y1, x2 - x1))) + 90.0


class BoardView:
    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 30,
    }

    def __init__(self, render_mode=None, screen_size=BOARD_SIZE):
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.screen_size = screen_size
        self.sprites = {}

        self.screen = None
        self.clock = None
        self._background = None

    # ------------------------------------------------------------
    # Sprites
    # ------------------------------------------------------------

    def sprite(self, color, piece_id):
        return self.sprites.get((color, piece_id))

    def render_pieces(self, players):
        """Rebuild all sprites from authoritative player data."""
        self.sprites = {}
        groups = {}
        for player in players:
            for piece in player.pieces:
                if piece.status is PieceStatus.FINISHED:
                    continue
                if piece.position is None:
                    logger.warn(
                        "skipping %s piece %s: no coordinate for step %s",
                        player.color,
                        piece.piece_id,
                        piece.step_index,
                    )
                    continue
                x, y = piece.position
                sprite = PieceSprite(
                    player_id=player.player_id,
                    color=player.color,
                    piece_id=piece.piece_id,
                    step_index=piece.step_index,
                    x=x,
                    y=y,
                    direction=piece.direction,
                    in_base=is_base_slot(piece.step_index),
                )
                self.sprites[sprite.key] = sprite
                groups.setdefault((x, y), []).append(sprite)

        for group in groups.values():
            for index, sprite in enumerate(group):
                sprite.offset = stack_offset(index, len(group))

    def clear(self):
        self.sprites = {}

    # ------------------------------------------------------------
    # Render
    # ------------------------------------------------------------

    def _draw_background(self, size):
        surface = pygame.Surface((size, size))
        cell = size / GRID_SIZE
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                kind, owner = classify(row, col)
                if owner is not None:
                    rgb = COLOR_RGB[owner]
                    if kind == "common":
                        # Lighter tint for shared ring cells
                        rgb = tuple((c + 255) // 2 for c in rgb)
                else:
                    rgb = CELL_RGB[kind]
                rect = pygame.Rect(
                    int(col * cell), int(row * cell), math.ceil(cell), math.ceil(cell)
                )
                surface.fill(rgb, rect)
        return surface

    def render(self):
        if self.render_mode is None:
            logger.warn("Render called without render_mode.")
            return None

        size = self.screen_size
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                pygame.display.set_caption("Flying Chess")
                self.screen = pygame.display.set_mode((size, size))
            else:
                self.screen = pygame.Surface((size, size))
            self.clock = pygame.time.Clock()
            self._background = self._draw_background(size)

        self.screen.blit(self._background, (0, 0))

        scale = size / BOARD_SIZE
        radius = max(2, int(PIECE_SIZE * scale / 2))
        for sprite in self.sprites.values():
            # Board coordinates are the sprite's top-left corner.
            dx, dy = sprite.offset
            cx = int((sprite.x + dx + PIECE_SIZE / 2) * scale)
            cy = int((sprite.y + dy + PIECE_SIZE / 2) * scale)
            if sprite.in_base:
                r = max(2, int(radius * 0.8))
            else:
                r = radius
            rgb = COLOR_RGB.get(sprite.color, NEUTRAL_RGB)
            pygame.draw.circle(self.screen, rgb, (cx, cy), r)
            pygame.draw.circle(self.screen, (0, 0, 0), (cx, cy), r, 1)
            if sprite.direction is not None:
                theta = math.radians(sprite.direction)
                tip = (int(cx + math.sin(theta) * r), int(cy - math.cos(theta) * r))
                pygame.draw.line(self.screen, (0, 0, 0), (cx, cy), tip, 2)

        if self.render_mode == "human":
            pygame.event.pump()
            pygame.display.update()
            self.clock.tick(self.metadata["render_fps"])

        obs = np.array(pygame.surfarray.pixels3d(self.screen))
        return np.transpose(obs, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.quit()
            self.screen = None
            self._background = None
