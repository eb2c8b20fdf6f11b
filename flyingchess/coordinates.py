"""
Board coordinate mappings for Flying Chess pieces.

Coordinates are pixel positions on the 425x425 board artwork (top-left at 0,0).
x increases to the right, y increases downward.

Each color has its own indexed path:
    0       launch staging cell
    1-50    shared track, starting at the color's entry point
    51-56   the color's private home lane
    90-93   the four base slots
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 425
GRID_SIZE = 15

COLORS = ("red", "green", "blue", "yellow")

LAUNCH_INDEX = 0
BASE_SLOTS = (90, 91, 92, 93)

# Fitted to the board image, not computed. Keep as literals.
BOARD_COORDS = {
    "blue": {
        0: (6, 100),  # Launch
        1: (22, 122),
        2: (50, 110),
        3: (75, 110),
        4: (104, 122),
        5: (120, 100),
        6: (112, 76),
        7: (112, 50),
        8: (122, 20),
        9: (150, 14),
        10: (175, 14),
        11: (200, 14),
        12: (225, 14),
        13: (250, 14),
        14: (278, 22),
        15: (288, 50),
        16: (288, 76),
        17: (278, 100),
        18: (296, 122),
        19: (324, 110),
        20: (350, 110),
        21: (376, 122),
        22: (388, 150),
        23: (388, 175),
        24: (388, 200),
        25: (388, 225),
        26: (388, 250),
        27: (376, 275),
        28: (350, 288),
        29: (325, 288),
        30: (296, 275),
        31: (278, 296),
        32: (288, 325),
        33: (288, 350),
        34: (278, 377),
        35: (250, 388),
        36: (225, 388),
        37: (200, 388),
        38: (175, 388),
        39: (150, 388),
        40: (122, 377),
        41: (112, 350),
        42: (112, 325),
        43: (122, 296),
        44: (104, 275),
        45: (75, 288),
        46: (50, 288),
        47: (22, 275),
        48: (14, 250),
        49: (14, 225),
        50: (14, 200),
        51: (50, 200),  # Home lane
        52: (75, 200),
        53: (100, 200),
        54: (125, 200),
        55: (150, 200),
        56: (175, 200),  # Finish
        90: (5, 5),  # Base slots
        91: (5, 50),
        92: (50, 5),
        93: (50, 50),
    },
    "green": {
        0: (300, 6),  # Launch
        1: (278, 22),
        2: (288, 50),
        3: (288, 76),
        4: (278, 100),
        5: (296, 122),
        6: (324, 110),
        7: (350, 110),
        8: (376, 122),
        9: (388, 150),
        10: (388, 175),
        11: (388, 200),
        12: (388, 225),
        13: (388, 250),
        14: (376, 275),
        15: (350, 288),
        16: (325, 288),
        17: (296, 275),
        18: (278, 296),
        19: (288, 325),
        20: (288, 350),
        21: (278, 377),
        22: (250, 388),
        23: (225, 388),
        24: (200, 388),
        25: (175, 388),
        26: (150, 388),
        27: (122, 377),
        28: (112, 350),
        29: (112, 325),
        30: (122, 296),
        31: (104, 275),
        32: (75, 288),
        33: (50, 288),
        34: (22, 275),
        35: (14, 250),
        36: (14, 225),
        37: (14, 200),
        38: (14, 175),
        39: (14, 150),
        40: (22, 122),
        41: (50, 110),
        42: (75, 110),
        43: (104, 122),
        44: (120, 100),
        45: (112, 76),
        46: (112, 50),
        47: (122, 20),
        48: (150, 14),
        49: (175, 14),
        50: (200, 14),
        51: (200, 50),  # Home lane
        52: (200, 75),
        53: (200, 100),
        54: (200, 125),
        55: (200, 150),
        56: (200, 175),  # Finish
        90: (330, 5),  # Base slots
        91: (330, 50),
        92: (375, 5),
        93: (375, 50),
    },
    "yellow": {
        0: (102, 400),  # Launch
        1: (122, 377),
        2: (112, 350),
        3: (112, 325),
        4: (122, 296),
        5: (104, 275),
        6: (75, 288),
        7: (50, 288),
        8: (22, 275),
        9: (14, 250),
        10: (14, 225),
        11: (14, 200),
        12: (14, 175),
        13: (14, 150),
        14: (22, 122),
        15: (50, 110),
        16: (75, 110),
        17: (104, 122),
        18: (120, 100),
        19: (112, 76),
        20: (112, 50),
        21: (122, 20),
        22: (150, 14),
        23: (175, 14),
        24: (200, 14),
        25: (225, 14),
        26: (250, 14),
        27: (278, 22),
        28: (288, 50),
        29: (288, 76),
        30: (278, 100),
        31: (296, 122),
        32: (324, 110),
        33: (350, 110),
        34: (376, 122),
        35: (388, 150),
        36: (388, 175),
        37: (388, 200),
        38: (388, 225),
        39: (388, 250),
        40: (376, 275),
        41: (350, 288),
        42: (325, 288),
        43: (296, 275),
        44: (278, 296),
        45: (288, 325),
        46: (288, 350),
        47: (278, 377),
        48: (250, 388),
        49: (225, 388),
        50: (200, 388),
        51: (200, 350),  # Home lane
        52: (200, 325),
        53: (200, 300),
        54: (200, 275),
        55: (200, 250),
        56: (200, 225),  # Finish
        90: (5, 325),  # Base slots
        91: (5, 370),
        92: (50, 325),
        93: (50, 370),
    },
    "red": {
        0: (400, 300),  # Launch
        1: (376, 275),
        2: (350, 288),
        3: (325, 288),
        4: (296, 275),
        5: (278, 296),
        6: (288, 325),
        7: (288, 350),
        8: (278, 377),
        9: (250, 388),
        10: (225, 388),
        11: (200, 388),
        12: (175, 388),
        13: (150, 388),
        14: (122, 377),
        15: (112, 350),
        16: (112, 325),
        17: (122, 296),
        18: (104, 275),
        19: (75, 288),
        20: (50, 288),
        21: (22, 275),
        22: (14, 250),
        23: (14, 225),
        24: (14, 200),
        25: (14, 175),
        26: (14, 150),
        27: (22, 122),
        28: (50, 110),
        29: (75, 110),
        30: (104, 122),
        31: (120, 100),
        32: (112, 76),
        33: (112, 50),
        34: (122, 20),
        35: (150, 14),
        36: (175, 14),
        37: (200, 14),
        38: (225, 14),
        39: (250, 14),
        40: (278, 22),
        41: (288, 50),
        42: (288, 76),
        43: (278, 100),
        44: (296, 122),
        45: (324, 110),
        46: (350, 110),
        47: (376, 122),
        48: (388, 150),
        49: (388, 175),
        50: (388, 200),
        51: (350, 200),  # Home lane
        52: (325, 200),
        53: (300, 200),
        54: (275, 200),
        55: (250, 200),
        56: (225, 200),  # Finish
        90: (330, 330),  # Base slots
        91: (330, 375),
        92: (375, 330),
        93: (375, 375),
    },
}

# Shared ring on the 15x15 logical grid as (row, col). Ownership cycles every
# cell through RING_COLORS, matching the four launch offsets.
RING_COLORS = ("blue", "green", "yellow", "red")
COMMON_PATH = [
    (6, 1), (6, 0), (7, 0), (8, 0), (8, 1), (8, 2), (8, 3), (8, 4), (8, 5),
    (9, 6), (10, 6), (11, 6), (12, 6), (13, 6), (14, 6), (14, 7), (14, 8),
    (13, 8), (12, 8), (11, 8), (10, 8), (9, 8),
    (8, 9), (8, 10), (8, 11), (8, 12), (8, 13), (8, 14), (7, 14), (6, 14),
    (6, 13), (6, 12), (6, 11), (6, 10), (6, 9),
    (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8), (0, 7), (0, 6),
    (1, 6), (2, 6), (3, 6), (4, 6), (5, 6),
    (6, 5), (6, 4), (6, 3), (6, 2),
]
_RING_INDEX = {cell: i for i, cell in enumerate(COMMON_PATH)}


class Cell(NamedTuple):
    kind: str
    owner: str | None = None


def coordinates_for(color, step_index):
    """Return the (x, y) board pixel for a color's step index, or None.

    Unknown colors and indices are caller errors. Nothing is raised; the
    caller is expected to warn and skip rendering the piece.
    """
    table = BOARD_COORDS.get(color)
    if table is None:
        return None
    return table.get(step_index)


def is_base_slot(step_index):
    return step_index in BASE_SLOTS


def classify(row, col):
    """Classify a cell of the 15x15 logical grid for static board layout."""
    # Bases (corners)
    if row < 6 and col < 6:
        return Cell("base", "blue")
    if row < 6 and col > 8:
        return Cell("base", "green")
    if row > 8 and col < 6:
        return Cell("base", "yellow")
    if row > 8 and col > 8:
        return Cell("base", "red")

    # Home lanes
    if row == 7 and 1 <= col <= 6:
        return Cell("home-path", "blue")
    if col == 7 and 1 <= row <= 6:
        return Cell("home-path", "green")
    if row == 7 and 8 <= col <= 13:
        return Cell("home-path", "yellow")
    if col == 7 and 8 <= row <= 13:
        return Cell("home-path", "red")

    # Finish area
    if 6 <= row <= 8 and 6 <= col <= 8:
        return Cell("home")

    idx = _RING_INDEX.get((row, col))
    if idx is not None:
        return Cell("common", RING_COLORS[idx % 4])

    return Cell("empty")
