import asyncio

import pytest

from flyingchess.bridge import EventBridge
from flyingchess.scheduler import AsyncioScheduler


class FakeScheduler(AsyncioScheduler):
    """Records requested delays and yields to the loop without waiting."""

    def __init__(self):
        self.delays = []

    def schedule(self, delay):
        self.delays.append(delay)
        return asyncio.sleep(0)


class Outbox:
    def __init__(self):
        self.sent = []

    def __call__(self, name, payload):
        self.sent.append((name, payload))

    def names(self):
        return [name for name, _ in self.sent]


def piece_wire(piece_id, step_index=None, status="base"):
    if step_index is None:
        step_index = 90 + piece_id
    return {"pieceId": piece_id, "status": status, "stepIndex": step_index}


def player_wire(player_id, name, color, steps=None, ready=False):
    pieces = None
    if steps is not None:
        pieces = []
        for i, step in enumerate(steps):
            if step is None:
                pieces.append(piece_wire(i, 56, "finished"))
            elif 90 <= step <= 93:
                pieces.append(piece_wire(i, step, "base"))
            else:
                pieces.append(piece_wire(i, step, "active"))
    return {
        "playerId": player_id,
        "name": name,
        "color": color,
        "isReady": ready,
        "pieces": pieces or [],
    }


def game_wire(players, current_turn=None, status="playing", game_id="g1", dice=None):
    data = {
        "gameId": game_id,
        "status": status,
        "currentTurn": current_turn,
        "players": players,
    }
    if dice is not None:
        data["diceValue"] = dice
    return data


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def outbox():
    return Outbox()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def make_bridge(scheduler):
    def _make(emit, notify=None):
        return EventBridge(emit, scheduler=scheduler, notify=notify)

    return _make


@pytest.fixture
def wire():
    """Builders for camelCase server payloads."""

    class Wire:
        piece = staticmethod(piece_wire)
        player = staticmethod(player_wire)
        game = staticmethod(game_wire)

    return Wire
