import numpy as np
import pytest

from flyingchess.state import GameState, GameStore
from flyingchess.turn_gate import GateState, TurnGate


@pytest.fixture
def store(wire):
    store = GameStore()
    players = [
        wire.player("p1", "Ann", "red", steps=[90, 12, None, 91]),
        wire.player("p2", "Bob", "green"),
    ]
    store.replace(GameState.from_wire(wire.game(players, current_turn="p1")))
    return store


@pytest.fixture
def gate(store):
    return TurnGate(store, local_player_id="p1")


def test_idle_rejects_everything(gate):
    """An idle gate allows nothing."""
    assert gate.state is GateState.IDLE
    assert not gate.request_roll()
    assert not gate.request_move()
    assert gate.state is GateState.IDLE
    assert not gate.action_mask().any()


def test_turn_changed_to_me_allows_a_roll(gate):
    """My turn allows exactly one roll request."""
    gate.on_turn_changed("p1")
    assert gate.state is GateState.MUST_ROLL
    assert gate.dice_enabled
    assert gate.request_roll()
    assert gate.state is GateState.AWAITING_SERVER
    assert not gate.request_roll()


def test_turn_changed_to_other_goes_idle(gate):
    """Someone else's turn idles the gate."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    gate.on_turn_changed("p2")
    assert gate.state is GateState.IDLE
    assert not gate.dice_enabled


def test_game_started_follows_current_turn(store):
    """Only the starting player's gate opens."""
    mine = TurnGate(store, local_player_id="p1")
    theirs = TurnGate(store, local_player_id="p2")
    mine.on_game_started()
    theirs.on_game_started()
    assert mine.state is GateState.MUST_ROLL
    assert theirs.state is GateState.IDLE


def test_no_moves_blocks_moving(gate, store):
    """A noMoves roll leaves nothing to move."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    store.patch_dice(3)
    gate.on_dice_rolled("p1", can_roll_again=False, no_moves=True)
    assert gate.state is GateState.MUST_ROLL
    assert not gate.dice_enabled
    assert not gate.request_move()


def test_exactly_one_move_per_roll(gate, store):
    """Each roll allows a single move request."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    store.patch_dice(4)
    gate.on_dice_rolled("p1", can_roll_again=False, no_moves=False)
    assert gate.state is GateState.MUST_MOVE
    assert gate.request_move()
    assert gate.state is GateState.AWAITING_SERVER
    assert not gate.request_move()


def test_six_keeps_dice_enabled_while_a_move_is_pending(gate, store):
    """A six keeps the dice enabled while a move is pending."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    store.patch_dice(6)
    gate.on_dice_rolled("p1", can_roll_again=True, no_moves=False)
    assert gate.state is GateState.MUST_MOVE
    assert gate.dice_enabled
    assert gate.can_roll()
    assert gate.can_move()


def test_other_players_rolls_do_not_touch_my_gate(gate):
    """Other players' rolls leave my gate alone."""
    gate.on_turn_changed("p1")
    gate.on_dice_rolled("p2", can_roll_again=False, no_moves=False)
    assert gate.state is GateState.MUST_ROLL


def test_request_failed_restores_previous_state(gate):
    """A failed request restores the previous gate state."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    gate.request_failed()
    assert gate.state is GateState.MUST_ROLL
    assert gate.dice_enabled


def test_roll_again_after_move(gate, store):
    """roll_again after a move lets me roll again."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    store.patch_dice(6)
    gate.on_dice_rolled("p1", can_roll_again=False, no_moves=False)
    gate.request_move()
    gate.on_roll_again("p1")
    assert gate.state is GateState.MUST_ROLL
    assert gate.dice_enabled


def test_game_over_goes_idle(gate):
    """Game over idles the gate."""
    gate.on_turn_changed("p1")
    gate.on_game_over()
    assert gate.state is GateState.IDLE
    assert not gate.can_roll()


def test_action_mask_skips_finished_pieces(gate, store):
    """The mask offers unfinished pieces after a roll and rolling before."""
    gate.on_turn_changed("p1")
    np.testing.assert_array_equal(gate.action_mask(), [0, 0, 0, 0, 1])
    gate.request_roll()
    store.patch_dice(2)
    gate.on_dice_rolled("p1", can_roll_again=False, no_moves=False)
    np.testing.assert_array_equal(gate.action_mask(), [1, 1, 0, 1, 0])


def test_sync_after_full_state(gate, store):
    """sync follows the turn in a full snapshot."""
    gate.sync()
    assert gate.state is GateState.MUST_ROLL
    store.patch_turn("p2")
    gate.sync()
    assert gate.state is GateState.IDLE


def test_no_moves_disables_rolling_until_turn_changes(gate, store):
    """A forfeited roll leaves the dice disabled until the next turn_changed."""
    gate.on_turn_changed("p1")
    gate.request_roll()
    store.patch_dice(3)
    gate.on_dice_rolled("p1", can_roll_again=False, no_moves=True)
    assert not gate.can_roll()
    assert not gate.request_roll()
    assert gate.action_mask()[TurnGate.ROLL_ACTION] == 0

    gate.on_turn_changed("p1")
    assert gate.can_roll()


def test_turn_changed_outside_play_stays_idle(gate, store):
    """Being named by turn_changed opens nothing unless the game is playing."""
    store.patch_status("waiting")
    gate.on_turn_changed("p1")
    assert gate.state is GateState.IDLE
    assert not gate.request_roll()

    store.patch_status("finished")
    gate.on_turn_changed("p1")
    assert gate.state is GateState.IDLE
