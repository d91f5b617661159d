import pytest

from chessbot.board import STARTING_FEN, Board
from chessbot.match import Match, SimulationState

FOOLS_MATE = ["f2f3", "e7e5", "g2g4", "d8h4"]


def first_legal(fen):
    return Board(fen).legal_moves()[0].uci()


def scripted(moves):
    remaining = iter(moves)
    return lambda fen: next(remaining)


def test_new_match_is_paused_at_start():
    match = Match(first_legal)
    assert match.state is SimulationState.PAUSED
    assert match.board.fen() == STARTING_FEN
    assert match.moves == []
    assert match.game_result == ""


def test_step_logs_move_with_turn_and_number():
    match = Match(scripted(["e2e4", "e7e5"]))
    assert match.step() is True
    assert match.step() is True
    assert match.moves == ["1 WHITE: e2e4", "2 BLACK: e7e5"]


def test_step_strips_newline_from_engine_output():
    match = Match(scripted(["e2e4\n"]))
    match.step()
    assert match.moves == ["1 WHITE: e2e4"]
    assert match.board.piece_at("e4").symbol == "P"


def test_step_records_timing():
    match = Match(first_legal)
    match.step()
    match.step()
    assert match.time_spent_on_moves_ns >= match.time_spent_last_move_ns >= 0


def test_run_to_checkmate():
    match = Match(scripted(FOOLS_MATE))
    played = match.run()
    assert played == 4
    assert match.game_result == "LOSE CHECKMATE"
    assert match.state is SimulationState.PAUSED


def test_run_respects_limit():
    match = Match(first_legal)
    assert match.run(max_moves=3) == 3
    assert len(match.moves) == 3
    assert match.state is SimulationState.RUNNING


def test_fifty_move_rule_stops_without_move():
    match = Match(first_legal)
    match.board = Board("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
    assert match.step() is False
    assert match.game_result == "DRAW FIFTY_MOVE_RULE"
    assert match.moves == []


def test_pause_and_play_toggle_state():
    match = Match(first_legal)
    match.play()
    assert match.state is SimulationState.RUNNING
    match.pause()
    assert match.state is SimulationState.PAUSED


def test_reset_clears_everything():
    match = Match(scripted(FOOLS_MATE))
    match.run()
    match.reset()
    assert match.board.fen() == STARTING_FEN
    assert match.moves == []
    assert match.game_result == ""
    assert match.time_spent_on_moves_ns == 0
    assert match.state is SimulationState.PAUSED


def test_illegal_engine_move_raises():
    match = Match(scripted(["e2e5"]))
    with pytest.raises(ValueError):
        match.step()


def test_default_engine_plays_legal_moves():
    match = Match()
    assert match.run(max_moves=2) == 2
    assert match.moves[0].startswith("1 WHITE: ")
    assert match.moves[1].startswith("2 BLACK: ")