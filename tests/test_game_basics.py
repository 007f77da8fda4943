import pytest

from conftest import board_from
from ttt_engine.errors import InvalidMove
from ttt_engine.game_basics import (
    GameResult,
    Mark,
    Outcome,
    WIN_PATTERNS,
    apply_move,
    current_mark,
    deserialize_board,
    empty_board,
    empty_cells,
    evaluate,
    is_valid_state,
    serialize_board,
)


def test_first_completes_top_row():
    board = board_from("XX_OO____")
    after = apply_move(board, 2, Mark.FIRST)
    assert evaluate(after) == GameResult.win(Mark.FIRST, (0, 1, 2))


def test_full_board_without_line_is_draw():
    board = board_from("XOXXOOOXX")
    res = evaluate(board)
    assert res.outcome is Outcome.DRAW
    assert res.winner is None and res.line is None


def test_empty_board_in_progress():
    res = evaluate(empty_board())
    assert res == GameResult.in_progress()
    assert not res.is_terminal


def test_win_on_last_cell_is_win_not_draw():
    board = board_from("XOXOXOOXX")
    res = evaluate(board)
    assert res.outcome is Outcome.WIN
    assert res.winner is Mark.FIRST
    assert res.line == (0, 4, 8)


@pytest.mark.parametrize("line", WIN_PATTERNS)
def test_every_line_detected_for_second(line):
    cells = ["_"] * 9
    for i in line:
        cells[i] = "O"
    res = evaluate(board_from("".join(cells)))
    assert res == GameResult.win(Mark.SECOND, line)


def test_apply_move_does_not_mutate_input():
    board = empty_board()
    after = apply_move(board, 4, Mark.FIRST)
    assert board == empty_board()
    assert after[4] is Mark.FIRST
    assert empty_cells(after) == [0, 1, 2, 3, 5, 6, 7, 8]


def test_apply_move_rejects_occupied_cell():
    board = apply_move(empty_board(), 0, Mark.FIRST)
    with pytest.raises(InvalidMove) as exc:
        apply_move(board, 0, Mark.SECOND)
    assert exc.value.index == 0


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_apply_move_rejects_out_of_range(index):
    with pytest.raises(InvalidMove):
        apply_move(empty_board(), index, Mark.FIRST)


def test_serialize_round_trip_and_bad_strings():
    board = board_from("X_O_X_O__")
    assert serialize_board(board) == "102010200"
    assert deserialize_board("102010200") == board
    for bad in ["abc", "0123", "1020102003", "12345678x"]:
        with pytest.raises(ValueError):
            deserialize_board(bad)


def test_valid_state_rules():
    assert is_valid_state(empty_board())
    assert is_valid_state(board_from("XX_OO____"))
    assert not is_valid_state(board_from("XXX______"))  # counts
    assert not is_valid_state(board_from("XXXOOO___"))  # both win
    assert not is_valid_state(board_from("XXXOO_O__"))  # X won but O moved after


def test_current_mark_from_counts():
    assert current_mark(empty_board()) is Mark.FIRST
    assert current_mark(board_from("X________")) is Mark.SECOND
