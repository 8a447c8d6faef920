"""Tests for win/draw detection and board classification."""

import pytest

from tictactoe import GameStatus, Mark, Outcome, WinChecker, board_from_list

X, O, _ = "X", "O", None


@pytest.fixture
def checker() -> WinChecker:
    return WinChecker()


@pytest.mark.parametrize(
    "cells, winner, line",
    [
        ([X, X, X,
          _, O, _,
          O, _, _], Mark.X, (0, 1, 2)),
        ([O, X, _,
          O, X, _,
          O, _, X], Mark.O, (0, 3, 6)),
        ([X, O, _,
          _, X, O,
          _, _, X], Mark.X, (0, 4, 8)),
        ([X, X, O,
          _, O, _,
          O, _, X], Mark.O, (2, 4, 6)),
        ([_, _, _,
          _, _, _,
          O, O, O], Mark.O, (6, 7, 8)),
    ],
)
def test_check_win_finds_line(checker, cells, winner, line):
    assert checker.check_win(board_from_list(cells)) == (winner, line)


def test_check_win_none_on_open_board(checker):
    board = board_from_list([X, O, _, _, X, _, _, _, O])
    assert checker.check_win(board) is None


def test_rows_scanned_before_columns(checker):
    board = board_from_list([X, X, X,
                             X, _, _,
                             X, _, _])
    assert checker.check_win(board) == (Mark.X, (0, 1, 2))


def test_columns_scanned_before_diagonals(checker):
    board = board_from_list([X, _, _,
                             X, X, _,
                             X, _, X])
    assert checker.check_win(board) == (Mark.X, (0, 3, 6))


def test_bottom_row_before_right_column(checker):
    board = board_from_list([_, _, O,
                             _, _, O,
                             O, O, O])
    assert checker.check_win(board) == (Mark.O, (6, 7, 8))


def test_full_board_without_line_is_draw(checker):
    board = board_from_list([X, O, X,
                             O, X, O,
                             O, X, O])
    assert checker.check_draw(board)
    assert checker.classify(board) == Outcome.draw()


def test_full_board_with_line_is_win_not_draw(checker):
    board = board_from_list([X, X, X,
                             O, O, X,
                             X, O, O])
    assert not checker.check_draw(board)
    outcome = checker.classify(board)
    assert outcome.status == GameStatus.WIN
    assert outcome.winner == Mark.X
    assert outcome.line == (0, 1, 2)


def test_open_board_is_in_progress(checker):
    board = board_from_list([X, _, _, _, O, _, _, _, _])
    assert not checker.check_draw(board)
    outcome = checker.classify(board)
    assert outcome == Outcome.in_progress()
    assert not outcome.is_terminal
    assert outcome.to_dict() is None


def test_outcome_to_dict():
    assert Outcome.win(Mark.O, (2, 4, 6)).to_dict() == {
        "result": "win",
        "winner": "O",
        "line": [2, 4, 6],
    }
    assert Outcome.draw().to_dict() == {"result": "draw", "winner": None, "line": None}


def test_accepts_plain_lists(checker):
    cells = [Mark.O, Mark.O, Mark.O, None, Mark.X, Mark.X, None, Mark.X, None]
    assert checker.check_win(cells) == (Mark.O, (0, 1, 2))
