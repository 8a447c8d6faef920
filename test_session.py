"""Tests for game sessions: create, move, query and sealing."""

import random

import pytest

from tictactoe import (
    AIPlayer,
    CellOccupied,
    GameConfig,
    GameMode,
    GameRecord,
    GameSession,
    GameStatus,
    InvalidMark,
    InvalidMode,
    InvalidPosition,
    Mark,
    NotActive,
    Tier,
    WrongTurn,
)


class ListRecorder:
    def __init__(self):
        self.records = []

    def record(self, game_record: GameRecord) -> None:
        self.records.append(game_record)


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def advance(self, seconds: float):
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def recorder() -> ListRecorder:
    return ListRecorder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def human_session(recorder, clock) -> GameSession:
    return GameSession.create(mode="human", recorder=recorder, clock=clock)


def test_create_starts_empty(human_session):
    view = human_session.query()
    assert view == {
        "board": [None] * 9,
        "turn": "X",
        "status": "active",
        "outcome": None,
        "mode": "human",
        "tier": None,
        "moves": 0,
    }


def test_query_is_idempotent(human_session):
    human_session.move("X", 4)
    assert human_session.query() == human_session.query()
    assert human_session.query()["moves"] == 1


def test_move_returns_updated_view(human_session):
    view = human_session.move("X", 0)
    assert view["board"][0] == "X"
    assert view["turn"] == "O"
    assert view["status"] == "active"


def test_scenario_win_is_sealed_and_recorded(human_session, recorder, clock):
    for mark, position in [("X", 0), ("O", 4), ("X", 1), ("O", 7), ("X", 2)]:
        clock.advance(2.0)
        view = human_session.move(mark, position)

    assert view["status"] == "completed"
    assert view["outcome"] == {"result": "win", "winner": "X", "line": [0, 1, 2]}

    assert len(recorder.records) == 1
    game_record = recorder.records[0]
    assert game_record.outcome.winner == Mark.X
    assert game_record.outcome.line == (0, 1, 2)
    assert [(m.player, m.position) for m in game_record.moves] == [
        (Mark.X, 0), (Mark.O, 4), (Mark.X, 1), (Mark.O, 7), (Mark.X, 2),
    ]
    assert game_record.mode == "human"
    assert game_record.tier is None
    assert game_record.total_moves == 5
    assert game_record.first_move_time == pytest.approx(2.0)
    assert game_record.average_move_time == pytest.approx(2.0)


def test_elapsed_time_is_per_move(human_session, recorder, clock):
    delays = [1.5, 3.0, 0.5, 4.0, 1.0]
    for delay, (mark, position) in zip(delays, [("X", 0), ("O", 4), ("X", 1), ("O", 7), ("X", 2)]):
        clock.advance(delay)
        human_session.move(mark, position)

    game_record = recorder.records[0]
    assert [m.elapsed for m in game_record.moves] == pytest.approx(delays)
    assert game_record.moves[-1].timestamp == pytest.approx(100.0 + sum(delays))


def test_draw_is_recorded(human_session, recorder):
    marks = ["X", "O"] * 5
    for mark, position in zip(marks, [0, 1, 2, 4, 3, 5, 7, 6, 8]):
        view = human_session.move(mark, position)

    assert view["outcome"] == {"result": "draw", "winner": None, "line": None}
    assert recorder.records[0].outcome.status == GameStatus.DRAW
    assert recorder.records[0].to_dict()["board"] == ["X", "O", "X", "X", "O", "O", "O", "X", "X"]


def test_finished_session_rejects_moves(human_session, recorder):
    for mark, position in [("X", 0), ("O", 4), ("X", 1), ("O", 7), ("X", 2)]:
        human_session.move(mark, position)
    before = human_session.query()

    with pytest.raises(NotActive):
        human_session.move("O", 8)

    assert human_session.query() == before
    assert len(recorder.records) == 1


@pytest.mark.parametrize(
    "mark, position, error",
    [
        ("O", 0, WrongTurn),
        ("X", 9, InvalidPosition),
        ("X", -1, InvalidPosition),
        ("Z", 0, InvalidMark),
    ],
)
def test_rejected_moves_change_nothing(human_session, mark, position, error):
    before = human_session.query()
    with pytest.raises(error):
        human_session.move(mark, position)
    assert human_session.query() == before


def test_occupied_cell_rejected(human_session):
    human_session.move("X", 4)
    before = human_session.query()
    with pytest.raises(CellOccupied) as excinfo:
        human_session.move("O", 4)
    assert excinfo.value.to_dict()["error"] == "cell_occupied"
    assert human_session.query() == before


def test_human_game_takes_no_tier():
    with pytest.raises(InvalidMode):
        GameSession.create(mode="human", tier="strong")


def test_unknown_mode_rejected():
    with pytest.raises(InvalidMark):
        GameSession.create(mode="online")


def test_computer_game_defaults_to_config_tier():
    session = GameSession.create(mode="computer")
    assert session.tier == Tier.MEDIUM
    assert session.query()["tier"] == "medium"

    session = GameSession.create(mode="computer", config=GameConfig(default_tier="weak"))
    assert session.tier == Tier.WEAK


def test_computer_replies_immediately():
    session = GameSession.create(mode=GameMode.COMPUTER, tier="strong")
    view = session.move("X", 0)
    assert view["board"][4] == "O"
    assert view["turn"] == "X"
    assert view["moves"] == 2
    assert session.history[-1].player == Mark.O


def test_computer_moves_cannot_be_played_by_human():
    session = GameSession.create(mode="computer", tier="strong")
    with pytest.raises(WrongTurn):
        session.move("O", 4)


class ComputerFirstConfig(GameConfig):
    COMPUTER_MARK = Mark.X


def test_computer_playing_x_opens_the_game(recorder):
    session = GameSession.create(
        mode="computer", tier="strong", recorder=recorder, config=ComputerFirstConfig()
    )
    view = session.query()
    assert view["moves"] == 1
    assert view["turn"] == "O"
    # Every opening draws, so the strong tier takes the lowest index
    assert view["board"][0] == "X"
    assert session.history[0].player == Mark.X

    with pytest.raises(WrongTurn):
        session.move("X", 4)

    view = session.move("O", 4)
    assert view["moves"] == 3
    assert view["turn"] == "O"
    assert view["board"][4] == "O"


def test_strong_computer_never_loses_to_greedy_human(recorder):
    session = GameSession.create(mode="computer", tier="strong", recorder=recorder)
    while session.is_active:
        position = session.state.get_empty_cells()[0]
        session.move("X", position)

    game_record = recorder.records[0]
    assert game_record.tier == "strong"
    assert game_record.mode == "computer"
    assert game_record.outcome.winner != Mark.X
    players = [m.player for m in game_record.moves]
    assert players == [Mark.X, Mark.O] * (len(players) // 2) + [Mark.X] * (len(players) % 2)


def test_seeded_weak_games_repeat():
    def play(seed):
        recorder = ListRecorder()
        session = GameSession.create(
            mode="computer",
            tier="weak",
            recorder=recorder,
            engine=AIPlayer(rng=random.Random(seed)),
        )
        while session.is_active:
            session.move("X", session.state.get_empty_cells()[-1])
        return [m.position for m in recorder.records[0].moves]

    assert play(3) == play(3)
