import pytest

from takrules.core import GamePhase, Player
from takrules.session import GameSession


def start_playing(session, cells, turn=3, to_move=Player.ONE):
    """Drop a hand-built position into a session that is past the opening."""
    for (row, col), stack in cells.items():
        session.board.cells[row][col] = list(stack)
    session.phase = GamePhase.PLAYING
    session.turn = turn
    session.active_player = to_move
    return session


@pytest.fixture
def session():
    return GameSession(5)


@pytest.fixture
def playing():
    def build(cells, size=5, **kwargs):
        return start_playing(GameSession(size), cells, **kwargs)

    return build
