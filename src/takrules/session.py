import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from takrules.core import (
    DEFAULT_SIZE,
    DRAW,
    Board,
    ErrorCode,
    GamePhase,
    IllegalMove,
    Player,
    Result,
    opponent,
    piece_player,
)
from takrules import roads, rules

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Inventory:
    stones: int
    capstones: int


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of a session that front-ends render from."""

    size: int
    board: tuple
    active_player: Player
    phase: GamePhase
    winner: object
    # indexed by Player
    inventories: Tuple[Inventory, Inventory]
    hand: tuple
    selected_cell: Optional[Coord]
    turn: int

    def stack(self, row, col):
        return self.board[row][col]

    def top_piece(self, row, col):
        stack = self.board[row][col]
        return stack[-1] if stack else None

    def total_pieces(self):
        on_board = sum(len(stack) for row in self.board for stack in row)
        in_reserve = sum(inv.stones + inv.capstones for inv in self.inventories)
        return on_board + len(self.hand) + in_reserve

    def height_map(self):
        return tuple(tuple(len(stack) for stack in row) for row in self.board)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    snapshot: GameSnapshot
    error: Optional[ErrorCode] = None
    message: Optional[str] = None


class GameSession:
    """Owns one game and exposes the command API.

    Every command either applies completely or is rejected with the state
    untouched; rejections come back as a failed ``CommandResult``.
    """

    def __init__(self, size=DEFAULT_SIZE):
        self.new_game(size)

    def new_game(self, size):
        self.board = Board.from_size(size)
        self.active_player = Player.ONE
        self.phase = GamePhase.INITIAL_PLACEMENT
        self.winner = None
        self.turn = 1
        self.hand = []
        self.selected_cell = None
        logger.info("New %dx%d game", size, size)
        return self._ok()

    @property
    def size(self):
        return self.board.size

    def current_state(self):
        return GameSnapshot(
            size=self.board.size,
            board=tuple(
                tuple(tuple(stack) for stack in row) for row in self.board.cells
            ),
            active_player=self.active_player,
            phase=self.phase,
            winner=self.winner,
            inventories=tuple(
                Inventory(
                    self.board.stones_remaining[player],
                    self.board.caps_remaining[player],
                )
                for player in Player
            ),
            hand=tuple(self.hand),
            selected_cell=self.selected_cell,
            turn=self.turn,
        )

    def place(self, row, col, stone_type):
        return self._run("place", self._place, row, col, stone_type)

    def pickup(self, row, col, count):
        return self._run("pickup", self._pickup, row, col, count)

    def move(self, destination, drop_counts):
        return self._run("move", self._move, tuple(destination), list(drop_counts))

    def cancel(self):
        return self._run("cancel", self._cancel)

    def legal_moves(self):
        if not self.hand or self.selected_cell is None:
            return {}
        return rules.legal_moves(self.board, self.selected_cell, self.hand)

    def pickup_limit(self, row, col):
        if self.phase != GamePhase.PLAYING or not self.board.inside(row, col):
            return 0
        top = self.board.top_piece(row, col)
        if top is None or piece_player(top) != self.active_player:
            return 0
        return rules.pickup_limit(self.board, row, col)

    def road_connections(self):
        return {player: roads.road_connections(self.board, player) for player in Player}

    def _run(self, name, command, *args):
        try:
            command(*args)
        except IllegalMove as e:
            logger.debug("Rejected %s%r: %s", name, args, e.message)
            return CommandResult(False, self.current_state(), e.code, e.message)
        logger.debug("Applied %s%r", name, args)
        return self._ok()

    def _ok(self):
        return CommandResult(True, self.current_state())

    def _require_not_over(self):
        if self.phase == GamePhase.GAME_OVER:
            raise IllegalMove(ErrorCode.WRONG_PHASE, "Game is over")

    def _require_idle(self):
        self._require_not_over()
        if self.hand:
            raise IllegalMove(ErrorCode.MOVE_IN_PROGRESS, "Finish or cancel the current move")

    def _place(self, row, col, stone_type):
        self._require_idle()
        opening = self.phase == GamePhase.INITIAL_PLACEMENT
        rules.place_piece(self.board, row, col, stone_type, self.active_player, opening)
        self.selected_cell = None
        self._end_turn()

    def _pickup(self, row, col, count):
        self._require_idle()
        if self.phase != GamePhase.PLAYING:
            raise IllegalMove(
                ErrorCode.WRONG_PHASE, "No stack moves allowed on the first two turns"
            )
        self.board.get(row, col)
        if count == 0:
            self.selected_cell = (row, col)
            return
        self.hand = rules.take_stack(self.board, row, col, count, self.active_player)
        self.selected_cell = (row, col)

    def _move(self, destination, drop_counts):
        self._require_not_over()
        if not self.hand or self.selected_cell is None:
            raise IllegalMove(ErrorCode.NO_PENDING_MOVE, "Nothing picked up")
        rules.drop_stack(
            self.board, self.selected_cell, destination, self.hand, drop_counts
        )
        self.hand = []
        self.selected_cell = None
        self._end_turn()

    def _cancel(self):
        self._require_not_over()
        if self.hand:
            row, col = self.selected_cell
            self.board.push(row, col, self.hand)
            self.hand = []
        elif self.selected_cell is None:
            raise IllegalMove(ErrorCode.NO_PENDING_MOVE, "No move to cancel")
        self.selected_cell = None

    def _end_turn(self):
        result = rules.evaluate(self.board, self.active_player)
        if result != Result.ONGOING:
            if result == Result.DRAW:
                self.winner = DRAW
            else:
                self.winner = Player.ONE if result == Result.ONE_WINS else Player.TWO
            self.phase = GamePhase.GAME_OVER
            logger.info("Game over on turn %d: %s", self.turn, result.name)
            return
        self.active_player = opponent(self.active_player)
        self.turn += 1
        if self.turn > 2 and self.phase == GamePhase.INITIAL_PLACEMENT:
            self.phase = GamePhase.PLAYING
