from enum import IntEnum


class Player(IntEnum):
    ONE = 0
    TWO = 1


class StoneType(IntEnum):
    FLAT = 0
    STANDING = 1
    CAPSTONE = 2


class GamePhase(IntEnum):
    INITIAL_PLACEMENT = 0
    PLAYING = 1
    GAME_OVER = 2


class Result(IntEnum):
    ONGOING = 0
    ONE_WINS = 1
    TWO_WINS = 2
    DRAW = 3


DRAW = "draw"

FLAT = StoneType.FLAT
STANDING = StoneType.STANDING
CAPSTONE = StoneType.CAPSTONE

ROAD_KINDS = (FLAT, CAPSTONE)
BLOCKING_KINDS = (STANDING, CAPSTONE)

MIN_SIZE = 3
MAX_SIZE = 9
DEFAULT_SIZE = 5

# size -> (stones, capstones) per player
PIECE_TABLE = {
    3: (10, 0),
    4: (15, 0),
    5: (21, 1),
    6: (30, 1),
    7: (40, 2),
    8: (50, 2),
    9: (60, 2),
}


def opponent(player):
    return Player(1 - player)


def win_for(player):
    return Result.ONE_WINS if player == Player.ONE else Result.TWO_WINS


def make_piece(player, kind):
    return (int(player) << 2) | int(kind)


def piece_player(piece):
    return Player(piece >> 2)


def piece_kind(piece):
    return StoneType(piece & 0b11)


class ErrorCode(IntEnum):
    OUT_OF_BOUNDS = 1
    CELL_OCCUPIED = 2
    CELL_EMPTY = 3
    NOT_OWNER = 4
    OUT_OF_PIECES = 5
    INVALID_CARRY_COUNT = 6
    INVALID_DIRECTION = 7
    PATH_BLOCKED = 8
    DROP_COUNT_MISMATCH = 9
    WRONG_PHASE = 10
    NO_PENDING_MOVE = 11
    MOVE_IN_PROGRESS = 12


class IllegalMove(Exception):
    def __init__(self, code, message=None):
        super().__init__(message or code.name)
        self.code = code
        self.message = message or code.name


class Board:
    """N x N grid of stacks plus the per-player piece inventory.

    Stacks are plain lists ordered bottom to top. Rows grow downwards from
    row 0, which is Player One's starting edge.
    """

    def __init__(self, size, stones_per_player, caps_per_player):
        if size < MIN_SIZE or size > MAX_SIZE:
            raise ValueError(f"Board size must be between {MIN_SIZE} and {MAX_SIZE}")
        self.size = size
        self.cells = [[[] for _ in range(size)] for _ in range(size)]
        self.stones_remaining = [stones_per_player, stones_per_player]
        self.caps_remaining = [caps_per_player, caps_per_player]

    @classmethod
    def from_size(cls, size):
        if size not in PIECE_TABLE:
            raise ValueError(f"Unsupported board size: {size}")
        stones, caps = PIECE_TABLE[size]
        return cls(size, stones, caps)

    def clone(self):
        other = Board.__new__(Board)
        other.size = self.size
        other.cells = [[stack.copy() for stack in row] for row in self.cells]
        other.stones_remaining = self.stones_remaining.copy()
        other.caps_remaining = self.caps_remaining.copy()
        return other

    def inside(self, row, col):
        return 0 <= row < self.size and 0 <= col < self.size

    def _check(self, row, col):
        if not self.inside(row, col):
            raise IllegalMove(ErrorCode.OUT_OF_BOUNDS, f"({row}, {col}) is off the board")

    def get(self, row, col):
        self._check(row, col)
        return self.cells[row][col]

    def top_piece(self, row, col):
        stack = self.get(row, col)
        return stack[-1] if stack else None

    def is_empty(self, row, col):
        return not self.get(row, col)

    def push(self, row, col, pieces):
        self.get(row, col).extend(pieces)

    def pop_top(self, row, col, count):
        stack = self.get(row, col)
        if count < 0 or count > len(stack):
            raise IllegalMove(
                ErrorCode.INVALID_CARRY_COUNT,
                f"Cannot take {count} pieces from a stack of {len(stack)}",
            )
        if count == 0:
            return []
        taken = stack[-count:]
        del stack[-count:]
        return taken

    def is_full(self):
        for row in self.cells:
            for stack in row:
                if not stack:
                    return False
        return True

    def count_flats(self, player):
        total = 0
        for row in self.cells:
            for stack in row:
                if not stack:
                    continue
                top = stack[-1]
                if piece_player(top) == player and piece_kind(top) == FLAT:
                    total += 1
        return total

    def pieces_on_board(self):
        return sum(len(stack) for row in self.cells for stack in row)

    def out_of_pieces(self, player):
        return self.stones_remaining[player] + self.caps_remaining[player] == 0
