from takrules.core import (
    BLOCKING_KINDS,
    CAPSTONE,
    FLAT,
    STANDING,
    ErrorCode,
    IllegalMove,
    Player,
    Result,
    StoneType,
    make_piece,
    opponent,
    piece_kind,
    piece_player,
    win_for,
)
from takrules.roads import road_winner

DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))


def evaluate(board, mover):
    """Decide the game after a completed placement or drop.

    A road always beats the flat count. The flat count only runs once the
    board is full or either player has nothing left to place.
    """
    winner = road_winner(board, mover)
    if winner is not None:
        return win_for(winner)
    if (
        board.is_full()
        or board.out_of_pieces(Player.ONE)
        or board.out_of_pieces(Player.TWO)
    ):
        one_flats = board.count_flats(Player.ONE)
        two_flats = board.count_flats(Player.TWO)
        if one_flats > two_flats:
            return Result.ONE_WINS
        if two_flats > one_flats:
            return Result.TWO_WINS
        return Result.DRAW
    return Result.ONGOING


def place_piece(board, row, col, kind, mover, opening):
    """Put a new piece on an empty cell and charge the owner's inventory.

    During the opening the piece is a flat belonging to the mover's
    opponent. Returns the placed piece.
    """
    kind = StoneType(kind)
    if not board.is_empty(row, col):
        raise IllegalMove(ErrorCode.CELL_OCCUPIED, f"({row}, {col}) is not empty")

    if opening:
        if kind != FLAT:
            raise IllegalMove(
                ErrorCode.WRONG_PHASE, "Only flat placements allowed on the first two turns"
            )
        owner = opponent(mover)
        if board.stones_remaining[owner] <= 0:
            raise IllegalMove(ErrorCode.OUT_OF_PIECES, "No stones left")
        board.stones_remaining[owner] -= 1
    else:
        owner = Player(mover)
        if kind == CAPSTONE:
            if board.caps_remaining[owner] <= 0:
                raise IllegalMove(ErrorCode.OUT_OF_PIECES, "No capstones left")
            board.caps_remaining[owner] -= 1
        else:
            if board.stones_remaining[owner] <= 0:
                raise IllegalMove(ErrorCode.OUT_OF_PIECES, "No stones left")
            board.stones_remaining[owner] -= 1

    piece = make_piece(owner, kind)
    board.push(row, col, [piece])
    return piece


def pickup_limit(board, row, col):
    return min(board.size, len(board.get(row, col)))


def take_stack(board, row, col, count, mover):
    """Lift the top ``count`` pieces of a stack the mover controls."""
    stack = board.get(row, col)
    if count < 0:
        raise IllegalMove(ErrorCode.INVALID_CARRY_COUNT, "Count must not be negative")
    if not stack:
        raise IllegalMove(ErrorCode.CELL_EMPTY, f"({row}, {col}) is empty")
    limit = pickup_limit(board, row, col)
    if count == 0 or count > limit:
        raise IllegalMove(
            ErrorCode.INVALID_CARRY_COUNT, f"Can carry between 1 and {limit} pieces"
        )
    if piece_player(stack[-1]) != mover:
        raise IllegalMove(ErrorCode.NOT_OWNER, "Stack not controlled by player")
    return board.pop_top(row, col, count)


def direction_to(origin, destination):
    """Unit step and distance from origin to an orthogonal destination."""
    dr = destination[0] - origin[0]
    dc = destination[1] - origin[1]
    if (dr == 0) == (dc == 0):
        raise IllegalMove(
            ErrorCode.INVALID_DIRECTION, "Destination must be in a straight line"
        )
    step = (0 if dr == 0 else (1 if dr > 0 else -1), 0 if dc == 0 else (1 if dc > 0 else -1))
    return step, abs(dr) + abs(dc)


def _blocked(top, dropping, last_step):
    if top is None or piece_kind(top) not in BLOCKING_KINDS:
        return False
    flattens = (
        last_step
        and piece_kind(top) == STANDING
        and len(dropping) == 1
        and piece_kind(dropping[0]) == CAPSTONE
    )
    return not flattens


def check_drops(board, origin, destination, hand, drops):
    """Validate a drop sequence without touching the board.

    Returns the unit step of the move.
    """
    board.get(*destination)
    step, distance = direction_to(origin, destination)
    if not drops:
        raise IllegalMove(ErrorCode.DROP_COUNT_MISMATCH, "Drops required")
    if any(n <= 0 for n in drops):
        raise IllegalMove(ErrorCode.DROP_COUNT_MISMATCH, "Invalid drop count")
    if sum(drops) != len(hand):
        raise IllegalMove(ErrorCode.DROP_COUNT_MISMATCH, "Drops do not sum to hand size")
    if len(drops) != distance:
        raise IllegalMove(
            ErrorCode.DROP_COUNT_MISMATCH,
            f"{len(drops)} drops cannot reach a cell {distance} away",
        )

    row, col = origin
    remaining = list(hand)
    for i, n in enumerate(drops):
        row += step[0]
        col += step[1]
        dropping = remaining[:n]
        remaining = remaining[n:]
        if _blocked(board.top_piece(row, col), dropping, i == len(drops) - 1):
            raise IllegalMove(
                ErrorCode.PATH_BLOCKED, f"({row}, {col}) blocks the move"
            )
    return step


def drop_stack(board, origin, destination, hand, drops):
    """Validate then spread ``hand`` along the path, flattening a wall if a lone
    capstone ends on it."""
    step = check_drops(board, origin, destination, hand, drops)
    row, col = origin
    remaining = list(hand)
    for n in drops:
        row += step[0]
        col += step[1]
        dropping = remaining[:n]
        remaining = remaining[n:]
        stack = board.cells[row][col]
        if stack and piece_kind(stack[-1]) == STANDING:
            stack[-1] = make_piece(piece_player(stack[-1]), FLAT)
        stack.extend(dropping)


def compositions(total, parts):
    """
    Generate every ordered split of ``total`` pieces into ``parts`` drops:
    - each drop >= 1
    - sum(drops) == total
    """
    if parts <= 0 or total < parts:
        return
    if parts == 1:
        yield [total]
        return
    for first in range(1, total - parts + 2):
        for rest in compositions(total - first, parts - 1):
            yield [first] + rest


def legal_moves(board, origin, hand):
    """Map each reachable destination to the drop sequences that reach it."""
    moves = {}
    if not hand:
        return moves
    hand_size = len(hand)
    capstone_on_top = piece_kind(hand[-1]) == CAPSTONE
    row, col = origin
    for dr, dc in DIRECTIONS:
        for dist in range(1, hand_size + 1):
            r, c = row + dr * dist, col + dc * dist
            if not board.inside(r, c):
                break
            top = board.top_piece(r, c)
            kind = None if top is None else piece_kind(top)
            if kind == CAPSTONE:
                break
            if kind == STANDING:
                if capstone_on_top:
                    options = [d for d in compositions(hand_size, dist) if d[-1] == 1]
                    if options:
                        moves[(r, c)] = options
                break
            moves[(r, c)] = list(compositions(hand_size, dist))
    return moves
