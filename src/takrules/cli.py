import argparse
import logging
import re

from takrules.core import (
    CAPSTONE,
    DEFAULT_SIZE,
    DRAW,
    FLAT,
    MAX_SIZE,
    MIN_SIZE,
    STANDING,
    GamePhase,
    Player,
    piece_kind,
    piece_player,
)
from takrules.session import GameSession

PLAYER_NAMES = {
    Player.ONE: "Player One",
    Player.TWO: "Player Two",
}

PIECE_CHARS = {
    (Player.ONE, FLAT): "x",
    (Player.ONE, STANDING): "X",
    (Player.ONE, CAPSTONE): "C",
    (Player.TWO, FLAT): "o",
    (Player.TWO, STANDING): "O",
    (Player.TWO, CAPSTONE): "K",
}

KIND_CHARS = {"F": FLAT, "S": STANDING, "C": CAPSTONE}

_files = "abcdefghi"


def coord_to_indices(coord, size):
    """Turn ``b3`` into ``(row, col)``: the letter is the column, the number
    counts rows from 1 at the top."""
    m = re.fullmatch(r"([a-i])(\d)", coord.strip().lower())
    if not m:
        raise ValueError(f"Invalid coordinate: {coord!r}")
    col = _files.index(m.group(1))
    row = int(m.group(2)) - 1
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError("Coordinate out of bounds")
    return row, col


def indices_to_coord(row, col):
    return f"{_files[col]}{row + 1}"


def parse_command(text, size):
    parts = text.strip().split()
    if not parts:
        raise ValueError("Empty input")
    head = parts[0].lower()
    args = parts[1:]

    if head in ("q", "quit", "exit"):
        return ("quit",)
    if head in ("cancel", "moves"):
        return (head,)
    if head == "new":
        return ("new", int(args[0]) if args else size)
    if head == "place":
        if not args:
            raise ValueError("place needs a coordinate")
        row, col = coord_to_indices(args[0], size)
        kind_char = args[1].upper() if len(args) > 1 else "F"
        if kind_char not in KIND_CHARS:
            raise ValueError("Stone type must be F, S or C")
        return ("place", row, col, KIND_CHARS[kind_char])
    if head == "pickup":
        if not args:
            raise ValueError("pickup needs a coordinate")
        row, col = coord_to_indices(args[0], size)
        count = int(args[1]) if len(args) > 1 else None
        return ("pickup", row, col, count)
    if head == "move":
        if len(args) < 2:
            raise ValueError("move needs a destination and drop counts")
        dest = coord_to_indices(args[0], size)
        drops = [int(d) for d in args[1:]]
        return ("move", dest, drops)
    raise ValueError(f"Unknown command: {head}")


def format_board(snapshot):
    n = snapshot.size

    def stack_str(stack):
        if not stack:
            return "."
        return "(" + "".join(PIECE_CHARS[piece_player(p), piece_kind(p)] for p in stack) + ")"

    board_repr = [[stack_str(snapshot.board[r][c]) for c in range(n)] for r in range(n)]
    cell_width = max(len(cell) for row in board_repr for cell in row)

    def center(cell):
        return cell.center(cell_width)

    lines = ["   " + " ".join(center(_files[i]) for i in range(n))]
    for row in range(n):
        line = " ".join(center(board_repr[row][col]) for col in range(n))
        lines.append(f"{row + 1:2d} {line}")
    lines.append("")
    for player in Player:
        inv = snapshot.inventories[player]
        lines.append(f"{PLAYER_NAMES[player]}: stones={inv.stones}, caps={inv.capstones}")
    if snapshot.hand:
        held = "".join(PIECE_CHARS[piece_player(p), piece_kind(p)] for p in snapshot.hand)
        lines.append(f"In hand from {indices_to_coord(*snapshot.selected_cell)}: {held}")
    lines.append(f"Turn {snapshot.turn}, to move: {PLAYER_NAMES[snapshot.active_player]}")
    return "\n".join(lines)


def format_moves(moves):
    if not moves:
        return "No drops available."
    lines = []
    for (row, col), options in sorted(moves.items()):
        seqs = ", ".join(" ".join(str(n) for n in drops) for drops in options)
        lines.append(f"{indices_to_coord(row, col)}: {seqs}")
    return "\n".join(lines)


def execute(session, parsed):
    kind = parsed[0]
    if kind == "new":
        return session.new_game(parsed[1])
    if kind == "place":
        _, row, col, stone = parsed
        return session.place(row, col, stone)
    if kind == "pickup":
        _, row, col, count = parsed
        if count is None:
            # fall back to 1 so an empty or foreign stack reports its error
            count = session.pickup_limit(row, col) or 1
        return session.pickup(row, col, count)
    if kind == "move":
        _, dest, drops = parsed
        return session.move(dest, drops)
    return session.cancel()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Tak in the terminal")
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_SIZE,
        help=f"board size {MIN_SIZE}-{MAX_SIZE} (default {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="logging level (default WARNING)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        session = GameSession(args.size)
    except ValueError as e:
        print(e)
        return 1

    print("Commands:")
    print("  place b2 [F|S|C]    place a piece (flat by default)")
    print("  pickup b2 [n]       lift n pieces (as many as allowed by default)")
    print("  move b4 1 2         carry the hand towards b4 dropping 1 then 2")
    print("  moves / cancel / new [size] / quit")

    while True:
        snapshot = session.current_state()
        print()
        print(format_board(snapshot))
        if snapshot.phase == GamePhase.GAME_OVER:
            if snapshot.winner == DRAW:
                print("Game is a draw.")
            else:
                print(f"{PLAYER_NAMES[snapshot.winner]} wins.")
            print("Type 'new' to play again or 'quit' to exit.")

        try:
            text = input("> ")
        except EOFError:
            break
        try:
            parsed = parse_command(text, session.size)
        except ValueError as e:
            print("Input error:", e)
            continue

        if parsed[0] == "quit":
            break
        if parsed[0] == "moves":
            print(format_moves(session.legal_moves()))
            continue

        try:
            result = execute(session, parsed)
        except ValueError as e:
            print("Input error:", e)
            continue
        if not result.ok:
            print(f"Illegal move ({result.error.name}): {result.message}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
