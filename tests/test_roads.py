from takrules.core import CAPSTONE, FLAT, STANDING, Board, Player, make_piece
from takrules.roads import has_road, road_connections, road_winner

P1F = make_piece(Player.ONE, FLAT)
P1S = make_piece(Player.ONE, STANDING)
P1C = make_piece(Player.ONE, CAPSTONE)
P2F = make_piece(Player.TWO, FLAT)


def board_with(size, cells):
    board = Board.from_size(size)
    for (row, col), stack in cells.items():
        board.push(row, col, stack)
    return board


def test_column_of_flats_is_road_for_one():
    board = board_with(5, {(r, 2): [P1F] for r in range(5)})
    assert has_road(board, Player.ONE)
    assert not has_road(board, Player.TWO)
    assert road_winner(board, Player.TWO) == Player.ONE


def test_row_of_flats_is_road_for_two():
    board = board_with(5, {(2, c): [P2F] for c in range(5)})
    assert has_road(board, Player.TWO)
    assert not has_road(board, Player.ONE)
    assert road_winner(board, Player.ONE) == Player.TWO


def test_row_of_one_flats_is_not_a_road_for_one():
    board = board_with(5, {(2, c): [P1F] for c in range(5)})
    assert not has_road(board, Player.ONE)
    assert road_winner(board, Player.ONE) is None


def test_standing_stone_breaks_road():
    cells = {(r, 0): [P1F] for r in range(4)}
    cells[(2, 0)] = [P1S]
    board = board_with(4, cells)
    assert not has_road(board, Player.ONE)


def test_capstone_is_part_of_road():
    cells = {(r, 0): [P1F] for r in range(4)}
    cells[(2, 0)] = [P2F, P1C]
    board = board_with(4, cells)
    assert has_road(board, Player.ONE)


def test_buried_pieces_do_not_count():
    cells = {(r, 1): [P1F] for r in range(3)}
    cells[(1, 1)] = [P1F, P2F]
    board = board_with(3, cells)
    assert not has_road(board, Player.ONE)


def test_winding_road():
    path = [(0, 0), (1, 0), (1, 1), (1, 2), (2, 2), (3, 2), (3, 1), (4, 1)]
    board = board_with(5, {cell: [P1F] for cell in path})
    assert has_road(board, Player.ONE)


def test_diagonal_does_not_connect():
    board = board_with(3, {(0, 0): [P1F], (1, 1): [P1F], (2, 2): [P1F]})
    assert not has_road(board, Player.ONE)


def test_road_connections_lists_each_pair_once():
    board = board_with(3, {(0, 0): [P1F], (0, 1): [P1F], (1, 1): [P1C], (2, 2): [P1F]})
    links = road_connections(board, Player.ONE)
    assert sorted(links) == [((0, 0), (0, 1)), ((0, 1), (1, 1))]
    assert road_connections(board, Player.TWO) == []
