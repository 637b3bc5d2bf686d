from collections import deque

from takrules.core import Player, ROAD_KINDS, piece_kind, piece_player

NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def is_road_cell(board, player, row, col):
    stack = board.cells[row][col]
    if not stack:
        return False
    top = stack[-1]
    if piece_player(top) != player:
        return False
    return piece_kind(top) in ROAD_KINDS


def _start_edge(board, player):
    n = board.size
    if player == Player.ONE:
        return [(0, col) for col in range(n)]
    return [(row, 0) for row in range(n)]


def _on_far_edge(board, player, row, col):
    if player == Player.ONE:
        return row == board.size - 1
    return col == board.size - 1


def has_road(board, player):
    """Breadth-first search from the player's start edge to the opposite one.

    Player One connects row 0 to the last row, Player Two connects column 0
    to the last column.
    """
    n = board.size
    visited = [[False] * n for _ in range(n)]
    queue = deque()
    for row, col in _start_edge(board, player):
        if is_road_cell(board, player, row, col):
            visited[row][col] = True
            queue.append((row, col))
    while queue:
        row, col = queue.popleft()
        if _on_far_edge(board, player, row, col):
            return True
        for dr, dc in NEIGHBOURS:
            nr, nc = row + dr, col + dc
            if (
                0 <= nr < n
                and 0 <= nc < n
                and not visited[nr][nc]
                and is_road_cell(board, player, nr, nc)
            ):
                visited[nr][nc] = True
                queue.append((nr, nc))
    return False


def road_winner(board, mover):
    """Return the player holding a road, or None.

    When a single move completes roads for both players the mover wins.
    """
    one_road = has_road(board, Player.ONE)
    two_road = has_road(board, Player.TWO)
    if one_road and two_road:
        return Player(mover)
    if one_road:
        return Player.ONE
    if two_road:
        return Player.TWO
    return None


def road_connections(board, player):
    n = board.size
    links = []
    for row in range(n):
        for col in range(n):
            if not is_road_cell(board, player, row, col):
                continue
            # right and down only, so each pair appears once
            for dr, dc in ((0, 1), (1, 0)):
                nr, nc = row + dr, col + dc
                if nr < n and nc < n and is_road_cell(board, player, nr, nc):
                    links.append(((row, col), (nr, nc)))
    return links
