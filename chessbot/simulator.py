"""Move selection: random play for black, shallow minimax search for white."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence

from chessbot.board import Board, Color, Move, PieceType

SEARCH_DEPTH = 5
DEFAULT_TIME_LIMIT_MS = 10000

# Starting values of the search as single-precision limits: the smallest
# positive float for the maximising side and the largest float for the other.
_FLOAT_SMALLEST_POSITIVE = 1.1754943508222875e-38
_FLOAT_MAX = 3.4028234663852886e38

_MATERIAL_WEIGHTS = (
    (PieceType.KING, 200),
    (PieceType.QUEEN, 9),
    (PieceType.ROOK, 5),
    (PieceType.BISHOP, 3),
    (PieceType.KNIGHT, 3),
    (PieceType.PAWN, 1),
)

_MOBILITY_WEIGHTS = (
    (PieceType.PAWN, 1),
    (PieceType.KNIGHT, 4),
    (PieceType.BISHOP, 4),
    (PieceType.ROOK, 2),
    (PieceType.QUEEN, 1),
    (PieceType.KING, 1),
)


def choose_move(
    fen: str,
    time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
    rng: Optional[random.Random] = None,
) -> str:
    """The move to play in the position ``fen``, in UCI notation, or "" if there is none.

    Black plays a random legal move; white searches. The time limit is accepted
    but not used by the search.
    """
    board = Board(fen)
    moves = board.legal_moves()
    if not moves:
        return ""
    if board.turn is Color.BLACK:
        move = (rng or random.Random()).choice(moves)
    else:
        move = find_best_move(board, SEARCH_DEPTH, moves)
    return move.uci()


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    moves: Sequence[Move],
) -> float:
    """Minimax value of ``board`` with alpha-beta pruning."""
    if depth == 0:
        return evaluate(board, moves)

    best = _FLOAT_SMALLEST_POSITIVE if maximizing else _FLOAT_MAX
    for move in moves:
        child = board.copy()
        child.push(move)
        value = minimax(child, depth - 1, alpha, beta, not maximizing, child.legal_moves())
        if maximizing:
            best = max(best, value)
            alpha = max(alpha, best)
        else:
            best = min(best, value)
            beta = min(beta, best)
        if beta <= alpha:
            break
    return best


def find_best_move(board: Board, depth: int, moves: Sequence[Move]) -> Optional[Move]:
    """The move among ``moves`` with the highest search value, or None if there are none."""
    best_value = -math.inf
    best_move: Optional[Move] = None
    for move in moves:
        child = board.copy()
        child.push(move)
        value = minimax(child, depth, 0.0, 0.0, False, child.legal_moves())
        if value > best_value:
            best_value = value
            best_move = move
    return best_move


def evaluate(board: Board, moves: Sequence[Move]) -> float:
    """Material plus mobility, negated when black is to move."""
    score = material_score(board) + mobility_score(board, moves)
    return score if board.turn is Color.WHITE else -score


def material_score(board: Board) -> float:
    """White's material minus black's, by weighted piece counts."""
    return float(
        sum(
            weight * (board.count(piece_type, Color.WHITE) - board.count(piece_type, Color.BLACK))
            for piece_type, weight in _MATERIAL_WEIGHTS
        )
    )


def _weighted_mobility(board: Board) -> int:
    return sum(weight * len(board.legal_moves([piece_type])) for piece_type, weight in _MOBILITY_WEIGHTS)


def mobility_score(board: Board, moves: Sequence[Move]) -> float:
    """Weighted move count of the side to move minus that of its opponent."""
    if not moves:
        return 0.0
    opponent = board.copy()
    opponent.push_null()
    return float(_weighted_mobility(board) - _weighted_mobility(opponent))