"""Chess position, legal move generation and game-end detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, NamedTuple, Optional, Union

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"
RANKS = "12345678"


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def other(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank direction in which this side's pawns advance."""
        return 1 if self is Color.WHITE else -1


class PieceType(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


class GameResult(Enum):
    WIN = auto()
    LOSE = auto()
    DRAW = auto()
    NONE = auto()


class GameResultReason(Enum):
    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    FIFTY_MOVE_RULE = auto()
    THREEFOLD_REPETITION = auto()
    NONE = auto()


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType

    @property
    def symbol(self) -> str:
        letter = self.type.value
        return letter.upper() if self.color is Color.WHITE else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        try:
            piece_type = PieceType(symbol.lower())
        except ValueError:
            raise ValueError(f"invalid piece symbol {symbol!r}") from None
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(color, piece_type)


def square_index(name: str) -> int:
    """Index (a1 = 0, h8 = 63) of a square given by name."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"invalid square {name!r}")
    return RANKS.index(name[1]) * 8 + FILES.index(name[0])


def square_name(square: int) -> str:
    if not 0 <= square < 64:
        raise ValueError(f"square out of range: {square}")
    return FILES[square % 8] + RANKS[square // 8]


_PROMOTION_TYPES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


@dataclass(frozen=True)
class Move:
    from_square: int
    to_square: int
    promotion: Optional[PieceType] = None

    def uci(self) -> str:
        text = square_name(self.from_square) + square_name(self.to_square)
        if self.promotion is not None:
            text += self.promotion.value
        return text

    def __str__(self) -> str:
        return self.uci()


def _offset(square: int, d_file: int, d_rank: int) -> Optional[int]:
    file, rank = square % 8 + d_file, square // 8 + d_rank
    if 0 <= file < 8 and 0 <= rank < 8:
        return rank * 8 + file
    return None


_KNIGHT_DELTAS = ((1, 2), (2, 1), (-1, 2), (-2, 1), (1, -2), (2, -1), (-1, -2), (-2, -1))
_KING_DELTAS = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1))
_ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def _step_table(deltas):
    return [
        [t for t in (_offset(sq, df, dr) for df, dr in deltas) if t is not None]
        for sq in range(64)
    ]


def _ray(square: int, d_file: int, d_rank: int) -> list[int]:
    ray = []
    current = _offset(square, d_file, d_rank)
    while current is not None:
        ray.append(current)
        current = _offset(current, d_file, d_rank)
    return ray


_KNIGHT_TARGETS = _step_table(_KNIGHT_DELTAS)
_KING_TARGETS = _step_table(_KING_DELTAS)
_ROOK_RAYS = [[_ray(sq, df, dr) for df, dr in _ROOK_DIRS] for sq in range(64)]
_BISHOP_RAYS = [[_ray(sq, df, dr) for df, dr in _BISHOP_DIRS] for sq in range(64)]
_SLIDER_RAYS = {
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.QUEEN: [r + b for r, b in zip(_ROOK_RAYS, _BISHOP_RAYS)],
}


class _CastlingRule(NamedTuple):
    color: Color
    king_from: int
    king_to: int
    rook_from: int
    rook_to: int
    must_be_empty: tuple[int, ...]
    must_be_safe: tuple[int, ...]


_CASTLING_RULES = {
    "K": _CastlingRule(Color.WHITE, 4, 6, 7, 5, (5, 6), (4, 5, 6)),
    "Q": _CastlingRule(Color.WHITE, 4, 2, 0, 3, (3, 2, 1), (4, 3, 2)),
    "k": _CastlingRule(Color.BLACK, 60, 62, 63, 61, (61, 62), (60, 61, 62)),
    "q": _CastlingRule(Color.BLACK, 60, 58, 56, 59, (59, 58, 57), (60, 59, 58)),
}
_CORNER_RIGHTS = {rule.rook_from: right for right, rule in _CASTLING_RULES.items()}


def _attacked(squares: list, square: int, by: Color) -> bool:
    """Whether ``square`` is attacked by a piece of colour ``by``."""
    for d_file in (-1, 1):
        origin = _offset(square, d_file, -by.forward)
        if origin is not None and squares[origin] == Piece(by, PieceType.PAWN):
            return True
    if any(squares[t] == Piece(by, PieceType.KNIGHT) for t in _KNIGHT_TARGETS[square]):
        return True
    if any(squares[t] == Piece(by, PieceType.KING) for t in _KING_TARGETS[square]):
        return True
    for rays, kinds in (
        (_ROOK_RAYS, (PieceType.ROOK, PieceType.QUEEN)),
        (_BISHOP_RAYS, (PieceType.BISHOP, PieceType.QUEEN)),
    ):
        for ray in rays[square]:
            for target in ray:
                piece = squares[target]
                if piece is None:
                    continue
                if piece.color is by and piece.type in kinds:
                    return True
                break
    return False


def _king_square(squares: list, color: Color) -> int:
    return squares.index(Piece(color, PieceType.KING))


def _apply(squares: list, move: Move, ep_square: Optional[int]) -> list:
    """Piece placement after ``move``, handling en passant, castling and promotion."""
    new = list(squares)
    piece = new[move.from_square]
    new[move.from_square] = None
    if (
        piece.type is PieceType.PAWN
        and move.to_square == ep_square
        and squares[move.to_square] is None
        and move.from_square % 8 != move.to_square % 8
    ):
        new[(move.from_square // 8) * 8 + move.to_square % 8] = None
    if piece.type is PieceType.KING and abs(move.to_square % 8 - move.from_square % 8) == 2:
        rank_base = (move.from_square // 8) * 8
        if move.to_square % 8 == 6:
            rook_from, rook_to = rank_base + 7, rank_base + 5
        else:
            rook_from, rook_to = rank_base, rank_base + 3
        new[rook_to] = new[rook_from]
        new[rook_from] = None
    new[move.to_square] = Piece(piece.color, move.promotion) if move.promotion else piece
    return new


SquareRef = Union[int, str]


def _to_index(square: SquareRef) -> int:
    if isinstance(square, str):
        return square_index(square)
    if not 0 <= square < 64:
        raise ValueError(f"square out of range: {square}")
    return square


class Board:
    """A chess position with its move history."""

    def __init__(self, fen: str = STARTING_FEN):
        fields = fen.split()
        if len(fields) not in (4, 6):
            raise ValueError(f"invalid FEN {fen!r}")
        self._squares = self._parse_placement(fields[0])
        try:
            self.turn = Color(fields[1])
        except ValueError:
            raise ValueError(f"invalid side to move {fields[1]!r}") from None
        if fields[2] != "-" and (
            not set(fields[2]) <= set(_CASTLING_RULES) or len(set(fields[2])) != len(fields[2])
        ):
            raise ValueError(f"invalid castling rights {fields[2]!r}")
        self.castling = frozenset() if fields[2] == "-" else frozenset(fields[2])
        self.ep_square = None if fields[3] == "-" else square_index(fields[3])
        if len(fields) == 6:
            try:
                self.halfmove_clock = int(fields[4])
                self.fullmove_number = int(fields[5])
            except ValueError:
                raise ValueError(f"invalid move counters in {fen!r}") from None
            if self.halfmove_clock < 0 or self.fullmove_number < 1:
                raise ValueError(f"invalid move counters in {fen!r}")
        else:
            self.halfmove_clock = 0
            self.fullmove_number = 1
        self._history = [self._key()]

    @staticmethod
    def _parse_placement(placement: str) -> list:
        rows = placement.split("/")
        if len(rows) != 8:
            raise ValueError(f"invalid piece placement {placement!r}")
        squares: list = [None] * 64
        for rank, row in zip(range(7, -1, -1), rows):
            file = 0
            for char in row:
                if char.isdigit():
                    file += int(char)
                else:
                    if file >= 8:
                        raise ValueError(f"rank too long in {placement!r}")
                    squares[rank * 8 + file] = Piece.from_symbol(char)
                    file += 1
            if file != 8:
                raise ValueError(f"rank {row!r} does not cover eight files")
        for color in Color:
            if squares.count(Piece(color, PieceType.KING)) != 1:
                raise ValueError(f"{color.name.lower()} must have exactly one king")
        return squares

    def _placement(self) -> str:
        rows = []
        for rank in range(7, -1, -1):
            row, empty = "", 0
            for piece in self._squares[rank * 8 : rank * 8 + 8]:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.symbol
            if empty:
                row += str(empty)
            rows.append(row)
        return "/".join(rows)

    def fen(self) -> str:
        castling = "".join(r for r in "KQkq" if r in self.castling) or "-"
        ep = "-" if self.ep_square is None else square_name(self.ep_square)
        return (
            f"{self._placement()} {self.turn.value} {castling} {ep} "
            f"{self.halfmove_clock} {self.fullmove_number}"
        )

    def __repr__(self) -> str:
        return f"Board({self.fen()!r})"

    def _key(self) -> tuple:
        ep = None
        if self.ep_square is not None:
            pawn = Piece(self.turn, PieceType.PAWN)
            for d_file in (-1, 1):
                origin = _offset(self.ep_square, d_file, -self.turn.forward)
                if origin is not None and self._squares[origin] == pawn:
                    ep = self.ep_square
        return (tuple(self._squares), self.turn, self.castling, ep)

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone._squares = list(self._squares)
        clone.turn = self.turn
        clone.castling = self.castling
        clone.ep_square = self.ep_square
        clone.halfmove_clock = self.halfmove_clock
        clone.fullmove_number = self.fullmove_number
        clone._history = list(self._history)
        return clone

    def piece_at(self, square: SquareRef) -> Optional[Piece]:
        return self._squares[_to_index(square)]

    def count(self, piece_type: PieceType, color: Color) -> int:
        return self._squares.count(Piece(color, piece_type))

    def is_check(self) -> bool:
        return _attacked(self._squares, _king_square(self._squares, self.turn), self.turn.other)

    def _targets(self, square: int, candidates: Iterable[int]) -> Iterator[Move]:
        for target in candidates:
            occupant = self._squares[target]
            if occupant is None or occupant.color is not self.turn:
                yield Move(square, target)

    def _slider_moves(self, square: int, rays) -> Iterator[Move]:
        for ray in rays:
            for target in ray:
                occupant = self._squares[target]
                if occupant is None:
                    yield Move(square, target)
                    continue
                if occupant.color is not self.turn:
                    yield Move(square, target)
                break

    def _pawn_moves(self, square: int) -> Iterator[Move]:
        forward = self.turn.forward
        last_rank = 7 if self.turn is Color.WHITE else 0
        start_rank = 1 if self.turn is Color.WHITE else 6

        def expand(target: int) -> Iterator[Move]:
            if target // 8 == last_rank:
                for promotion in _PROMOTION_TYPES:
                    yield Move(square, target, promotion)
            else:
                yield Move(square, target)

        one = _offset(square, 0, forward)
        if one is not None and self._squares[one] is None:
            yield from expand(one)
            two = _offset(square, 0, 2 * forward)
            if square // 8 == start_rank and two is not None and self._squares[two] is None:
                yield Move(square, two)
        for d_file in (-1, 1):
            target = _offset(square, d_file, forward)
            if target is None:
                continue
            occupant = self._squares[target]
            if (occupant is not None and occupant.color is not self.turn) or (
                occupant is None and target == self.ep_square
            ):
                yield from expand(target)

    def _castling_moves(self) -> Iterator[Move]:
        king = Piece(self.turn, PieceType.KING)
        rook = Piece(self.turn, PieceType.ROOK)
        for right in "KQkq":
            rule = _CASTLING_RULES[right]
            if right not in self.castling or rule.color is not self.turn:
                continue
            if self._squares[rule.king_from] != king or self._squares[rule.rook_from] != rook:
                continue
            if any(self._squares[sq] is not None for sq in rule.must_be_empty):
                continue
            if any(_attacked(self._squares, sq, self.turn.other) for sq in rule.must_be_safe):
                continue
            yield Move(rule.king_from, rule.king_to)

    def _pseudo_moves(self, types: Optional[frozenset]) -> Iterator[Move]:
        for square, piece in enumerate(self._squares):
            if piece is None or piece.color is not self.turn:
                continue
            if types is not None and piece.type not in types:
                continue
            if piece.type is PieceType.PAWN:
                yield from self._pawn_moves(square)
            elif piece.type is PieceType.KNIGHT:
                yield from self._targets(square, _KNIGHT_TARGETS[square])
            elif piece.type is PieceType.KING:
                yield from self._targets(square, _KING_TARGETS[square])
                yield from self._castling_moves()
            else:
                yield from self._slider_moves(square, _SLIDER_RAYS[piece.type][square])

    def _is_legal(self, move: Move) -> bool:
        squares = _apply(self._squares, move, self.ep_square)
        return not _attacked(squares, _king_square(squares, self.turn), self.turn.other)

    def legal_moves(self, piece_types: Optional[Iterable[PieceType]] = None) -> list[Move]:
        """Legal moves for the side to move, optionally only for the given piece types."""
        types = None if piece_types is None else frozenset(piece_types)
        return [m for m in self._pseudo_moves(types) if self._is_legal(m)]

    def parse_uci(self, text: str) -> Move:
        """The legal move written as ``text`` in UCI notation."""
        text = text.strip()
        if len(text) not in (4, 5):
            raise ValueError(f"invalid UCI move {text!r}")
        promotion = None
        if len(text) == 5:
            try:
                promotion = PieceType(text[4])
            except ValueError:
                raise ValueError(f"invalid promotion in {text!r}") from None
        move = Move(square_index(text[:2]), square_index(text[2:4]), promotion)
        if move not in self.legal_moves():
            raise ValueError(f"illegal move {text!r} in {self.fen()!r}")
        return move

    def push(self, move: Move) -> None:
        """Play ``move`` for the side to move."""
        piece = self._squares[move.from_square]
        if piece is None:
            raise ValueError(f"no piece on {square_name(move.from_square)}")
        is_capture = self._squares[move.to_square] is not None or (
            piece.type is PieceType.PAWN and move.to_square == self.ep_square
        )
        self._squares = _apply(self._squares, move, self.ep_square)
        if piece.type is PieceType.PAWN or is_capture:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        lost = {_CORNER_RIGHTS.get(move.from_square), _CORNER_RIGHTS.get(move.to_square)}
        if piece.type is PieceType.KING:
            lost |= {"K", "Q"} if piece.color is Color.WHITE else {"k", "q"}
        self.castling = self.castling - lost
        if piece.type is PieceType.PAWN and abs(move.to_square - move.from_square) == 16:
            self.ep_square = (move.from_square + move.to_square) // 2
        else:
            self.ep_square = None
        self._end_turn()

    def push_null(self) -> None:
        """Pass the turn to the opponent without moving."""
        self.ep_square = None
        self._end_turn()

    def _end_turn(self) -> None:
        if self.turn is Color.BLACK:
            self.fullmove_number += 1
        self.turn = self.turn.other
        self._history.append(self._key())

    def is_repetition(self) -> bool:
        """Whether the current position has now occurred three times."""
        window = self._history[-(self.halfmove_clock + 1) :]
        return window.count(self._history[-1]) >= 3

    def is_insufficient_material(self) -> bool:
        others = [
            (square, piece)
            for square, piece in enumerate(self._squares)
            if piece is not None and piece.type is not PieceType.KING
        ]
        if any(p.type not in (PieceType.KNIGHT, PieceType.BISHOP) for _, p in others):
            return False
        if len(others) <= 1:
            return True
        if len(others) == 2:
            (sq_a, a), (sq_b, b) = others
            return (
                a.type is PieceType.BISHOP
                and b.type is PieceType.BISHOP
                and a.color is not b.color
                and (sq_a // 8 + sq_a % 8) % 2 == (sq_b // 8 + sq_b % 8) % 2
            )
        return False

    def is_half_move_draw(self) -> bool:
        return self.halfmove_clock >= 100

    def half_move_draw_type(self) -> tuple[GameResultReason, GameResult]:
        if self.is_check() and not self.legal_moves():
            return GameResultReason.CHECKMATE, GameResult.LOSE
        return GameResultReason.FIFTY_MOVE_RULE, GameResult.DRAW

    def game_over(self) -> tuple[GameResultReason, GameResult]:
        """Reason and result from the side to move's view, or NONE twice."""
        if self.is_half_move_draw():
            return self.half_move_draw_type()
        if self.is_insufficient_material():
            return GameResultReason.INSUFFICIENT_MATERIAL, GameResult.DRAW
        if self.is_repetition():
            return GameResultReason.THREEFOLD_REPETITION, GameResult.DRAW
        if not self.legal_moves():
            if self.is_check():
                return GameResultReason.CHECKMATE, GameResult.LOSE
            return GameResultReason.STALEMATE, GameResult.DRAW
        return GameResultReason.NONE, GameResult.NONE