# chessbot

A small chess engine with no dependencies. Give it a position in FEN notation
and it answers with a move in UCI notation.

White searches with minimax and alpha-beta pruning, scoring positions by
material and by piece mobility. Black plays a random legal move. If the side to
move has no legal move, the answer is an empty string.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

`chessbot` reads one FEN line from standard input and prints the chosen move:

```
echo "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1" | chessbot
```

If the FEN cannot be read, the command prints an error to standard error and
exits with status 1.

## Library use

```python
import random

from chessbot.board import Board
from chessbot.simulator import choose_move

fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR b KQkq - 0 1"
print(choose_move(fen, rng=random.Random(1)))  # a random legal move for black

board = Board(fen)
board.push(board.parse_uci("e7e5"))
print(board.fen())
```

`choose_move(fen, time_limit_ms=10000, rng=None)` takes an optional
`random.Random` for black's choice. The time limit is accepted but the search
does not use it; white always searches to a fixed depth.

`chessbot.board` provides `Board`, `Move`, `Piece`, `Color`, `PieceType`,
`GameResult` and `GameResultReason`. A `Board` reads and writes FEN
(`Board(fen)`, `fen()`), lists legal moves (`legal_moves()`, optionally limited
to some piece types), parses UCI moves (`parse_uci()`), plays moves and null
moves (`push()`, `push_null()`), and detects check, checkmate, stalemate,
insufficient material, threefold repetition and the fifty-move rule
(`is_check()`, `game_over()`, `is_half_move_draw()`, `half_move_draw_type()`).
Invalid FEN, squares and moves raise `ValueError`.

`chessbot.simulator` exposes the search pieces: `choose_move`, `minimax`,
`find_best_move`, `evaluate`, `material_score` and `mobility_score`.

## Self-play

`chessbot.match.Match` plays an engine against itself from the starting
position; by default the engine is `choose_move`, and any callable taking a FEN
and returning a UCI move can be given instead.

```python
from chessbot.match import Match

match = Match()
played = match.run(max_moves=20)
print(played, match.moves)
print(match.game_result)
```

`step()` asks the engine for one move and plays it, returning `False` once the
game has ended; the result is then set in `game_result` as text such as
`"DRAW STALEMATE"`. Each entry in `moves` reads like `"1 WHITE: e2e4"`.
`time_spent_on_moves_ns` and `time_spent_last_move_ns` hold the time spent in
engine calls. `play()` and `pause()` switch `state` between the
`SimulationState` values, `run()` plays while running, and `reset()` returns to
the starting position.

## What it does not do

There is no graphical board: matches run without a display, and the package
offers the move log and result text only. There is no UCI protocol loop
either; the command answers a single position and exits.