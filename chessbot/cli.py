"""Command line: read a FEN line from standard input, print the chosen move."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from chessbot.simulator import choose_move


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="chessbot",
        description="Read a position in FEN from standard input and print a move in UCI notation.",
    )
    parser.parse_args(argv)
    fen = sys.stdin.readline().rstrip("\r\n")
    try:
        move = choose_move(fen)
    except ValueError as error:
        print(f"chessbot: {error}", file=sys.stderr)
        return 1
    print(move)
    return 0


if __name__ == "__main__":
    sys.exit(main())