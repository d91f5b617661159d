"""A self-play match driven one move at a time by an engine."""

from __future__ import annotations

import time
from enum import Enum, auto
from typing import Callable, Optional

from chessbot.board import Board, GameResult, GameResultReason
from chessbot.simulator import choose_move

Engine = Callable[[str], str]


class SimulationState(Enum):
    PAUSED = auto()
    RUNNING = auto()


class Match:
    """Game state, move log and timing statistics for engine self-play."""

    def __init__(self, engine: Engine = choose_move):
        self.engine = engine
        self.reset()

    def reset(self) -> None:
        """Back to the starting position, paused, with cleared statistics."""
        self.board = Board()
        self.state = SimulationState.PAUSED
        self.time_spent_on_moves_ns = 0
        self.time_spent_last_move_ns = 0
        self.game_result = ""
        self.moves: list[str] = []

    def play(self) -> None:
        self.state = SimulationState.RUNNING

    def pause(self) -> None:
        self.state = SimulationState.PAUSED

    def step(self) -> bool:
        """Ask the engine for one move and play it; False if the game has ended."""
        if self.board.is_half_move_draw():
            reason, result = self.board.half_move_draw_type()
            self.game_result = f"{result.name} {reason.name}"
            return False
        reason, result = self.board.game_over()
        if result is not GameResult.NONE or reason is not GameResultReason.NONE:
            self.game_result = f"{result.name} {reason.name}"
            self.pause()
            return False

        turn = self.board.turn.name
        before = time.perf_counter_ns()
        move_text = self.engine(self.board.fen())
        after = time.perf_counter_ns()

        move_text = move_text.replace("\n", "")
        self.board.push(self.board.parse_uci(move_text))

        self.time_spent_on_moves_ns += after - before
        self.time_spent_last_move_ns = after - before
        self.moves.append(f"{self.board.fullmove_number} {turn}: {move_text}")
        return True

    def run(self, max_moves: Optional[int] = None) -> int:
        """Play moves while running, up to ``max_moves``; returns how many were played."""
        self.play()
        played = 0
        while self.state is SimulationState.RUNNING and (max_moves is None or played < max_moves):
            if not self.step():
                break
            played += 1
        return played