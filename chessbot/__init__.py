"""A small chess engine: board model, alpha-beta move search, command line and self-play."""

__version__ = "0.1.0"
__all__ = ["board", "simulator", "cli", "match"]