[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chessbot"
version = "0.1.0"
description = "A small chess engine with FEN/UCI move selection, alpha-beta search and self-play matches"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "engine", "minimax", "alpha-beta", "fen", "uci"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chessbot = "chessbot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["chessbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
