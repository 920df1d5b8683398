"""
Minesweeper game module.

Provides the game engine, difficulty settings and cell views.
"""
from .cell import Cell, CellView
from .difficulty import (
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DifficultyChoice,
    DifficultyError,
    DifficultyPreset,
    DifficultySettings,
    InvalidDimension,
    InvalidMineCount,
    choice_for_custom,
    choice_for_preset,
    is_new_best,
    parse_choice,
    preset,
    validate_custom,
)
from .game import Game, GameStatus
from .rng import RandomSource, XorShift64, default_source

__all__ = [
    "Cell",
    "CellView",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DifficultyChoice",
    "DifficultyError",
    "DifficultyPreset",
    "DifficultySettings",
    "InvalidDimension",
    "InvalidMineCount",
    "choice_for_custom",
    "choice_for_preset",
    "is_new_best",
    "parse_choice",
    "preset",
    "validate_custom",
    "Game",
    "GameStatus",
    "RandomSource",
    "XorShift64",
    "default_source",
]
