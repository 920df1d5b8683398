"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    BEGINNER,
    Cell,
    DifficultySettings,
    Game,
    validate_custom,
)


# ============================================================================
# Random Sources
# ============================================================================

class PlannedRandom:
    """
    Random source that steers mine placement onto chosen cells.

    Replays the engine's partial Fisher-Yates over the candidate list
    (every index except the first click) and answers each randrange()
    with the offset that swaps the next planned mine into place.
    """

    def __init__(self, mines: Sequence[int], first_idx: int, total: int) -> None:
        candidates = [i for i in range(total) if i != first_idx]
        self._picks: List[int] = []
        for i, target in enumerate(mines):
            pick = candidates.index(target)
            candidates[i], candidates[pick] = candidates[pick], candidates[i]
            self._picks.append(pick - i)
        self.calls: List[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        pick = self._picks[len(self.calls) - 1]
        assert 0 <= pick < stop
        return pick


def board_settings(width: int, height: int, mines: int) -> DifficultySettings:
    """Settings for boards smaller than the custom minimum."""
    return DifficultySettings(width, height, mines, "Test")


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def make_game() -> Callable[..., Game]:
    """
    Build a game whose first reveal at `first` places mines at `mines`.

    Indices are row-major (y * width + x).
    """
    def _make(
        width: int, height: int, mines: Iterable[int], first=(0, 0)
    ) -> Game:
        mines = list(mines)
        first_idx = first[1] * width + first[0]
        rng = PlannedRandom(mines, first_idx, width * height)
        return Game(board_settings(width, height, len(mines)), rng=rng)

    return _make


@pytest.fixture
def default_game() -> Game:
    """Create a beginner 9x9 game with 10 mines."""
    return Game(BEGINNER)


@pytest.fixture
def small_game() -> Game:
    """Create a 5x5 game with 3 mines."""
    return Game(validate_custom(5, 5, 3))


@pytest.fixture
def wall_game(make_game) -> Game:
    """
    5x5 board with a column of mines at x=3, first click at (0, 0).

    Columns 0-1 are zeros, column 2 and column 4 are numbered.
    """
    return make_game(5, 5, [3 + 5 * y for y in range(5)], first=(0, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Helpers
# ============================================================================

def all_views(game: Game):
    """Yield ((x, y), view) for every cell on the board."""
    for y in range(game.settings.height):
        for x in range(game.settings.width):
            yield (x, y), game.cell(x, y)


def count_mines(game: Game) -> int:
    return sum(1 for _, view in all_views(game) if view.mine)


def count_revealed(game: Game) -> int:
    return sum(1 for _, view in all_views(game) if view.revealed)
