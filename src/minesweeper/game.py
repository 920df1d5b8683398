"""
Game engine for Minesweeper.

Owns the grid, places mines lazily on the first reveal, runs flood-fill
and chord reveals, and tracks win/loss and elapsed time. Callers pass in
a monotonic "now" in milliseconds; the engine never reads a clock.
"""
import logging
import numbers
from collections import deque
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from .cell import Cell, CellView
from .difficulty import DifficultySettings
from .rng import RandomSource, default_source

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    READY = auto()
    RUNNING = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATES = frozenset({GameStatus.WON, GameStatus.LOST})


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Minesweeper game engine.

    Cells are stored row-major, index = y * width + x. Mines are placed
    on the first accepted reveal, so READY means "no mines yet" and every
    other status means they are down.
    """

    def __init__(
        self,
        settings: DifficultySettings,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Create a fresh board.

        Args:
            settings: Validated settings from a preset or validate_custom().
            rng: Random source for mine placement (default: shared
                process-wide xorshift generator).
        """
        self._rng = rng if rng is not None else default_source()
        self._init_state(settings)

    def _init_state(self, settings: DifficultySettings) -> None:
        if not isinstance(settings, DifficultySettings):
            raise TypeError(
                f"expected DifficultySettings, got {type(settings).__name__}"
            )
        self._settings = settings
        self._cells: List[Cell] = [Cell() for _ in range(settings.total_cells)]
        self._status = GameStatus.READY
        self._revealed_safe_cells = 0
        self._flagged_cells = 0
        self._started_at_ms: Optional[float] = None
        self._finished_at_ms: Optional[float] = None

    def reset(self, settings: Optional[DifficultySettings] = None) -> None:
        """Discard all state and start a new board (same settings if omitted)."""
        self._init_state(settings if settings is not None else self._settings)
        logger.debug(
            "reset to %s %dx%d with %d mines",
            self._settings.label,
            self._settings.width,
            self._settings.height,
            self._settings.mines,
        )

    # ========================================================================
    # Index Utilities (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> Optional[int]:
        """Convert a position to a cell index, or None if out of bounds."""
        if not (isinstance(x, numbers.Integral) and isinstance(y, numbers.Integral)):
            return None
        if not (0 <= x < self._settings.width and 0 <= y < self._settings.height):
            return None
        return y * self._settings.width + x

    def _neighbor_indices(self, idx: int) -> List[int]:
        """
        Get indices of the up-to-8 cells surrounding idx.

        Edges and corners yield fewer neighbors.
        """
        width = self._settings.width
        height = self._settings.height
        y, x = divmod(idx, width)

        neighbors = []
        for ny in range(max(y - 1, 0), min(y + 1, height - 1) + 1):
            for nx in range(max(x - 1, 0), min(x + 1, width - 1) + 1):
                if nx == x and ny == y:
                    continue
                neighbors.append(ny * width + nx)
        return neighbors

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def _place_mines(self, excluded_idx: int) -> None:
        """
        Place mines with a partial Fisher-Yates shuffle.

        Args:
            excluded_idx: Cell index to keep mine-free.
        """
        candidates = [i for i in range(len(self._cells)) if i != excluded_idx]
        for i in range(self._settings.mines):
            pick = i + self._rng.randrange(len(candidates) - i)
            candidates[i], candidates[pick] = candidates[pick], candidates[i]
            self._cells[candidates[i]].is_mine = True
        self._recompute_adjacency()

    def _recompute_adjacency(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for idx, cell in enumerate(self._cells):
            if cell.is_mine:
                cell.adjacent_mines = 0
                continue
            cell.adjacent_mines = sum(
                1 for n in self._neighbor_indices(idx) if self._cells[n].is_mine
            )

    # ========================================================================
    # Reveal Helpers (Mid-level)
    # ========================================================================

    def _flood_fill(self, start_idx: int) -> None:
        """Reveal start_idx and spread breadth-first through zero cells."""
        queue = deque([start_idx])
        while queue:
            idx = queue.popleft()
            cell = self._cells[idx]
            if not cell.reveal():
                continue
            if not cell.is_mine:
                self._revealed_safe_cells += 1
            if cell.adjacent_mines == 0:
                queue.extend(
                    n for n in self._neighbor_indices(idx)
                    if self._cells[n].is_hidden
                )

    def _lose(self, idx: int, now_ms: float) -> None:
        self._cells[idx].revealed = True
        self._status = GameStatus.LOST
        self._finished_at_ms = now_ms
        for cell in self._cells:
            if cell.is_mine:
                cell.revealed = True
        logger.debug("game lost at index %d after %d ms", idx, self.elapsed_ms(now_ms))

    def _check_win_condition(self, now_ms: float) -> None:
        """Win once every non-mine cell is revealed, flagging leftover mines."""
        if self._revealed_safe_cells != self._settings.safe_cells:
            return
        self._status = GameStatus.WON
        self._finished_at_ms = now_ms
        for cell in self._cells:
            if cell.is_mine and not cell.flagged:
                cell.flagged = True
                self._flagged_cells += 1
        logger.debug("game won after %d ms", self.elapsed_ms(now_ms))

    # ========================================================================
    # Game Actions (High-level)
    # ========================================================================

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False if the game is over, the
            position is invalid or the cell is revealed.
        """
        if self.is_terminal:
            return False
        idx = self._index(x, y)
        if idx is None:
            return False
        cell = self._cells[idx]
        if not cell.toggle_flag():
            return False
        self._flagged_cells += 1 if cell.flagged else -1
        return True

    def reveal(self, x: int, y: int, now_ms: float) -> bool:
        """
        Reveal a cell at the given position.

        On first accepted reveal, places mines avoiding this cell and
        starts the timer. A zero cell spreads to its neighbors. A mine
        ends the game as lost.

        Args:
            x: Column index.
            y: Row index.
            now_ms: Caller's monotonic clock in milliseconds.

        Returns:
            True if the click was accepted (even when it hit a mine).
        """
        if self.is_terminal:
            return False
        idx = self._index(x, y)
        if idx is None:
            return False
        cell = self._cells[idx]
        if cell.revealed or cell.flagged:
            return False

        if self._status is GameStatus.READY:
            self._place_mines(idx)
            self._started_at_ms = now_ms
            self._status = GameStatus.RUNNING
            logger.debug("mines placed, first reveal at (%d, %d)", x, y)

        if cell.is_mine:
            self._lose(idx, now_ms)
            return True

        self._flood_fill(idx)
        self._check_win_condition(now_ms)
        return True

    def chord_reveal(self, x: int, y: int, now_ms: float) -> bool:
        """
        Reveal all unflagged neighbors of a numbered cell.

        Only allowed when the number of flagged neighbors equals the
        cell's adjacent count exactly.

        Returns:
            True if at least one neighbor was revealed or a mine was hit.
        """
        if self.is_terminal:
            return False
        idx = self._index(x, y)
        if idx is None:
            return False
        selected = self._cells[idx]
        if not selected.revealed or selected.is_mine or selected.adjacent_mines == 0:
            return False

        neighbors = self._neighbor_indices(idx)
        flag_count = sum(1 for n in neighbors if self._cells[n].flagged)
        if flag_count != selected.adjacent_mines:
            return False

        changed = False
        for n in neighbors:
            neighbor = self._cells[n]
            if neighbor.revealed or neighbor.flagged:
                continue
            changed = True
            if neighbor.is_mine:
                self._lose(n, now_ms)
                return True
            self._flood_fill(n)

        if not changed:
            return False

        self._check_win_condition(now_ms)
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def settings(self) -> DifficultySettings:
        return self._settings

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def mines_placed(self) -> bool:
        return self._status is not GameStatus.READY

    @property
    def is_terminal(self) -> bool:
        """Check if game is won or lost."""
        return self._status in TERMINAL_STATES

    @property
    def revealed_safe_cells(self) -> int:
        return self._revealed_safe_cells

    @property
    def flagged_cells(self) -> int:
        return self._flagged_cells

    def flags_left(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        return self._settings.mines - self._flagged_cells

    def elapsed_ms(self, now_ms: float) -> int:
        """
        Milliseconds since the first reveal.

        Returns 0 before the game starts and freezes once it ends.
        """
        if self._started_at_ms is None:
            return 0
        end = self._finished_at_ms if self._finished_at_ms is not None else now_ms
        return int(max(end - self._started_at_ms, 0))

    def cell(self, x: int, y: int) -> Optional[CellView]:
        """Get a view of the cell at position, or None if invalid."""
        idx = self._index(x, y)
        if idx is None:
            return None
        return self._cells[idx].view()

    def observation(self) -> np.ndarray:
        """
        Get the board as a numpy array indexed [y, x].

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros(
            (self._settings.height, self._settings.width), dtype=np.int8
        )
        for idx, cell in enumerate(self._cells):
            y, x = divmod(idx, self._settings.width)
            obs[y, x] = cell.view().to_observation()
        return obs

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """
        Get positions that can still be revealed.

        Returns:
            List of (x, y) positions neither revealed nor flagged.
        """
        width = self._settings.width
        return [
            (idx % width, idx // width)
            for idx, cell in enumerate(self._cells)
            if cell.is_hidden
        ]
