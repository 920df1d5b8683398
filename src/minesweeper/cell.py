"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(revealed/flagged) and content (mine/number), plus the read-only
view handed out to callers.
"""
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

HIDDEN_VALUE = -1
FLAGGED_VALUE = -2
MINE_VALUE = 9


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only projection of a cell.

    Attributes:
        revealed: Whether the cell has been opened.
        flagged: Whether the cell carries a flag.
        mine: Whether the cell holds a mine (always False before the
            first reveal places mines).
        adjacent: Count of mines in neighboring cells (0-8).
    """

    revealed: bool
    flagged: bool
    mine: bool
    adjacent: int

    def to_observation(self) -> int:
        """
        Encode this view as a single integer.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.revealed:
            return MINE_VALUE if self.mine else self.adjacent
        if self.flagged:
            return FLAGGED_VALUE
        return HIDDEN_VALUE


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        revealed: Whether the cell has been opened.
        flagged: Whether the cell carries a flag.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    revealed: bool = False
    flagged: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.revealed or self.flagged:
            return False
        self.revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.revealed:
            return False
        self.flagged = not self.flagged
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.revealed and not self.flagged

    def view(self) -> CellView:
        """Project this cell into an immutable view."""
        return CellView(
            revealed=self.revealed,
            flagged=self.flagged,
            mine=self.is_mine,
            adjacent=self.adjacent_mines,
        )
