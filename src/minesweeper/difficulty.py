"""
Difficulty settings for Minesweeper.

Board dimensions and mine counts come from one of three presets or from
custom values that pass validate_custom(). The storage-string encoding
of a chosen difficulty lives here too, so callers that remember the last
selection or track best times share one format.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

MIN_SIDE = 5
MAX_SIDE = 50

CUSTOM_LABEL = "Custom"
CUSTOM_PREFIX = "custom"


# ============================================================================
# Errors
# ============================================================================

class DifficultyError(ValueError):
    """Base class for rejected difficulty input."""


class InvalidDimension(DifficultyError):
    """Width or height outside the allowed range."""

    def __init__(self, field: str, minimum: int, maximum: int) -> None:
        self.field = field
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{field.capitalize()} must be between {minimum} and {maximum}."
        )


class InvalidMineCount(DifficultyError):
    """Mine count of zero, or not leaving at least one safe cell."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


# ============================================================================
# Settings
# ============================================================================

class DifficultyPreset(Enum):
    """Fixed difficulty tiers."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


@dataclass(frozen=True)
class DifficultySettings:
    """
    Board configuration for one game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Total mines to place.
        label: Display name.
    """

    width: int
    height: int
    mines: int
    label: str

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.width < 1 or self.height < 1:
            raise DifficultyError("Board dimensions must be positive.")
        if self.mines <= 0:
            raise InvalidMineCount("Mines must be at least 1.")
        if self.mines >= self.width * self.height:
            raise InvalidMineCount("Mines must be less than total cell count.")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mines


BEGINNER = DifficultySettings(9, 9, 10, "Beginner")
INTERMEDIATE = DifficultySettings(16, 16, 40, "Intermediate")
EXPERT = DifficultySettings(30, 16, 99, "Expert")

_PRESETS = {
    DifficultyPreset.BEGINNER: BEGINNER,
    DifficultyPreset.INTERMEDIATE: INTERMEDIATE,
    DifficultyPreset.EXPERT: EXPERT,
}


def preset(tier: DifficultyPreset) -> DifficultySettings:
    """Return the fixed settings for a preset tier."""
    return _PRESETS[tier]


def validate_custom(width: int, height: int, mines: int) -> DifficultySettings:
    """
    Validate custom board values.

    Args:
        width: Requested number of columns.
        height: Requested number of rows.
        mines: Requested mine count.

    Returns:
        Settings labeled "Custom".

    Raises:
        InvalidDimension: If width or height is outside [MIN_SIDE, MAX_SIDE].
        InvalidMineCount: If mines is 0 or not less than width * height.
    """
    if not MIN_SIDE <= width <= MAX_SIDE:
        raise InvalidDimension("width", MIN_SIDE, MAX_SIDE)
    if not MIN_SIDE <= height <= MAX_SIDE:
        raise InvalidDimension("height", MIN_SIDE, MAX_SIDE)
    if mines <= 0:
        raise InvalidMineCount("Mines must be at least 1.")
    if mines >= width * height:
        raise InvalidMineCount("Mines must be less than total cell count.")
    return DifficultySettings(width, height, mines, CUSTOM_LABEL)


# ============================================================================
# Stored Choice Encoding
# ============================================================================

@dataclass(frozen=True)
class DifficultyChoice:
    """
    A selected difficulty together with its storage keys.

    Attributes:
        settings: The validated board settings.
        best_key: Key under which the best time for this board is kept.
        storage_value: String that round-trips through parse_choice().
    """

    settings: DifficultySettings
    best_key: str
    storage_value: str


def choice_for_preset(tier: DifficultyPreset) -> DifficultyChoice:
    return DifficultyChoice(preset(tier), tier.value, tier.value)


def choice_for_custom(width: int, height: int, mines: int) -> DifficultyChoice:
    """Validate custom values and build their choice; raises DifficultyError."""
    settings = validate_custom(width, height, mines)
    return DifficultyChoice(
        settings,
        best_key=f"{CUSTOM_PREFIX}-{width}x{height}-{mines}",
        storage_value=f"{CUSTOM_PREFIX}:{width}:{height}:{mines}",
    )


def parse_choice(raw: Optional[str]) -> Optional[DifficultyChoice]:
    """
    Decode a stored difficulty string.

    Accepts a preset name or "custom:W:H:M". Anything unknown, malformed
    or failing validation yields None so the caller can fall back to a
    default.
    """
    if raw is None:
        return None
    try:
        return choice_for_preset(DifficultyPreset(raw))
    except ValueError:
        pass

    parts = raw.split(":")
    if len(parts) != 4 or parts[0] != CUSTOM_PREFIX:
        return None
    # int() alone would also take signs, spaces and underscores.
    if not all(part.isascii() and part.isdigit() for part in parts[1:]):
        return None
    width, height, mines = (int(part) for part in parts[1:])
    try:
        choice = choice_for_custom(width, height, mines)
    except DifficultyError:
        return None
    return replace(choice, storage_value=raw)


def is_new_best(elapsed_seconds: int, best_seconds: Optional[int]) -> bool:
    """Check whether a finished time beats the stored best."""
    return best_seconds is None or elapsed_seconds < best_seconds
