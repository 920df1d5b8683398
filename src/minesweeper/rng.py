"""
Random sources for mine placement.

The engine only needs uniform integers in [0, stop). Anything with a
randrange(stop) method works, including random.Random, which is what
tests use for reproducible boards.
"""
import threading
import time
from typing import Optional, Protocol


# ============================================================================
# Constants
# ============================================================================

_MASK64 = (1 << 64) - 1
_FALLBACK_SEED = 0x517CC1B727220A95


# ============================================================================
# Protocol
# ============================================================================

class RandomSource(Protocol):
    """Source of uniform integers in [0, stop)."""

    def randrange(self, stop: int) -> int:
        ...


# ============================================================================
# Xorshift Generator
# ============================================================================

class XorShift64:
    """
    64-bit xorshift generator.

    Fast and non-blocking, not cryptographically secure. The state is
    advanced under a lock so one instance can be shared process-wide.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = time.time_ns() ^ _FALLBACK_SEED
        seed &= _MASK64
        # Zero is a fixed point of xorshift.
        self._state = seed or _FALLBACK_SEED
        self._lock = threading.Lock()

    def next_u64(self) -> int:
        """Advance the state and return it."""
        with self._lock:
            value = self._state
            value ^= (value << 7) & _MASK64
            value ^= value >> 9
            value ^= (value << 8) & _MASK64
            self._state = value
        return value

    def randrange(self, stop: int) -> int:
        """
        Return an integer in [0, stop).

        Raises:
            ValueError: If stop is less than 1.
        """
        if stop < 1:
            raise ValueError(f"empty range for randrange({stop})")
        return self.next_u64() % stop


_default: Optional[XorShift64] = None
_default_lock = threading.Lock()


def default_source() -> XorShift64:
    """Return the process-wide generator, seeding it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = XorShift64()
        return _default
