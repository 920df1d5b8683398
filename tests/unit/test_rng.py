"""
Unit tests for random sources.
"""
import threading

import pytest
from minesweeper import XorShift64, default_source


class TestXorShift64:
    """Test the xorshift generator."""

    def test_same_seed_same_sequence(self) -> None:
        """Seeded generators are reproducible."""
        a = XorShift64(seed=1234)
        b = XorShift64(seed=1234)
        assert [a.next_u64() for _ in range(10)] == [b.next_u64() for _ in range(10)]

    def test_values_fit_in_64_bits(self) -> None:
        """State never grows beyond 64 bits."""
        rng = XorShift64(seed=(1 << 64) - 1)
        for _ in range(1000):
            assert 0 < rng.next_u64() < (1 << 64)

    def test_zero_seed_does_not_stick(self) -> None:
        """A zero seed still produces a changing sequence."""
        rng = XorShift64(seed=0)
        values = {rng.next_u64() for _ in range(5)}
        assert len(values) == 5

    @pytest.mark.parametrize("stop", [1, 2, 7, 480])
    def test_randrange_in_bounds(self, stop: int) -> None:
        """randrange stays within [0, stop)."""
        rng = XorShift64(seed=99)
        for _ in range(200):
            assert 0 <= rng.randrange(stop) < stop

    def test_randrange_empty_range_raises(self) -> None:
        """stop < 1 is rejected."""
        with pytest.raises(ValueError):
            XorShift64(seed=1).randrange(0)

    def test_shared_across_threads(self) -> None:
        """Concurrent draws each advance the shared state once."""
        rng = XorShift64(seed=7)
        results = []

        def draw() -> None:
            for _ in range(100):
                results.append(rng.next_u64())

        threads = [threading.Thread(target=draw) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        expected = XorShift64(seed=7)
        assert sorted(results) == sorted(expected.next_u64() for _ in range(400))


def test_default_source_is_shared() -> None:
    """The process-wide source is created once."""
    assert default_source() is default_source()
