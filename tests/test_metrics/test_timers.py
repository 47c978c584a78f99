"""
Тесты таймера шагов EM.
"""

import time
import pytest
from palette_kmeans.metrics.timers import Timer


class TestTimer:
    """Тесты контекстного менеджера Timer."""

    def test_timer_measures_sleep(self):
        with Timer() as t:
            time.sleep(0.05)

        assert t.elapsed >= 0.05
        assert t.end > t.start
        assert abs(t.elapsed - (t.end - t.start)) < 1e-9

    def test_timer_reuse_overwrites(self):
        timer = Timer()

        with timer:
            time.sleep(0.02)
        first_start = timer.start

        with timer:
            pass

        assert timer.start > first_start
        assert timer.elapsed < 0.02

    def test_timer_records_on_exception(self):
        timer = Timer()
        with pytest.raises(RuntimeError):
            with timer:
                raise RuntimeError("boom")

        assert timer.elapsed >= 0
        assert timer.end >= timer.start

    def test_timer_nested(self):
        with Timer() as outer:
            time.sleep(0.02)
            with Timer() as inner:
                time.sleep(0.01)

        assert outer.elapsed > inner.elapsed
