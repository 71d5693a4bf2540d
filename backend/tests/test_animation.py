"""Reel motion tests: wrap-around scrolling, snapping, slot placement."""
import pytest

from reelspin.logic.animation import advance, scroll, snap, symbol_slots
from reelspin.logic.models import Reel
from tests.conftest import SYMBOLS


SYMBOL_HEIGHT = 100.0
STRIP_LENGTH = len(SYMBOLS) * SYMBOL_HEIGHT  # 900


def run_ticks(reel: Reel, ticks: int, speed: float, dt: float = 1.0) -> Reel:
    reels = [reel]
    for _ in range(ticks):
        reels = advance(
            reels, dt, speed=speed, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH
        )
    return reels[0]


class TestScroll:
    """Spinning reels move upward and wrap around the strip."""

    @pytest.mark.parametrize("initial", [0.0, 50.0, 450.0, 899.0])
    @pytest.mark.parametrize("speed", [1.0, 10.0, 37.0, 300.0])
    @pytest.mark.parametrize("ticks", [0, 1, 7, 60])
    def test_position_after_n_ticks(self, initial: float, speed: float, ticks: int):
        """After N ticks of speed s: (initial - N*s) mod strip_length."""
        reel = run_ticks(Reel(position=initial, spinning=True, stopped=False), ticks, speed)
        assert reel.position == pytest.approx((initial - ticks * speed) % STRIP_LENGTH)
        assert 0.0 <= reel.position < STRIP_LENGTH

    def test_scroll_wraps_below_zero(self):
        assert scroll(10.0, 30.0, STRIP_LENGTH) == pytest.approx(880.0)

    def test_scroll_larger_than_strip_stays_in_range(self):
        position = scroll(10.0, 2 * STRIP_LENGTH + 30.0, STRIP_LENGTH)
        assert position == pytest.approx(880.0)

    def test_frame_rate_independent(self):
        """Same elapsed time gives the same position at 30 fps and 60 fps."""
        start = Reel(position=0.0, spinning=True, stopped=False)
        at_30 = run_ticks(start, 30, speed=600.0, dt=1 / 30)
        at_60 = run_ticks(start, 60, speed=600.0, dt=1 / 60)
        assert at_30.position == pytest.approx(at_60.position)
        assert at_60.position == pytest.approx((0.0 - 600.0) % STRIP_LENGTH)

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            advance([Reel()], -0.1, speed=1.0, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH)


class TestSnap:
    """Stopped reels align to the symbol grid."""

    @pytest.mark.parametrize(
        "position,expected",
        [
            (0.0, 0.0),
            (49.0, 0.0),
            (50.0, 100.0),  # halves round up
            (149.9, 100.0),
            (351.0, 400.0),
            (860.0, 0.0),  # nearest boundary is a full turn
        ],
    )
    def test_snap_to_nearest_boundary(self, position: float, expected: float):
        assert snap(position, SYMBOL_HEIGHT, STRIP_LENGTH) == expected

    @pytest.mark.parametrize("position", [0.0, 12.5, 333.3, 550.0, 899.9])
    def test_snap_yields_grid_position_and_is_idempotent(self, position: float):
        reel = Reel(position=position, spinning=False, stopped=False)
        once = advance([reel], 1 / 60, speed=600.0, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH)
        twice = advance(once, 1 / 60, speed=600.0, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH)
        assert once[0].position % SYMBOL_HEIGHT == 0
        assert twice[0].position == once[0].position

    @pytest.mark.parametrize("position", [0.0, 47.0, 333.3, 561.0, 800.0])
    def test_snap_with_layout_derived_height(self, position: float):
        """93.6 is not exact in binary, so alignment is checked in slot units."""
        h = (600 * 0.8 - 6 * 2) / 5
        strip = len(SYMBOLS) * h
        reel = Reel(position=position, spinning=False, stopped=False)
        [snapped] = advance([reel], 1 / 60, speed=600.0, symbol_height=h, strip_length=strip)
        slots = snapped.position / h
        assert slots == pytest.approx(round(slots))
        assert 0.0 <= snapped.position < strip

    def test_snap_marks_settling_reel_stopped(self):
        reel = Reel(position=123.0, spinning=False, stopped=False)
        assert reel.settling
        [snapped] = advance([reel], 0.0, speed=600.0, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH)
        assert snapped.stopped is True
        assert snapped.settling is False

    def test_advance_does_not_mutate_input(self):
        reels = [Reel(position=10.0, spinning=True, stopped=False), Reel(position=42.0)]
        advance(reels, 1.0, speed=5.0, symbol_height=SYMBOL_HEIGHT, strip_length=STRIP_LENGTH)
        assert reels[0].position == 10.0
        assert reels[1].position == 42.0


class TestSymbolSlots:
    """Slot placement is derived from position."""

    def test_slots_at_rest(self):
        slots = symbol_slots(0.0, SYMBOLS, SYMBOL_HEIGHT, slot_count=len(SYMBOLS) + 5)
        assert len(slots) == 14
        assert [s.symbol for s in slots[:3]] == ["cherry", "lemon", "orange"]
        assert slots[9].symbol == "cherry"
        assert [s.y for s in slots[:3]] == [0.0, 100.0, 200.0]

    def test_slots_wrap_for_any_position(self):
        slots = symbol_slots(150.0, SYMBOLS, SYMBOL_HEIGHT, slot_count=len(SYMBOLS))
        assert slots[0].y == pytest.approx(750.0)
        assert slots[1].y == pytest.approx(850.0)
        assert slots[2].y == pytest.approx(50.0)
        assert all(0.0 <= s.y < STRIP_LENGTH for s in slots)
