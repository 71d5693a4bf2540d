"""Reel motion: per-frame position updates, snapping and slot placement."""
import math
from typing import Callable, Sequence

from reelspin.logic.models import Reel, SlotView


def scroll(position: float, distance: float, strip_length: float) -> float:
    """Scroll upward by distance, wrapping into [0, strip_length)."""
    return (position - distance + strip_length) % strip_length


def snap(position: float, symbol_height: float, strip_length: float) -> float:
    """
    Align position to the nearest symbol boundary.

    Halves round up. The result is folded back into [0, strip_length), so a
    reel just short of a full turn snaps to 0. Idempotent.
    """
    snapped = math.floor(position / symbol_height + 0.5) * symbol_height
    return snapped % strip_length


def advance(
    reels: Sequence[Reel],
    dt: float,
    *,
    speed: float,
    symbol_height: float,
    strip_length: float,
) -> list[Reel]:
    """
    Advance every reel by dt seconds.

    Spinning reels scroll by speed * dt. Reels that are not spinning are
    snapped to the symbol grid and marked stopped. Returns new Reel objects;
    the inputs are left untouched.
    """
    if dt < 0:
        raise ValueError(f"dt must be non-negative, got {dt}")
    advanced = []
    for reel in reels:
        if reel.spinning:
            advanced.append(
                reel.model_copy(
                    update={"position": scroll(reel.position, speed * dt, strip_length)}
                )
            )
        else:
            advanced.append(
                reel.model_copy(
                    update={
                        "position": snap(reel.position, symbol_height, strip_length),
                        "stopped": True,
                    }
                )
            )
    return advanced


def symbol_slots(
    position: float,
    symbols: Sequence[str],
    symbol_height: float,
    slot_count: int,
) -> list[SlotView]:
    """
    Derive where each visible slot of a reel is drawn.

    Slot k sits at ((k * h - position) mod L + L) mod L and shows
    symbols[k mod N].
    """
    count = len(symbols)
    strip_length = count * symbol_height
    return [
        SlotView(
            symbol=symbols[k % count],
            y=((k * symbol_height - position) % strip_length + strip_length)
            % strip_length,
        )
        for k in range(slot_count)
    ]


class AnimationDriver:
    """
    Per-frame tick for a spin controller's reels.

    Each tick first moves the reels by the time elapsed since the previous
    tick, then lets the controller fire any stops that are due. A reel whose
    stop fires during a tick is therefore snapped on the following tick.
    """

    def __init__(
        self,
        controller,
        speed: float,
        symbol_count: int,
        symbol_height: Callable[[], float],
    ):
        if symbol_count <= 0:
            raise ValueError("a reel strip needs at least one symbol")
        self.controller = controller
        self.speed = speed
        self.symbol_count = symbol_count
        self._symbol_height = symbol_height
        self._last_tick: float | None = None

    @property
    def strip_length(self) -> float:
        return self.symbol_count * self._symbol_height()

    def tick(self, now: float) -> float:
        """Run one frame at time now. Returns the dt that was applied."""
        dt = 0.0 if self._last_tick is None else max(now - self._last_tick, 0.0)
        self._last_tick = now
        self.controller.reels = advance(
            self.controller.reels,
            dt,
            speed=self.speed,
            symbol_height=self._symbol_height(),
            strip_length=self.strip_length,
        )
        self.controller.update(now)
        return dt
