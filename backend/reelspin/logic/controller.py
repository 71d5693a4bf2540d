"""Spin controller: bet validation, debit, and the staggered stop schedule."""
import logging

from reelspin.errors import SessionBusy
from reelspin.events import EventBus, ReelStoppedEvent, SpinFinishedEvent
from reelspin.logic.models import Reel, SpinPhase, SpinSession, StopEntry
from reelspin.logic.wallet import Wallet
from reelspin.validators import validate_denomination


logger = logging.getLogger(__name__)


def build_stop_schedule(
    started_at: float, spin_duration: float, columns: int
) -> list[StopEntry]:
    """
    Compute when each reel stops.

    All reels spin for spin_duration, then the stop of reel 0 is armed; each
    stop fires spin_duration / columns after it was armed and arms the next
    reel's. Reel i therefore stops at
    started_at + spin_duration + (i + 1) * spin_duration / columns and the
    last reel at started_at + 2 * spin_duration.
    """
    if columns <= 0:
        raise ValueError(f"columns must be positive, got {columns}")
    delay = spin_duration / columns
    return [
        StopEntry(reel_index=i, fire_at=started_at + spin_duration + (i + 1) * delay)
        for i in range(columns)
    ]


class SpinController:
    """
    Orchestrates one spin at a time over a row of reels.

    The session's active flag is the only guard against overlapping spins:
    spin() while active is a no-op, and resize() is refused.
    """

    def __init__(
        self,
        wallet: Wallet,
        columns: int,
        spin_duration: float,
        events: EventBus | None = None,
    ):
        if spin_duration < 0:
            raise ValueError(f"spin_duration must be non-negative, got {spin_duration}")
        self.wallet = wallet
        self.spin_duration = spin_duration
        self.events = events or EventBus()
        self.session = SpinSession()
        self.reels: list[Reel] = []
        self.resize(columns)

    @property
    def active(self) -> bool:
        return self.session.active

    @property
    def columns(self) -> int:
        return len(self.reels)

    @property
    def phase(self) -> SpinPhase:
        if not self.session.active:
            return SpinPhase.IDLE
        if self.session.stops_fired == 0:
            return SpinPhase.SPINNING
        return SpinPhase.STOPPING

    def resize(self, columns: int) -> None:
        """Rebuild the reel array for a new column count."""
        if self.session.active:
            raise SessionBusy("change columns")
        if columns <= 0:
            raise ValueError(f"columns must be positive, got {columns}")
        self.reels = [Reel() for _ in range(columns)]

    def spin(self, bet: int, now: float) -> SpinSession | None:
        """
        Start a spin charging bet.

        Returns None without debiting if a session is already active.
        Raises INVALID_DENOMINATION or INSUFFICIENT_FUNDS before touching
        any reel; the wallet debit is the last step that can fail.
        """
        if self.session.active:
            logger.debug("spin ignored: session already active")
            return None

        validate_denomination(bet, self.wallet.available_amounts())
        self.wallet.debit(bet)

        self.reels = [
            reel.model_copy(update={"spinning": True, "stopped": False})
            for reel in self.reels
        ]
        self.session = SpinSession(
            active=True,
            bet_amount_charged=bet,
            started_at=now,
            spin_duration=self.spin_duration,
            stop_delay_per_reel=self.spin_duration / self.columns,
            schedule=build_stop_schedule(now, self.spin_duration, self.columns),
        )
        logger.debug(
            "Spin armed: bet=%d columns=%d stops=%s",
            bet,
            self.columns,
            [entry.fire_at for entry in self.session.schedule],
        )
        return self.session

    def update(self, now: float) -> list[int]:
        """
        Fire every stop due at now, in schedule order.

        Returns the indices of the reels stopped by this call. Closes the
        session when the last reel's stop fires.
        """
        fired: list[int] = []
        session = self.session
        while session.active:
            entry = session.next_stop
            if entry is None or entry.fire_at > now:
                break
            self.reels[entry.reel_index] = self.reels[entry.reel_index].model_copy(
                update={"spinning": False}
            )
            session.stops_fired += 1
            fired.append(entry.reel_index)
            self.events.emit_reel_stopped(ReelStoppedEvent(reel_index=entry.reel_index))

            if session.next_stop is None:
                session.active = False
                self.events.emit_spin_finished(
                    SpinFinishedEvent(
                        bet_amount=session.bet_amount_charged, columns=self.columns
                    )
                )
        return fired
