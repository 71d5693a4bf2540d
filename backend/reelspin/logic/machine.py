"""Slot machine facade: the triggers the UI layer drives."""
from typing import Sequence

from reelspin.balance_store import BalanceStore, InMemoryBalanceStore
from reelspin.config import Settings, settings as default_settings
from reelspin.events import (
    ButtonActivatedEvent,
    EventBus,
    SpinStartedEvent,
)
from reelspin.logic.animation import AnimationDriver, symbol_slots
from reelspin.logic.bet_selector import BetSelector
from reelspin.logic.clock import Clock, MonotonicClock
from reelspin.logic.controller import SpinController
from reelspin.logic.layout import Layout, compute_layout
from reelspin.logic.models import FrameSnapshot, ReelView, SpinPhase, SpinSession
from reelspin.logic.wallet import Wallet


class SlotMachine:
    """
    Wallet, bet selector, spin controller and animation driver wired together.

    Every trigger emits button_activated before it runs, whether or not it
    then succeeds. Errors propagate to the caller with state unchanged.
    """

    def __init__(
        self,
        wallet: Wallet,
        symbols: Sequence[str],
        config: Settings | None = None,
        events: EventBus | None = None,
        clock: Clock | None = None,
    ):
        self.config = config or default_settings
        if not symbols:
            raise ValueError("a reel strip needs at least one symbol")
        self.symbols = list(symbols)
        self.wallet = wallet
        self.events = events or EventBus()
        self.clock = clock or MonotonicClock()
        self.selector = BetSelector(
            wallet.available_amounts(),
            column_options=self.config.column_options,
            row_options=self.config.row_options,
            columns=self.config.default_columns,
            rows=self.config.default_rows,
            initial_bet=self.config.initial_bet,
            is_busy=lambda: self.controller.active,
        )
        self.controller = SpinController(
            wallet,
            columns=self.selector.columns,
            spin_duration=self.config.spin_duration_seconds,
            events=self.events,
        )
        self.layout = self._compute_layout()
        self.driver = AnimationDriver(
            self.controller,
            speed=self.config.spin_speed,
            symbol_count=len(self.symbols),
            symbol_height=lambda: self.layout.symbol_height,
        )

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        store: BalanceStore | None = None,
        events: EventBus | None = None,
        clock: Clock | None = None,
    ) -> "SlotMachine":
        """Build a machine, loading the wallet from store."""
        config = config or default_settings
        wallet = Wallet.load(
            store or InMemoryBalanceStore(),
            available_amounts=config.available_amounts,
            default_balance=config.default_balance,
        )
        return cls(wallet, config.symbols, config=config, events=events, clock=clock)

    def _compute_layout(self) -> Layout:
        return compute_layout(
            self.selector.columns,
            self.selector.rows,
            machine_width=self.config.machine_width,
            machine_height=self.config.machine_height,
            border_width=self.config.border_width,
            symbol_height=self.config.symbol_height,
        )

    def _press(self, action: str) -> None:
        self.events.emit_button_activated(ButtonActivatedEvent(action=action))

    # === UI triggers ===

    def spin(self) -> SpinSession | None:
        """Spin at the current bet. None if a spin is already running."""
        self._press("spin")
        session = self.controller.spin(self.selector.current_bet(), self.clock.now())
        if session is not None:
            self.events.emit_spin_started(
                SpinStartedEvent(
                    bet_amount=session.bet_amount_charged,
                    balance_after=self.wallet.get_balance(),
                    columns=self.controller.columns,
                )
            )
        return session

    def increase_bet(self) -> int:
        self._press("increase_bet")
        return self.selector.increase_bet()

    def decrease_bet(self) -> int:
        self._press("decrease_bet")
        return self.selector.decrease_bet()

    def set_bet(self, amount: int) -> int:
        self._press("set_bet")
        return self.selector.set_bet(amount)

    def set_columns(self, n: int) -> int:
        self._press("set_columns")
        previous = self.selector.columns
        columns = self.selector.set_columns(n)
        if columns != previous:
            self.controller.resize(columns)
            self.layout = self._compute_layout()
        return columns

    def set_rows(self, n: int) -> int:
        self._press("set_rows")
        rows = self.selector.set_rows(n)
        self.layout = self._compute_layout()
        return rows

    # === Frame loop ===

    @property
    def phase(self) -> SpinPhase:
        return self.controller.phase

    def tick(self, now: float | None = None) -> float:
        """Advance one frame. Defaults to the machine clock's time."""
        return self.driver.tick(self.clock.now() if now is None else now)

    def snapshot(self) -> FrameSnapshot:
        """Per-frame data for the rendering surface."""
        symbol_height = self.layout.symbol_height
        slot_count = len(self.symbols) + self.selector.rows
        balance = self.wallet.get_balance()
        bet = self.selector.current_bet()
        return FrameSnapshot(
            reels=[
                ReelView(
                    index=index,
                    position=reel.position,
                    spinning=reel.spinning,
                    stopped=reel.stopped,
                    slots=symbol_slots(
                        reel.position, self.symbols, symbol_height, slot_count
                    ),
                )
                for index, reel in enumerate(self.controller.reels)
            ],
            phase=self.controller.phase,
            active=self.controller.active,
            balance=balance,
            bet=bet,
            columns=self.selector.columns,
            rows=self.selector.rows,
            symbol_height=symbol_height,
            balance_text=f"BALANCE: {balance}",
            bet_text=f"BET: {bet}",
        )
