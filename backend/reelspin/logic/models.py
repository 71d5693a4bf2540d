"""Reel, stop schedule and session models."""
from enum import Enum

from pydantic import BaseModel, Field


class SpinPhase(str, Enum):
    """Spin controller phase."""
    IDLE = "IDLE"
    SPINNING = "SPINNING"
    STOPPING = "STOPPING"


class Reel(BaseModel):
    """
    Motion state of one column.

    position is the scroll offset in [0, strip_length). A reel with
    spinning=False and stopped=False is settling: its stop fired but the
    animation driver has not snapped it yet.
    """
    position: float = 0.0
    spinning: bool = False
    stopped: bool = True

    @property
    def settling(self) -> bool:
        return not self.spinning and not self.stopped


class StopEntry(BaseModel):
    """One scheduled reel stop."""
    reel_index: int
    fire_at: float


class SpinSession(BaseModel):
    """State of one spin, from debit to the last reel stop."""
    active: bool = False
    bet_amount_charged: int = 0
    started_at: float = 0.0
    spin_duration: float = 0.0
    stop_delay_per_reel: float = 0.0
    schedule: list[StopEntry] = Field(default_factory=list)
    stops_fired: int = 0

    @property
    def next_stop(self) -> StopEntry | None:
        if self.stops_fired < len(self.schedule):
            return self.schedule[self.stops_fired]
        return None


class SlotView(BaseModel):
    """Derived placement of one visible symbol slot."""
    symbol: str
    y: float


class ReelView(BaseModel):
    """Per-reel frame data handed to the rendering surface."""
    index: int
    position: float
    spinning: bool
    stopped: bool
    slots: list[SlotView] = Field(default_factory=list)


class FrameSnapshot(BaseModel):
    """Everything the rendering surface needs for one frame."""
    reels: list[ReelView] = Field(default_factory=list)
    phase: SpinPhase = SpinPhase.IDLE
    active: bool = False
    balance: int = 0
    bet: int = 0
    columns: int = 0
    rows: int = 0
    symbol_height: float = 0.0
    balance_text: str = ""
    bet_text: str = ""
