"""Fire-and-forget machine events for audio and other collaborators."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Protocol for event sinks (sound players, recorders)."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a machine event."""
        ...


class LoggingEventSink:
    """Default sink that logs machine events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log machine event."""
        logger.info("EVENT %s: %s", event_name, data)


@dataclass
class ReelStoppedEvent:
    """reel_stopped: a reel's scheduled stop fired."""

    reel_index: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {"reel_index": self.reel_index}


@dataclass
class ButtonActivatedEvent:
    """button_activated: any UI trigger was pressed."""

    action: str  # "spin" | "increase_bet" | "decrease_bet" | "set_bet" | ...

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {"action": self.action}


@dataclass
class SpinStartedEvent:
    """spin_started: a spin was accepted and the bet debited."""

    bet_amount: int
    balance_after: int
    columns: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "bet_amount": self.bet_amount,
            "balance_after": self.balance_after,
            "columns": self.columns,
        }


@dataclass
class SpinFinishedEvent:
    """spin_finished: the last reel stopped and the session closed."""

    bet_amount: int
    columns: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {"bet_amount": self.bet_amount, "columns": self.columns}


class EventBus:
    """Emits machine events to a sink without letting sink failures escape."""

    def __init__(self, sink: EventSink | None = None):
        self._sink = sink or LoggingEventSink()
        self._sink_errors = 0  # Counter for sink failures

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def set_sink(self, sink: EventSink) -> None:
        """Set the event sink (useful for testing)."""
        self._sink = sink

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures (a sound that cannot play) MUST NOT change machine state.
        """
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Event sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_reel_stopped(self, event: ReelStoppedEvent) -> None:
        self._safe_emit("reel_stopped", event.to_dict())

    def emit_button_activated(self, event: ButtonActivatedEvent) -> None:
        self._safe_emit("button_activated", event.to_dict())

    def emit_spin_started(self, event: SpinStartedEvent) -> None:
        self._safe_emit("spin_started", event.to_dict())

    def emit_spin_finished(self, event: SpinFinishedEvent) -> None:
        self._safe_emit("spin_finished", event.to_dict())
