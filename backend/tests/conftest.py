"""Pytest fixtures for backend tests."""
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from reelspin.balance_store import InMemoryBalanceStore, RedisBalanceStore
from reelspin.config import Settings
from reelspin.events import EventBus
from reelspin.logic.clock import ManualClock
from reelspin.logic.machine import SlotMachine
from reelspin.logic.wallet import Wallet
from reelspin.main import create_app


AVAILABLE_AMOUNTS = [5, 10, 25, 50, 100, 500, 1000]
SYMBOLS = ["cherry", "lemon", "orange", "plum", "banana", "bars", "bigwin", "seven", "watermelon"]


class MockRedis:
    """Mock Redis client for testing."""

    def __init__(self):
        self._store: dict[str, str] = {}
        self.operations: list[str] = []

    def get(self, key: str) -> str | None:
        self.operations.append(f"get:{key}")
        return self._store.get(key)

    def set(self, key: str, value: str, nx: bool = False, ex: int | None = None) -> bool | None:
        self.operations.append(f"set:{key}")
        if nx and key in self._store:
            return None
        self._store[key] = value
        return True

    def close(self) -> None:
        pass

    def clear(self) -> None:
        self._store.clear()
        self.operations.clear()


class FailingStore:
    """Balance store whose writes always fail."""

    def __init__(self, balance: int | None = None):
        self._balance = balance

    def load_balance(self) -> int | None:
        return self._balance

    def save_balance(self, balance: int) -> None:
        raise ConnectionError("store unavailable")


class RecordingEventSink:
    """Event sink that records every emission in order."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def get_events(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]

    def clear(self) -> None:
        self.events.clear()


class FailingEventSink:
    """Event sink that always raises, like a sound device that is gone."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        raise RuntimeError(f"Sink failure for {event_name}")


def make_settings(**overrides: Any) -> Settings:
    """Settings with round numbers: 1s spin, 100-unit symbols, 5x5."""
    values: dict[str, Any] = {
        "available_amounts": AVAILABLE_AMOUNTS,
        "default_balance": 50000,
        "column_options": [3, 4, 5, 6],
        "row_options": [3, 4, 5, 6],
        "default_columns": 5,
        "default_rows": 5,
        "symbols": SYMBOLS,
        "spin_duration_seconds": 1.0,
        "spin_speed": 600.0,
        "symbol_height": 100.0,
        "frame_rate": 60,
    }
    values.update(overrides)
    return Settings(**values)


def make_machine(
    balance: int = 50000,
    sink: Any = None,
    clock: ManualClock | None = None,
    **overrides: Any,
) -> SlotMachine:
    """Machine on an in-memory store and a manual clock."""
    return SlotMachine.from_settings(
        config=make_settings(**overrides),
        store=InMemoryBalanceStore(balance),
        events=EventBus(sink or RecordingEventSink()),
        clock=clock or ManualClock(),
    )


@pytest.fixture
def mock_redis() -> MockRedis:
    """Create a fresh mock Redis for each test."""
    return MockRedis()


@pytest.fixture
def redis_store_with_mock(mock_redis: MockRedis) -> Generator[RedisBalanceStore, None, None]:
    """Create RedisBalanceStore with mock client."""
    store = RedisBalanceStore(key="balance")
    store._client = mock_redis
    yield store
    mock_redis.clear()


@pytest.fixture
def store() -> InMemoryBalanceStore:
    return InMemoryBalanceStore()


@pytest.fixture
def wallet(store: InMemoryBalanceStore) -> Wallet:
    return Wallet(store, 50000, AVAILABLE_AMOUNTS)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def recording_sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def machine(clock: ManualClock, recording_sink: RecordingEventSink) -> SlotMachine:
    """5x5 machine with 50000 balance, a manual clock and a recording sink."""
    return make_machine(sink=recording_sink, clock=clock)


@pytest.fixture
def client(machine: SlotMachine) -> Generator[TestClient, None, None]:
    """TestClient over the machine fixture, animation loop disabled."""
    with TestClient(create_app(machine=machine, animate=False)) as test_client:
        yield test_client
