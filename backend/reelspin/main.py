"""Reelspin FastAPI application."""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from reelspin.animation_loop import run_animation_loop
from reelspin.balance_store import BalanceStore, InMemoryBalanceStore, RedisBalanceStore
from reelspin.config import settings
from reelspin.config_hash import get_config_hash
from reelspin.errors import ErrorCode, GameError
from reelspin.events import EventBus
from reelspin.logic.machine import SlotMachine
from reelspin.middleware import ErrorHandlerMiddleware
from reelspin.protocol import (
    BetResponse,
    Configuration,
    GeometryRequest,
    GeometryResponse,
    InitResponse,
    SetBetRequest,
    SpinResponse,
)


logger = logging.getLogger(__name__)


def _build_store() -> BalanceStore:
    if settings.use_redis:
        store = RedisBalanceStore()
        store.connect()
        return store
    return InMemoryBalanceStore()


def create_app(machine: SlotMachine | None = None, animate: bool = True) -> FastAPI:
    """
    Create the HTTP host.

    machine defaults to one built from settings when the app starts. With
    animate, the driver ticks on the event loop at the machine's frame_rate.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage machine, balance store and animation loop lifecycle."""
        store = None
        if machine is None:
            store = _build_store()
            app.state.machine = SlotMachine.from_settings(
                store=store, events=EventBus()
            )
        else:
            app.state.machine = machine
        logger.info(
            "Machine ready: balance=%d bet=%d geometry=%dx%d",
            app.state.machine.wallet.get_balance(),
            app.state.machine.selector.current_bet(),
            app.state.machine.selector.columns,
            app.state.machine.selector.rows,
        )

        stop_event = asyncio.Event()
        loop_task = None
        if animate:
            loop_task = asyncio.create_task(
                run_animation_loop(
                    app.state.machine, app.state.machine.config.frame_rate, stop_event
                )
            )
        try:
            yield
        finally:
            stop_event.set()
            if loop_task is not None:
                await loop_task
            if isinstance(store, RedisBalanceStore):
                store.close()

    app = FastAPI(
        title="Reelspin",
        version="0.1.0",
        description="Reel-spin engine and wallet for an animated slot machine",
        lifespan=lifespan,
    )
    app.add_middleware(ErrorHandlerMiddleware)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return GameError(ErrorCode.INVALID_REQUEST, str(exc.errors())).to_response()

    def get_machine(request: Request) -> SlotMachine:
        return request.app.state.machine

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/init")
    async def init(request: Request) -> dict:
        """Return machine configuration and the current frame."""
        machine = get_machine(request)
        configuration = Configuration(
            availableAmounts=machine.wallet.available_amounts(),
            columnOptions=machine.selector.column_options,
            rowOptions=machine.selector.row_options,
            symbols=machine.symbols,
            spinDurationSeconds=machine.config.spin_duration_seconds,
            spinSpeed=machine.config.spin_speed,
            frameRate=machine.config.frame_rate,
            configHash=get_config_hash(machine.config),
        )
        return InitResponse(
            configuration=configuration, frame=machine.snapshot()
        ).model_dump()

    @app.get("/frame")
    async def frame(request: Request) -> dict:
        """Current reel positions and display strings."""
        return get_machine(request).snapshot().model_dump()

    @app.post("/spin")
    async def spin(request: Request) -> dict:
        """
        Spin at the current bet.

        The balance is debited before this returns. A spin requested while
        one is running is ignored (accepted=false) and charges nothing.
        """
        machine = get_machine(request)
        session = machine.spin()
        return SpinResponse(
            accepted=session is not None,
            betAmountCharged=session.bet_amount_charged if session else 0,
            balance=machine.wallet.get_balance(),
            frame=machine.snapshot(),
        ).model_dump()

    def _bet_response(machine: SlotMachine) -> dict:
        return BetResponse(
            bet=machine.selector.current_bet(),
            betIndex=machine.selector.bet_index,
        ).model_dump()

    def _geometry_response(machine: SlotMachine) -> dict:
        return GeometryResponse(
            columns=machine.selector.columns, rows=machine.selector.rows
        ).model_dump()

    @app.post("/bet/increase")
    async def increase_bet(request: Request) -> dict:
        machine = get_machine(request)
        machine.increase_bet()
        return _bet_response(machine)

    @app.post("/bet/decrease")
    async def decrease_bet(request: Request) -> dict:
        machine = get_machine(request)
        machine.decrease_bet()
        return _bet_response(machine)

    @app.put("/bet")
    async def set_bet(request: Request, body: SetBetRequest) -> dict:
        machine = get_machine(request)
        machine.set_bet(body.amount)
        return _bet_response(machine)

    @app.put("/geometry/columns")
    async def set_columns(request: Request, body: GeometryRequest) -> dict:
        machine = get_machine(request)
        machine.set_columns(body.value)
        return _geometry_response(machine)

    @app.put("/geometry/rows")
    async def set_rows(request: Request, body: GeometryRequest) -> dict:
        machine = get_machine(request)
        machine.set_rows(body.value)
        return _geometry_response(machine)

    return app


app = create_app()
