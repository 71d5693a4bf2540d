"""Runs the animation driver on the asyncio event loop."""
import asyncio
import logging

from reelspin.logic.machine import SlotMachine


logger = logging.getLogger(__name__)


async def run_animation_loop(
    machine: SlotMachine,
    frame_rate: int,
    stop_event: asyncio.Event | None = None,
) -> int:
    """
    Tick machine frame_rate times per second until stop_event is set.

    Runs on the same event loop as the request handlers, so ticks and
    triggers never interleave mid-operation. A frame that raises is logged
    and skipped; the loop keeps running so the next tick can close the
    session. Returns the number of frames ticked successfully.
    """
    if frame_rate <= 0:
        raise ValueError(f"frame_rate must be positive, got {frame_rate}")
    stop_event = stop_event or asyncio.Event()
    interval = 1.0 / frame_rate
    frames = 0
    failed = 0
    logger.info("Animation loop started at %d fps", frame_rate)
    while not stop_event.is_set():
        try:
            machine.tick()
            frames += 1
        except Exception:
            failed += 1
            logger.exception("Animation frame %d failed", frames + failed)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
    logger.info("Animation loop stopped after %d frames (%d failed)", frames, failed)
    return frames
