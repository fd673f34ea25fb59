"""Zeitmessung und Log-Formatierung für whisper-paste."""

import logging
import time
from contextlib import contextmanager

from .logging import get_logger, get_session_id


def format_duration(seconds: float) -> str:
    """1.234 → '1.23s', 0.0421 → '42ms'."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"


def log_preview(text: str, max_length: int = 80) -> str:
    """Einzeilige, gekürzte Fassung eines Transkripts fürs Log."""
    flat = " ".join(text.split())
    if len(flat) <= max_length:
        return flat
    return flat[:max_length].rstrip() + "…"


class Stopwatch:
    """Gemessene Dauer eines timed_operation-Blocks (auch während er läuft)."""

    def __init__(self) -> None:
        self.started = time.perf_counter()
        self.stopped: float | None = None

    @property
    def elapsed(self) -> float:
        end = self.stopped if self.stopped is not None else time.perf_counter()
        return end - self.started


@contextmanager
def timed_operation(
    name: str,
    *,
    logger: logging.Logger | None = None,
    include_session: bool = True,
):
    """Misst einen Block und loggt die Dauer, auch wenn er mit Exception endet.

    Usage:
        with timed_operation("OpenAI-Transkription", logger=logger) as watch:
            text = client.transcribe(...)
        bytes_per_second = size / watch.elapsed
    """
    op_logger = logger or get_logger()
    label = f"[{get_session_id()}] {name}" if include_session else name
    watch = Stopwatch()
    try:
        yield watch
    finally:
        watch.stopped = time.perf_counter()
        op_logger.info(f"{label}: {format_duration(watch.elapsed)}")


__all__ = ["Stopwatch", "format_duration", "log_preview", "timed_operation"]
