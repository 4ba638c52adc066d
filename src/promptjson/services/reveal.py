"""Typewriter-style progressive reveal of text."""

import asyncio
from collections.abc import AsyncGenerator, Callable, Iterator


def _always_current() -> bool:
    return True


def reveal_steps(
    text: str,
    chars_per_tick: int = 1,
    is_current: Callable[[], bool] = _always_current,
) -> Iterator[str]:
    """
    Yield growing prefixes of text, one step per scheduling tick.

    The generator is cooperative: the caller drives it once per tick and it
    stops early as soon as is_current() reports that it has been superseded.

    Args:
        text: Text to reveal.
        chars_per_tick: Characters added per step.
        is_current: Returns False once a newer reveal has started.

    Yields:
        Prefixes of text, ending with the full text unless superseded.
    """
    step = max(1, chars_per_tick)
    position = 0
    while position < len(text):
        if not is_current():
            return
        position = min(len(text), position + step)
        yield text[:position]


async def stream_reveal(
    text: str,
    chars_per_tick: int = 1,
    tick_seconds: float = 1 / 60,
    is_current: Callable[[], bool] = _always_current,
) -> AsyncGenerator[str, None]:
    """
    Async counterpart of reveal_steps yielding each newly revealed chunk.

    Ticks are paced with asyncio.sleep; the stream ends early when superseded.
    """
    revealed = 0
    for prefix in reveal_steps(text, chars_per_tick, is_current):
        yield prefix[revealed:]
        revealed = len(prefix)
        await asyncio.sleep(tick_seconds)
