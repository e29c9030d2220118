"""
Scripted progress narration for the UI terminal.

The steps below are display-only events. They are played back after the
model call has already finished and say nothing about what actually
happened: there is no scraping, no bot-protection bypass and no self-healing
anywhere in this code base.
"""

import asyncio
import random
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from .models import ProgressStep, StepKind

StepCallback = Callable[[ProgressStep], None]

SCRIPT: Tuple[Tuple[StepKind, str], ...] = (
    (StepKind.ACTION, "Targeting NBA.com/stats and Basketball-Reference dynamic tables..."),
    (StepKind.ACTION, "Bypassing Cloudflare protection via rotating stealth headers..."),
    (StepKind.HEALING, "Self-healing: Re-indexing dynamic table rows for 2024 schema change."),
    (
        StepKind.REASONING,
        "Extracting raw box scores and executing Python-based advanced metric calculations.",
    ),
    (StepKind.OUTPUT, "Data verification complete. Synchronizing result set..."),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProgressNarrator:
    """Plays `SCRIPT` to a callback with a random pause before each step."""

    def __init__(
        self,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
        min_delay: float = 0.7,
        max_delay: float = 1.2,
        script: Sequence[Tuple[StepKind, str]] = SCRIPT,
    ) -> None:
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range: {min_delay}..{max_delay}")
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._clock = clock
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.script = tuple(script)

    def step(self, kind: StepKind, message: str) -> ProgressStep:
        return ProgressStep(id=uuid.uuid4().hex, timestamp=self._clock(), kind=kind, message=message)

    async def play(self, on_step: StepCallback) -> None:
        for kind, message in self.script:
            await self._sleep(self._rng.uniform(self.min_delay, self.max_delay))
            on_step(self.step(kind, message))
