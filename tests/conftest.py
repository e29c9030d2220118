"""
Shared fakes: a scripted analysis backend and a narrator that never waits.
"""

import json
import random
from typing import List, Optional

import pytest

from courtvision.agent import AnalysisAgent
from courtvision.errors import RequestError
from courtvision.narrator import ProgressNarrator
from courtvision.prompts import AnalysisPayload

RANKING_RESPONSE = json.dumps(
    {
        "mode": "RANKING",
        "summary": "x",
        "data": [
            {
                "name": "A",
                "pts": 10,
                "reb": 1,
                "ast": 1,
                "advanced": {"ts_pct": 0.5, "efg_pct": 0.5, "per": 15},
            }
        ],
    }
)


async def no_sleep(_delay: float) -> None:
    return None


class FakeBackend:
    """Returns a canned text (or raises) and records every payload it saw."""

    def __init__(self, text: str = RANKING_RESPONSE, error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.payloads: List[AnalysisPayload] = []

    async def generate(self, payload: AnalysisPayload) -> str:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.text


def make_agent(backend: FakeBackend) -> AnalysisAgent:
    return AnalysisAgent(backend, ProgressNarrator(sleep=no_sleep, rng=random.Random(7)))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def failing_backend() -> FakeBackend:
    return FakeBackend(error=RequestError("quota exhausted", status_code=429))
