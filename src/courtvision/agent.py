"""
Analysis agent: turns a free-text basketball question into an AnalysisResult.

The agent:
- Emits one initial step, then makes a single model call.
- Plays back the scripted narration once the call has returned.
- Parses the model's JSON and derives missing shooting percentages.

Error policy:
- RequestError: one final `output` step is emitted, then the error propagates.
- ParseError: one final `output` step is emitted and an empty RANKING result
  is returned. The error never leaves `run`.
"""

import json
import logging
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from .client import AnalysisBackend
from .errors import ParseError, RequestError
from .metrics import fill_advanced
from .models import AnalysisResult, ProgressStep, StepKind
from .narrator import ProgressNarrator, StepCallback
from .prompts import build_request

log = logging.getLogger(__name__)

PARSE_FAILURE_SUMMARY = "Error processing request."


def _extract_json(text: str) -> Any:
    text = text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    # ```json ... ``` fences
    m = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group(1).strip())
        except json.JSONDecodeError:
            pass
    m = re.search(r"\{.*\}", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group())
        except json.JSONDecodeError:
            pass
    raise ParseError("Model response is not valid JSON.", raw_text=text)


def parse_analysis(text: Optional[str]) -> AnalysisResult:
    """Read model output as an AnalysisResult or raise ParseError."""
    if not text or not text.strip():
        raise ParseError("Model response was empty.")
    data = _extract_json(text)
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}.", raw_text=text)
    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"Unexpected response shape: {exc.error_count()} error(s).", raw_text=text) from exc
    return result.model_copy(
        update={"entries": [fill_advanced(e) for e in result.entries], "degraded": False}
    )


class AnalysisAgent:
    """Single entry point: `await agent.run(query, on_step)`."""

    def __init__(self, backend: AnalysisBackend, narrator: Optional[ProgressNarrator] = None) -> None:
        self.backend = backend
        self.narrator = narrator or ProgressNarrator()

    async def run(self, query: str, on_step: StepCallback) -> AnalysisResult:
        payload = build_request(query)
        log.info("Analysis requested: %r", payload.query[:120])

        on_step(
            self.narrator.step(
                StepKind.REASONING,
                "Agent initialized. Parsing query intent and identifying data sources...",
            )
        )

        try:
            text = await self.backend.generate(payload)
        except RequestError as exc:
            log.error("Analysis call failed: %s", exc.message)
            on_step(self.narrator.step(StepKind.OUTPUT, f"Agent encountered an error: {exc.message}"))
            raise

        await self.narrator.play(on_step)

        try:
            result = parse_analysis(text)
        except ParseError as exc:
            log.warning("Unreadable model response: %s", exc.message)
            on_step(self.narrator.step(StepKind.OUTPUT, f"Agent encountered an error: {exc.message}"))
            return AnalysisResult.empty(PARSE_FAILURE_SUMMARY)

        log.info("Analysis complete: mode=%s entries=%d", result.mode.value, len(result.entries))
        return result

    def completion_step(self, result: AnalysisResult) -> ProgressStep:
        return self.narrator.step(
            StepKind.OUTPUT,
            f"Success. Harvested {len(result.entries)} data points. Pipeline integrity check: 100%.",
        )

    async def run_task(self, store: "TaskStore", task_id: str, query: str) -> None:
        """Run a query for the polling API, recording progress on the task status."""
        status = store.get(task_id) or store.create(task_id)
        status.status = "running"

        try:
            result = await self.run(query, status.steps.append)
        except Exception as exc:  # pylint: disable=broad-except
            status.status = "error"
            status.error_message = getattr(exc, "message", None) or str(exc)
            if not isinstance(exc, RequestError):
                log.exception("Task %s failed", task_id)
            return

        status.result = result
        if result.degraded:
            status.status = "error"
            status.error_message = status.steps[-1].message
            return

        status.steps.append(self.completion_step(result))
        status.status = "completed"


class TaskStatus(BaseModel):
    task_id: str
    status: str  # pending, running, completed, error
    steps: List[ProgressStep] = []
    result: Optional[AnalysisResult] = None
    error_message: Optional[str] = None


@dataclass
class TaskStore:
    """In-memory task statuses for the UI. Oldest entries are evicted past `max_tasks`."""

    max_tasks: int = 100
    tasks: "OrderedDict[str, TaskStatus]" = field(default_factory=OrderedDict)

    def create(self, task_id: str) -> TaskStatus:
        status = TaskStatus(task_id=task_id, status="pending")
        self.tasks[task_id] = status
        while len(self.tasks) > self.max_tasks:
            self.tasks.popitem(last=False)
        return status

    def get(self, task_id: str) -> Optional[TaskStatus]:
        return self.tasks.get(task_id)
