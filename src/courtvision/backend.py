"""
FastAPI backend for CourtVision.

Exposes:
- `/analyze` for a single blocking analysis call
- Task endpoints the Streamlit UI polls while the agent narrates
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .agent import AnalysisAgent, TaskStatus, TaskStore
from .client import GeminiClient
from .config import Settings
from .config import settings as default_settings
from .errors import RequestError
from .models import AnalysisRequest, AnalysisResult, ProgressStep
from .narrator import ProgressNarrator

log = logging.getLogger(__name__)

SUGGESTIONS = [
    "Top 10 PER leaders for 2024-25 season",
    "Curry vs Irving season efficiency comparison",
    "Lakers last 10 games scoring trend",
    "Most efficient scorers: PPG vs TS% matrix",
]


class AnalyzeResponse(BaseModel):
    result: AnalysisResult
    steps: List[ProgressStep]


def build_agent(cfg: Settings) -> AnalysisAgent:
    narrator = ProgressNarrator(
        min_delay=cfg.narrator_min_delay_s,
        max_delay=cfg.narrator_max_delay_s,
    )
    return AnalysisAgent(GeminiClient(cfg.gemini), narrator)


def create_app(agent: Optional[AnalysisAgent] = None, settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or default_settings
    owns_agent = agent is None
    agent = agent or build_agent(cfg)
    store = TaskStore(max_tasks=cfg.max_tasks)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_agent and isinstance(agent.backend, GeminiClient):
            await agent.backend.aclose()

    app = FastAPI(title="CourtVision", version="0.1.0", lifespan=lifespan)
    app.state.agent = agent
    app.state.task_store = store

    # Allow local UIs (Streamlit) to talk to the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/suggestions")
    async def suggestions() -> Dict[str, List[str]]:
        return {"suggestions": SUGGESTIONS}

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(payload: AnalysisRequest) -> AnalyzeResponse:
        """Run one analysis inline and return the result with every emitted step."""
        steps: List[ProgressStep] = []
        try:
            result = await agent.run(payload.query, steps.append)
        except RequestError as exc:
            raise HTTPException(
                status_code=502,
                detail={"message": exc.message, "steps": jsonable_encoder(steps)},
            ) from exc
        if not result.degraded:
            steps.append(agent.completion_step(result))
        return AnalyzeResponse(result=result, steps=steps)

    @app.post("/agent/start", response_model=TaskStatus)
    async def start_agent(payload: AnalysisRequest, background_tasks: BackgroundTasks) -> TaskStatus:
        """
        Start an analysis task and return the initial status.
        """
        task_id = str(uuid.uuid4())
        status = store.create(task_id)
        background_tasks.add_task(agent.run_task, store, task_id, payload.query)
        log.info("Task %s queued", task_id)
        return status

    @app.get("/agent/status/{task_id}", response_model=TaskStatus)
    async def get_status(task_id: str) -> TaskStatus:
        status = store.get(task_id)
        if status is None:
            raise HTTPException(status_code=404, detail="Unknown task_id")
        return status

    return app
