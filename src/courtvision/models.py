"""
Data model shared by the agent, the backend and the UI.

Everything in an `AnalysisResult` is generated by the language model. None of
it is measured data.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class AnalysisMode(str, Enum):
    RANKING = "RANKING"
    TREND = "TREND"
    COMPARISON = "COMPARISON"


class StepKind(str, Enum):
    REASONING = "reasoning"
    ACTION = "action"
    HEALING = "healing"
    OUTPUT = "output"


class ProgressStep(BaseModel):
    """A status line for the UI terminal. Carries no information about real work."""

    id: str
    timestamp: datetime
    kind: StepKind
    message: str


class AdvancedMetrics(BaseModel):
    ts_pct: Optional[float] = None
    efg_pct: Optional[float] = None
    per: Optional[float] = None


class EntityStat(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    name: str
    team: str = ""
    pts: float
    reb: float
    ast: float
    fga: Optional[float] = None
    fgm: Optional[float] = None
    fta: Optional[float] = None
    ftm: Optional[float] = None
    tpa: Optional[float] = None
    tpm: Optional[float] = None
    date: Optional[str] = None  # YYYY-MM-DD, TREND mode only
    advanced: Optional[AdvancedMetrics] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: AnalysisMode
    summary: str
    entries: List[EntityStat] = Field(
        default_factory=list,
        validation_alias=AliasChoices("entries", "data"),
    )
    # Set only when the model response could not be read.
    degraded: bool = False

    @classmethod
    def empty(cls, summary: str) -> "AnalysisResult":
        """Default result used when the model response cannot be read."""
        return cls(mode=AnalysisMode.RANKING, summary=summary, entries=[], degraded=True)


class AnalysisRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query must not be empty.")
        return value
