"""
CourtVision: model-fabricated basketball analytics with a narrated progress log.

The statistics returned here are generated by a language model, not scraped
or measured.
"""

from .agent import AnalysisAgent, parse_analysis
from .client import GeminiClient
from .metrics import effective_fg_pct, true_shooting_pct
from .models import AnalysisMode, AnalysisResult, EntityStat, ProgressStep, StepKind

__all__ = [
    "AnalysisAgent",
    "AnalysisMode",
    "AnalysisResult",
    "EntityStat",
    "GeminiClient",
    "ProgressStep",
    "StepKind",
    "effective_fg_pct",
    "parse_analysis",
    "true_shooting_pct",
]
