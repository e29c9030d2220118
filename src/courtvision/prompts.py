"""
Request builder: the fixed instruction prompt plus the caller's question.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

SYSTEM_INSTRUCTION = """\
You are a professional NBA Data Scientist and Autonomous Web Agent.
Your goal is to parse natural language queries into structured sports data.

ANALYSIS MODES:
- RANKING: List multiple players (e.g., "Top 10 scorers").
- TREND: Performance over time for one or more players (e.g., "LeBron's last 5 games").
- COMPARISON: Head-to-head stats (e.g., "Curry vs Lillard").

CALCULATION RULES:
- TS% (True Shooting Percentage) = PTS / (2 * (FGA + 0.44 * FTA))
- eFG% (Effective Field Goal Percentage) = (FGM + 0.5 * 3PM) / FGA
- PER (Player Efficiency Rating): Use a simplified linear weight approximation.

SIMULATION DATA:
Provide realistic 2024-25 season stats.
Return JSON only, matching the response schema. Percentages are fractions (0.61, not 61).
"""

_NUMBER = {"type": "NUMBER"}

# Gemini `responseSchema` dialect (OpenAPI subset, upper-case type names).
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "mode": {"type": "STRING", "enum": ["RANKING", "TREND", "COMPARISON"]},
        "summary": {"type": "STRING"},
        "data": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "name": {"type": "STRING"},
                    "team": {"type": "STRING"},
                    "pts": _NUMBER,
                    "reb": _NUMBER,
                    "ast": _NUMBER,
                    "fga": _NUMBER,
                    "fgm": _NUMBER,
                    "fta": _NUMBER,
                    "ftm": _NUMBER,
                    "tpa": _NUMBER,
                    "tpm": _NUMBER,
                    "date": {
                        "type": "STRING",
                        "description": "Required for TREND mode (YYYY-MM-DD)",
                    },
                    "advanced": {
                        "type": "OBJECT",
                        "properties": {
                            "ts_pct": _NUMBER,
                            "efg_pct": _NUMBER,
                            "per": _NUMBER,
                        },
                    },
                },
                "required": ["name", "pts", "reb", "ast", "advanced"],
            },
        },
    },
    "required": ["mode", "data", "summary"],
}


@dataclass(frozen=True)
class AnalysisPayload:
    system_instruction: str
    query: str
    response_schema: Dict[str, Any] = field(default_factory=lambda: RESPONSE_SCHEMA)


def build_request(query: str) -> AnalysisPayload:
    """Combine the fixed instruction with the caller's question."""
    if not query or not query.strip():
        raise ValueError("Query must not be empty.")
    return AnalysisPayload(system_instruction=SYSTEM_INSTRUCTION, query=query.strip())
