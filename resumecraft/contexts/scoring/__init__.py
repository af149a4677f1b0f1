"""
Scoring Context

Responsibilities:
- Computes local structural heuristics for a ResumeDocument
- Requests and strictly validates the remote ATS judgment
- Blends both into an ATSScore
- Tracks score panel state (empty prompt, last report, in-flight guard)

Owns: ATS scoring, remote judgment parsing, scoring sessions
Never: Falls back to heuristics-only scores when the remote judgment fails
"""

from resumecraft.contexts.scoring.ats_scorer import ATSScore, ScoreBreakdown, analyze_ats, blend_breakdown
from resumecraft.contexts.scoring.exceptions import RemoteJudgmentError
from resumecraft.contexts.scoring.judgment import RemoteJudgment, parse_judgment_response, request_judgment
from resumecraft.contexts.scoring.session import ScoreReport, ScoringSession

__all__ = [
    "ATSScore",
    "ScoreBreakdown",
    "analyze_ats",
    "blend_breakdown",
    "RemoteJudgment",
    "RemoteJudgmentError",
    "parse_judgment_response",
    "request_judgment",
    "ScoreReport",
    "ScoringSession",
]
