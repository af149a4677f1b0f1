"""
ATS compatibility scorer.

Blends the remote judgment with the local heuristics:

1. The remote overall score S is the final overall score.
2. The five local sub-scores are rescaled by S / (weighted local average) so the
   displayed breakdown agrees with S instead of contradicting it. A zero local
   average leaves the sub-scores unscaled.
3. Missing keywords are the remote keywords absent from the resume text.
4. Suggestions pass through from the remote judgment unchanged.

The remote judgment is mandatory. If it fails, RemoteJudgmentError reaches the
caller; there is no heuristics-only score.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List, Optional

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.contexts.scoring.heuristics import (
    LocalBreakdown,
    compute_local_breakdown,
    find_missing_keywords,
    weighted_average,
)
from resumecraft.contexts.scoring.judgment import RemoteJudgment, request_judgment
from resumecraft.contexts.scoring.logger import log_score_result
from resumecraft.utils.event_logging import log_event

Judge = Callable[[ResumeDocument, Optional[str]], RemoteJudgment]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Displayed sub-scores, each an int in [0, 100]."""

    keywords: int
    formatting: int
    experience: int
    education: int
    skills: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ATSScore:
    """
    ATS compatibility result.

    Attributes:
        overall: Overall score in [0, 100] (the remote score)
        breakdown: Adjusted local sub-scores
        suggestions: Improvement suggestions from the remote judgment
        missing_keywords: Recommended keywords not found in the resume (at most 10)
        analysis: Free-text analysis from the remote judgment ("" if none)
    """

    overall: int
    breakdown: ScoreBreakdown
    suggestions: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    analysis: str = ""


def round_half_up(value: float) -> int:
    """Round to the nearest int, halves away from zero for non-negative values (72.5 -> 73)."""
    return int(math.floor(value + 0.5))


def adjustment_factor(local: LocalBreakdown, remote_score: float) -> float:
    """S / weighted local average, or 1 when the average is 0."""
    average = weighted_average(local)
    if average == 0:
        return 1.0
    return remote_score / average


def blend_breakdown(local: LocalBreakdown, remote_score: float) -> ScoreBreakdown:
    """
    Rescale local sub-scores toward the remote overall score.

    Each displayed value is round_half_up(min(local × factor, 100)), floored at 0.

    Example:
        >>> local = LocalBreakdown(keywords=50, formatting=100, experience=75, education=80, skills=90)
        >>> blend_breakdown(local, remote_score=75.25).experience
        75
    """
    factor = adjustment_factor(local, remote_score)
    return ScoreBreakdown(
        **{
            name: max(0, round_half_up(min(value * factor, 100)))
            for name, value in local.as_dict().items()
        }
    )


def analyze_ats(
    document: ResumeDocument,
    job_description: Optional[str] = None,
    judge: Judge = request_judgment,
) -> ATSScore:
    """
    Score a resume for ATS compatibility.

    Args:
        document: Resume to score (callers short-circuit empty documents)
        job_description: Optional job posting text
        judge: Source of the remote judgment (default: request_judgment)

    Returns:
        ATSScore

    Raises:
        RemoteJudgmentError: If the remote judgment fails (never swallowed)
    """
    judgment = judge(document, job_description)

    local = compute_local_breakdown(document, judgment.keywords)
    factor = adjustment_factor(local, judgment.score)

    score = ATSScore(
        overall=round_half_up(min(max(judgment.score, 0), 100)),
        breakdown=blend_breakdown(local, judgment.score),
        suggestions=list(judgment.suggestions),
        missing_keywords=find_missing_keywords(judgment.keywords, document.plaintext()),
        analysis=judgment.analysis,
    )

    log_score_result(score, weighted_average(local), factor)
    log_event(
        "ats_scored",
        source="scoring",
        overall=score.overall,
        with_job_description=bool(job_description),
    )
    return score
