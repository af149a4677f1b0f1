"""
Caller-side orchestration of ATS scoring.

A ScoringSession holds what a score panel shows: the optional job description
and the last report. Re-scoring happens only when refresh() is called.
"""

from dataclasses import dataclass
from typing import Optional

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.contexts.scoring.ats_scorer import ATSScore, Judge, analyze_ats
from resumecraft.contexts.scoring.exceptions import RemoteJudgmentError
from resumecraft.contexts.scoring.judgment import request_judgment
from resumecraft.contexts.scoring.logger import _log_debug, _log_info

EMPTY_STATE_PROMPT = "Start building your resume to see its ATS compatibility score."

STATE_EMPTY = "empty"
STATE_SCORED = "scored"
STATE_ERROR = "error"


@dataclass(frozen=True)
class ScoreReport:
    """
    What the score panel displays.

    Attributes:
        state: "empty" (nothing to score yet), "scored", or "error"
        score: The ATS score when state is "scored"
        message: Empty-state prompt or error message
    """

    state: str
    score: Optional[ATSScore] = None
    message: str = ""


class ScoringSession:
    """
    Score panel state for one editing session.

    Attributes:
        job_description: Optional job posting text used for every refresh
        is_analyzing: True while a judgment request is outstanding
        last_report: Report from the most recent completed refresh
    """

    def __init__(self, job_description: Optional[str] = None, judge: Judge = request_judgment):
        self.job_description = job_description
        self.judge = judge
        self.is_analyzing = False
        self.last_report: Optional[ScoreReport] = None

    def set_job_description(self, job_description: Optional[str]) -> None:
        self.job_description = job_description or None

    def refresh(self, document: ResumeDocument) -> Optional[ScoreReport]:
        """
        Re-score a document.

        - Empty documents produce the empty-state prompt without calling the judge.
        - A refresh requested while one is in flight is ignored and the
          previous report is returned.
        - A remote failure produces an error report with the failure message.
        """
        if self.is_analyzing:
            _log_debug("Refresh ignored: analysis already in progress")
            return self.last_report

        if document.is_empty():
            self.last_report = ScoreReport(state=STATE_EMPTY, message=EMPTY_STATE_PROMPT)
            return self.last_report

        self.is_analyzing = True
        try:
            score = analyze_ats(document, self.job_description, judge=self.judge)
            report = ScoreReport(state=STATE_SCORED, score=score)
        except RemoteJudgmentError as e:
            _log_info(f"Showing analysis error: {e.message}")
            report = ScoreReport(state=STATE_ERROR, message=e.message)
        finally:
            self.is_analyzing = False

        self.last_report = report
        return report
