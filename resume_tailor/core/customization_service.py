"""
Caller-side integration of the pipeline.

The orchestrator only ever returns a validated record or raises. Falling back
to the untouched original resume is a decision made here, explicitly, and the
result says so.
"""

import copy
import json
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from resume_tailor.errors import CustomizationInProgressError, PipelineError
from resume_tailor.models import PipelineInput, ProgressCallback
from .langgraph_orchestrator import LangGraphOrchestrator

COMMON_KEYWORDS = ['javascript', 'python', 'react', 'node.js', 'sql', 'aws', 'agile', 'leadership']


@dataclass
class CustomizationResult:
    resume: Dict
    customized: bool
    error: Optional[PipelineError] = None

    @property
    def failed_stage(self) -> Optional[str]:
        return self.error.stage if self.error else None


def keyword_count(job_description: str, resume: Dict) -> int:
    """Counts common keywords that appear in both the job description and the resume."""
    job_text = job_description.lower()
    resume_text = json.dumps(resume).lower()
    return sum(1 for keyword in COMMON_KEYWORDS if keyword in job_text and keyword in resume_text)


def relevance_score(job_description: str, resume: Dict) -> int:
    return min(100, 75 + keyword_count(job_description, resume) * 3)


class ResumeCustomizationService:
    """
    Runs the pipeline for a caller, guarding against overlapping runs and
    turning a pipeline failure into a clearly flagged fallback result.
    """

    def __init__(self, orchestrator: Optional[LangGraphOrchestrator] = None):
        self.orchestrator = orchestrator or LangGraphOrchestrator()
        self._in_flight = threading.Lock()

    def customize(
        self,
        resume: Dict,
        job_description: str,
        industry_type: str,
        api_key: str,
        on_progress: ProgressCallback,
    ) -> CustomizationResult:
        if not api_key:
            raise ValueError("API key is required")
        if not resume or not job_description or not job_description.strip():
            raise ValueError("Resume and job description are required")

        if not self._in_flight.acquire(blocking=False):
            raise CustomizationInProgressError("Customization already in progress")
        try:
            on_progress(0, "Initializing...")
            pipeline_input = PipelineInput(resume, job_description.strip(), industry_type)
            try:
                customized = self.orchestrator.run(pipeline_input, api_key, on_progress)
            except PipelineError as e:
                logging.warning(f"AI customization failed, using original resume: {e}")
                on_progress(90, "AI customization failed, using original resume...")
                return CustomizationResult(resume=copy.deepcopy(resume), customized=False, error=e)

            logging.info(
                f"Resume customized: {keyword_count(job_description, customized)} shared keywords, "
                f"relevance {relevance_score(job_description, customized)}%."
            )
            return CustomizationResult(resume=customized, customized=True)
        finally:
            self._in_flight.release()
