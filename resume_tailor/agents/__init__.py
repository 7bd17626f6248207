# This file makes the 'agents' directory a Python package,
# allowing for clean imports of the agent classes.

from .job_analyzer_agent import JobAnalyzerAgent
from .resume_optimizer_agent import ResumeOptimizerAgent
from .quality_validator_agent import QualityValidatorAgent
from .markdown_formatting_agent import MarkdownFormattingAgent

__all__ = [
    "JobAnalyzerAgent",
    "ResumeOptimizerAgent",
    "QualityValidatorAgent",
    "MarkdownFormattingAgent",
]
