"""
Exception hierarchy for the resume customization pipeline.

Errors are layered the same way the pipeline is: the Gemini client raises
transport errors, the extractor raises extraction errors, each stage agent
wraps whatever went wrong into its own stage error, and the orchestrator
wraps stage errors into a single PipelineError that names the failed stage.
"""

from typing import Optional


class ResumeTailorError(Exception):
    """Base class for every error raised by resume_tailor."""


class ApiError(ResumeTailorError):
    """The Gemini endpoint answered with a non-success status or a provider error."""

    def __init__(self, http_status: Optional[int], provider_message: str):
        self.http_status = http_status
        self.provider_message = provider_message
        super().__init__(f"API request failed: {http_status} - {provider_message}")


class ExhaustedRetriesError(ResumeTailorError):
    """Every attempt in the retry budget failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"API call failed after {attempts} attempts. Last error: {last_error}")


class ExtractionError(ResumeTailorError):
    """No parseable, structurally valid JSON payload was found in a model reply."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to extract JSON: {reason}")


class StageError(ResumeTailorError):
    """Base class for the errors raised by the stage agents."""

    label = "Stage"

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"{self.label} failed: {cause}")


class JobAnalysisError(StageError):
    label = "Job analysis"


class StrategyError(StageError):
    label = "Strategy creation"


class OptimizationError(StageError):
    label = "Optimization application"


class ValidationRefinementError(StageError):
    label = "Quality validation"


class PipelineError(ResumeTailorError):
    """
    Raised by the orchestrator when a run aborts.

    Attributes:
        stage: One of "analyze", "strategize", "apply", "validate" or "finalize".
        cause: The underlying stage error (or, for "finalize", the validation error).
    """

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Agentic customization failed at '{stage}': {cause}")


class CustomizationInProgressError(ResumeTailorError):
    """A customization is already running for this service instance."""
