import json
import logging

from resume_tailor.errors import ValidationRefinementError
from resume_tailor.models import (
    JobAnalysis,
    ModelCaller,
    OptimizationStrategy,
    ProgressCallback,
    ResumeRecord,
    SchemaKind,
)


class QualityValidatorAgent:
    """
    Final review pass over the optimized resume.

    Checks that keywords read naturally, descriptions are specific, language is
    consistent, the content is ATS friendly and achievements are quantified, and
    returns the refined resume in the same structure.
    """

    def _create_prompt(self, resume: ResumeRecord, job_analysis: JobAnalysis, strategy: OptimizationStrategy) -> str:
        return f"""
        You are a resume quality validator. Review the optimized resume and make final refinements.

        **Job Analysis:**
        ---
        {json.dumps(job_analysis, indent=2)}
        ---

        **Optimization Strategy:**
        ---
        {json.dumps(strategy, indent=2)}
        ---

        **Optimized Resume:**
        ---
        {json.dumps(resume, indent=2)}
        ---

        Perform final quality checks and refinements:
        1. Ensure all keywords are naturally integrated
        2. Verify descriptions are compelling and specific
        3. Check for consistency in formatting and language
        4. Ensure ATS compatibility
        5. Validate that achievements are quantified

        Do not invent facts. Return the final refined resume in the EXACT same JSON structure, and nothing else.

        **JSON Output:**
        """

    def run(
        self,
        resume: ResumeRecord,
        job_analysis: JobAnalysis,
        strategy: OptimizationStrategy,
        api_key: str,
        call_model: ModelCaller,
        progress: ProgressCallback,
    ) -> ResumeRecord:
        """
        Raises:
            ValidationRefinementError: Wrapping whatever made the stage fail.
        """
        try:
            progress(25, "Validating resume quality...")
            prompt = self._create_prompt(resume, job_analysis, strategy)

            progress(60, "Refining content quality...")
            refined_resume = call_model(api_key, prompt, SchemaKind.RESUME)

            progress(90, "Final validation checks...")
            progress(100, "Quality validation complete")
            logging.info("Quality validation complete.")
            return refined_resume
        except Exception as e:
            logging.error(f"Quality validation failed: {e}")
            raise ValidationRefinementError(e) from e
