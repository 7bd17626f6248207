import json
import logging
from typing import Dict

from resume_tailor.errors import OptimizationError, StrategyError
from resume_tailor.models import (
    JobAnalysis,
    ModelCaller,
    OptimizationStrategy,
    ProgressCallback,
    ResumeRecord,
    SchemaKind,
)


class ResumeOptimizerAgent:
    """
    Plans and then applies the tailoring of a resume to a job analysis.

    The work is split into two model calls. `create_strategy` asks for a plan
    (keyword placement, section order, per-section actions) without touching
    the resume. `apply_optimizations` hands that plan back with the original
    resume and asks for a rewritten resume of exactly the same shape, with no
    invented experience or skills.
    """

    def _create_strategy_prompt(self, resume: ResumeRecord, job_analysis: JobAnalysis) -> str:
        job_analysis_str = json.dumps(job_analysis, indent=2)
        resume_str = json.dumps(resume, indent=2)

        return f"""
        You are a resume optimization strategist. Based on the job analysis and current resume, create an optimization strategy.
        This is a plan, not a rewrite: do not return the resume itself.

        **Job Analysis:**
        ---
        {job_analysis_str}
        ---

        **Current Resume:**
        ---
        {resume_str}
        ---

        Return ONLY valid JSON with this structure:
        {{
          "keywordIntegration": {{
            "primary": ["keyword1", "keyword2"],
            "secondary": ["keyword3", "keyword4"]
          }},
          "sectionPriorities": ["experience", "skills", "education", "projects"],
          "improvementAreas": [
            {{
              "section": "experience",
              "action": "enhance_descriptions",
              "details": "Add more action verbs and quantifiable results"
            }}
          ],
          "skillsToEmphasize": ["skill1", "skill2"],
          "achievementsToHighlight": ["achievement1", "achievement2"],
          "languageOptimizations": {{
            "tone": "professional|technical|creative",
            "keywords": ["keyword1", "keyword2"],
            "actionVerbs": ["verb1", "verb2"]
          }}
        }}

        **JSON Output:**
        """

    def _create_apply_prompt(self, resume: ResumeRecord, strategy: OptimizationStrategy) -> str:
        strategy_str = json.dumps(strategy, indent=2)
        resume_str = json.dumps(resume, indent=2)

        return f"""
        You are a resume optimization specialist. Apply the given strategy to optimize the resume.

        **Optimization Strategy:**
        ---
        {strategy_str}
        ---

        **Current Resume:**
        ---
        {resume_str}
        ---

        Apply the optimization strategy and return the improved resume. Focus on:
        1. Integrating keywords naturally
        2. Enhancing job descriptions with action verbs
        3. Quantifying achievements where possible
        4. Improving overall ATS compatibility
        5. Maintaining factual accuracy

        **Critical Rules:**
        - NEVER fabricate experience, skills, employers, dates, or achievements.
        - Keep every section, entry, and field name of the current resume; lists stay lists.
        - Return ONLY the optimized resume JSON with the exact same structure, with no markdown or explanations.

        **JSON Output:**
        """

    def create_strategy(
        self,
        resume: ResumeRecord,
        job_analysis: JobAnalysis,
        api_key: str,
        call_model: ModelCaller,
        progress: ProgressCallback,
    ) -> OptimizationStrategy:
        """
        Builds the optimization plan for the resume.

        Raises:
            StrategyError: Wrapping whatever made the stage fail.
        """
        try:
            progress(20, "Creating optimization strategy...")
            prompt = self._create_strategy_prompt(resume, job_analysis)

            progress(60, "Analyzing optimization opportunities...")
            strategy: Dict = call_model(api_key, prompt, SchemaKind.STRATEGY)

            progress(100, "Strategy created")
            logging.info(
                f"Strategy created with {len(strategy.get('improvementAreas') or [])} improvement areas."
            )
            return strategy
        except Exception as e:
            logging.error(f"Strategy creation failed: {e}")
            raise StrategyError(e) from e

    def apply_optimizations(
        self,
        resume: ResumeRecord,
        strategy: OptimizationStrategy,
        api_key: str,
        call_model: ModelCaller,
        progress: ProgressCallback,
    ) -> ResumeRecord:
        """
        Rewrites the resume according to the strategy.

        Raises:
            OptimizationError: Wrapping whatever made the stage fail.
        """
        try:
            progress(10, "Applying keyword optimizations...")
            prompt = self._create_apply_prompt(resume, strategy)

            progress(50, "Enhancing descriptions...")
            optimized_resume: Dict = call_model(api_key, prompt, SchemaKind.RESUME)

            progress(80, "Applying final optimizations...")
            missing = [section for section in resume if section not in optimized_resume]
            if missing:
                logging.warning(f"Optimized resume dropped sections: {', '.join(missing)}")

            progress(100, "Optimizations applied")
            return optimized_resume
        except Exception as e:
            logging.error(f"Optimization application failed: {e}")
            raise OptimizationError(e) from e
