import logging
from typing import Dict

from resume_tailor.errors import JobAnalysisError
from resume_tailor.models import JobAnalysis, ModelCaller, ProgressCallback, SchemaKind
from .industry_guidance import guidance_for


class JobAnalyzerAgent:
    """
    Analyzes a job description using the Gemini LLM to extract structured data.

    This is the first stage of the pipeline. Its output (a JobAnalysis) is never
    shown to the user; it only feeds the prompts of the optimizer and validator
    stages. The agent keeps no per-request state, so a single instance can be
    shared between concurrent runs.
    """

    def _create_prompt(self, job_description: str, industry_type: str) -> str:
        """
        Constructs a zero-shot prompt instructing the LLM to act as a job analysis
        expert and return only the JobAnalysis JSON object.
        """
        return f"""
        You are a job analysis expert. Analyze the following job description and extract key information in JSON format.

        **Job Description:**
        ---
        {job_description}
        ---

        **Industry Type:** {industry_type}
        {guidance_for(industry_type)}

        Return ONLY valid JSON with this structure, with no additional text or explanations:
        {{
          "keyRequirements": ["requirement1", "requirement2"],
          "mustHaveSkills": ["skill1", "skill2"],
          "niceToHaveSkills": ["skill1", "skill2"],
          "experienceLevel": "junior|mid|senior",
          "industryKeywords": ["keyword1", "keyword2"],
          "companySize": "startup|mid-size|enterprise|unknown",
          "roleType": "individual_contributor|team_lead|manager|executive",
          "techStack": ["tech1", "tech2"],
          "softSkills": ["skill1", "skill2"],
          "priorities": {{
            "technical": 0.7,
            "leadership": 0.3,
            "communication": 0.5
          }}
        }}

        `priorities` weights must be numbers between 0 and 1.

        **JSON Output:**
        """

    def run(
        self,
        job_description: str,
        industry_type: str,
        api_key: str,
        call_model: ModelCaller,
        progress: ProgressCallback,
    ) -> JobAnalysis:
        """
        Executes the analysis for a given job description.

        Args:
            job_description: The raw text of the job description.
            industry_type: One of the supported industry identifiers, or "general".
            api_key: The Gemini API key for this run.
            call_model: Performs the model call and JSON extraction.
            progress: Stage-local progress callback (0-100).

        Returns:
            The extracted JobAnalysis.

        Raises:
            JobAnalysisError: Wrapping whatever made the stage fail.
        """
        try:
            progress(25, "Extracting key requirements...")
            prompt = self._create_prompt(job_description, industry_type)

            progress(50, "Processing job requirements...")
            analysis: Dict = call_model(api_key, prompt, SchemaKind.JOB_ANALYSIS)

            progress(75, "Analyzing company culture fit...")
            logging.info(
                f"Job analysis found {len(analysis.get('mustHaveSkills') or [])} must-have skills "
                f"(level: {analysis.get('experienceLevel', 'unknown')})."
            )

            progress(100, "Job analysis complete")
            return analysis
        except Exception as e:
            logging.error(f"Job analysis failed: {e}")
            raise JobAnalysisError(e) from e
