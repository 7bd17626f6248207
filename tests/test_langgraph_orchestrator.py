import json
import unittest
from unittest.mock import MagicMock

from resume_tailor.core.gemini_client import ModelResponse
from resume_tailor.core.langgraph_orchestrator import LangGraphOrchestrator
from resume_tailor.core.validation import validate
from resume_tailor.errors import (
    ApiError,
    ExhaustedRetriesError,
    ExtractionError,
    JobAnalysisError,
    OptimizationError,
    PipelineError,
)
from resume_tailor.models import PipelineInput, SchemaKind

RESUME = {
    "personalInfo": {"name": "Sam Park", "email": "sam@example.com"},
    "summary": "Frontend developer building React applications.",
    "experience": [{
        "title": "Frontend Developer", "company": "Initech",
        "description": ["Built dashboards in React."], "achievements": [],
    }],
    "skills": {"technical": ["React", "CSS"]},
}
JOB_DESCRIPTION = "Hiring a frontend engineer with React and TypeScript experience."
JOB_ANALYSIS = {"mustHaveSkills": ["React", "TypeScript"], "experienceLevel": "mid", "priorities": {"technical": 0.8}}
STRATEGY = {"keywordIntegration": {"primary": ["TypeScript"], "secondary": []}, "sectionPriorities": ["skills"]}


def _reply(record) -> ModelResponse:
    return ModelResponse([json.dumps(record)])


class TestLangGraphOrchestrator(unittest.TestCase):

    def setUp(self):
        self.gemini_client = MagicMock()
        self.orchestrator = LangGraphOrchestrator(self.gemini_client)
        self.events = []
        self.pipeline_input = PipelineInput(RESUME, JOB_DESCRIPTION, "software-engineering")

    def _on_progress(self, percentage, message):
        self.events.append((percentage, message))

    def _prompts(self):
        return [c.args[1] for c in self.gemini_client.call.call_args_list]

    def test_successful_run(self):
        optimized = dict(RESUME, summary="Frontend developer building React and TypeScript applications.")
        self.gemini_client.call.side_effect = [
            _reply(JOB_ANALYSIS),
            ModelResponse([f"Here is the plan:\n```json\n{json.dumps(STRATEGY)}\n```"]),
            _reply(optimized),
            ModelResponse([f"Final version: {json.dumps(optimized)}"]),
        ]

        result = self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertEqual(result, optimized)
        self.assertTrue(validate(result, SchemaKind.RESUME))
        self.assertEqual(self.gemini_client.call.call_count, 4)
        for c in self.gemini_client.call.call_args_list:
            self.assertEqual(c.args[0], "key")

    def test_progress_is_monotonic_and_reaches_100(self):
        self.gemini_client.call.side_effect = [_reply(JOB_ANALYSIS), _reply(STRATEGY), _reply(RESUME), _reply(RESUME)]

        self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        percentages = [pct for pct, _ in self.events]
        self.assertEqual(percentages, sorted(percentages))
        self.assertTrue(all(0 <= pct <= 100 for pct in percentages))
        self.assertEqual(self.events[-1], (100, "Resume customization complete!"))
        self.assertIn((90, "Finalizing customized resume..."), self.events)

    def test_stages_feed_forward_extracted_records(self):
        self.gemini_client.call.side_effect = [_reply(JOB_ANALYSIS), _reply(STRATEGY), _reply(RESUME), _reply(RESUME)]

        self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        analyze_prompt, strategy_prompt, apply_prompt, validate_prompt = self._prompts()
        self.assertIn(JOB_DESCRIPTION, analyze_prompt)
        self.assertIn('"TypeScript"', strategy_prompt)
        self.assertIn('"sectionPriorities"', apply_prompt)
        self.assertIn('"mustHaveSkills"', validate_prompt)
        self.assertIn('"sectionPriorities"', validate_prompt)

    def test_original_keyword_survives_echo_run(self):
        echo = MagicMock(side_effect=[_reply(JOB_ANALYSIS), _reply(STRATEGY), _reply(RESUME), _reply(RESUME)])
        self.gemini_client.call = echo

        result = self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertIn("React", json.dumps(result))

    def test_failure_at_apply_stops_the_pipeline(self):
        self.gemini_client.call.side_effect = [
            _reply(JOB_ANALYSIS),
            _reply(STRATEGY),
            ModelResponse(["I rewrote your resume but forgot the JSON."]),
            _reply(RESUME),
        ]

        with self.assertRaises(PipelineError) as ctx:
            self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertEqual(ctx.exception.stage, "apply")
        self.assertIsInstance(ctx.exception.cause, OptimizationError)
        self.assertIsInstance(ctx.exception.cause.cause, ExtractionError)
        # analyze and strategize succeeded, apply failed, validate never ran
        self.assertEqual(self.gemini_client.call.call_count, 3)
        messages = [message for _, message in self.events]
        self.assertNotIn("Validating and refining results...", messages)
        self.assertNotIn(100, [pct for pct, _ in self.events])

    def test_exhausted_retries_at_analyze(self):
        self.gemini_client.call.side_effect = ExhaustedRetriesError(3, ApiError(503, "Service unavailable"))

        with self.assertRaises(PipelineError) as ctx:
            self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertEqual(ctx.exception.stage, "analyze")
        self.assertIsInstance(ctx.exception.cause, JobAnalysisError)
        self.assertEqual(self.gemini_client.call.call_count, 1)

    def test_strategy_failure_names_the_stage(self):
        self.gemini_client.call.side_effect = [_reply(JOB_ANALYSIS), ModelResponse([])]

        with self.assertRaises(PipelineError) as ctx:
            self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertEqual(ctx.exception.stage, "strategize")

    def test_invalid_final_record_fails_at_finalize(self):
        self.gemini_client.call.side_effect = [_reply(JOB_ANALYSIS), _reply(STRATEGY), _reply(RESUME)]
        self.orchestrator.validator = MagicMock()
        self.orchestrator.validator.run.return_value = {"summary": "lost the header"}

        with self.assertRaises(PipelineError) as ctx:
            self.orchestrator.run(self.pipeline_input, "key", self._on_progress)

        self.assertEqual(ctx.exception.stage, "finalize")
        self.assertIn("personalInfo", str(ctx.exception.cause))

    def test_caller_resume_is_not_mutated(self):
        original = json.loads(json.dumps(RESUME))
        pipeline_input = PipelineInput(original, JOB_DESCRIPTION)
        original["summary"] = "changed after the run started"

        self.assertEqual(pipeline_input.resume["summary"], RESUME["summary"])
        self.assertEqual(pipeline_input.industry_type, "general")

    def test_runs_share_no_state(self):
        self.gemini_client.call.side_effect = [
            _reply(JOB_ANALYSIS), _reply(STRATEGY), _reply(RESUME), _reply(RESUME),
            _reply({"mustHaveSkills": ["Go"]}), _reply(STRATEGY), _reply(RESUME), _reply(RESUME),
        ]

        self.orchestrator.run(self.pipeline_input, "key-1", self._on_progress)
        self.orchestrator.run(PipelineInput(RESUME, "Go developer wanted"), "key-2", self._on_progress)

        second_run_prompts = self._prompts()[4:]
        self.assertIn("Go developer wanted", second_run_prompts[0])
        self.assertNotIn("TypeScript", second_run_prompts[1])
        self.assertEqual(self.gemini_client.call.call_args_list[-1].args[0], "key-2")


if __name__ == '__main__':
    unittest.main()
