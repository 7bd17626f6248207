import json
import unittest

from resume_tailor.core.gemini_client import ModelResponse
from resume_tailor.core.response_extractor import extract, find_brace_spans
from resume_tailor.errors import ExtractionError
from resume_tailor.models import SchemaKind

RESUME = {
    "personalInfo": {"name": "Ana Ruiz", "email": "ana@example.com"},
    "summary": "Data engineer.",
    "experience": [{"title": "Data Engineer", "company": "Globex", "description": ["Built Airflow DAGs."]}],
    "skills": {"technical": ["Python", "Spark"]},
}


class TestResponseExtractor(unittest.TestCase):

    def test_raw_json(self):
        response = ModelResponse([json.dumps(RESUME)])
        self.assertEqual(extract(response, SchemaKind.RESUME), RESUME)

    def test_plain_string_input(self):
        self.assertEqual(extract("  " + json.dumps(RESUME) + "\n", SchemaKind.RESUME), RESUME)

    def test_fenced_json(self):
        text = f"Here is your optimized resume:\n```json\n{json.dumps(RESUME, indent=2)}\n```\nLet me know!"
        self.assertEqual(extract(ModelResponse([text]), SchemaKind.RESUME), RESUME)

    def test_unlabelled_fence(self):
        text = f"```\n{json.dumps({'mustHaveSkills': ['Go']})}\n```"
        self.assertEqual(extract(text, SchemaKind.JOB_ANALYSIS), {"mustHaveSkills": ["Go"]})

    def test_json_embedded_in_prose(self):
        text = f"Sure! Based on the job posting, {json.dumps(RESUME)} I hope this helps."
        self.assertEqual(extract(text, SchemaKind.RESUME), RESUME)

    def test_braces_inside_strings_do_not_break_the_scan(self):
        record = {"personalInfo": {"name": "Ana"}, "summary": "Writes {templated} configs and } stray braces"}
        text = f"Result: {json.dumps(record)} -- done"
        self.assertEqual(extract(text, SchemaKind.RESUME), record)

    def test_skips_invalid_first_candidate(self):
        invalid = {"summary": "no personal info here"}
        valid = {"personalInfo": {"name": "Ana Ruiz"}, "experience": []}
        text = f"Option A: {json.dumps(invalid)}\nOption B: {json.dumps(valid)}"

        self.assertEqual(extract(text, SchemaKind.RESUME), valid)

    def test_skips_longer_invalid_candidate(self):
        draft = {"personalInfo": "Ana Ruiz, data engineer in Madrid", "experience": "five years of pipelines"}
        final = {"personalInfo": {"name": "Ana"}}
        text = f"Draft: {json.dumps(draft)}\nFinal: {json.dumps(final)}"

        result = extract(text, SchemaKind.RESUME)

        self.assertEqual(result, final)

    def test_json_array_is_not_a_record(self):
        with self.assertRaises(ExtractionError):
            extract("[1, 2, 3]", SchemaKind.JOB_ANALYSIS)

    def test_array_wrapped_object_is_recovered_from_the_brace_scan(self):
        self.assertEqual(extract('[{"mustHaveSkills": ["Go"]}]', SchemaKind.JOB_ANALYSIS),
                         {"mustHaveSkills": ["Go"]})

    def test_intermediate_records_only_need_an_object(self):
        self.assertEqual(extract('{"tone": "technical"}', SchemaKind.STRATEGY), {"tone": "technical"})
        # No personalInfo needed for a strategy
        self.assertEqual(extract('Plan: {"sectionPriorities": ["skills"]}', SchemaKind.STRATEGY),
                         {"sectionPriorities": ["skills"]})

    def test_truncated_reply_raises(self):
        with self.assertRaises(ExtractionError):
            extract('{"personalInfo": {"name": "Ana"', SchemaKind.RESUME)

    def test_no_candidates(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract(ModelResponse([]), SchemaKind.RESUME)
        self.assertIn("No response candidates", ctx.exception.reason)

    def test_first_candidate_without_text(self):
        with self.assertRaises(ExtractionError):
            extract(ModelResponse([None, json.dumps(RESUME)]), SchemaKind.RESUME)

    def test_empty_text(self):
        with self.assertRaises(ExtractionError):
            extract("   ", SchemaKind.STRATEGY)

    def test_prose_only(self):
        with self.assertRaises(ExtractionError):
            extract("I'm sorry, I can't help with that.", SchemaKind.JOB_ANALYSIS)

    def test_cut_off_candidate_before_a_complete_one(self):
        text = '{"personalInfo": {"name": "Ana\n\nRetry: {"personalInfo": {"name": "Ana"}}'
        self.assertEqual(extract(text, SchemaKind.RESUME), {"personalInfo": {"name": "Ana"}})

    def test_quoted_brace_in_prose_before_the_record(self):
        text = 'Use the "{" character. {"personalInfo": {"name": "Ana"}}'
        self.assertEqual(extract(text, SchemaKind.RESUME), {"personalInfo": {"name": "Ana"}})

    def test_object_followed_by_trailing_brace_noise(self):
        text = 'Result: {"personalInfo": {"name": "Ana"}, "summary": "uses \\"{\\" a lot"} }}'
        self.assertEqual(extract(text, SchemaKind.RESUME),
                         {"personalInfo": {"name": "Ana"}, "summary": 'uses "{" a lot'})

    def test_find_brace_spans_ignoring_strings(self):
        text = 'say "{" then {"a": 1}'
        self.assertEqual(find_brace_spans(text), [])
        spans = [text[start:end] for start, end, _ in find_brace_spans(text, honour_strings=False)]
        self.assertEqual(spans, ['{"a": 1}'])

    def test_find_brace_spans(self):
        text = 'a {"x": {"y": 1}} b {"z": 2}'
        spans = [(text[start:end], depth) for start, end, depth in find_brace_spans(text)]
        self.assertEqual(spans, [('{"y": 1}', 1), ('{"x": {"y": 1}}', 0), ('{"z": 2}', 0)])


if __name__ == '__main__':
    unittest.main()
