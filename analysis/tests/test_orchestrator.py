"""
Unit tests for the analysis orchestrator.
"""

import unittest
import logging
from unittest import mock
from document_store import InMemoryDocumentStore
from analysis import AnalysisOrchestrator, InferenceError, InvalidRequest, NotFound, Ok
from analysis.config import MESSAGES

logging.basicConfig(level=logging.INFO)


def gemini_response(*texts):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}


class FakeClient:
    """Records prompts and replays a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response


class RecordingStore(InMemoryDocumentStore):
    def __init__(self, data):
        super().__init__(data)
        self.calls = []

    def get(self, collection, doc_id):
        self.calls.append((collection, doc_id))
        return super().get(collection, doc_id)


def make_store():
    return RecordingStore({
        "users": {
            "u1": {"resumeText": "Built REST services in Python. " * 400, "skills": ["Python", "Docker"]},
            "u2": {"resumeText": "cv", "skills": "Python"},
        },
        "internships": {
            "i1": {"title": "Backend Intern", "Description": "Build APIs", "skillsRequired": ["Python", "SQL"]},
        },
        "hackathons": {
            "h1": {"name": "Cloud Jam", "themes": ["AWS", "Serverless"]},
            "h2": {"name": "Data Jam", "description": {"en": "Build stuff"}, "themes": ["AI"]},
        },
    })


class TestAnalyze(unittest.TestCase):

    def test_unknown_user(self):
        client = FakeClient(gemini_response("unused"))
        text = AnalysisOrchestrator(make_store(), client).analyze("ghost", "i1", "internship")
        self.assertEqual(text, MESSAGES["profile_not_found"])
        self.assertEqual(client.prompts, [])

    def test_invalid_type(self):
        client = FakeClient(gemini_response("unused"))
        text = AnalysisOrchestrator(make_store(), client).analyze("u1", "i1", "job")
        self.assertEqual(text, MESSAGES["invalid_type"])
        self.assertEqual(client.prompts, [])

    def test_unknown_posting(self):
        text = AnalysisOrchestrator(make_store(), FakeClient()).analyze("u1", "missing", "hackathon")
        self.assertEqual(text, "Hackathon not found.")

    def test_client_error_becomes_failed_message(self):
        client = FakeClient(error=ConnectionError("boom"))
        text = AnalysisOrchestrator(make_store(), client).analyze("u1", "i1", "internship")
        self.assertEqual(text, MESSAGES["analysis_failed"])

    def test_store_error_becomes_failed_message(self):
        store = make_store()
        store.get = mock.Mock(side_effect=RuntimeError("firestore down"))
        text = AnalysisOrchestrator(store, FakeClient()).analyze("u1", "i1", "internship")
        self.assertEqual(text, MESSAGES["analysis_failed"])

    def test_empty_response(self):
        for response in [{}, {"candidates": []}, gemini_response("  "), None, "text"]:
            text = AnalysisOrchestrator(make_store(), FakeClient(response)).analyze("u1", "i1", "internship")
            self.assertEqual(text, MESSAGES["no_analysis"])

    def test_parts_concatenated(self):
        client = FakeClient(gemini_response("Match score: 90%\n", "Eligibility: Eligible"))
        text = AnalysisOrchestrator(make_store(), client).analyze("u1", "i1", "internship")
        self.assertEqual(text, "Match score: 90%\nEligibility: Eligible")

    def test_lookups_precede_single_inference_call(self):
        store = make_store()
        client = FakeClient(gemini_response("ok"))
        AnalysisOrchestrator(store, client).analyze("u1", "i1", "internship")

        self.assertEqual(store.calls, [("users", "u1"), ("internships", "i1")])
        self.assertEqual(len(client.prompts), 1)

    def test_prompt_contents(self):
        client = FakeClient(gemini_response("ok"))
        AnalysisOrchestrator(make_store(), client, max_resume_chars=100).analyze("u1", "h1", "hackathon")
        prompt = client.prompts[0]

        self.assertIn("Required skills: AWS, Serverless", prompt)
        self.assertIn("No description provided.", prompt)
        self.assertIn("Verified candidate skills: Python, Docker", prompt)
        self.assertEqual(prompt.count("Built REST services"), 3)

    def test_structured_description_reaches_model(self):
        client = FakeClient(gemini_response("ok"))
        text = AnalysisOrchestrator(make_store(), client).analyze("u1", "h2", "hackathon")

        self.assertEqual(text, "ok")
        self.assertEqual(len(client.prompts), 1)
        self.assertIn("Build stuff", client.prompts[0])

    def test_non_list_profile_skills_ignored(self):
        client = FakeClient(gemini_response("ok"))
        AnalysisOrchestrator(make_store(), client).analyze("u2", "i1", "internship")
        self.assertIn("Verified candidate skills: None\n", client.prompts[0])
        self.assertNotIn("P, y, t", client.prompts[0])


class TestRun(unittest.TestCase):
    """run() exposes the failure cause before it is flattened."""

    def test_result_types(self):
        store = make_store()
        self.assertIsInstance(AnalysisOrchestrator(store, FakeClient()).run("ghost", "i1", "internship"), NotFound)
        self.assertIsInstance(AnalysisOrchestrator(store, FakeClient()).run("u1", "i1", "job"), InvalidRequest)
        self.assertIsInstance(AnalysisOrchestrator(store, FakeClient({})).run("u1", "i1", "internship"), InferenceError)
        self.assertEqual(
            AnalysisOrchestrator(store, FakeClient(gemini_response("fit"))).run("u1", "i1", "internship"),
            Ok("fit"),
        )

    def test_run_propagates_errors(self):
        with self.assertRaises(ConnectionError):
            AnalysisOrchestrator(make_store(), FakeClient(error=ConnectionError("x"))).run("u1", "i1", "internship")


if __name__ == "__main__":
    unittest.main()
