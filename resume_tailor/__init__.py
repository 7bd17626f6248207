"""Tailors a structured resume to a job posting with a multi-stage Gemini pipeline."""

__version__ = "1.0.0"
