"""
Configuration settings for the resume tailor.

Values come from the environment (a local .env file is loaded first), so the
API key never has to live in source control.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

# Retry budget and linear backoff base for every model call
GEMINI_MAX_RETRIES = int(os.getenv("GEMINI_MAX_RETRIES", "3"))
GEMINI_RETRY_DELAY_MS = int(os.getenv("GEMINI_RETRY_DELAY_MS", "1000"))

# Sampling is kept low-variance so replies stay close to the requested JSON schema
GENERATION_PARAMS = {
    "temperature": 0.3,
    "top_k": 40,
    "top_p": 0.95,
    "max_output_tokens": 8192,
}

SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

DEFAULT_INDUSTRY = os.getenv("DEFAULT_INDUSTRY", "general")
DEFAULT_TEMPLATE = os.getenv("DEFAULT_TEMPLATE", "modern")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
