"""Rough token and price estimate for one customization request."""

import json
import math
from typing import Dict

# Gemini 1.5 Flash pricing, USD per 1M tokens
INPUT_PRICE_PER_MILLION = 0.075
OUTPUT_PRICE_PER_MILLION = 0.30

# Rewritten resumes tend to come back a bit longer than they went in
OUTPUT_GROWTH = 1.2


def estimate_tokens(text: str) -> int:
    """About 4 characters per token for English text."""
    return math.ceil(len(text) / 4)


def estimate_cost(resume: Dict, job_description: str) -> Dict:
    resume_json = json.dumps(resume)
    input_tokens = estimate_tokens(resume_json + job_description)
    output_tokens = estimate_tokens(resume_json) * OUTPUT_GROWTH

    input_cost = input_tokens / 1_000_000 * INPUT_PRICE_PER_MILLION
    output_cost = output_tokens / 1_000_000 * OUTPUT_PRICE_PER_MILLION

    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "estimated_cost": input_cost + output_cost,
        "currency": "USD",
    }
