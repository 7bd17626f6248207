"""
Recovers a JSON record from a Gemini reply.

The model is asked for bare JSON but frequently wraps it in markdown fences,
surrounds it with prose, or emits several candidate objects. Strategies are
tried cheapest first, and a candidate only wins if it also passes the
structural check for the expected schema kind:

    1. the whole trimmed reply
    2. the inside of each fenced code block
    3. the first top-level {...} span
    4. every balanced {...} span, longest first, then every JSON value
       that starts at a "{"
"""

import json
import logging
import re
from typing import Any, Iterator, List, Tuple, Union

from resume_tailor.errors import ExtractionError
from resume_tailor.models import SchemaKind
from .gemini_client import ModelResponse
from .validation import validate

_FENCED_BLOCK = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


def _try_parse(text: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return False, None


def find_brace_spans(text: str, honour_strings: bool = True) -> List[Tuple[int, int, int]]:
    """
    Returns (start, end, depth) for every balanced {...} span, in order of the
    closing brace. depth 0 marks a top-level span.

    With `honour_strings`, string literals are skipped once inside a brace, so
    quotes in the surrounding prose do not matter. A stray quote (a cut-off
    string, a quoted "{" in prose) hides every later span from this pass, so
    callers fall back to `honour_strings=False`, which counts braces only.
    """
    spans = []
    stack = []
    in_string = False
    escaped = False
    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"' and stack and honour_strings:
            in_string = True
        elif char == "{":
            stack.append(i)
        elif char == "}" and stack:
            start = stack.pop()
            spans.append((start, i + 1, len(stack)))
    return spans


def _longest_first(spans: List[Tuple[int, int, int]]) -> List[Tuple[int, int, int]]:
    return sorted(spans, key=lambda span: span[1] - span[0], reverse=True)


def _decoded_objects(text: str) -> Iterator[str]:
    """Yields the JSON value that starts at each '{', parsed independently."""
    decoder = json.JSONDecoder()
    idx = text.find("{")
    while idx != -1:
        try:
            _, end = decoder.raw_decode(text, idx)
        except ValueError:
            pass
        else:
            yield text[idx:end]
        idx = text.find("{", idx + 1)


def _candidates(text: str) -> Iterator[Tuple[str, str]]:
    """Yields (strategy, candidate_text) in the order they should be tried."""
    yield "direct", text

    for match in _FENCED_BLOCK.finditer(text):
        yield "code_block", match.group(1)

    spans = find_brace_spans(text)
    top_level = [span for span in spans if span[2] == 0]
    if top_level:
        start, end, _ = min(top_level)
        yield "first_object", text[start:end]
    else:
        # Unbalanced (e.g. truncated) reply: fall back to first '{' .. last '}'
        first, last = text.find("{"), text.rfind("}")
        if first != -1 and last > first:
            yield "first_object", text[first:last + 1]

    for start, end, _ in _longest_first(spans):
        yield "largest_object", text[start:end]

    for start, end, _ in _longest_first(find_brace_spans(text, honour_strings=False)):
        yield "largest_object", text[start:end]

    for candidate in _decoded_objects(text):
        yield "object_at_brace", candidate


def extract(response: Union[ModelResponse, str], schema_kind: SchemaKind) -> dict:
    """
    Extracts the first record that both parses and validates for `schema_kind`.

    Raises:
        ExtractionError: If the reply has no candidates or nothing valid is found.
    """
    if isinstance(response, ModelResponse):
        if not response.candidates:
            raise ExtractionError("No response candidates")
        text = response.text
    else:
        text = response

    if not text or not text.strip():
        raise ExtractionError("Empty text response from AI")
    text = text.strip()

    seen = set()
    for strategy, candidate in _candidates(text):
        if candidate in seen:
            continue
        seen.add(candidate)
        ok, record = _try_parse(candidate)
        if ok and validate(record, schema_kind):
            if strategy != "direct":
                logging.info(f"Recovered {schema_kind.value} JSON using the '{strategy}' strategy.")
            return record

    logging.error(f"No valid {schema_kind.value} JSON found in response: {text[:500]}")
    raise ExtractionError(f"No valid {schema_kind.value} JSON found in response")
