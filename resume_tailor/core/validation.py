"""
Minimal structural checks for records recovered from model output.

The resume check is intentionally permissive: only personalInfo is required,
and optional sections are checked for type only when they are present. The
intermediate records (job analysis, strategy) only have to be JSON objects.
"""

import logging
from typing import Any, List

from resume_tailor.models import SchemaKind

RESUME_LIST_FIELDS = ("experience", "education", "projects")
SKILL_LIST_FIELDS = ("technical", "soft", "languages", "certifications")


def describe_problems(record: Any, schema_kind: SchemaKind) -> List[str]:
    """Returns every structural problem found in the record; empty means valid."""
    if not isinstance(record, dict):
        return ["record is not a JSON object"]

    if schema_kind is not SchemaKind.RESUME:
        return []

    problems = []
    if "personalInfo" not in record:
        problems.append("missing required field: personalInfo")
    elif not isinstance(record["personalInfo"], dict):
        problems.append("personalInfo is not an object")

    for field_name in RESUME_LIST_FIELDS:
        value = record.get(field_name)
        if value is not None and not isinstance(value, list):
            problems.append(f"{field_name} exists but is not a list")

    skills = record.get("skills")
    if skills is not None:
        if isinstance(skills, dict):
            for skill_type in SKILL_LIST_FIELDS:
                value = skills.get(skill_type)
                if value is not None and not isinstance(value, list):
                    problems.append(f"skills.{skill_type} exists but is not a list")
        elif not isinstance(skills, list):
            # A flat list of skills is tolerated; anything else is not.
            problems.append("skills has an invalid structure")

    return problems


def validate(record: Any, schema_kind: SchemaKind) -> bool:
    problems = describe_problems(record, schema_kind)
    if problems:
        logging.debug(f"{schema_kind.value} record failed validation: {'; '.join(problems)}")
        return False
    return True
