from typing import Dict, List

SKILL_LABELS = {
    "technical": "Technical",
    "soft": "Soft Skills",
    "languages": "Languages",
    "certifications": "Certifications",
}


def _plain(text) -> str:
    return str(text).replace('**', '').replace('*', '').replace('`', '')


def _as_list(value) -> List:
    """Wraps a lone string (or any scalar) so list-shaped fields can be iterated."""
    if not value:
        return []
    return value if isinstance(value, list) else [value]


def _date_range(item: Dict) -> str:
    return ' - '.join(filter(None, [item.get('startDate'), item.get('endDate')]))


class MarkdownFormattingAgent:
    """
    Formats a ResumeRecord into the structured Markdown the document generator parses.

    Headers that need a right-aligned column (dates) use a '|||' separator, and
    bullet content is stripped to plain text. This agent is deterministic; it
    makes no model calls.
    """

    def _format_contact(self, personal_info: Dict) -> str:
        parts = [
            personal_info.get('phone'),
            personal_info.get('location'),
            personal_info.get('github'),
            personal_info.get('linkedin'),
            personal_info.get('website'),
            personal_info.get('email'),
        ]
        return ' | '.join(filter(None, parts))

    def _format_experience(self, items: List[Dict]) -> List[str]:
        lines = ["## Experience"]
        for item in items:
            left_part = ' | '.join(filter(None, [f"**{item.get('title', '')}**", item.get('company'), item.get('location')]))
            lines.append(f"{left_part} ||| {_date_range(item)}")
            for point in _as_list(item.get('description')) + _as_list(item.get('achievements')):
                lines.append(f"- {_plain(point)}")
            lines.append("")
        return lines

    def _format_projects(self, items: List[Dict]) -> List[str]:
        lines = ["## Projects"]
        for item in items:
            technologies = item.get('technologies') or []
            if isinstance(technologies, list):
                technologies = ', '.join(technologies)
            lines.append(f"**{item.get('name', '')}** ||| *{technologies}*")
            for point in _as_list(item.get('description')) + _as_list(item.get('achievements')):
                lines.append(f"- {_plain(point)}")
            lines.append("")
        return lines

    def _format_skills(self, skills) -> List[str]:
        """Formats skills with one category per line for the generator to parse."""
        lines = ["## Skills"]
        if isinstance(skills, list):
            lines.append(f"**Skills:** {', '.join(map(str, skills))}")
            return lines
        for category, skill_list in skills.items():
            if skill_list:
                label = SKILL_LABELS.get(category, category.title())
                lines.append(f"**{label}:** {', '.join(map(str, skill_list))}")
        return lines

    def _format_education(self, items: List[Dict]) -> List[str]:
        lines = ["## Education"]
        for item in items:
            lines.append(f"**{item.get('degree', '')}** ||| {item.get('graduationDate', '')}")
            institution = ', '.join(filter(None, [item.get('institution'), item.get('location')]))
            lines.append(f"*{institution}*")
            details = []
            if item.get('gpa'):
                details.append(f"GPA: {item['gpa']}")
            if item.get('relevantCoursework'):
                details.append(f"Relevant Coursework: {', '.join(map(str, _as_list(item['relevantCoursework'])))}")
            for detail in details:
                lines.append(f"- {_plain(detail)}")
            lines.append("")
        return lines

    def run(self, resume: Dict) -> str:
        """Constructs the full resume in a structured Markdown format."""
        personal_info = resume.get('personalInfo') or {}
        resume_parts = [
            f"# {personal_info.get('name') or 'Your Name'}",
            self._format_contact(personal_info),
            "",
        ]

        if resume.get('summary'):
            resume_parts.extend(["## Summary", _plain(resume['summary']), ""])

        if resume.get('skills'):
            resume_parts.extend(self._format_skills(resume['skills']))
            resume_parts.append("")

        if resume.get('experience'):
            resume_parts.extend(self._format_experience(resume['experience']))

        if resume.get('projects'):
            resume_parts.extend(self._format_projects(resume['projects']))

        if resume.get('education'):
            resume_parts.extend(self._format_education(resume['education']))

        return "\n".join(resume_parts).strip()
