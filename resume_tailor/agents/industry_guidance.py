"""Industry-specific emphasis injected into the stage prompts."""

from resume_tailor import config

INDUSTRY_GUIDANCE = {
    "software-engineering": (
        "Focus on technical skills, programming languages, frameworks, and quantifiable achievements. "
        "Emphasize software development methodologies, agile practices, and technical problem-solving. "
        "Highlight code quality, testing, and deployment experience."
    ),
    "data-science": (
        "Emphasize statistical analysis, machine learning, data visualization, and programming skills. "
        "Highlight experience with big data tools, databases, and analytical methodologies. "
        "Focus on quantifiable insights and business impact."
    ),
    "marketing": (
        "Emphasize campaign performance, ROI metrics, digital marketing skills, and brand management. "
        "Highlight experience with marketing tools, analytics platforms, and creative strategies. "
        "Focus on customer acquisition and market expansion results."
    ),
    "sales": (
        "Emphasize sales performance, revenue generation, relationship building, and territory management. "
        "Highlight experience with CRM systems, sales methodologies, and market expansion. "
        "Focus on quota achievement and customer retention."
    ),
    "finance": (
        "Emphasize financial analysis, modeling, risk management, and regulatory compliance. "
        "Highlight experience with financial software, reporting, and strategic planning. "
        "Focus on cost savings and revenue optimization."
    ),
    "healthcare": (
        "Emphasize patient care, medical procedures, regulatory compliance, and healthcare systems. "
        "Highlight experience with medical software, protocols, and interdisciplinary collaboration. "
        "Focus on patient outcomes and quality improvement."
    ),
    "education": (
        "Emphasize teaching methodologies, curriculum development, student assessment, and educational technology. "
        "Highlight experience with learning management systems and student engagement strategies. "
        "Focus on student achievement and program improvement."
    ),
    "design": (
        "Emphasize creative skills, design tools, user experience, and visual communication. "
        "Highlight experience with design software, prototyping, and design thinking methodologies. "
        "Focus on user feedback and design impact."
    ),
    "consulting": (
        "Emphasize problem-solving, strategic thinking, client management, and project delivery. "
        "Highlight experience with business analysis, change management, and stakeholder engagement. "
        "Focus on client outcomes and business transformation."
    ),
}

GENERAL_GUIDANCE = (
    "Focus on relevant skills, achievements, and experiences that align with the job requirements. "
    "Emphasize quantifiable results and professional growth."
)

INDUSTRY_TYPES = sorted(INDUSTRY_GUIDANCE) + [config.DEFAULT_INDUSTRY]


def guidance_for(industry_type: str) -> str:
    """Unknown or generic industries get the general guidance."""
    return INDUSTRY_GUIDANCE.get(industry_type, GENERAL_GUIDANCE)
