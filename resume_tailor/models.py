import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, TypedDict

from resume_tailor import config


class PersonalInfo(TypedDict, total=False):
    name: str
    email: str
    phone: str
    location: str
    linkedin: str
    github: str
    website: str


class ExperienceEntry(TypedDict, total=False):
    title: str
    company: str
    location: str
    startDate: str
    endDate: str
    description: List[str]
    achievements: List[str]


class EducationEntry(TypedDict, total=False):
    degree: str
    institution: str
    location: str
    graduationDate: str
    gpa: str
    relevantCoursework: List[str]


class Skills(TypedDict, total=False):
    technical: List[str]
    soft: List[str]
    languages: List[str]
    certifications: List[str]


class ProjectEntry(TypedDict, total=False):
    name: str
    description: str
    technologies: List[str]
    achievements: List[str]


class ResumeRecord(TypedDict, total=False):
    """The canonical structured resume. Only personalInfo is mandatory."""
    personalInfo: PersonalInfo
    summary: str
    experience: List[ExperienceEntry]
    education: List[EducationEntry]
    skills: Skills
    projects: List[ProjectEntry]


class JobAnalysis(TypedDict, total=False):
    keyRequirements: List[str]
    mustHaveSkills: List[str]
    niceToHaveSkills: List[str]
    experienceLevel: str  # junior | mid | senior
    industryKeywords: List[str]
    companySize: str  # startup | mid-size | enterprise | unknown
    roleType: str  # individual_contributor | team_lead | manager | executive
    techStack: List[str]
    softSkills: List[str]
    priorities: Dict[str, float]


class KeywordIntegration(TypedDict, total=False):
    primary: List[str]
    secondary: List[str]


class ImprovementArea(TypedDict, total=False):
    section: str
    action: str
    details: str


class LanguageOptimizations(TypedDict, total=False):
    tone: str
    keywords: List[str]
    actionVerbs: List[str]


class OptimizationStrategy(TypedDict, total=False):
    keywordIntegration: KeywordIntegration
    sectionPriorities: List[str]
    improvementAreas: List[ImprovementArea]
    skillsToEmphasize: List[str]
    achievementsToHighlight: List[str]
    languageOptimizations: LanguageOptimizations


class SchemaKind(str, Enum):
    """Which record shape a model reply is expected to contain."""
    RESUME = "resume"
    JOB_ANALYSIS = "job_analysis"
    STRATEGY = "strategy"


# (percentage, message) -> None
ProgressCallback = Callable[[float, str], None]

# (api_key, prompt, schema_kind) -> extracted record
ModelCaller = Callable[[str, str, SchemaKind], Dict[str, Any]]


@dataclass(frozen=True)
class PipelineInput:
    """
    Everything one pipeline run reads. The resume is deep-copied on construction
    so that nothing the caller does afterwards can change a run in flight.
    """
    resume: Dict[str, Any]
    job_description: str
    industry_type: str = field(default=config.DEFAULT_INDUSTRY)

    def __post_init__(self):
        object.__setattr__(self, "resume", copy.deepcopy(self.resume))
