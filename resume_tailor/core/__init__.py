"""
Core module for the resume tailor.

This package contains the non-agent components that form the backbone of the
pipeline: the Gemini API client, response extraction and validation, the
LangGraph orchestrator, and the document generation utilities.
"""

from resume_tailor.errors import PipelineError
from .gemini_client import GeminiClient
from .langgraph_orchestrator import LangGraphOrchestrator
from .customization_service import CustomizationResult, ResumeCustomizationService
from resume_tailor.models import PipelineInput, SchemaKind
from .pdf_docx_generator import PdfDocxGenerator, render

__all__ = [
    "CustomizationResult",
    "GeminiClient",
    "LangGraphOrchestrator",
    "PdfDocxGenerator",
    "PipelineError",
    "PipelineInput",
    "ResumeCustomizationService",
    "SchemaKind",
    "render",
]
