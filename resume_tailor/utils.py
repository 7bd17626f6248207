import json
import logging
from pathlib import Path

from docx import Document
from PyPDF2 import PdfReader


def extract_pdf_text(filepath: str) -> str:
    """Extracts text from all pages of a PDF file."""
    with open(filepath, "rb") as f:
        reader = PdfReader(f)
        texts = (page.extract_text() for page in reader.pages)
        return "\n".join(text for text in texts if text)


def extract_docx_text(filepath: str) -> str:
    return "\n".join(paragraph.text for paragraph in Document(filepath).paragraphs if paragraph.text)


def extract_text(filepath: str) -> str:
    """
    Extracts raw text from a PDF, DOCX or TXT resume.

    Raises:
        ValueError: For any other file type.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(filepath)
    if suffix == ".docx":
        return extract_docx_text(filepath)
    if suffix == ".txt":
        return Path(filepath).read_text(encoding="utf-8")
    raise ValueError(f"Unsupported file type: {suffix or filepath}")


def load_json_file(file_path: str):
    """Safely loads a JSON file."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        logging.error(f"File not found: {file_path}")
        return None
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {file_path}")
        return None
    except UnicodeDecodeError:
        logging.error(f"Encoding error reading file: {file_path}. Please ensure the file is saved with UTF-8 encoding.")
        return None
