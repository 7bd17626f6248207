import io
import logging
import math
import os
import tempfile
from typing import Dict

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt
from docx2pdf import convert

from resume_tailor.agents.markdown_formatting_agent import MarkdownFormattingAgent

# Visual settings per template id
TEMPLATES = {
    "modern": {"font": "Calibri", "size": 10.5, "name_size": 22, "borders": True, "skills_table": True, "center_header": True},
    "ats-friendly": {"font": "Arial", "size": 11, "name_size": 18, "borders": False, "skills_table": False, "center_header": False},
    "minimal": {"font": "Georgia", "size": 10, "name_size": 20, "borders": False, "skills_table": True, "center_header": True},
}


class PdfDocxGenerator:
    """
    Converts the structured Markdown produced by MarkdownFormattingAgent into a
    styled DOCX, and that DOCX into a PDF.
    """
    def __init__(self, markdown_content: str, template_id: str = "modern"):
        if template_id not in TEMPLATES:
            raise ValueError(f"Unknown template '{template_id}'. Available: {', '.join(TEMPLATES)}")
        self.markdown = markdown_content
        self.template_id = template_id
        self.style: Dict = TEMPLATES[template_id]

    def _set_paragraph_border(self, paragraph):
        if not self.style["borders"]:
            return
        p_pr = paragraph._p.get_or_add_pPr()
        p_bdr = OxmlElement('w:pBdr')
        p_pr.append(p_bdr)
        bottom_bdr = OxmlElement('w:bottom')
        bottom_bdr.set(qn('w:val'), 'single')
        bottom_bdr.set(qn('w:sz'), '4')
        bottom_bdr.set(qn('w:space'), '1')
        bottom_bdr.set(qn('w:color'), '000000')
        p_bdr.append(bottom_bdr)

    def _add_skill_line(self, paragraph, skill_line: str):
        category, skills = skill_line.split(':', 1)
        paragraph.paragraph_format.space_after = Pt(0)
        paragraph.add_run(f"{category.replace('**', '').strip()}:").bold = True
        paragraph.add_run(f" {skills.replace('**', '').strip()}")

    def _add_skills(self, doc, skill_lines):
        if not skill_lines:
            return
        if not self.style["skills_table"]:
            # Tables confuse some applicant tracking systems
            for skill_line in skill_lines:
                self._add_skill_line(doc.add_paragraph(), skill_line)
            return

        split_point = math.ceil(len(skill_lines) / 2)
        left_col_skills = skill_lines[:split_point]
        right_col_skills = skill_lines[split_point:]

        table = doc.add_table(rows=len(left_col_skills), cols=2)
        table.autofit = False
        table.columns[0].width = Inches(3.75)
        table.columns[1].width = Inches(3.75)
        for i, skill_line in enumerate(left_col_skills):
            self._add_skill_line(table.cell(i, 0).paragraphs[0], skill_line)
            if i < len(right_col_skills):
                self._add_skill_line(table.cell(i, 1).paragraphs[0], right_col_skills[i])

    def _add_heading(self, doc, text: str):
        p = doc.add_paragraph()
        run = p.add_run(text.upper())
        run.font.bold = True
        run.font.size = Pt(11)
        p.paragraph_format.space_before = Pt(8)
        p.paragraph_format.space_after = Pt(4)
        self._set_paragraph_border(p)

    def _add_item_header(self, doc, line: str):
        left_content, right_content = [part.strip() for part in line.split('|||', 1)]
        table = doc.add_table(rows=1, cols=2)
        table.autofit = False
        table.columns[0].width = Inches(5.0)
        table.columns[1].width = Inches(2.5)
        left_cell, right_cell = table.rows[0].cells

        parts = left_content.replace('**', '').split('|')
        left_p = left_cell.paragraphs[0]
        left_p.add_run(parts[0].strip()).bold = True
        if len(parts) > 1:
            left_p.add_run(f" | {' | '.join(part.strip() for part in parts[1:])}")

        right_p = right_cell.paragraphs[0]
        is_italic = right_content.startswith('*') and right_content.endswith('*')
        run = right_p.add_run(right_content.replace('*', '').strip())
        run.italic = is_italic
        right_p.alignment = WD_ALIGN_PARAGRAPH.RIGHT

        for cell in (left_cell, right_cell):
            cell.paragraphs[0].paragraph_format.space_before = Pt(0)
            cell.paragraphs[0].paragraph_format.space_after = Pt(0)

    def build_document(self):
        """Builds the python-docx Document for the Markdown content."""
        doc = Document()
        for section in doc.sections:
            section.left_margin = Inches(0.5)
            section.right_margin = Inches(0.5)
            section.top_margin = Inches(0.5)
            section.bottom_margin = Inches(0.5)

        doc.styles['Normal'].font.name = self.style["font"]
        doc.styles['Normal'].font.size = Pt(self.style["size"])
        header_alignment = WD_ALIGN_PARAGRAPH.CENTER if self.style["center_header"] else WD_ALIGN_PARAGRAPH.LEFT

        lines = self.markdown.split('\n')
        expect_contact = False
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            if not line:
                i += 1
                continue

            if line.startswith('# '):
                p = doc.add_paragraph()
                run = p.add_run(line[2:])
                run.font.size = Pt(self.style["name_size"])
                p.alignment = header_alignment
                p.paragraph_format.space_after = Pt(2)
                expect_contact = True
                i += 1
                continue

            if expect_contact and not line.startswith('#'):
                p = doc.add_paragraph(line)
                p.alignment = header_alignment
                p.paragraph_format.space_after = Pt(8)

            elif line.startswith('## '):
                heading = line[3:]
                self._add_heading(doc, heading)
                if heading.upper() == "SKILLS":
                    skill_lines = []
                    i += 1
                    while i < len(lines) and lines[i].strip().startswith('**'):
                        skill_lines.append(lines[i].strip())
                        i += 1
                    self._add_skills(doc, skill_lines)
                    expect_contact = False
                    continue

            elif line.startswith('**') and '|||' in line:
                self._add_item_header(doc, line)

            elif line.startswith('- '):
                p = doc.add_paragraph(style='List Bullet')
                p.text = line[2:]
                p.paragraph_format.left_indent = Inches(0.25)
                p.paragraph_format.space_before = Pt(0)
                p.paragraph_format.space_after = Pt(2)

            elif line.startswith('*') and line.endswith('*'):
                p = doc.add_paragraph()
                p.add_run(line.strip('*')).italic = True
                p.paragraph_format.space_after = Pt(2)

            else:
                doc.add_paragraph(line)

            expect_contact = False
            i += 1

        return doc

    def to_docx(self, output_path: str):
        logging.info(f"Generating styled DOCX file at: {output_path}")
        self.build_document().save(output_path)
        logging.info("Styled DOCX generation complete.")

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.build_document().save(buffer)
        return buffer.getvalue()

    def to_pdf(self, output_path: str):
        """
        Creates a PDF by first generating a DOCX and then converting it.
        docx2pdf needs Microsoft Word (Windows/macOS) to be installed.
        """
        logging.info(f"Generating PDF at: {output_path}")
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_docx_path = os.path.join(temp_dir, "temp_resume.docx")
            self.to_docx(temp_docx_path)
            convert(temp_docx_path, output_path)
        logging.info("PDF generation complete.")


def render(resume: Dict, template_id: str = "modern") -> bytes:
    """Renders a validated resume record to DOCX bytes with the given template."""
    markdown = MarkdownFormattingAgent().run(resume)
    return PdfDocxGenerator(markdown, template_id).to_bytes()
