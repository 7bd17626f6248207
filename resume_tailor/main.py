import argparse
import json
import logging
import os
from datetime import datetime

from resume_tailor import config
from resume_tailor.agents.industry_guidance import INDUSTRY_TYPES
from resume_tailor.agents.markdown_formatting_agent import MarkdownFormattingAgent
from resume_tailor.core.cost_estimator import estimate_cost
from resume_tailor.core.customization_service import ResumeCustomizationService, relevance_score
from resume_tailor.core.pdf_docx_generator import TEMPLATES, PdfDocxGenerator
from resume_tailor.utils import extract_text, load_json_file


def _report_progress(percentage: float, message: str):
    logging.info(f"Progress: {percentage:.0f}% - {message}")


def output_basename(resume: dict) -> str:
    name = ((resume.get("personalInfo") or {}).get("name") or "Resume").replace(" ", "")
    return f"{name}-{datetime.now().strftime('%d%m')}"


def main():
    """
    Main function to run the resume tailoring pipeline from the command line.
    """
    logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Tailor a JSON resume to a job description with Gemini")
    parser.add_argument("--resume", type=str, default="data/resume.json", help="Path to the resume JSON file.")
    parser.add_argument(
        "--job-desc",
        type=str,
        required=True,
        help="Path to the job description (.txt, .pdf or .docx).",
    )
    parser.add_argument("--industry", choices=INDUSTRY_TYPES, default=config.DEFAULT_INDUSTRY)
    parser.add_argument("--template", choices=sorted(TEMPLATES), default=config.DEFAULT_TEMPLATE)
    parser.add_argument("--output-dir", type=str, default="output", help="Directory for the generated files.")
    parser.add_argument("--pdf", action="store_true", help="Also convert the DOCX to PDF (needs Microsoft Word).")
    args = parser.parse_args()

    # --- 1. Load Inputs ---
    resume = load_json_file(args.resume)
    if not resume:
        return 1
    try:
        job_description = extract_text(args.job_desc)
    except (OSError, ValueError) as e:
        logging.error(f"Could not read job description {args.job_desc}: {e}")
        return 1

    api_key = config.GEMINI_API_KEY
    if not api_key:
        logging.error("GEMINI_API_KEY environment variable not set.")
        return 1

    estimate = estimate_cost(resume, job_description)
    logging.info(
        f"Estimated usage per model call: {estimate['input_tokens']} input tokens, "
        f"~${estimate['estimated_cost']:.4f}"
    )

    # --- 2. Run Pipeline ---
    service = ResumeCustomizationService()
    result = service.customize(resume, job_description, args.industry, api_key, _report_progress)
    if result.customized:
        logging.info(f"Resume customized successfully (relevance {relevance_score(job_description, result.resume)}%).")
    else:
        logging.warning(
            f"AI customization failed at stage '{result.failed_stage}': {result.error.cause}. "
            "The original resume was kept unchanged."
        )

    # --- 3. Save Outputs ---
    os.makedirs(args.output_dir, exist_ok=True)
    base_filename = output_basename(result.resume)

    json_path = os.path.join(args.output_dir, f"{base_filename}.json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result.resume, f, indent=2, ensure_ascii=False)

    generator = PdfDocxGenerator(MarkdownFormattingAgent().run(result.resume), args.template)
    generator.to_docx(os.path.join(args.output_dir, f"{base_filename}.docx"))
    if args.pdf:
        generator.to_pdf(os.path.join(args.output_dir, f"{base_filename}.pdf"))

    logging.info(f"Saved outputs to {args.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
