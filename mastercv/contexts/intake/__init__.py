"""
Intake Context

AI text service calls that produce CV records and cover letter prose.

Owns: prompts, response recovery, fallback to existing data
Never: Generates LaTeX or letter markup
"""

from mastercv.contexts.intake.cv_llm import (
    add_to_existing_cv,
    generate_cover_letter_body,
    parse_raw_text_to_cv,
    tailor_cv_for_job,
)

__all__ = [
    "add_to_existing_cv",
    "generate_cover_letter_body",
    "parse_raw_text_to_cv",
    "tailor_cv_for_job",
]
