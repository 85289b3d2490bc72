"""
LLM-backed CV intake.

Turns raw text into CV records, merges new content into an existing record,
tailors a record to a job description, and writes cover letter body prose.
Model output is never trusted structurally: JSON is recovered leniently and
every record passes through CVRecord.from_dict before it is returned.
"""

import json
import re
from typing import Any, Dict, Mapping, Optional, Union

from mastercv.contexts.intake.logger import _log_debug, _log_warning, log_llm_call
from mastercv.contexts.intake.prompts import (
    ADD_CONTENT_PROMPT,
    COVER_LETTER_PROMPT,
    COVER_LETTER_SYSTEM_PROMPT,
    CV_SCHEMA,
    JSON_ONLY_SYSTEM_PROMPT,
    PARSE_CV_PROMPT,
    TAILOR_PROMPT,
)
from mastercv.contexts.templating.cv_data_structure import CVRecord
from mastercv.utils.llm import LLMProvider, get_provider, parse_json_object_response

CVInput = Union[CVRecord, Mapping[str, Any]]

CV_SECTIONS = ("personal_info", "education", "experience", "projects", "skills")

# Lines the model sometimes adds around the body even when told not to
_SALUTATION_RE = re.compile(r"^Dear\b", re.IGNORECASE)
_SIGN_OFF_RE = re.compile(
    r"^(Sincerely|Best regards|Kind regards|Warm regards|Regards|Best)[,.]?$", re.IGNORECASE
)


def _as_dict(cv: CVInput) -> Dict[str, Any]:
    """Normalized snake_case dict for a record or raw mapping."""
    if not isinstance(cv, CVRecord):
        cv = CVRecord.from_dict(cv)
    return cv.to_dict()


def _fill_missing(parsed: Dict[str, Any], fallback: Mapping[str, Any], keys) -> Dict[str, Any]:
    """Take keys the model omitted (or returned as null) from fallback."""
    for key in keys:
        if parsed.get(key) is None and key in fallback:
            parsed[key] = fallback[key]
            _log_debug(f"Model omitted {key}; keeping existing value")
    return parsed


def _generate_json(llm: LLMProvider, operation: str, user_prompt: str) -> Dict[str, Any]:
    response = llm.generate(JSON_ONLY_SYSTEM_PROMPT, user_prompt, json_output=True)
    log_llm_call(operation, llm.name, response)
    return parse_json_object_response(response.content)


def parse_raw_text_to_cv(raw_text: str, llm: Optional[LLMProvider] = None) -> CVRecord:
    """
    Parse a raw resume/CV text dump into a CV record.

    Sections the model omits come back empty.

    Raises:
        LLMResponseError: If the response holds no JSON object
    """
    llm = llm or get_provider()
    prompt = PARSE_CV_PROMPT.format(schema=CV_SCHEMA, raw_text=raw_text)
    return CVRecord.from_dict(_generate_json(llm, "Parse CV", prompt))


def add_to_existing_cv(
    existing: CVInput,
    new_content: str,
    content_type: str = "auto",
    llm: Optional[LLMProvider] = None,
) -> CVRecord:
    """
    Merge new experience or project text into an existing record.

    Args:
        existing: Current Master CV
        new_content: Free text describing the new role/project
        content_type: "auto", "experience" or "projects"
        llm: Provider (default: get_provider())

    Returns:
        Updated record; any section the model omits is kept from existing
    """
    llm = llm or get_provider()
    existing_dict = _as_dict(existing)

    content_label = "experience or projects" if content_type == "auto" else content_type
    prompt = ADD_CONTENT_PROMPT.format(
        content_label=content_label,
        existing_json=json.dumps(existing_dict, indent=2),
        new_content=new_content,
        content_type=content_type,
    )
    parsed = _generate_json(llm, "Add to CV", prompt)
    return CVRecord.from_dict(_fill_missing(parsed, existing_dict, CV_SECTIONS))


def tailor_cv_for_job(
    master: CVInput,
    job_description: str,
    llm: Optional[LLMProvider] = None,
) -> CVRecord:
    """
    Select and rewrite the most relevant parts of the Master CV for a job.

    Omitted entry lists come back empty (the model chose nothing); omitted
    skills and personal info are taken from the master record.
    """
    llm = llm or get_provider()
    master_dict = _as_dict(master)

    prompt = TAILOR_PROMPT.format(
        education_count=len(master_dict["education"]),
        experience_count=len(master_dict["experience"]),
        project_count=len(master_dict["projects"]),
        master_json=json.dumps(master_dict, indent=2),
        job_description=job_description,
    )
    parsed = _generate_json(llm, "Tailor CV", prompt)
    return CVRecord.from_dict(_fill_missing(parsed, master_dict, ("personal_info", "skills")))


def strip_letter_framing(text: str) -> str:
    """
    Remove a salutation and sign-off the model added around the body.

    Leading "Dear ..." lines are dropped, and everything from the first
    sign-off line ("Sincerely,", "Best regards," ...) onward is cut.
    """
    lines = (text or "").strip().split("\n")

    while lines and (not lines[0].strip() or _SALUTATION_RE.match(lines[0].strip())):
        lines.pop(0)

    for index, line in enumerate(lines):
        if _SIGN_OFF_RE.match(line.strip()):
            lines = lines[:index]
            break

    return "\n".join(lines).strip()


def generate_cover_letter_body(
    master: CVInput,
    job_description: str,
    company: str = "",
    position: str = "",
    word_count: int = 250,
    llm: Optional[LLMProvider] = None,
) -> str:
    """
    Write cover letter body paragraphs for a job.

    The assembler owns the name, contact block, date, salutation and closing,
    so only the body prose is returned.
    """
    llm = llm or get_provider()
    prompt = COVER_LETTER_PROMPT.format(
        word_count=word_count,
        position=position or "(not specified)",
        company=company or "(not specified)",
        job_description=job_description,
        master_json=json.dumps(_as_dict(master), indent=2),
    )
    response = llm.generate(COVER_LETTER_SYSTEM_PROMPT, prompt)
    log_llm_call("Cover letter body", llm.name, response)

    body = strip_letter_framing(response.content)
    if body != response.content.strip():
        _log_warning("Removed salutation/sign-off lines from generated body")
    return body
