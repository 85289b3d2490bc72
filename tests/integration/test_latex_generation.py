"""Integration tests for CV record -> Jake's Resume LaTeX."""

import pytest

from mastercv.contexts.templating import CVRecord, CVToLaTeXConverter, generate_latex
from mastercv.contexts.templating.registries import TemplateRegistry

SECTION_HEADERS = [
    r"\section{Education}",
    r"\section{Experience}",
    r"\section{Projects}",
    r"\section{Technical Skills}",
]


def _section(latex: str, header: str) -> str:
    """Slice of the document from header up to the next section or the closing rule."""
    start = latex.index(header)
    candidates = [latex.find(other, start + 1) for other in SECTION_HEADERS]
    candidates.append(latex.index(r"\end{document}"))
    end = min(position for position in candidates if position != -1)
    return latex[start:end]


@pytest.fixture
def latex(sample_cv) -> str:
    return generate_latex(sample_cv)


@pytest.mark.integration
def test_document_frame(latex):
    assert latex.startswith(r"\documentclass[letterpaper,11pt]{article}")
    assert latex.endswith("%-------------------------------------------\n\\end{document}")
    assert latex.count(r"\begin{document}") == 1
    assert latex.count(r"\end{document}") == 1


@pytest.mark.integration
def test_heading(latex):
    assert r"\textbf{\Huge \scshape Jane Doe} \\ \vspace{1pt}" in latex
    assert (
        r"\small +1 555-010-2000 $|$ "
        r"\href{mailto:jane.doe@example.com}{\underline{jane.doe@example.com}} $|$ "
        r"\href{https://linkedin.com/in/janedoe}{\underline{linkedin.com/in/janedoe}} $|$ "
        r"\href{https://github.com/janedoe}{\underline{github.com/janedoe}}"
    ) in latex


@pytest.mark.integration
def test_section_order(latex):
    positions = [latex.index(header) for header in SECTION_HEADERS]
    assert positions == sorted(positions)
    assert latex.index(r"\begin{document}") < positions[0]


@pytest.mark.integration
def test_education_entry(latex):
    education = _section(latex, r"\section{Education}")

    assert "{State University}{Springfield, IL}" in education
    assert "{B.S. in Computer Science}{Aug 2016 -- May 2020}" in education


@pytest.mark.integration
def test_experience_entry(latex):
    experience = _section(latex, r"\section{Experience}")

    assert "{Software Engineer}{Jun 2020 -- Present}" in experience
    assert "{Acme Corp}{Remote}" in experience
    assert experience.count(r"\resumeItem{") == 4
    assert r"\resumeItem{Cut deploy time by 40\% with incremental builds}" in experience
    assert r"\resumeItem{Mentored 3 engineers on R\&D projects}" in experience


@pytest.mark.integration
def test_project_links_name_to_demo(latex):
    projects = _section(latex, r"\section{Projects}")

    assert projects.count(r"\href{") == 1
    assert (
        r"{\href{https://resume.example.com/demo}{\textbf{Resume Builder}} $|$ "
        r"\emph{Python, Jinja2, LaTeX}}{2024}"
    ) in projects


@pytest.mark.integration
def test_skills_block(latex):
    skills = _section(latex, r"\section{Technical Skills}")

    assert (
        "     \\textbf{Languages}{: Python, C++} \\\\\n"
        "     \\textbf{Frameworks}{: FastAPI} \\\\\n"
        "     \\textbf{Developer Tools}{: Git, Docker}\n"
    ) in skills
    assert "Libraries" not in skills


@pytest.mark.integration
def test_deterministic(sample_cv):
    assert generate_latex(sample_cv) == generate_latex(sample_cv)
    assert generate_latex(sample_cv) == CVToLaTeXConverter(TemplateRegistry()).generate_document(sample_cv)


@pytest.mark.integration
def test_accepts_raw_mapping(sample_cv, sample_cv_dict):
    assert generate_latex(sample_cv_dict) == generate_latex(sample_cv)


@pytest.mark.integration
def test_no_runs_of_blank_lines(latex):
    assert "\n\n\n" not in latex


@pytest.mark.integration
def test_empty_record_is_still_a_document():
    latex = generate_latex(CVRecord.empty())

    assert r"\section{" not in latex
    assert r"\textbf{\Huge \scshape } \\ \vspace{1pt}" in latex
    assert latex.endswith("\\end{document}")


@pytest.mark.integration
def test_empty_sections_omitted(sample_cv_dict):
    sample_cv_dict["education"] = []
    sample_cv_dict["projects"] = []
    sample_cv_dict["skills"] = {"languages": [], "frameworks": [], "tools": [], "libraries": []}

    latex = generate_latex(sample_cv_dict)

    assert r"\section{Experience}" in latex
    assert r"\section{Education}" not in latex
    assert r"\section{Projects}" not in latex
    assert r"\section{Technical Skills}" not in latex


@pytest.mark.integration
def test_user_text_is_escaped():
    cv = CVRecord.from_dict(
        {
            "personal_info": {"name": "Jo_e #1"},
            "experience": [
                {
                    "role": "Dev & Ops",
                    "company": "A$B",
                    "points": ["Used ~/bin and {braces} at 100%", r"C:\temp"],
                }
            ],
            "skills": {"languages": ["C#", "F#"]},
        }
    )

    latex = generate_latex(cv)

    assert r"\scshape Jo\_e \#1}" in latex
    assert r"{Dev \& Ops}" in latex
    assert r"{A\$B}" in latex
    assert r"\resumeItem{Used \textasciitilde{}/bin and \{braces\} at 100\%}" in latex
    assert r"\resumeItem{C:\textbackslash{}temp}" in latex
    assert r"{: C\#, F\#}" in latex


@pytest.mark.integration
def test_line_breaks_in_values_are_kept():
    cv = CVRecord.from_dict(
        {
            "personal_info": {"name": "Ann"},
            "experience": [{"role": "Dev", "points": ["line a\n\n\n\nline b"]}],
        }
    )

    latex = generate_latex(cv)

    assert "\\resumeItem{line a\n\n\n\nline b}" in latex


@pytest.mark.integration
def test_contact_fields_skip_empty_and_keep_scheme():
    cv = CVRecord.from_dict(
        {"personal_info": {"name": "Ann", "website": "http://ann.dev", "email": "ann@x.io"}}
    )

    latex = generate_latex(cv)

    assert (
        r"\small \href{mailto:ann@x.io}{\underline{ann@x.io}} $|$ "
        r"\href{http://ann.dev}{\underline{ann.dev}}"
    ) in latex


@pytest.mark.integration
def test_experience_without_points_keeps_item_list():
    cv = CVRecord.from_dict({"experience": [{"role": "Intern", "company": "X"}]})

    experience = _section(generate_latex(cv), r"\section{Experience}")

    assert r"\resumeItem{" not in experience
    assert r"\resumeItemListStart" in experience
    assert r"\resumeItemListEnd" in experience


@pytest.mark.integration
def test_project_without_demo_link():
    cv = CVRecord.from_dict({"projects": [{"name": "CLI", "technologies": "Go"}]})

    projects = _section(generate_latex(cv), r"\section{Projects}")

    assert r"\href{" not in projects
    assert r"{\textbf{CLI} $|$ \emph{Go}}{}" in projects
