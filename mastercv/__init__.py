"""
mastercv - one canonical CV record, many generated documents

Keeps a single "Master CV" record and derives job-specific documents from it
using LaTeX typesetting and a plain-text cover letter format.

Architecture:
- Templating Context: CV record model and CV -> LaTeX generation
- Correspondence Context: cover letter assembly, parsing, HTML/DOCX rendering
- Rendering Context: LaTeX -> PDF compilation (local pdflatex or remote server)
- Intake Context: AI text service calls that produce CV records and letter prose
"""

__version__ = "0.1.0"
