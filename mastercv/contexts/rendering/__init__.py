"""
Rendering Context

Responsibilities:
- Compiles LaTeX to PDF locally (pdflatex) or through the remote LaTeX server
- Reports LaTeX errors, warnings, and page counts

Owns: LaTeX compilation, PDF bytes
Never: Modifies generated LaTeX
"""

from mastercv.contexts.rendering.compiler import (
    CompilationResult,
    compile_latex,
    compile_latex_source,
)
from mastercv.contexts.rendering.exceptions import (
    CompilationServiceError,
    CompilerConfigurationError,
)
from mastercv.contexts.rendering.latex_server import LatexServerClient

__all__ = [
    "CompilationResult",
    "CompilationServiceError",
    "CompilerConfigurationError",
    "LatexServerClient",
    "compile_latex",
    "compile_latex_source",
]
