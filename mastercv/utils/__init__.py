"""
Shared utilities for mastercv.

Common functionality used across contexts:
- Text escaping and URL normalization
- Logging setup
- Date formatting
- LLM provider access
"""

from mastercv.utils.text_processing import escape_latex
from mastercv.utils.timestamp import long_date_today, now, today

__all__ = ["escape_latex", "long_date_today", "now", "today"]
