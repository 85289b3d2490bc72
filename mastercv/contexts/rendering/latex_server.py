"""
Remote LaTeX Compilation Client

Client for the standalone LaTeX compilation server: POST /compile takes
{"latex": ..., "compiler": "pdflatex"} with an X-API-Key header and returns
application/pdf on success or JSON {"error", "details"} on failure.
"""

import os
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

from mastercv.contexts.rendering.exceptions import (
    CompilationServiceError,
    CompilerConfigurationError,
)
from mastercv.contexts.rendering.logger import _log_debug, _log_error, _log_info, _log_success

load_dotenv()

DEFAULT_TIMEOUT = 60
PDF_CONTENT_TYPE = "application/pdf"


class LatexServerClient:
    """
    HTTP client for the LaTeX compilation server.

    Args:
        url: Server base URL (default: LATEX_SERVER_URL)
        api_key: API key sent as X-API-Key (default: LATEX_SERVER_API_KEY)
        timeout: Request timeout in seconds (default: LATEX_SERVER_TIMEOUT, or 60)

    Raises:
        CompilerConfigurationError: If the URL or API key is not configured
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        url = url or os.getenv("LATEX_SERVER_URL")
        api_key = api_key or os.getenv("LATEX_SERVER_API_KEY")

        if not url:
            raise CompilerConfigurationError(
                "LaTeX compilation server is not configured", "LATEX_SERVER_URL"
            )
        if not api_key:
            raise CompilerConfigurationError(
                "LaTeX compilation server API key is not configured", "LATEX_SERVER_API_KEY"
            )

        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout or float(os.getenv("LATEX_SERVER_TIMEOUT", DEFAULT_TIMEOUT))
        self.session = session or requests.Session()

    @staticmethod
    def _error_payload(response: requests.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {"error": response.text or "Unknown server error"}
        return payload if isinstance(payload, dict) else {"error": str(payload)}

    def compile(self, latex: str) -> bytes:
        """
        Compile LaTeX source remotely.

        Args:
            latex: Complete LaTeX document

        Returns:
            PDF bytes

        Raises:
            ValueError: If latex is empty
            CompilationServiceError: On transport failure, non-2xx status, or a
                response that is not a PDF
        """
        if not latex:
            raise ValueError("LaTeX content is required")

        _log_info(f"Sending LaTeX to compilation server ({len(latex)} chars)")
        try:
            response = self.session.post(
                f"{self.url}/compile",
                json={"latex": latex, "compiler": "pdflatex"},
                headers={"X-API-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            _log_error(f"Compilation server unreachable: {e}")
            raise CompilationServiceError(f"Could not reach LaTeX server at {self.url}", details=str(e)) from e

        if not response.ok:
            payload = self._error_payload(response)
            error = payload.get("error") or f"Compilation failed: {response.status_code}"
            _log_error(f"Compilation server returned {response.status_code}: {error}")
            raise CompilationServiceError(error, response.status_code, payload.get("details"))

        content_type = response.headers.get("Content-Type", "")
        if not content_type.startswith(PDF_CONTENT_TYPE):
            raise CompilationServiceError(
                f"Expected {PDF_CONTENT_TYPE}, got '{content_type or 'no content type'}'",
                response.status_code,
            )

        _log_success(f"PDF received ({len(response.content)} bytes)")
        return response.content

    def health(self) -> Dict[str, Any]:
        """
        Query GET /health.

        Returns:
            Server status payload (e.g., {"status": "healthy", "pdflatex": true})

        Raises:
            CompilationServiceError: If the server is unreachable or unhealthy
        """
        try:
            response = self.session.get(f"{self.url}/health", timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise CompilationServiceError(f"Health check failed for {self.url}", details=str(e)) from e

        payload = response.json()
        _log_debug(f"Server health: {payload}")
        return payload
