"""
Text-generation service clients and JSON response recovery.

Every intake call goes through LLMProvider.generate(), which retries the
provider's transient error with exponential backoff. Calls that expect a CV
record ask for JSON output; providers that support a native JSON mode use it,
and parse_json_object_response() recovers the object either way.
"""

import json
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

MAX_RETRIES = 5
BASE_DELAY = 1.0

# A full CV record with bullet points easily exceeds 2k tokens
MAX_OUTPUT_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "8192"))
TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))

T = TypeVar("T")


class LLMResponseError(ValueError):
    """
    Raised when model output cannot be turned into the expected structure.

    Attributes:
        message: Error description
        raw_content: The model output that failed to parse
    """

    def __init__(self, message: str, raw_content: str = ""):
        self.message = message
        self.raw_content = raw_content

        parts = [message]
        if raw_content:
            snippet = raw_content[:200] + "..." if len(raw_content) > 200 else raw_content
            parts.append(f"\nModel output:\n{snippet}")

        super().__init__("\n".join(parts))


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
) -> T:
    """
    Call operation, retrying retryable_exception with delays of 1s, 2s, 4s...

    The last failure is re-raised after MAX_RETRIES attempts; any other
    exception propagates immediately.
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s ({attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


@dataclass
class LLMResponse:
    """Text returned by a provider plus token usage."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Base class for text-generation providers.

    Subclasses set _provider_prefix, _retryable_exception and _retry_message,
    implement _call_api(), and call update_model() from __init__.
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _retry_message: str

    name: str
    model: str

    def update_model(self, model: str):
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, json_output: bool) -> LLMResponse:
        """Single request, no retries."""

    def generate(self, system_prompt: str, user_prompt: str, json_output: bool = False) -> LLMResponse:
        """
        Generate a completion, retrying transient provider errors.

        Args:
            system_prompt: Instructions for the model
            user_prompt: Task content
            json_output: Request a bare JSON object where the provider supports it
        """
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt, json_output),
            self._retryable_exception,
            self._retry_message,
        )


def _require_api_key(variable: str) -> str:
    api_key = os.getenv(variable)
    if not api_key:
        raise ValueError(f"{variable} environment variable not set")
    return api_key


class GeminiProvider(LLMProvider):
    """Google Gemini via google-genai; JSON output uses response_mime_type."""

    _provider_prefix = "gemini"
    _retry_message = "Gemini server error"

    def __init__(self, model: str = "gemini-flash-latest"):
        try:
            from google import genai
            from google.genai import errors, types
        except ImportError:
            raise ImportError("google-genai package required. Install with: pip install google-genai")

        self.client = genai.Client(api_key=_require_api_key("GEMINI_API_KEY"))
        self._types = types
        self._retryable_exception = errors.ServerError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_output: bool) -> LLMResponse:
        config = self._types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=TEMPERATURE,
            max_output_tokens=MAX_OUTPUT_TOKENS,
            response_mime_type="application/json" if json_output else None,
        )
        response = self.client.models.generate_content(
            model=self.model, contents=user_prompt, config=config
        )
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            model=self.model,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
        )


class AnthropicProvider(LLMProvider):
    """
    Anthropic Claude via the anthropic SDK.

    There is no native JSON mode; JSON_ONLY_SYSTEM_PROMPT carries the format
    requirement and the response is recovered leniently.
    """

    _provider_prefix = "anthropic"
    _retry_message = "Anthropic API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        self.client = anthropic.Anthropic(api_key=_require_api_key("ANTHROPIC_API_KEY"))
        self._retryable_exception = anthropic.OverloadedError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_output: bool) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(
            content=text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions; JSON output uses response_format json_object."""

    _provider_prefix = "openai"
    _retry_message = "OpenAI rate limit hit"

    def __init__(self, model: str = "gpt-4o"):
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        self.client = openai.OpenAI(api_key=_require_api_key("OPENAI_API_KEY"))
        self._retryable_exception = openai.RateLimitError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_output: bool) -> LLMResponse:
        extra = {"response_format": {"type": "json_object"}} if json_output else {}
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **extra,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


PROVIDERS = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Build a provider by name.

    Args:
        provider_name: "gemini", "anthropic" or "openai" (default: LLM_PROVIDER, or gemini)
        model: Model override (default: the provider's default model)

    Raises:
        ValueError: Unknown provider or missing API key
        ImportError: Provider SDK not installed (pip install mastercv[llm])
    """
    provider_name = (provider_name or os.getenv("LLM_PROVIDER", "gemini")).lower()
    if provider_name not in PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(sorted(PROVIDERS))}"
        )

    provider_class = PROVIDERS[provider_name]
    return provider_class(model=model) if model else provider_class()


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` markdown block if present."""
    text = text.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text)
    text = re.sub(r"\s*```$", "", text)
    return text.strip()


def parse_json_object_response(text: str) -> Dict[str, Any]:
    """
    Recover a JSON object from model output.

    Tries the raw text, the text with markdown fences removed, then the
    outermost {...} span.

    Raises:
        LLMResponseError: If no JSON object can be recovered
    """
    candidates = [text.strip(), strip_code_fences(text)]

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            result = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(result, dict):
            return result

    raise LLMResponseError("Could not parse a JSON object from the model response", text)
