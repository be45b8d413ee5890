"""
Structured prompting over Gemini.

Every flow goes through `PromptRunner.run`, which:
1. Appends the output JSON Schema to the prompt
2. Extracts a JSON object from the reply (fenced block, raw text, or the
   first balanced object)
3. Validates it against the output model
4. Retries once with stricter instructions if the reply didn't parse

The model never writes to storage. It only returns text that is
validated before anyone sees it.
"""

import json
import re
import time
from typing import Any, Optional, TypeVar

import google.generativeai as genai
import structlog
from pydantic import BaseModel, ValidationError

from pesa_path.config import get_settings
from pesa_path.flows.prompts import RETRY_INSTRUCTIONS, STRUCTURED_OUTPUT_INSTRUCTIONS


T = TypeVar("T", bound=BaseModel)

logger = structlog.get_logger()


class FlowError(Exception):
    """An AI flow failed to produce a valid output."""

    def __init__(self, flow_name: str, message: str, provider_failed: bool = False):
        self.flow_name = flow_name
        # True when Gemini itself could not be reached or configured
        self.provider_failed = provider_failed
        super().__init__(f"{flow_name}: {message}")


def _extract_fenced_block(text: str) -> Optional[str]:
    blocks = re.findall(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL | re.IGNORECASE)
    return blocks[0].strip() if blocks else None


def _extract_balanced_object(text: str) -> Optional[str]:
    """First balanced top-level {...} span, ignoring braces inside strings."""
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def json_candidates(raw_text: str) -> list[str]:
    """Strings worth trying json.loads on, most likely first, deduplicated."""
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates = []
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)
    candidates.append(text)
    balanced = _extract_balanced_object(text)
    if balanced:
        candidates.append(balanced)

    seen = set()
    unique = []
    for candidate in candidates:
        c = candidate.strip()
        if c and c not in seen:
            seen.add(c)
            unique.append(c)
    return unique


def parse_structured(text: str, output_model: type[T]) -> T:
    """
    Parse a model reply into `output_model`.

    Raises:
        ValueError: If no candidate parses and validates
    """
    candidates = json_candidates(text)
    if not candidates:
        raise ValueError("Model returned empty content")

    errors = []
    for candidate in candidates:
        try:
            return output_model.model_validate(json.loads(candidate, strict=False))
        except (json.JSONDecodeError, ValidationError) as e:
            errors.append(str(e))
    raise ValueError("Unable to parse structured response: " + " | ".join(errors[:3]))


class PromptRunner:
    """
    Sends prompts to Gemini and returns validated pydantic outputs.

    Pass `model` to use a preconfigured (or mocked) GenerativeModel.
    """

    def __init__(self, model: Optional[Any] = None):
        self._settings = get_settings().gemini if model is None else None
        self._model = model or self._configure_genai()

    def _configure_genai(self) -> genai.GenerativeModel:
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        return genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    async def run(self, flow_name: str, prompt: str, output_model: type[T]) -> T:
        """
        Run one structured prompt.

        Raises:
            FlowError: If the provider call fails or no attempt yields a
                       valid output
        """
        schema = json.dumps(output_model.model_json_schema(by_alias=True))
        augmented = f"{prompt}\n\n{STRUCTURED_OUTPUT_INSTRUCTIONS.format(schema=schema)}"
        attempts = [augmented, f"{augmented}\n\n{RETRY_INSTRUCTIONS}"]

        started = time.monotonic()
        last_error = ""
        for attempt, attempt_prompt in enumerate(attempts, start=1):
            try:
                response = await self._model.generate_content_async(attempt_prompt)
            except Exception as e:
                logger.error("flow_provider_error", flow=flow_name, attempt=attempt, error=str(e))
                raise FlowError(flow_name, f"provider call failed: {e}", provider_failed=True) from e

            try:
                output = parse_structured(response.text, output_model)
            except ValueError as e:
                # response.text also raises ValueError when the reply was blocked
                last_error = str(e)
                logger.warning(
                    "flow_parse_failed",
                    flow=flow_name,
                    attempt=attempt,
                    attempts=len(attempts),
                    error=last_error,
                )
                continue

            logger.info(
                "flow_completed",
                flow=flow_name,
                attempt=attempt,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
            return output

        raise FlowError(flow_name, f"no valid output after {len(attempts)} attempts: {last_error}")
