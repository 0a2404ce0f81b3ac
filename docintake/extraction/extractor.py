"""AI-powered structured field extractor for immigration documents."""

import json
import time
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from docintake.extraction.base import BaseExtractor
from docintake.extraction.client_base import BaseExtractionClient, CompletionRequest
from docintake.extraction.exceptions import ExtractionError
from docintake.extraction.models import DocumentTemplate, ExtractionContext, ExtractionResult
from docintake.extraction.prompt_loader import (
    load_document_templates,
    load_json_schema,
    load_prompt_template,
)
from docintake.extraction.validator import validate_and_build
from docintake.logging.logger import Log

FALLBACK_TEMPLATE = "general"
DEFAULT_SYSTEM_PROMPT = (
    "You extract structured data from immigration documents. "
    "Respond with JSON only."
)


class Extractor(BaseExtractor):
    """Extracts typed fields from a transcript using an AI provider.

    The provider call, JSON parsing and validation are retried together up to
    ``max_attempts`` times with a linear backoff.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 1.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        templates_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_attempts = max(1, max_attempts)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._system_prompt = system_prompt
        self._sleep = sleep
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)
        self._templates = load_document_templates(templates_path)

    def extract(self, context: ExtractionContext) -> ExtractionResult:
        started = time.monotonic()
        template = self.template_for(context.document_category)
        prompt = self._build_prompt(context, template)
        Log.debug(f"Extraction prompt for document {context.document_id}:\n{prompt}")

        result = self._extract_with_retries(prompt, template)
        result = replace(result, processing_time_ms=int((time.monotonic() - started) * 1000))

        Log.info(
            f"Extraction complete for document {context.document_id}: "
            f"{len(result.extracted_fields)} fields, overall confidence "
            f"{result.confidence_summary.overall_confidence:.2f} "
            f"in {result.processing_time_ms}ms"
        )
        return result

    def template_for(self, category: str) -> DocumentTemplate:
        return self._templates.get(category) or self._templates[FALLBACK_TEMPLATE]

    def _extract_with_retries(self, prompt: str, template: DocumentTemplate) -> ExtractionResult:
        last_error: ExtractionError | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                raw_response = self._call_ai(prompt)
                Log.debug(f"AI raw response:\n{raw_response}")
                return validate_and_build(
                    self._parse_json(raw_response),
                    default_document_type=template.name,
                )
            except ExtractionError as exc:
                last_error = exc
                Log.warning(f"Extraction attempt {attempt}/{self._max_attempts} failed: {exc}")
                if attempt < self._max_attempts:
                    self._sleep(self._retry_backoff_seconds * attempt)

        raise ExtractionError(
            f"All extraction attempts failed. Last error: {last_error}"
        ) from last_error

    def _build_prompt(self, context: ExtractionContext, template: DocumentTemplate) -> str:
        fields = "\n".join(
            f"- {f.name}: {f.description} ({'REQUIRED' if f.required else 'OPTIONAL'})\n"
            f"   Examples: {', '.join(f.examples)}"
            for f in template.fields
        )
        return self._prompt_template.format(
            document_type=template.name,
            description=template.description,
            filename=context.filename,
            document_text=context.document_text,
            fields=fields,
            examples="\n".join(template.examples),
            json_schema=self._json_schema,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.complete(
            CompletionRequest(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                json_schema=self._json_schema_dict,
            )
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
