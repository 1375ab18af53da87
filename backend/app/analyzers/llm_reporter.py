# -*- coding: utf-8 -*-
"""LLM backed benchmark report generator."""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Literal

from anthropic import Anthropic
from anthropic import APIConnectionError as AnthropicConnectionError
from anthropic import APIError as AnthropicAPIError
from openai import OpenAI
from openai import APIConnectionError as OpenAIConnectionError
from openai import APIError as OpenAIAPIError
from pydantic import ValidationError

from app.analyzers.base import BaseReportGenerator
from app.errors import ReportGenerationError, SchemaMismatchError
from app.prompts.benchmark_prompt import BENCHMARK_PROMPT_NAME, BENCHMARK_REPORT_PROMPT
from app.schemas import BenchmarkReport, BenchmarkRequest

logger = logging.getLogger(__name__)

CLAUDE_MODEL = "claude-sonnet-4-5-20250929"

GPT_REPORT_JSON_SCHEMA: Dict[str, Any] = {
    "name": "BenchmarkReport",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "report": {"type": "string"},
        },
        "required": ["report"],
    },
}

SYSTEM_INSTRUCTION = (
    "You are an assistant that strictly replies with ONLY a valid JSON object. "
    "Return PURE JSON - NO markdown fences and NO explanatory text around it. "
    'The object must contain a single key "report" whose value is the full '
    "benchmark report written as Markdown. Ensure all strings are properly escaped, "
    "especially quotes and newlines."
)


class LLMReportGenerator(BaseReportGenerator):
    """Generate GLUE benchmark reports with an LLM backend."""

    def __init__(self, provider: Literal["claude", "openai"] = "claude") -> None:
        self.provider = provider
        self._openai_high_reasoning = False

        if provider == "claude":
            api_key = os.getenv("CLAUDE_API_KEY")
            logger.info(
                "Anthropic istemcisi oluşturuluyor (api_key_var=%s)",
                bool(api_key),
            )
            if api_key:
                self.client = Anthropic(api_key=api_key)
            else:
                logger.warning("CLAUDE_API_KEY bulunamadı, stub istemci kullanılacak.")
                self.client = self._missing_key_client("Claude")
        else:
            api_key = os.getenv("OPENAI_API_KEY")
            logger.info(
                "OpenAI istemcisi oluşturuluyor (api_key_var=%s)",
                bool(api_key),
            )
            self._openai_high_reasoning = (
                os.getenv("OPENAI_HIGH_REASONING", "").strip().lower()
                in {"1", "true", "yes", "on"}
            )
            if api_key:
                self.client = OpenAI(api_key=api_key)
            else:
                logger.warning("OPENAI_API_KEY bulunamadı, stub istemci kullanılacak.")
                self.client = self._missing_key_client("OpenAI")

    @staticmethod
    def _missing_key_client(label: str) -> Any:
        """Build a client whose calls fail because no API key is configured."""

        def _raise_missing_key(*_args: Any, **_kwargs: Any) -> Any:
            raise ReportGenerationError(f"{label} API key is not configured.")

        create_stub = {"create": staticmethod(_raise_missing_key)}
        return type(
            f"{label}Stub",
            (),
            {
                "messages": type("MessagesStub", (), create_stub)(),
                "responses": type("ResponsesStub", (), create_stub)(),
            },
        )()

    @staticmethod
    def _openai_supports_temperature(model_name: str) -> bool:
        """Return True when the given OpenAI model supports temperature."""

        if model_name.startswith("gpt-5"):
            logger.debug(
                "OpenAI modeli %s temperature parametresini desteklemiyor; parametre atlanacak.",
                model_name,
            )
            return False
        return True

    @staticmethod
    def _extract_json_payload(raw_text: str) -> Any:
        """Extract a JSON object from an LLM response."""
        if not raw_text or not raw_text.strip():
            raise SchemaMismatchError("LLM response payload is empty.")

        raw_text = raw_text.strip()

        try:
            return json.loads(raw_text)
        except json.JSONDecodeError as exc:
            logger.debug("Yanıtın tamamı JSON olarak ayrıştırılamadı: %s", exc)

        # The report itself is Markdown, so only a fenced block holding an object counts.
        for code_block in re.findall(r"```(?:json)?\s*(.+?)\s*```", raw_text, flags=re.DOTALL):
            try:
                candidate = json.loads(code_block.strip())
            except json.JSONDecodeError:
                continue
            if isinstance(candidate, dict):
                return candidate

        first_brace = raw_text.find("{")
        if first_brace == -1:
            logger.warning("Yanıtta JSON nesnesi bulunamadı: %s", raw_text[:200])
            raise SchemaMismatchError("Unable to locate JSON object in LLM response.")

        depth = 0
        in_string = False
        escape_next = False
        for index in range(first_brace, len(raw_text)):
            char = raw_text[index]
            if escape_next:
                escape_next = False
                continue
            if char == "\\":
                escape_next = True
                continue
            if char == '"':
                in_string = not in_string
                continue
            if in_string:
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(raw_text[first_brace:index + 1])
                    except json.JSONDecodeError as exc:
                        logger.debug("Süslü parantez sayımıyla çıkarılan JSON ayrıştırılamadı: %s", exc)
                    break

        logger.warning("Tüm ayrıştırma stratejileri başarısız oldu. Yanıt önizlemesi: %s", raw_text[:500])
        raise SchemaMismatchError("Unable to parse JSON from LLM response.")

    @staticmethod
    def _parse_report_output(raw_text: str) -> BenchmarkReport:
        """Validate the LLM response against the report schema."""

        payload = LLMReportGenerator._extract_json_payload(raw_text)
        if not isinstance(payload, dict):
            raise SchemaMismatchError("LLM response is not a JSON object.")
        try:
            return BenchmarkReport.model_validate(payload)
        except ValidationError as exc:
            raise SchemaMismatchError(f"LLM response does not match the report schema: {exc}") from exc

    def _build_prompt(self, request: BenchmarkRequest) -> str:
        return BENCHMARK_REPORT_PROMPT.format(
            model_outputs=request.model_outputs,
            glue_dataset=request.glue_dataset,
        )

    def generate(self, request: BenchmarkRequest) -> BenchmarkReport:
        """Render the benchmark prompt and dispatch it to the chosen provider."""

        prompt = self._build_prompt(request)
        logger.debug(
            "%s hazırlandı (provider=%s, dataset=%s, uzunluk=%s karakter)",
            BENCHMARK_PROMPT_NAME,
            self.provider,
            request.glue_dataset,
            len(prompt),
        )

        if self.provider == "claude":
            return self._generate_with_claude(prompt)
        return self._generate_with_gpt(prompt)

    def _generate_with_claude(self, prompt: str) -> BenchmarkReport:
        try:
            response = self.client.messages.create(
                model=CLAUDE_MODEL,
                max_tokens=8192,
                temperature=0,
                system=SYSTEM_INSTRUCTION,
                messages=[{"role": "user", "content": prompt}],
            )
        except (TimeoutError, AnthropicConnectionError, AnthropicAPIError) as exc:
            raise ReportGenerationError(f"Claude request failed: {exc}") from exc

        text_chunks = [
            getattr(block, "text", "")
            for block in getattr(response, "content", None) or []
            if getattr(block, "type", "") == "text"
        ]
        raw_text = "".join(text_chunks).strip()

        usage = getattr(response, "usage", None)
        logger.debug(
            "Claude yanıtı alındı (uzunluk=%s karakter, input_tokens=%s, output_tokens=%s)",
            len(raw_text),
            getattr(usage, "input_tokens", "N/A"),
            getattr(usage, "output_tokens", "N/A"),
        )

        return self._parse_report_output(raw_text)

    def _generate_with_gpt(self, prompt: str) -> BenchmarkReport:
        model_name = "gpt-5-thinking" if self._openai_high_reasoning else "gpt-5"
        reasoning_effort = "high" if self._openai_high_reasoning else "medium"

        request_kwargs: Dict[str, Any] = {
            "model": model_name,
            "reasoning": {"effort": reasoning_effort},
            "input": [
                {
                    "role": "system",
                    "content": [{"type": "input_text", "text": SYSTEM_INSTRUCTION}],
                },
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                },
            ],
        }

        if self._openai_supports_temperature(model_name):
            request_kwargs["temperature"] = 0

        # Responses API structured output: text.format carries the JSON schema.
        request_kwargs["text"] = {"format": {"type": "json_schema", **GPT_REPORT_JSON_SCHEMA}}

        try:
            response = self.client.responses.create(**request_kwargs)
        except (TimeoutError, OpenAIConnectionError, OpenAIAPIError) as exc:
            raise ReportGenerationError(f"OpenAI request failed: {exc}") from exc

        collected_chunks: List[str] = []
        for output_block in getattr(response, "output", None) or []:
            for content in getattr(output_block, "content", None) or []:
                if getattr(content, "type", "") in {"output_text", "text", ""}:
                    text_value = getattr(content, "text", "") or ""
                    if text_value:
                        collected_chunks.append(text_value)
        raw_text = "".join(collected_chunks).strip()

        if not raw_text:
            raw_text = getattr(response, "output_text", "") or ""

        usage = getattr(response, "usage", None)
        logger.debug(
            "OpenAI yanıtı alındı (uzunluk=%s karakter, total_tokens=%s)",
            len(raw_text),
            getattr(usage, "total_tokens", "N/A"),
        )

        return self._parse_report_output(raw_text)


__all__ = ["LLMReportGenerator", "GPT_REPORT_JSON_SCHEMA"]
