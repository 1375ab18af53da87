# -*- coding: utf-8 -*-
"""Server side entry point that turns raw input into a report result.

``generate_report_action`` is the single seam where every failure of the
pipeline converges into one of three fixed user facing messages.  It never
raises; callers only ever see a :data:`GenerateReportResult`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app import config
from app.analyzers.base import BaseReportGenerator
from app.analyzers.llm_reporter import LLMReportGenerator
from app.schemas import (
    BenchmarkRequest,
    GenerateReportResult,
    ReportActionInput,
    ReportFailure,
    ReportSuccess,
)

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input."
EMPTY_REPORT_MESSAGE = "The AI failed to generate a report. Please try again."
UNEXPECTED_ERROR_MESSAGE = (
    "An unexpected error occurred while generating the report. Please check the server logs."
)


def build_report_generator(provider: Optional[str] = None) -> BaseReportGenerator:
    """Create the LLM generator for the configured provider."""

    provider = (provider or config.LLM_PROVIDER or "claude").strip().lower()
    if provider not in config.SUPPORTED_PROVIDERS:
        logger.warning("Geçersiz LLM provider: %s, claude kullanılacak", provider)
        provider = "claude"
    return LLMReportGenerator(provider=provider)  # type: ignore[arg-type]


async def generate_report_action(
    values: Any,
    generator: Optional[BaseReportGenerator] = None,
) -> GenerateReportResult:
    try:
        validated = ReportActionInput.model_validate(values)
    except ValidationError as exc:
        logger.info("Geçersiz rapor isteği reddedildi (%d hata)", exc.error_count())
        return ReportFailure(error=INVALID_INPUT_MESSAGE)

    request = BenchmarkRequest(
        model_outputs=validated.model_outputs,
        glue_dataset=validated.glue_dataset,
    )

    start_time = time.time()
    try:
        if generator is None:
            generator = build_report_generator()
        result = await run_in_threadpool(generator.generate, request)
        report = result.report
    except Exception:
        logger.exception(
            "Benchmark raporu oluşturulurken hata oluştu (%.2fs, dataset=%s)",
            time.time() - start_time,
            request.glue_dataset,
        )
        return ReportFailure(error=UNEXPECTED_ERROR_MESSAGE)

    if not report:
        logger.warning("LLM boş rapor döndürdü (dataset=%s)", request.glue_dataset)
        return ReportFailure(error=EMPTY_REPORT_MESSAGE)

    logger.info(
        "Benchmark raporu oluşturuldu (%.2fs): dataset=%s, uzunluk=%d karakter",
        time.time() - start_time,
        request.glue_dataset,
        len(report),
    )
    return ReportSuccess(report=report)


__all__ = [
    "generate_report_action",
    "build_report_generator",
    "INVALID_INPUT_MESSAGE",
    "EMPTY_REPORT_MESSAGE",
    "UNEXPECTED_ERROR_MESSAGE",
]
