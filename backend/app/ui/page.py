# -*- coding: utf-8 -*-
"""Submission lifecycle of the evaluator page."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError

from app.actions import generate_report_action
from app.analyzers.base import BaseReportGenerator
from app.errors import SubmissionInProgressError
from app.schemas import (
    SELECT_DATASET_MESSAGE,
    BenchmarkForm,
    GenerateReportResult,
    ReportDownload,
    min_length_message,
)
from app.ui.notifier import Notifier

logger = logging.getLogger(__name__)

REPORT_FILENAME = "benchmark-report.md"
REPORT_MEDIA_TYPE = "text/markdown; charset=utf-8"

FORM_FIELDS = ("modelOutputs", "glueDataset")

ReportAction = Callable[[Dict[str, Any], Optional[BaseReportGenerator]], Awaitable[GenerateReportResult]]


class PageState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"


class EvaluatorPage:
    """Track the form submission, the current report and the submitted input.

    Only one submission is tracked at a time.  A new submission clears the
    previous report and snapshot before the handler is awaited, and the
    report slot is overwritten, never merged, when a result arrives.
    """

    def __init__(self, notifier: Notifier, action: Optional[ReportAction] = None) -> None:
        self.notifier = notifier
        self._action: ReportAction = action or generate_report_action
        self._state = PageState.IDLE
        self.report: Optional[str] = None
        self.submitted: Optional[BenchmarkForm] = None
        self.last_values: Optional[BenchmarkForm] = None

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is PageState.PENDING

    @staticmethod
    def validate_form(raw: Mapping[str, Any]) -> Tuple[Optional[BenchmarkForm], Dict[str, str]]:
        """Validate raw form fields and return inline messages keyed by field name."""

        # Browsers submit textarea line breaks as CRLF.
        values = {field: str(raw.get(field) or "").replace("\r\n", "\n") for field in FORM_FIELDS}
        try:
            return BenchmarkForm.model_validate(values), {}
        except ValidationError as exc:
            fallback = {
                "modelOutputs": min_length_message(),
                "glueDataset": SELECT_DATASET_MESSAGE,
            }
            field_errors: Dict[str, str] = {}
            for error in exc.errors():
                field = str(error["loc"][0]) if error.get("loc") else "form"
                cause = (error.get("ctx") or {}).get("error")
                message = str(cause) if cause else fallback.get(field, error["msg"])
                field_errors.setdefault(field, message)
            return None, field_errors

    async def submit(
        self,
        values: BenchmarkForm,
        generator: Optional[BaseReportGenerator] = None,
    ) -> GenerateReportResult:
        if self.is_pending:
            raise SubmissionInProgressError("A benchmark report is already being generated.")

        self.report = None
        self.submitted = None
        self.last_values = values
        self._state = PageState.PENDING
        logger.info("Rapor isteği gönderiliyor: dataset=%s", values.glue_dataset)

        try:
            result = await self._action(values.model_dump(by_alias=True), generator)
        except Exception:
            self._state = PageState.IDLE
            raise

        if result.success and result.report:
            self.report = result.report
            self.submitted = values
            self._state = PageState.SUCCESS
            self.notifier.notify(
                "success",
                "Success!",
                "Benchmark report generated successfully.",
            )
        else:
            self._state = PageState.IDLE
            self.notifier.notify(
                "destructive",
                "Error",
                getattr(result, "error", None) or "An unknown error occurred.",
            )
        return result

    def download(self) -> Optional[ReportDownload]:
        if not self.report:
            return None
        return ReportDownload(
            filename=REPORT_FILENAME,
            media_type=REPORT_MEDIA_TYPE,
            content=self.report.encode("utf-8"),
        )


__all__ = [
    "EvaluatorPage",
    "PageState",
    "ReportAction",
    "REPORT_FILENAME",
    "REPORT_MEDIA_TYPE",
]
