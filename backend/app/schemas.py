# -*- coding: utf-8 -*-
"""Pydantic models shared by the prompt invoker, request handler and page."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app import config

GLUE_DATASETS = (
    "CoLA",
    "SST-2",
    "MRPC",
    "STS-B",
    "QQP",
    "MNLI",
    "QNLI",
    "RTE",
    "WNLI",
)

SELECT_DATASET_MESSAGE = "Please select a GLUE dataset."


def min_length_message() -> str:
    return f"Model output must be at least {config.MODEL_OUTPUTS_MIN_CHARS} characters."


def max_length_message() -> str:
    return f"Model output must not exceed {config.MODEL_OUTPUTS_MAX_CHARS} characters."


class BenchmarkRequest(BaseModel):
    """Input of the benchmark report prompt."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model_outputs: str = Field(
        alias="modelOutputs",
        description="AI model outputs in JSON or CSV format.",
    )
    glue_dataset: str = Field(
        alias="glueDataset",
        description="The GLUE benchmark dataset to compare against.",
    )


class BenchmarkReport(BaseModel):
    """Output of the benchmark report prompt."""

    report: str = Field(description="A detailed benchmark report.")


class ReportActionInput(BenchmarkRequest):
    """Validation applied at the request handler boundary."""

    @field_validator("model_outputs")
    @classmethod
    def _check_length(cls, value: str) -> str:
        if len(value) < config.MODEL_OUTPUTS_MIN_CHARS:
            raise ValueError(min_length_message())
        if len(value) > config.MODEL_OUTPUTS_MAX_CHARS:
            raise ValueError(max_length_message())
        return value

    @field_validator("glue_dataset")
    @classmethod
    def _check_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError(SELECT_DATASET_MESSAGE)
        return value


class BenchmarkForm(ReportActionInput):
    """Form validation; the dataset must come from the fixed GLUE list."""

    @field_validator("glue_dataset")
    @classmethod
    def _check_known_dataset(cls, value: str) -> str:
        if value not in GLUE_DATASETS:
            raise ValueError(SELECT_DATASET_MESSAGE)
        return value


class ReportSuccess(BaseModel):
    success: Literal[True] = True
    report: str


class ReportFailure(BaseModel):
    success: Literal[False] = False
    error: str


GenerateReportResult = Union[ReportSuccess, ReportFailure]


class ReportDownload(BaseModel):
    """A report ready to be offered as a file download."""

    filename: str
    media_type: str
    content: bytes


__all__ = [
    "GLUE_DATASETS",
    "SELECT_DATASET_MESSAGE",
    "BenchmarkRequest",
    "BenchmarkReport",
    "ReportActionInput",
    "BenchmarkForm",
    "ReportSuccess",
    "ReportFailure",
    "GenerateReportResult",
    "ReportDownload",
    "min_length_message",
    "max_length_message",
]
