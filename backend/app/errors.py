"""Exceptions raised along the report generation pipeline."""


class ReportGenerationError(RuntimeError):
    """Base error for failures while producing a benchmark report."""


class SchemaMismatchError(ReportGenerationError):
    """The model reply could not be validated against the report schema."""


class SubmissionInProgressError(ReportGenerationError):
    """A page already has a submission in flight."""


__all__ = [
    "ReportGenerationError",
    "SchemaMismatchError",
    "SubmissionInProgressError",
]
