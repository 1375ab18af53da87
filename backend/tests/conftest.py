"""Pytest configuration and fixtures."""
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from app.analyzers.base import BaseReportGenerator  # noqa: E402
from app.schemas import BenchmarkReport, BenchmarkRequest  # noqa: E402


class StubReportGenerator(BaseReportGenerator):
    """Deterministic generator that records every request it receives."""

    def __init__(self, report: str = "Accuracy: 0.91", error: Optional[Exception] = None) -> None:
        self.report = report
        self.error = error
        self.requests: List[BenchmarkRequest] = []

    def generate(self, request: BenchmarkRequest) -> BenchmarkReport:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return BenchmarkReport(report=self.report)


@pytest.fixture
def stub_generator():
    return StubReportGenerator()


@pytest.fixture
def model_outputs():
    """Sixty characters of CSV shaped model output."""
    text = "id,label\n1,1\n2,0\n3,1\n4,1\n5,0\n6,1\n7,0\n8,1\n9,1\n10,0\n11,1\n"
    return (text * 2)[:60]
