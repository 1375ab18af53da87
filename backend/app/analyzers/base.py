"""Interface for components that turn a benchmark request into a report."""

from abc import ABC, abstractmethod

from app.schemas import BenchmarkReport, BenchmarkRequest


class BaseReportGenerator(ABC):
    """Abstract base class for benchmark report generators."""

    @abstractmethod
    def generate(self, request: BenchmarkRequest) -> BenchmarkReport:
        """Produce a report for the request or raise."""
        raise NotImplementedError
