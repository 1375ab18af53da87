"""Tests for request and form validation."""
import pytest
from pydantic import ValidationError

from app import config
from app.schemas import (
    GLUE_DATASETS,
    BenchmarkForm,
    BenchmarkRequest,
    ReportActionInput,
    ReportFailure,
    ReportSuccess,
)


class TestValidation:
    """Both validation layers share one length bound."""

    def test_accepts_wire_names_and_field_names(self):
        by_alias = BenchmarkRequest.model_validate({"modelOutputs": "x", "glueDataset": "RTE"})
        by_name = BenchmarkRequest(model_outputs="x", glue_dataset="RTE")
        assert by_alias == by_name

    @pytest.mark.parametrize("length", [0, 10, 49])
    def test_rejects_short_outputs(self, length):
        with pytest.raises(ValidationError, match="at least 50 characters"):
            ReportActionInput.model_validate({"modelOutputs": "a" * length, "glueDataset": "MRPC"})

    def test_rejects_outputs_over_maximum(self):
        too_long = "a" * (config.MODEL_OUTPUTS_MAX_CHARS + 1)
        with pytest.raises(ValidationError, match="must not exceed"):
            ReportActionInput.model_validate({"modelOutputs": too_long, "glueDataset": "MRPC"})
        with pytest.raises(ValidationError, match="must not exceed"):
            BenchmarkForm.model_validate({"modelOutputs": too_long, "glueDataset": "MRPC"})

    def test_maximum_is_configurable(self, monkeypatch):
        monkeypatch.setattr(config, "MODEL_OUTPUTS_MAX_CHARS", 60)
        ReportActionInput.model_validate({"modelOutputs": "a" * 60, "glueDataset": "MRPC"})
        with pytest.raises(ValidationError, match="must not exceed 60 characters"):
            ReportActionInput.model_validate({"modelOutputs": "a" * 61, "glueDataset": "MRPC"})

    def test_handler_accepts_any_non_empty_dataset(self):
        validated = ReportActionInput.model_validate(
            {"modelOutputs": "a" * 50, "glueDataset": "custom-set"}
        )
        assert validated.glue_dataset == "custom-set"

    def test_handler_rejects_empty_dataset(self):
        with pytest.raises(ValidationError, match="Please select a GLUE dataset."):
            ReportActionInput.model_validate({"modelOutputs": "a" * 50, "glueDataset": ""})

    def test_form_requires_known_dataset(self):
        with pytest.raises(ValidationError, match="Please select a GLUE dataset."):
            BenchmarkForm.model_validate({"modelOutputs": "a" * 50, "glueDataset": "custom-set"})
        for dataset in GLUE_DATASETS:
            BenchmarkForm.model_validate({"modelOutputs": "a" * 50, "glueDataset": dataset})

    def test_result_serialises_only_its_branch(self):
        assert ReportSuccess(report="X").model_dump() == {"success": True, "report": "X"}
        assert ReportFailure(error="nope").model_dump() == {"success": False, "error": "nope"}
