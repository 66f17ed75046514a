# tests/shell/test_dataframe_service.py
import pandas as pd
import pytest

from folio_auditor.model import CompositeReport, DimensionReport, Suggestion, ValidationIssue
from folio_shell.core.services.dataframe_service import REPORT_COLUMNS, DataFrameService


@pytest.fixture
def report():
    return CompositeReport(
        content=DimensionReport(score=40, issues=[
            ValidationIssue(kind="no_projects", severity="critical", message="No projects", fix="Add projects")
        ]),
        accessibility=DimensionReport(score=70, issues=[
            ValidationIssue(kind="missing_alt_text", severity="high", message="Image missing alt", element='img[src="a.jpg"]')
        ]),
        suggestions=[Suggestion(kind="light_content", message="Light content", text="Write more",
                                category="content", priority="high")],
    )


def test_report_is_flattened(report):
    df = DataFrameService(separator=",").to_dataframe(report)

    assert list(df.columns) == REPORT_COLUMNS
    assert len(df) == 3
    assert list(df["Kind"]) == ["no_projects", "missing_alt_text", "light_content"]
    assert list(df["Type"]) == ["issue", "issue", "suggestion"]
    assert df.iloc[2]["Severity"] == "high"


def test_empty_report_keeps_columns():
    df = DataFrameService(separator=",").to_dataframe(CompositeReport())
    assert df.empty
    assert list(df.columns) == REPORT_COLUMNS


def test_score_frame(report):
    df = DataFrameService.score_frame({"a.html": report})
    assert df.iloc[0]["Content"] == 40
    assert df.iloc[0]["Accessibility"] == 70


def test_export_csv(report, tmp_path):
    """Test of de export een CSV schrijft, inclusief ontbrekende mappen."""
    service = DataFrameService(separator=";")
    output = service.export_csv(service.to_dataframe({"jane.html": report}), tmp_path / "out" / "report")

    assert output.suffix == ".csv"
    assert output.exists()
    loaded = pd.read_csv(output, sep=";")
    assert list(loaded["Artifact"]) == ["jane.html"] * 3
