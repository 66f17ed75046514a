# src/folio_shell/core/services/dataframe_service.py
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import pandas as pd

from folio_auditor.model import DIMENSIONS, CompositeReport
from folio_shell.core.managers.config_manager import config_manager
from folio_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["Artifact", "Dimension", "Type", "Kind", "Severity", "Message", "Fix", "Element"]


class DataFrameService:
    """
    Central service for turning CompositeReports into Pandas DataFrames.

    Keeps the auditor core free of pandas: controllers produce pydantic models,
    this service flattens them for inspection and CSV export.
    """

    def __init__(self, separator: Optional[str] = None):
        self.separator = separator or config_manager.get_nested("export.csv_separator", ",")

    @staticmethod
    def report_rows(report: CompositeReport, artifact: str = "") -> List[Dict[str, Any]]:
        """One row per issue and per suggestion, in dimension order."""
        rows: List[Dict[str, Any]] = []
        for dimension in DIMENSIONS:
            dim_report = report.dimension(dimension)
            for issue in dim_report.issues:
                rows.append({
                    "Artifact": artifact,
                    "Dimension": dimension,
                    "Type": "issue",
                    "Kind": issue.kind,
                    "Severity": issue.severity,
                    "Message": issue.message,
                    "Fix": issue.fix or "",
                    "Element": issue.element or "",
                })

        # Compiled suggestions already carry their category and priority
        for suggestion in report.suggestions:
            rows.append({
                "Artifact": artifact,
                "Dimension": suggestion.category or "",
                "Type": "suggestion",
                "Kind": suggestion.kind,
                "Severity": suggestion.priority or "",
                "Message": suggestion.message,
                "Fix": suggestion.text,
                "Element": suggestion.element or "",
            })
        return rows

    def to_dataframe(self, reports: Union[CompositeReport, Dict[str, CompositeReport]]) -> pd.DataFrame:
        """
        Flattens one report, or a mapping of artifact name -> report, into a DataFrame.

        Returns:
            pd.DataFrame: Always carries REPORT_COLUMNS, even when no findings exist.
        """
        if isinstance(reports, CompositeReport):
            reports = {"": reports}

        rows: List[Dict[str, Any]] = []
        for artifact, report in reports.items():
            rows.extend(self.report_rows(report, artifact))
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    @staticmethod
    def score_frame(reports: Dict[str, CompositeReport]) -> pd.DataFrame:
        """One row per artifact with the overall verdict and the four dimension scores."""
        rows = []
        for artifact, report in reports.items():
            row = {"Artifact": artifact, "Overall": report.overall.score, "Status": report.overall.status}
            for dimension in DIMENSIONS:
                row[dimension.capitalize()] = report.dimension(dimension).score
            rows.append(row)
        return pd.DataFrame(rows)

    def export_csv(self, df: pd.DataFrame, output_file: Union[str, Path]) -> Path:
        output_path = PathUtils.ensure_parent_dir(Path(output_file)).with_suffix(".csv")
        df.to_csv(output_path, index=False, sep=self.separator)
        logger.info(f"Exported {len(df)} rows to {output_path}")
        return output_path
