# src/folio_shell/core/handlers/validate_handler.py
import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List

from tqdm.auto import tqdm

from folio_auditor.controllers.autofix_controller import AutoFixController
from folio_auditor.controllers.quality_controller import QualityController
from folio_auditor.model import DIMENSIONS, CompositeReport, ImageSet, PortfolioData
from folio_shell.core.services.dataframe_service import DataFrameService
from folio_shell.core.services.json_service import load_json_file, read_text_file
from folio_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

validate_help_text = """
  validate <file.html> [<file.html> ...] --portfolio <data.json> [--images <images.json>]
           [--timeout <seconds>] [--export <report.csv>] [--fix <output_dir>] [--json]
                      Scores generated portfolio artifacts on content, design,
                      technical and accessibility quality.
""".strip()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="validate", description="Score generated portfolio HTML artifacts.")
    parser.add_argument("files", nargs="+", help="HTML artifact(s) to validate.")
    parser.add_argument("--portfolio", "-p", required=True, help="JSON file with the portfolio data.")
    parser.add_argument("--images", "-i", default=None, help="JSON file with client images (moodboard/process/final).")
    parser.add_argument("--timeout", type=float, default=None, help="Per-analyzer timeout in seconds.")
    parser.add_argument("--export", "-e", default=None, help="Write all issues and suggestions to a CSV file.")
    parser.add_argument("--fix", default=None, help="Apply automatic fixes and write improved artifacts to this directory.")
    parser.add_argument("--json", action="store_true", help="Print full reports as JSON instead of a summary table.")
    return parser


def _print_report(name: str, report: CompositeReport) -> None:
    print(f"\n📄 {name}: {report.overall.score}/100 ({report.overall.status})")
    for dimension in DIMENSIONS:
        dim_report = report.dimension(dimension)
        print(f"   {dimension:<14} {dim_report.score:>3}/100  {len(dim_report.issues)} issue(s)")
    for suggestion in report.suggestions[:5]:
        print(f"   [{suggestion.priority}] {suggestion.category}: {suggestion.message}")


def handle_validate(args: List[str]) -> int:
    """Validates one or more artifacts against the same portfolio data."""
    parser = _build_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return 1

    try:
        portfolio = PortfolioData.model_validate(load_json_file(parsed.portfolio))
        images = ImageSet.model_validate(load_json_file(parsed.images))
    except (OSError, ValueError) as e:
        print(f"❌ Could not read input data: {e}")
        logger.error(f"Failed to load portfolio/image data: {e}", exc_info=True)
        return 1

    controller = QualityController(timeout=parsed.timeout)
    fixer = AutoFixController() if parsed.fix else None

    reports: Dict[str, CompositeReport] = {}
    exit_code = 0

    for file_name in tqdm(parsed.files, desc="Validating", unit="file", disable=len(parsed.files) < 2):
        try:
            html = read_text_file(file_name)
        except OSError as e:
            print(f"❌ Could not read {file_name}: {e}")
            exit_code = 1
            continue

        report = controller.run(html, portfolio, images)
        reports[file_name] = report
        if report.overall.status == "error":
            exit_code = 1

        if fixer is not None:
            record = fixer.apply_auto_fixes(html, report, portfolio, images)
            if record.success and record.html_modified:
                output_path = PathUtils.ensure_parent_dir(Path(parsed.fix) / Path(file_name).name)
                output_path.write_text(record.improved_html, encoding="utf-8")
                report.auto_fix_applied = True
                print(f"🔧 {len(record.fixes_applied)} fix(es) applied to {file_name} -> {output_path}")
            elif not record.success:
                print(f"❌ Auto-fix failed for {file_name}: {record.error}")
                exit_code = 1

    if parsed.json:
        print(json.dumps({name: r.model_dump(mode="json") for name, r in reports.items()}, indent=2))
    else:
        for name, report in reports.items():
            _print_report(name, report)
        if len(reports) > 1:
            print()
            print(DataFrameService.score_frame(reports).to_string(index=False))

    if parsed.export and reports:
        service = DataFrameService()
        output = service.export_csv(service.to_dataframe(reports), parsed.export)
        print(f"✅ Exported report rows to {output}")

    return exit_code
