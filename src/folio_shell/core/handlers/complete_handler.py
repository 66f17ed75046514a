# src/folio_shell/core/handlers/complete_handler.py
import argparse
import logging
from typing import List

from continuation.services.completeness_service import CompletenessService
from folio_shell.core.services.json_service import read_text_file, to_json

logger = logging.getLogger(__name__)

complete_help_text = """
  complete <file.html>  Estimates whether a generated artifact was truncated
                        and prints the completeness report as JSON.
""".strip()


def handle_complete(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="complete", description="Check an artifact for truncation.")
    parser.add_argument("file", help="HTML artifact to inspect.")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return 1

    try:
        html = read_text_file(parsed.file)
    except OSError as e:
        print(f"❌ Could not read {parsed.file}: {e}")
        logger.error(f"Failed to read artifact {parsed.file}: {e}", exc_info=True)
        return 1

    report = CompletenessService().validate_completeness(html)
    print(to_json(report.model_dump(mode="json")))
    return 0 if report.is_complete else 2
