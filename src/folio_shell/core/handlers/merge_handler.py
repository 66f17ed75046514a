# src/folio_shell/core/handlers/merge_handler.py
import argparse
import logging
from pathlib import Path
from typing import List

from continuation.services.merge_service import MergeService, clean_generated_html
from folio_shell.core.services.json_service import read_text_file
from folio_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

merge_help_text = """
  merge <partial.html> <continuation.html> [-o <output.html>]
                        Appends a generator continuation to a truncated artifact,
                        dropping repeated preamble and duplicate closing tags.
""".strip()


def handle_merge(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="merge", description="Merge a truncated artifact with its continuation.")
    parser.add_argument("partial", help="The truncated HTML artifact.")
    parser.add_argument("continuation", help="The generator's continuation fragment.")
    parser.add_argument("--output", "-o", default=None, help="Write the merged artifact here instead of stdout.")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return 1

    try:
        partial = read_text_file(parsed.partial)
        fragment = clean_generated_html(read_text_file(parsed.continuation))
    except OSError as e:
        print(f"❌ Could not read input: {e}")
        logger.error(f"Failed to read merge input: {e}", exc_info=True)
        return 1

    merged = MergeService().merge_html_parts(partial, fragment)

    if parsed.output:
        output_path = PathUtils.ensure_parent_dir(Path(parsed.output))
        output_path.write_text(merged, encoding="utf-8")
        print(f"✅ Merged artifact written to {output_path}")
    else:
        print(merged)
    return 0
