# tests/continuation/test_merge.py
import re

import pytest

from continuation.services.continuation_prompt_service import ContinuationPromptService
from continuation.services.merge_service import MergeService, clean_generated_html

PARTIAL = "<!DOCTYPE html><html><head><title>Jane</title></head><body><h1>Jane Doe</h1><p>Product desig"


@pytest.fixture
def merger():
    return MergeService()


def _count(pattern, text):
    return len(re.findall(pattern, text, re.IGNORECASE))


@pytest.mark.parametrize("continuation", [
    "ner.</p></body></html>",
    "ner.</p>",
    "<!DOCTYPE html><html><head><style>p{}</style></head><body>ner.</p></body></html>",
    "<html lang='en'><body class='x'>ner.</p></body></html></body></html>",
    "ner.</p></html></body>",
])
def test_merge_yields_single_closers(merger, continuation):
    """Ongeacht de vorm van het vervolg: precies één </body> en één </html>, </html> als laatste."""
    merged = merger.merge_html_parts(PARTIAL, continuation)

    assert _count(r"</body>", merged) == 1
    assert _count(r"</html>", merged) == 1
    assert merged.rstrip().lower().endswith("</html>")
    assert merged.lower().index("</body>") < merged.lower().index("</html>")


def test_merge_strips_repeated_preamble(merger):
    continuation = "<!DOCTYPE html>\n<html>\n<head><title>Again</title></head>\n<body>\nner.</p></body></html>"
    merged = merger.merge_html_parts(PARTIAL, continuation)

    assert merged.startswith(PARTIAL)
    assert "Again" not in merged
    assert _count(r"<!DOCTYPE", merged) == 1
    assert "Product designer.</p>" in merged


def test_merge_inserts_missing_body_before_html(merger):
    merged = merger.merge_html_parts(PARTIAL, "ner.</p></html>")
    assert merged.endswith("</body>\n</html>")


def test_clean_generated_html_strips_fences():
    assert clean_generated_html("```html\n<p>x</p>\n```") == "<p>x</p>"
    assert clean_generated_html("```\n<p>x</p>```") == "<p>x</p>"
    assert clean_generated_html("  <p>x</p>  ") == "<p>x</p>"
    assert clean_generated_html(None) == ""


def test_continuation_prompt_contents():
    portfolio = {
        "personalInfo": {"name": "Jane Doe", "title": "Product Designer"},
        "projects": [{"title": "Harbor"}, {"title": "Field Notes"}],
        "stylePreferences": {"mood": "minimal", "colorScheme": "warm"},
    }
    prompt = ContinuationPromptService().generate_continuation_prompt(PARTIAL, portfolio)

    assert f"---START OF INCOMPLETE HTML---\n{PARTIAL}\n---END OF INCOMPLETE HTML---" in prompt
    assert "- Missing closing </body> tag" in prompt
    assert "- Missing closing </html> tag" in prompt
    assert "% of tags are unclosed" in prompt
    assert "Jane Doe - Product Designer" in prompt
    assert "Number of Projects: 2" in prompt
    assert '"colorScheme": "warm"' in prompt
    assert "COMPLETION STATUS:" in prompt


def test_closers_with_whitespace_are_recognised(merger):
    """Een '</body >' met spatie telt als afsluiter; er komt geen tweede bij."""
    merged = merger.merge_html_parts("<html><body><p>a", "b</p></body ></html>")

    assert merged == "<html><body><p>ab</p></body ></html>"
    assert _count(r"</body\s*>", merged) == 1
    assert _count(r"</html\s*>", merged) == 1
