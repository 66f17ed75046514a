# tests/auditor/test_autofix_controller.py
import pytest

from folio_auditor.controllers.autofix_controller import AutoFixController
from folio_auditor.controllers.quality_controller import QualityController
from folio_auditor.dom.registry import FixerRegistry
from folio_auditor.model import CompositeReport, DimensionReport, ValidationIssue

BROKEN_HTML = """<html>
<head><style>body { color: #333; }</style></head>
<body>
  <h2>Jane Doe</h2>
  <img src="work-1.jpg">
  <img src="work-2.jpg">
  <img src="">
  <div onclick="openMenu()">Menu</div>
  <p>Lorem ipsum dolor sit amet.</p>
</body>
</html>"""

PORTFOLIO = {
    "personalInfo": {"name": "Jane Doe", "title": "Product Designer", "bio": "I design calm products."},
}


@pytest.fixture
def fixer():
    return AutoFixController(default_lang="nl")


def _issue(kind):
    return ValidationIssue(kind=kind, severity="medium", message=kind)


def test_fixers_are_registered_by_dimension_and_kind():
    FixerRegistry.discover()
    kinds = FixerRegistry.get_all_kinds()

    assert ("accessibility", "missing_alt_text") in kinds
    assert ("technical", "missing_viewport") in kinds
    assert ("content", "placeholder_content") in kinds
    assert ("design", "not_responsive") in kinds
    # Same issue kind, different dimension, different fixer
    assert FixerRegistry.get("content", "missing_title") is not FixerRegistry.get("technical", "missing_title")


def test_fixes_disappear_on_revalidation(fixer):
    """Na de automatische fixes mogen de mechanisch opgeloste issues niet terugkomen."""
    quality = QualityController()
    report = quality.run(BROKEN_HTML, PORTFOLIO)
    assert report.accessibility.score < 80
    assert report.technical.score < 80

    record = fixer.apply_auto_fixes(BROKEN_HTML, report, PORTFOLIO)
    assert record.success
    assert record.html_modified
    assert record.original_html == BROKEN_HTML

    again = quality.run(record.improved_html, PORTFOLIO)
    accessibility_kinds = again.accessibility.issue_kinds()
    technical_kinds = again.technical.issue_kinds()

    assert "missing_alt_text" not in accessibility_kinds
    assert "missing_alt_text" not in technical_kinds
    assert "missing_tabindex" not in accessibility_kinds
    assert "missing_main_landmark" not in accessibility_kinds
    assert "missing_h1" not in accessibility_kinds
    for kind in ("missing_viewport", "missing_charset", "missing_title", "missing_lang_attribute", "broken_image_src"):
        assert kind not in technical_kinds
    assert 'lang="nl"' in record.improved_html
    assert "Jane Doe - Portfolio" in record.improved_html


def test_fixes_are_idempotent(fixer):
    report = CompositeReport(accessibility=DimensionReport(score=10, issues=[_issue("missing_alt_text")] * 2))

    first = fixer.apply_auto_fixes(BROKEN_HTML, report, PORTFOLIO)
    assert first.fixes_applied == ["Added alt text to image 1", "Added alt text to image 2", "Added alt text to image 3"]

    second = fixer.apply_auto_fixes(first.improved_html, report, PORTFOLIO)
    assert second.fixes_applied == []
    assert second.html_modified is False
    assert second.improved_html == first.improved_html


def test_stage_thresholds_skip_healthy_dimensions(fixer):
    report = CompositeReport(
        accessibility=DimensionReport(score=80, issues=[_issue("missing_alt_text")]),
        design=DimensionReport(score=70, issues=[_issue("not_responsive")]),
    )
    record = fixer.apply_auto_fixes(BROKEN_HTML, report, PORTFOLIO)

    assert record.fixes_applied == []
    assert record.improved_html == BROKEN_HTML


def test_content_and_design_stages(fixer):
    report = CompositeReport(
        accessibility=DimensionReport(score=100),
        technical=DimensionReport(score=100),
        content=DimensionReport(score=20, issues=[_issue("placeholder_content")]),
        design=DimensionReport(score=20, issues=[_issue("not_responsive"), _issue("poor_contrast"), _issue("unknown_kind")]),
    )
    record = fixer.apply_auto_fixes(BROKEN_HTML, report, PORTFOLIO)

    assert record.fixes_applied == [
        "Replaced placeholder text",
        "Added basic responsive styles",
        "Added contrast improvements",
    ]
    assert "lorem ipsum" not in record.improved_html.lower()
    assert "I design calm products." in record.improved_html
    assert "@media (max-width: 768px)" in record.improved_html


def test_client_images_replace_placeholders(fixer):
    html = '<html><body><img src="https://via.placeholder.com/300" alt="a"><img src="https://picsum.photos/200" alt="b"></body></html>'
    images = {"final": [{"url": "https://cdn.example.com/final-1.jpg"}]}
    report = CompositeReport(design=DimensionReport(score=30, issues=[_issue("no_client_images_used")]))

    record = fixer.apply_auto_fixes(html, report, PORTFOLIO, images)

    assert record.fixes_applied == ["Replaced placeholder with client image 1"]
    assert "https://cdn.example.com/final-1.jpg" in record.improved_html
    assert "picsum" in record.improved_html


def test_failing_fixer_is_isolated(fixer, monkeypatch):
    def explode(ctx, issue):
        raise ValueError("fixer broke")

    FixerRegistry.discover()
    monkeypatch.setitem(FixerRegistry._fixers, ("accessibility", "missing_h1"), explode)
    report = CompositeReport(accessibility=DimensionReport(score=10, issues=[_issue("missing_h1"), _issue("missing_alt_text")]))

    record = fixer.apply_auto_fixes(BROKEN_HTML, report, PORTFOLIO)

    assert record.success
    assert len(record.fixes_applied) == 3


def test_non_string_artifact_fails_softly(fixer):
    record = fixer.apply_auto_fixes(None, CompositeReport(), PORTFOLIO)
    assert record.success is False
    assert record.improved_html == ""
    assert record.error
