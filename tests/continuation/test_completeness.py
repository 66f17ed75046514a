# tests/continuation/test_completeness.py
import pytest

from continuation.services.completeness_service import CompletenessService

STYLE = "<style>" + "body { margin: 0; padding: 0; }\n" * 40 + "</style>"
COMPLETE_HTML = (
    "<!DOCTYPE html><html lang='en'><head><title>Jane Doe</title>" + STYLE + "</head>"
    "<body><main><h1>Jane Doe</h1><p>Product designer.</p></main></body></html>"
)


@pytest.fixture
def service():
    return CompletenessService()


def test_complete_document(service):
    report = service.validate_completeness(COMPLETE_HTML)

    assert report.is_complete
    assert report.issues == []
    assert report.estimated_completion_percent == 100
    assert report.can_continue
    assert report.structure.has_html_close


def test_missing_html_close_example(service):
    """Het voorbeeld zonder </html>: nooit compleet en maximaal 75%."""
    html = "<!DOCTYPE html><html><head></head><body><h1>Jane Doe</h1></body>"
    report = service.validate_completeness(html)

    assert report.is_complete is False
    assert report.issues == [
        "No CSS styling detected",
        "Missing closing </html> tag",
        "Significant number of unclosed HTML tags",
    ]
    assert report.estimated_completion_percent == 50
    assert report.can_continue is False


def test_truncated_document_is_capped_and_continuable(service):
    truncated = COMPLETE_HTML.split("<p>")[0] + "<p>Product desig"
    report = service.validate_completeness(truncated)

    assert report.is_complete is False
    assert report.estimated_completion_percent <= 75
    assert "Missing closing </body> tag" in report.issues
    assert "Content appears to end abruptly" in report.issues
    assert report.can_continue


def test_unfinished_tag_and_comment(service):
    report = service.validate_completeness(COMPLETE_HTML[:-7] + "<!-- footer <div class=")
    assert "Incomplete HTML tag at end" in report.issues
    assert "Unclosed HTML comment" in report.issues


def test_closed_comment_is_not_flagged(service):
    report = service.validate_completeness(COMPLETE_HTML.replace("<main>", "<!-- hero --><main>"))
    assert "Unclosed HTML comment" not in report.issues


@pytest.mark.parametrize("value", ["", None, 42])
def test_empty_or_invalid_input(service, value):
    report = service.validate_completeness(value)

    assert report.is_complete is False
    assert report.estimated_completion_percent == 0
    assert report.issues == ["No HTML content provided"]
    assert report.can_continue is False


def test_many_issues_apply_penalty(service):
    report = service.validate_completeness("<div><p>just a fragment")
    assert len(report.issues) > 5
    assert report.estimated_completion_percent == 10


def test_estimate_never_rises_with_more_issues(service):
    """Met gelijke structuur-vlaggen daalt de schatting (of blijft gelijk) bij meer issues."""
    base = "<html><head><style>p{}</style></head><body><p>x</p>"
    fewer = service.validate_completeness(base + "</body>")
    more = service.validate_completeness(base + "</body><div")

    assert fewer.structure == more.structure
    assert len(more.issues) > len(fewer.issues)
    assert more.estimated_completion_percent <= fewer.estimated_completion_percent


def test_tag_balance_stats(service):
    report = service.validate_completeness("<html><body><img src='a.jpg'/><p>x</p></body></html>")
    stats = report.stats

    assert stats.open_tags == 4
    assert stats.close_tags == 3
    assert stats.self_closing_tags == 1
    assert stats.tag_balance == pytest.approx(1.0)


def test_closers_with_whitespace_count_as_closed(service):
    html = COMPLETE_HTML.replace("</body></html>", "</body ></html >")
    report = service.validate_completeness(html)

    assert report.structure.has_body_close
    assert report.structure.has_html_close
    assert report.is_complete
    assert report.estimated_completion_percent == 100
