# tests/auditor/test_content_analyzer.py
import pytest

from folio_auditor.analyzers.content import (
    check_contact, check_content_quality, check_sections, check_skills, check_word_count, validate
)
from folio_auditor.dom.builder import DocumentBuilder
from folio_auditor.dom.core import ReportAccumulator
from folio_auditor.model import ImageSet, PortfolioData, PersonalInfo

FULL_PORTFOLIO = {
    "personalInfo": {
        "name": "Jane Doe",
        "title": "Product Designer",
        "bio": "I design calm, useful products for small teams.",
        "skills": ["Figma", "Research", "Prototyping"],
        "email": "jane@example.com",
    },
    "projects": [
        {"title": "Harbor App", "overview": "A booking tool for marinas.", "tags": ["mobile"]},
        {"title": "Field Notes", "overview": "A journaling product.", "tags": ["web"]},
    ],
    "stylePreferences": {"mood": "minimal"},
}


@pytest.fixture
def portfolio():
    return PortfolioData.model_validate(FULL_PORTFOLIO)


def _page(body: str) -> str:
    return f"<!DOCTYPE html><html lang='en'><head><title>Jane Doe</title></head><body>{body}</body></html>"


def test_name_found_but_no_projects_is_critical():
    """Naam aanwezig, nul projecten: naam-check slaagt, maar 'no_projects' is kritiek."""
    data = PortfolioData.model_validate({"personalInfo": {"name": "Jane Doe"}, "projects": []})
    report = validate(_page("<h1>Jane Doe</h1>"), data, ImageSet())

    assert "Name displayed in portfolio" in report.passed
    no_projects = [i for i in report.issues if i.kind == "no_projects"]
    assert len(no_projects) == 1
    assert no_projects[0].severity == "critical"
    assert report.score < 100


def test_missing_name_is_reported(portfolio):
    report = validate(_page("<h1>Someone Else</h1>"), portfolio, ImageSet())
    assert "missing_name" in report.issue_kinds()


def test_placeholder_content_is_critical(portfolio):
    html = _page("<h1>Jane Doe</h1><p>Lorem ipsum dolor sit amet.</p>")
    report = validate(html, portfolio, ImageSet())

    placeholder = next(i for i in report.issues if i.kind == "placeholder_content")
    assert placeholder.severity == "critical"
    assert "lorem ipsum" in placeholder.details["phrases"]


def test_thin_page_has_insufficient_content(portfolio):
    report = validate(_page("<h1>Jane Doe</h1>"), portfolio, ImageSet())
    assert "insufficient_content" in report.issue_kinds()


def test_projects_and_sections_detected(portfolio):
    words = " ".join(["I enjoy building thoughtful interfaces with my team."] * 40)
    html = _page(
        "<h1>Jane Doe</h1><h2>Product Designer</h2>"
        f"<section id='about'><h2>About</h2><p>{words}</p></section>"
        "<section id='projects'><h2>Projects</h2>"
        "<article><h3>Harbor App</h3><p>A booking tool for marinas.</p></article>"
        "<article><h3>Field Notes</h3><p>A journaling product.</p></article></section>"
        "<section id='skills'><h2>Skills</h2><ul><li>Figma</li><li>Research</li><li>Prototyping</li></ul></section>"
        "<section id='contact'><h2>Contact</h2><a href='mailto:jane@example.com'>jane@example.com</a></section>"
    )
    report = validate(html, portfolio, ImageSet())

    assert "All 2 project titles displayed" in report.passed
    assert "missing_projects" not in report.issue_kinds()
    assert "insufficient_content" not in report.issue_kinds()
    assert "No placeholder text detected" in report.passed
    assert report.details["content_structure"]["structure"] == "sectioned"


def test_reports_are_independent_between_calls(portfolio):
    """Een analyse deelt geen toestand met de volgende aanroep."""
    first = validate(_page("<h1>Nobody</h1>"), portfolio, ImageSet())
    second = validate(_page("<h1>Nobody</h1>"), portfolio, ImageSet())
    assert first.issue_kinds() == second.issue_kinds()
    assert first.issues is not second.issues


def _doc(body: str):
    return DocumentBuilder().parse_doc(_page(body))


def _suggestion_kinds(acc):
    return [s.kind for s in acc.suggestions]


SKILLS = ["Figma", "Research", "Prototyping", "Sketch", "Webflow"]


@pytest.mark.parametrize("shown, expected", [
    (5, "pass"),
    (4, "pass"),
    (3, "some_skills_missing"),
    (2, "many_skills_missing"),
])
def test_skills_ratio_bands(shown, expected):
    """0.8 of meer slaagt, 0.5 of meer is een suggestie, daaronder een issue."""
    body = "<section><h2>Skills</h2><p>" + " ".join(SKILLS[:shown]) + "</p></section>"
    acc = ReportAccumulator()
    check_skills(_doc(body), SKILLS, acc)

    if expected == "pass":
        assert f"Most skills displayed ({shown}/5)" in acc.passed
        assert not acc.issues
        assert not acc.suggestions
    elif expected == "some_skills_missing":
        assert _suggestion_kinds(acc) == ["some_skills_missing"]
        assert not acc.issues
    else:
        issue = acc.issues[0]
        assert issue.kind == "many_skills_missing"
        assert issue.severity == "medium"
    assert "Skills section found" in acc.passed


def test_missing_skills_section():
    acc = ReportAccumulator()
    check_skills(_doc("<p>Figma Research Prototyping Sketch Webflow</p>"), SKILLS, acc)

    assert [i.kind for i in acc.issues] == ["missing_skills_section"]
    assert "Most skills displayed (5/5)" in acc.passed


CONTACT = PersonalInfo(
    name="Jane Doe", email="jane@example.com", phone="+31 6 1234 5678", website="janedoe.design"
)


def test_no_contact_displayed_is_high():
    acc = ReportAccumulator()
    check_contact(_doc("<p>Hello there.</p>"), CONTACT, acc)

    assert acc.issues[0].kind == "no_contact_displayed"
    assert acc.issues[0].severity == "high"


def test_incomplete_contact_below_seventy_percent():
    """2 van 3 is minder dan 70%: suggestie in plaats van een pass."""
    acc = ReportAccumulator()
    check_contact(_doc("<p>jane@example.com</p><p>+31 6 1234 5678</p>"), CONTACT, acc)

    assert _suggestion_kinds(acc) == ["incomplete_contact"]
    assert not acc.issues


def test_contact_displayed_with_dedicated_section():
    body = (
        "<section><h2>Contact</h2><p>jane@example.com</p>"
        "<p>+31 6 1234 5678</p><a href='https://janedoe.design'>Website</a></section>"
    )
    acc = ReportAccumulator()
    check_contact(_doc(body), CONTACT, acc)

    assert "Contact information displayed (3/3 methods)" in acc.passed
    assert "Dedicated contact section found" in acc.passed
    assert not acc.issues


def test_no_contact_info_provided_is_a_suggestion():
    acc = ReportAccumulator()
    check_contact(_doc("<p>Hello there.</p>"), PersonalInfo(name="Jane Doe"), acc)
    assert _suggestion_kinds(acc) == ["no_contact_info"]


def test_missing_required_section_is_high():
    """Alleen About en Projects zijn verplicht; Skills en Contact ontbreken zonder issue."""
    acc = ReportAccumulator()
    check_sections(_doc("<section><h2>About</h2><p>Designer.</p></section>"), acc)

    assert "About section found" in acc.passed
    assert len(acc.issues) == 1
    assert acc.issues[0].kind == "missing_essential_section"
    assert acc.issues[0].severity == "high"
    assert acc.issues[0].message == "Missing essential section: projects or work or portfolio or showcase"


@pytest.mark.parametrize("words, issue, suggestion, passed", [
    (99, "insufficient_content", None, None),
    (100, None, "light_content", None),
    (299, None, "light_content", None),
    (300, None, None, "Substantial content (300 words)"),
])
def test_word_count_bands(words, issue, suggestion, passed):
    acc = ReportAccumulator()
    check_word_count(_doc("<p>" + "word " * words + "</p>"), acc)

    assert [i.kind for i in acc.issues] == ([issue] if issue else [])
    assert _suggestion_kinds(acc) == ([suggestion] if suggestion else [])
    if passed:
        assert passed in acc.passed


def test_repeated_paragraphs_are_flagged():
    paragraph = "<p>Harbor is a booking tool for marinas.</p>"
    acc = ReportAccumulator()
    check_content_quality(_doc(paragraph * 5), acc)
    assert "repetitive_content" in _suggestion_kinds(acc)


def test_unique_paragraphs_are_not_flagged():
    body = "".join(f"<p>Project number {n} solved a different problem.</p>" for n in range(5))
    acc = ReportAccumulator()
    check_content_quality(_doc(body), acc)
    assert "repetitive_content" not in _suggestion_kinds(acc)


def test_personal_voice_is_recognised():
    acc = ReportAccumulator()
    check_content_quality(_doc("<p>In my work I focus on research.</p>"), acc)
    assert "Personal voice used in content" in acc.passed

    acc = ReportAccumulator()
    check_content_quality(_doc("<p>Jane focuses on research.</p>"), acc)
    assert "Personal voice used in content" not in acc.passed
