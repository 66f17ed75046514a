# src/folio_auditor/analyzers/content.py
import logging
from typing import Dict, Any, List

from ..dom.builder import DocumentBuilder, find_text, find_section_by_heading, word_count
from ..dom.core import ReportAccumulator, AnalyzerDefinition, score_band_summary
from ..dom.models import ArtifactDocument
from ..model import DimensionReport, ImageSet, PortfolioData, PersonalInfo, Project

logger = logging.getLogger(__name__)

# --- CONSTANTS ---

CONTACT_FIELDS = ["email", "phone", "website", "linkedin", "instagram", "behance"]

SKILLS_LABELS = ["skills", "expertise", "technologies", "competencies"]
CONTACT_LABELS = ["contact", "get in touch", "reach out", "connect"]

ESSENTIAL_SECTIONS = [
    {"names": ["about", "bio", "introduction"], "required": True, "label": "About"},
    {"names": ["projects", "work", "portfolio", "showcase"], "required": True, "label": "Projects"},
    {"names": ["skills", "expertise", "technologies"], "required": False, "label": "Skills"},
    {"names": ["contact", "get in touch", "connect"], "required": False, "label": "Contact"},
]

PLACEHOLDER_PHRASES = [
    "lorem ipsum", "placeholder", "sample text", "dummy text",
    "your name here", "insert text", "add content", "coming soon",
]

PERSONAL_PRONOUNS = [" i ", " my ", " me "]

MIN_WORDS = 100
RECOMMENDED_WORDS = 300

PROJECT_DISPLAY_RATIO = 0.8
SKILLS_PASS_RATIO = 0.8
SKILLS_SUGGEST_RATIO = 0.5
CONTACT_PASS_RATIO = 0.7
UNIQUE_PARAGRAPH_RATIO = 0.8

STRUCTURE_SELECTOR = 'section, div[class*="section"], main > div, article'

SUMMARY_BANDS = {
    "excellent": "Excellent content - comprehensive and well-organized information",
    "good": "Good content - most essential information is present",
    "fair": "Fair content - missing some important information or sections",
    "poor": "Poor content - significant information gaps need to be addressed",
}


# --- CHECKS ---

def check_personal_info(doc: ArtifactDocument, info: PersonalInfo, acc: ReportAccumulator) -> None:
    if find_text(doc, info.name):
        acc.add_pass("Name displayed in portfolio")
    else:
        acc.add_issue(
            "missing_name", "critical",
            f'Name "{info.name}" not found in portfolio',
            fix="Ensure name is prominently displayed"
        )

    if info.title:
        if find_text(doc, info.title):
            acc.add_pass("Professional title displayed")
        else:
            acc.add_issue(
                "missing_title", "high",
                f'Professional title "{info.title}" not found',
                fix="Display professional title near name"
            )

    if info.bio and len(info.bio) > 50:
        if find_text(doc, info.bio[:30]):
            acc.add_pass("Bio/About content included")
        else:
            acc.add_issue(
                "missing_bio", "medium",
                "Bio/About content not found or incomplete",
                fix="Include about/bio section with personal and professional information"
            )
    else:
        acc.add_suggestion("short_bio", "Bio is very short or missing", "Consider adding a more detailed professional bio")

    # Personal branding in the document title
    if info.name and info.title:
        page_title = doc.soup.find('title')
        if page_title:
            title_text = page_title.get_text()
            if info.name in title_text or "Portfolio" in title_text:
                acc.add_pass("Page title includes personal branding")


def check_projects(doc: ArtifactDocument, projects: List[Project], acc: ReportAccumulator) -> None:
    if not projects:
        acc.add_issue(
            "no_projects", "critical",
            "No projects found in portfolio data",
            fix="Add project information to showcase work"
        )
        return

    logger.debug(f"Validating {len(projects)} projects...")

    displayed = 0
    with_descriptions = 0
    with_tags = 0

    for index, project in enumerate(projects):
        if find_text(doc, project.title):
            displayed += 1
        else:
            acc.add_issue(
                "missing_project_title", "high",
                f'Project "{project.title}" title not found in portfolio',
                fix=f"Ensure project {index + 1} title is displayed in projects section"
            )

        if project.overview and len(project.overview) > 20:
            if find_text(doc, project.overview[:25]):
                with_descriptions += 1
            else:
                acc.add_issue(
                    "missing_project_description", "medium",
                    f'Project "{project.title}" description not found',
                    fix=f'Add description/overview for project "{project.title}"'
                )

        if project.tags:
            if any(find_text(doc, tag) for tag in project.tags):
                with_tags += 1
            else:
                acc.add_suggestion(
                    "missing_project_tags",
                    f'Project "{project.title}" tags not displayed',
                    "Consider displaying project tags/categories for better organization"
                )

        if project.problem or project.solution or project.reflection:
            has_details = (
                find_text(doc, project.problem)
                or find_text(doc, project.solution)
                or find_text(doc, project.reflection)
            )
            if has_details:
                acc.add_pass(f'Project "{project.title}" has detailed content')
            else:
                acc.add_suggestion(
                    "missing_project_details",
                    f'Project "{project.title}" missing detailed content',
                    "Include problem, solution, and reflection sections in project details"
                )

    total = len(projects)
    display_ratio = displayed / total
    if display_ratio == 1:
        acc.add_pass(f"All {total} project titles displayed")
    elif display_ratio >= PROJECT_DISPLAY_RATIO:
        acc.add_pass(f"Most projects displayed ({displayed}/{total})")
    else:
        acc.add_issue(
            "missing_projects", "high",
            f"Only {displayed}/{total} projects displayed",
            fix="Ensure all projects are included in the portfolio"
        )

    if with_descriptions > total * 0.5:
        acc.add_pass("Most projects have descriptions")

    if with_tags > 0:
        acc.add_pass(f"{with_tags} projects have tags/categories")


def check_skills(doc: ArtifactDocument, skills: List[str], acc: ReportAccumulator) -> None:
    if not skills:
        acc.add_suggestion("no_skills", "No skills provided", "Add skills section to highlight technical competencies")
        return

    shown = [skill for skill in skills if find_text(doc, skill)]
    ratio = len(shown) / len(skills)

    if ratio >= SKILLS_PASS_RATIO:
        acc.add_pass(f"Most skills displayed ({len(shown)}/{len(skills)})")
    elif ratio >= SKILLS_SUGGEST_RATIO:
        acc.add_suggestion(
            "some_skills_missing",
            f"{len(shown)}/{len(skills)} skills displayed",
            "Consider including all provided skills"
        )
    else:
        acc.add_issue(
            "many_skills_missing", "medium",
            f"Only {len(shown)}/{len(skills)} skills displayed",
            fix="Include more of the provided skills in the skills section"
        )

    if find_section_by_heading(doc, SKILLS_LABELS) is not None:
        acc.add_pass("Skills section found")
    else:
        acc.add_issue(
            "missing_skills_section", "medium",
            "Skills section not found",
            fix="Add a dedicated skills/expertise section"
        )


def _contact_displayed(doc: ArtifactDocument, field: str, value: str) -> bool:
    if find_text(doc, value):
        return True
    for anchor in doc.soup.find_all('a', href=True):
        href = anchor.get('href', '')
        if value in href or field in href:
            return True
    return False


def check_contact(doc: ArtifactDocument, info: PersonalInfo, acc: ReportAccumulator) -> None:
    provided = 0
    found = 0

    for field in CONTACT_FIELDS:
        value = getattr(info, field, None)
        if value and value.strip():
            provided += 1
            if _contact_displayed(doc, field, value):
                found += 1

    if provided == 0:
        acc.add_suggestion(
            "no_contact_info",
            "No contact information provided",
            "Add contact information (email, social links, etc.)"
        )
        return

    if found == 0:
        acc.add_issue(
            "no_contact_displayed", "high",
            "No contact information displayed",
            fix="Add contact section with links to email, social profiles, etc."
        )
    elif found >= provided * CONTACT_PASS_RATIO:
        acc.add_pass(f"Contact information displayed ({found}/{provided} methods)")
    else:
        acc.add_suggestion(
            "incomplete_contact",
            f"{found}/{provided} contact methods displayed",
            "Display more contact options for better accessibility"
        )

    if find_section_by_heading(doc, CONTACT_LABELS) is not None:
        acc.add_pass("Dedicated contact section found")


def check_sections(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    for section in ESSENTIAL_SECTIONS:
        if find_section_by_heading(doc, section["names"]) is not None:
            acc.add_pass(f"{section['label']} section found")
        elif section["required"]:
            acc.add_issue(
                "missing_essential_section", "high",
                f"Missing essential section: {' or '.join(section['names'])}",
                fix=f"Add {section['label'].lower()} section to portfolio"
            )


def check_word_count(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    words = word_count(doc.body_text)

    if words < MIN_WORDS:
        acc.add_issue(
            "insufficient_content", "critical",
            f"Very little content ({words} words)",
            fix="Add more descriptive content throughout the portfolio"
        )
    elif words < RECOMMENDED_WORDS:
        acc.add_suggestion(
            "light_content",
            f"Light content ({words} words)",
            "Consider adding more detailed descriptions and information"
        )
    else:
        acc.add_pass(f"Substantial content ({words} words)")


def check_content_quality(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    body_lower = doc.body_text.lower()

    found_phrases = [phrase for phrase in PLACEHOLDER_PHRASES if phrase in body_lower]
    if found_phrases:
        acc.add_issue(
            "placeholder_content", "critical",
            "Placeholder text found in portfolio",
            fix="Replace all placeholder text with actual content",
            details={"phrases": found_phrases}
        )
    else:
        acc.add_pass("No placeholder text detected")

    paragraphs = [p.get_text().strip() for p in doc.soup.find_all('p')]
    unique = {p for p in paragraphs if len(p) > 20}
    if paragraphs and len(unique) < len(paragraphs) * UNIQUE_PARAGRAPH_RATIO:
        acc.add_suggestion(
            "repetitive_content",
            "Some content appears to be repeated",
            "Ensure each section has unique, valuable content"
        )

    if any(pronoun in body_lower for pronoun in PERSONAL_PRONOUNS):
        acc.add_pass("Personal voice used in content")


# --- DESCRIPTIVE ANALYSIS ---

def analyze_content_structure(doc: ArtifactDocument) -> Dict[str, Any]:
    soup = doc.soup
    sections = soup.select(STRUCTURE_SELECTOR)
    return {
        "section_count": len(sections),
        "heading_count": len(soup.find_all(['h1', 'h2', 'h3', 'h4', 'h5', 'h6'])),
        "list_count": len(soup.find_all(['ul', 'ol'])),
        "paragraph_count": len(soup.find_all('p')),
        "structure": "sectioned" if sections else "single-flow",
    }


def analyze_information_density(doc: ArtifactDocument) -> Dict[str, Any]:
    words = word_count(doc.body_text)
    elements = len(doc.soup.find_all(True))
    density = words / elements if elements > 0 else 0

    if density > 5:
        level = "high"
    elif density > 2:
        level = "medium"
    else:
        level = "low"

    return {"word_count": words, "element_count": elements, "density": density, "level": level}


# --- ENTRY POINT ---

def validate(html: str, portfolio: PortfolioData, images: ImageSet) -> DimensionReport:
    """
    Validates that the onboarding data actually made it into the artifact.

    Args:
        html (str): The generated artifact.
        portfolio (PortfolioData): The source record the artifact was generated from.
        images (ImageSet): Client images (unused by this dimension, kept for the shared contract).

    Returns:
        DimensionReport: A freshly built report; nothing is retained between calls.
    """
    doc = DocumentBuilder().parse_doc(html)
    acc = ReportAccumulator()
    info = portfolio.personal_info

    check_personal_info(doc, info, acc)
    check_projects(doc, portfolio.projects, acc)
    check_skills(doc, info.skills, acc)
    check_contact(doc, info, acc)
    check_sections(doc, acc)
    check_word_count(doc, acc)
    check_content_quality(doc, acc)

    return acc.build(
        summary=score_band_summary(acc.score, SUMMARY_BANDS),
        details={
            "content_structure": analyze_content_structure(doc),
            "information_density": analyze_information_density(doc),
        }
    )


# --- DEFINITION ---
DEFINITION = AnalyzerDefinition(
    dimension="content",
    validate=validate,
    description="Personal info, projects, skills, contact, sections and copy quality"
)
