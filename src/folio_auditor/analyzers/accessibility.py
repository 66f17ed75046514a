# src/folio_auditor/analyzers/accessibility.py
import logging

from ..dom.builder import DocumentBuilder, HEADING_TAGS, attr_text
from ..dom.core import ReportAccumulator, AnalyzerDefinition, score_band_summary
from ..dom.models import ArtifactDocument
from ..model import DimensionReport, ImageSet, PortfolioData
from ..utils.contrast import contrast_ratio, inline_colors

logger = logging.getLogger(__name__)

MIN_CONTRAST = 4.5
SHORT_ALT_LENGTH = 5
MIN_SEMANTIC_ELEMENTS = 3

SEMANTIC_ELEMENTS = ['main', 'nav', 'header', 'footer', 'section', 'article', 'aside']
TEXT_SELECTOR = 'p, h1, h2, h3, h4, h5, h6, span, div, a, button'
INTERACTIVE_SELECTOR = 'a, button, input, select, textarea, [tabindex]'
CLICKABLE_DIV_SELECTOR = 'div[onclick], div[role="button"]'
ARIA_SELECTOR = 'button, [role="button"], nav, main, aside, section'
FOCUSABLE_SELECTOR = 'a, button, input, select, textarea, [tabindex="0"]'
GENERIC_LINK_TEXTS = ['click here', 'read more', 'here', 'more', 'link']

SUMMARY_BANDS = {
    "excellent": "Excellent accessibility - portfolio follows accessibility best practices",
    "good": "Good accessibility - minor improvements recommended",
    "fair": "Fair accessibility - several issues should be addressed",
    "poor": "Poor accessibility - significant improvements needed",
}


# --- CHECKS ---

def check_alt_texts(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    good = 0
    for img in doc.soup.find_all('img'):
        alt = img.get('alt')
        src = img.get('src') or 'unknown'
        element = f'img[src="{src}"]'

        # alt=None means the attribute is missing
        if alt is None:
            acc.add_issue(
                "missing_alt_text", "high",
                "Image missing alt attribute",
                fix="Add descriptive alt text for screen readers",
                element=element
            )
        elif not alt.strip():
            acc.add_issue(
                "empty_alt_text", "medium",
                "Image has empty alt text",
                fix='Provide descriptive alt text or use alt="" for decorative images',
                element=element
            )
        else:
            if len(alt) < SHORT_ALT_LENGTH:
                acc.add_suggestion(
                    "improve_alt_text",
                    f'Alt text could be more descriptive: "{alt}"',
                    "Consider adding more descriptive alt text",
                    element=element
                )
            good += 1

    if good > 0:
        acc.add_pass(f"{good} images have proper alt text")


def check_headings(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    levels = [int(h.name[1]) for h in doc.soup.find_all(HEADING_TAGS)]

    h1_count = levels.count(1)
    if h1_count == 0:
        acc.add_issue("missing_h1", "high", "No H1 heading found", fix="Add an H1 heading for the main page title")
    elif h1_count > 1:
        acc.add_issue("multiple_h1", "medium", f"Multiple H1 headings found ({h1_count})", fix="Use only one H1 per page")
    else:
        acc.add_pass("Single H1 heading found")

    skips = 0
    for previous, current in zip(levels, levels[1:]):
        if current > previous + 1:
            skips += 1
            acc.add_issue(
                "heading_hierarchy_skip", "medium",
                f"Heading level skipped: H{previous} to H{current}",
                fix="Maintain logical heading hierarchy"
            )

    if skips == 0 and len(levels) > 1:
        acc.add_pass("Proper heading hierarchy maintained")


def check_contrast(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    checked = 0
    low = 0

    for element in doc.soup.select(TEXT_SELECTOR):
        style = element.get('style')
        if not style:
            continue
        foreground, background = inline_colors(style)
        if foreground is None or background is None:
            continue

        checked += 1
        ratio = contrast_ratio(foreground, background)
        if ratio < MIN_CONTRAST:
            low += 1
            acc.add_issue(
                "low_contrast", "medium",
                f"Potentially low color contrast ratio: {ratio:.2f}",
                fix="Increase color contrast for better readability",
                element=element.name
            )

    if checked > 0 and low == 0:
        acc.add_pass(f"Color contrast checked for {checked} elements")


def _tabindex_value(raw) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def check_keyboard(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    soup = doc.soup
    interactive = soup.select(INTERACTIVE_SELECTOR)
    problems = 0

    for element in interactive:
        tabindex = element.get('tabindex')
        if tabindex and _tabindex_value(tabindex) > 0:
            problems += 1
            acc.add_issue(
                "positive_tabindex", "medium",
                f"Positive tabindex found: {tabindex}",
                fix='Use tabindex="0" or remove tabindex for natural tab order',
                element=element.name
            )

    for div in soup.select(CLICKABLE_DIV_SELECTOR):
        if not div.get('tabindex'):
            problems += 1
            acc.add_issue(
                "missing_tabindex", "high",
                "Interactive div missing tabindex",
                fix='Add tabindex="0" to make keyboard accessible',
                element="div with click handler"
            )

    if interactive and problems == 0:
        acc.add_pass(f"{len(interactive)} interactive elements are keyboard accessible")


def check_aria(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    labelled = 0
    for element in doc.soup.select(ARIA_SELECTOR):
        aria_label = element.get('aria-label')
        aria_labelledby = element.get('aria-labelledby')

        if element.name == 'button' and not aria_label and not aria_labelledby and not element.get_text().strip():
            acc.add_issue(
                "button_missing_label", "high",
                "Button missing accessible name",
                fix="Add aria-label or visible text content",
                element="button"
            )
        elif element.name == 'nav' and not aria_label:
            acc.add_suggestion(
                "nav_aria_label",
                "Navigation could benefit from aria-label",
                'Add aria-label="Main navigation" or similar',
                element="nav"
            )
        else:
            labelled += 1

    if labelled > 0:
        acc.add_pass(f"ARIA labels present on {labelled} elements")


def check_focus(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    focusable = doc.soup.select(FOCUSABLE_SELECTOR)
    if not focusable:
        return

    acc.add_pass(f"{len(focusable)} focusable elements found")
    if doc.soup.select('a[href^="#"]'):
        acc.add_pass("Skip links detected for keyboard navigation")
    else:
        acc.add_suggestion(
            "add_skip_links",
            "Consider adding skip links for keyboard users",
            'Add "Skip to main content" link at the beginning'
        )


def check_semantics(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    soup = doc.soup
    semantic_count = sum(1 for tag in SEMANTIC_ELEMENTS if soup.find(tag) is not None)

    if semantic_count >= MIN_SEMANTIC_ELEMENTS:
        acc.add_pass(f"Good use of semantic HTML ({semantic_count} semantic elements)")
    else:
        acc.add_suggestion(
            "improve_semantics",
            "Could improve semantic HTML structure",
            "Use more semantic elements like <main>, <nav>, <section>"
        )

    if soup.find('main') is not None:
        acc.add_pass("Main landmark found")
    else:
        acc.add_issue(
            "missing_main_landmark", "medium",
            "No main landmark found",
            fix="Wrap main content in <main> element"
        )


def check_forms(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    soup = doc.soup
    inputs = soup.find_all(['input', 'select', 'textarea'])
    if not inputs:
        return

    unlabelled = 0
    for field in inputs:
        field_id = field.get('id')
        has_label = bool(field_id) and soup.find('label', attrs={'for': field_id}) is not None
        if not has_label and not field.get('aria-label') and not field.get('aria-labelledby'):
            unlabelled += 1
            acc.add_issue(
                "input_missing_label", "high",
                "Form input missing label",
                fix="Associate input with label element or add aria-label",
                element=field.name
            )

    if unlabelled == 0:
        acc.add_pass(f"All {len(inputs)} form inputs properly labeled")


def check_links(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    links = doc.soup.find_all('a')
    problems = 0

    for link in links:
        href = link.get('href')
        text = link.get_text().strip()
        element = f'a[href="{href}"]'

        if not text and not link.get('aria-label'):
            problems += 1
            acc.add_issue(
                "empty_link", "high",
                "Link with no accessible text",
                fix="Add descriptive link text or aria-label",
                element=element
            )

        if text.lower() in GENERIC_LINK_TEXTS:
            acc.add_suggestion(
                "generic_link_text",
                f'Generic link text: "{text}"',
                "Use more descriptive link text",
                element=element
            )

        if href and href.startswith('http') and 'noopener' not in attr_text(link, 'rel'):
            acc.add_suggestion(
                "external_link_security",
                'External link could benefit from rel="noopener"',
                'Add rel="noopener noreferrer" for security',
                element=element
            )

    if links and problems == 0:
        acc.add_pass(f"{len(links)} links have accessible text")


def validate(html: str, portfolio: PortfolioData, images: ImageSet) -> DimensionReport:
    """
    Alt text, headings, contrast, keyboard access, ARIA, landmarks, forms and links.
    Contrast is only measured where an element declares both colours inline.
    """
    doc = DocumentBuilder().parse_doc(html)
    acc = ReportAccumulator()

    check_alt_texts(doc, acc)
    check_headings(doc, acc)
    check_contrast(doc, acc)
    check_keyboard(doc, acc)
    check_aria(doc, acc)
    check_focus(doc, acc)
    check_semantics(doc, acc)
    check_forms(doc, acc)
    check_links(doc, acc)

    return acc.build(summary=score_band_summary(acc.score, SUMMARY_BANDS))


# --- DEFINITION ---
DEFINITION = AnalyzerDefinition(
    dimension="accessibility",
    validate=validate,
    description="Screen-reader, keyboard and contrast checks"
)
