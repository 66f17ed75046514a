# src/folio_auditor/analyzers/technical.py
import logging

from ..dom.builder import DocumentBuilder
from ..dom.core import ReportAccumulator, AnalyzerDefinition, score_band_summary
from ..dom.models import ArtifactDocument
from ..model import DimensionReport, ImageSet, PortfolioData

logger = logging.getLogger(__name__)

SEMANTIC_ELEMENTS = ['main', 'nav', 'header', 'footer', 'section', 'article', 'aside']
MIN_SEMANTIC_ELEMENTS = 3
RESPONSIVE_IMAGE_RATIO = 0.8
MAX_INLINE_STYLES = 20
MAX_DOM_SIZE = 1500

SUMMARY_BANDS = {
    "excellent": "Excellent technical implementation - well structured and optimized",
    "good": "Good technical quality - minor improvements recommended",
    "fair": "Fair technical implementation - several issues should be addressed",
    "poor": "Poor technical quality - significant improvements needed",
}


# --- CHECKS ---

def check_structure(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    soup = doc.soup

    if doc.has_doctype:
        acc.add_pass("Valid HTML5 DOCTYPE found")
    else:
        acc.add_issue(
            "missing_doctype", "medium",
            "Missing or incorrect DOCTYPE declaration",
            fix="Add <!DOCTYPE html> at the beginning of the document"
        )

    html_el = soup.find('html')
    if html_el is None:
        acc.add_issue("missing_html_element", "high", "Missing <html> element", fix="Wrap content in proper <html> element")
    elif not html_el.get('lang'):
        acc.add_issue(
            "missing_lang_attribute", "medium",
            "Missing lang attribute on <html> element",
            fix='Add lang="en" or appropriate language code to <html> element'
        )
    else:
        acc.add_pass("HTML element has lang attribute")

    if soup.find('head') is None:
        acc.add_issue("missing_head", "high", "Missing <head> element", fix="Add <head> element with meta tags and title")
    else:
        acc.add_pass("Head element found")

    if soup.find('body') is None:
        acc.add_issue("missing_body", "high", "Missing <body> element", fix="Wrap main content in <body> element")
    else:
        acc.add_pass("Body element found")

    semantic_count = sum(1 for tag in SEMANTIC_ELEMENTS if soup.find(tag) is not None)
    if semantic_count >= MIN_SEMANTIC_ELEMENTS:
        acc.add_pass(f"Good use of semantic HTML ({semantic_count} semantic elements)")
    else:
        acc.add_suggestion(
            "improve_semantics",
            "Could improve semantic HTML structure",
            "Use more semantic elements like <main>, <nav>, <section>, <header>, <footer>"
        )


def check_meta(doc: ArtifactDocument, portfolio: PortfolioData, acc: ReportAccumulator) -> None:
    soup = doc.soup
    # Meta checks only make sense once a head exists
    if soup.find('head') is None:
        return

    title = soup.find('title')
    if title is None or not title.get_text().strip():
        acc.add_issue(
            "missing_title", "high",
            "Missing or empty <title> element",
            fix=f"Add <title>{portfolio.personal_info.name} - Portfolio</title>"
        )
    else:
        acc.add_pass("Page title found")

    if soup.find('meta', attrs={'charset': True}) is None:
        acc.add_issue("missing_charset", "medium", "Missing charset meta tag", fix='Add <meta charset="UTF-8"> in head')
    else:
        acc.add_pass("Charset meta tag found")

    if soup.find('meta', attrs={'name': 'viewport'}) is None:
        acc.add_issue(
            "missing_viewport", "high",
            "Missing viewport meta tag",
            fix='Add <meta name="viewport" content="width=device-width, initial-scale=1.0">'
        )
    else:
        acc.add_pass("Viewport meta tag found")

    description = soup.find('meta', attrs={'name': 'description'})
    if description is None or not (description.get('content') or '').strip():
        acc.add_suggestion("add_meta_description", "Missing meta description", "Add meta description for better SEO")
    else:
        acc.add_pass("Meta description found")


def check_responsive(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    css = doc.css_text

    if '@media' in css:
        acc.add_pass("Responsive media queries found")
    else:
        acc.add_issue(
            "missing_media_queries", "medium",
            "No responsive media queries detected",
            fix="Add CSS media queries for different screen sizes"
        )

    if any(marker in css for marker in ('display: flex', 'display: grid', 'display:flex', 'display:grid')):
        acc.add_pass("Modern layout methods (Flexbox/Grid) detected")
    else:
        acc.add_suggestion(
            "use_modern_layout",
            "Consider using Flexbox or CSS Grid for layout",
            "Replace float-based layouts with modern CSS layout methods"
        )

    images = doc.soup.find_all('img')
    if images:
        responsive = 0
        for img in images:
            style = img.get('style', '')
            if 'max-width' in style or 'width: 100%' in style:
                responsive += 1
        if responsive > len(images) * RESPONSIVE_IMAGE_RATIO:
            acc.add_pass("Most images are responsive")
        else:
            acc.add_suggestion(
                "make_images_responsive",
                "Some images may not be responsive",
                "Add max-width: 100% and height: auto to images"
            )


def check_images(doc: ArtifactDocument, images: ImageSet, acc: ReportAccumulator) -> None:
    img_tags = doc.soup.find_all('img')
    if not img_tags:
        return

    client_urls = [img.url for img in images.all_images() if img.url]
    missing_alt = 0
    blank_alt = 0
    broken = 0
    client_used = 0

    for index, img in enumerate(img_tags):
        src = img.get('src')
        alt = img.get('alt')

        if alt is None:
            missing_alt += 1
        elif not alt.strip():
            blank_alt += 1

        if src and any(url in src for url in client_urls):
            client_used += 1

        if not src or not src.strip():
            broken += 1
            acc.add_issue(
                "broken_image_src", "high",
                f"Image {index + 1} missing src attribute",
                fix="Add valid src attribute to image"
            )

    if missing_alt == 0 and blank_alt == 0:
        acc.add_pass("All images have alt text")
    if missing_alt:
        acc.add_issue(
            "missing_alt_text", "medium",
            f"{missing_alt} images missing alt text",
            fix="Add descriptive alt text to all images"
        )
    if blank_alt:
        acc.add_issue(
            "empty_alt_text", "low",
            f"{blank_alt} images have blank alt text",
            fix="Describe the image, or keep alt=\"\" only for decorative images"
        )

    if client_used > 0:
        acc.add_pass(f"{client_used} client images properly used")
    if broken == 0:
        acc.add_pass("All images have valid src attributes")


def check_links(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    links = doc.soup.select('a[href]')
    if not links:
        return

    working = 0
    empty = 0

    for index, link in enumerate(links):
        href = link.get('href', '')
        if not href.strip():
            empty += 1
            acc.add_issue(
                "empty_link", "medium",
                f"Link {index + 1} has empty href",
                fix="Add valid href or remove link"
            )
        else:
            working += 1

        if not link.get_text().strip() and not link.get('aria-label'):
            acc.add_issue(
                "inaccessible_link", "medium",
                f"Link {index + 1} has no accessible text",
                fix="Add descriptive text content or aria-label"
            )

    if empty == 0:
        acc.add_pass("All links have valid href attributes")
    acc.add_pass(f"{working} links found")


def check_performance(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    soup = doc.soup

    inline_count = len(doc.inline_styles)
    if inline_count > MAX_INLINE_STYLES:
        acc.add_issue(
            "excessive_inline_styles", "low",
            f"{inline_count} elements with inline styles",
            fix="Move inline styles to CSS classes for better performance"
        )
    else:
        acc.add_pass("Reasonable use of inline styles")

    total_elements = len(soup.find_all(True))
    if total_elements > MAX_DOM_SIZE:
        acc.add_suggestion("large_dom", f"Large DOM size ({total_elements} elements)", "Consider simplifying HTML structure")
    else:
        acc.add_pass("Reasonable DOM size")

    scripts = soup.find_all('script')
    if scripts:
        acc.add_pass(f"{len(scripts)} script elements found")

    stylesheets = soup.select('style, link[rel="stylesheet"]')
    if stylesheets:
        acc.add_pass(f"{len(stylesheets)} stylesheet elements found")


def check_seo(doc: ArtifactDocument, portfolio: PortfolioData, acc: ReportAccumulator) -> None:
    soup = doc.soup

    h1_count = len(soup.find_all('h1'))
    if h1_count == 0:
        acc.add_issue("missing_h1", "medium", "No H1 heading found", fix="Add H1 heading for main page title")
    elif h1_count > 1:
        acc.add_suggestion("multiple_h1", f"{h1_count} H1 headings found", "Consider using only one H1 per page")
    else:
        acc.add_pass("Single H1 heading found")

    has_structured_data = soup.select_one('[itemtype], script[type="application/ld+json"]') is not None
    if portfolio.personal_info.name and not has_structured_data:
        acc.add_suggestion(
            "add_structured_data",
            "Could benefit from structured data markup",
            "Add schema.org Person markup for better SEO"
        )


def validate(html: str, portfolio: PortfolioData, images: ImageSet) -> DimensionReport:
    """Document structure, metadata, responsiveness, media, links, performance and SEO basics."""
    doc = DocumentBuilder().parse_doc(html)
    acc = ReportAccumulator()

    check_structure(doc, acc)
    check_meta(doc, portfolio, acc)
    check_responsive(doc, acc)
    check_images(doc, images, acc)
    check_links(doc, acc)
    check_performance(doc, acc)
    check_seo(doc, portfolio, acc)

    return acc.build(summary=score_band_summary(acc.score, SUMMARY_BANDS))


# --- DEFINITION ---
DEFINITION = AnalyzerDefinition(
    dimension="technical",
    validate=validate,
    description="Structure, metadata, responsiveness, media, links and performance"
)
