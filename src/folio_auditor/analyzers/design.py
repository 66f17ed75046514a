# src/folio_auditor/analyzers/design.py
import logging
import re
from typing import Dict, Any, List

from ..dom.builder import DocumentBuilder, SECTION_SELECTOR, HEADING_TAGS, inline_font_size
from ..dom.core import ReportAccumulator, AnalyzerDefinition
from ..dom.models import ArtifactDocument
from ..model import DimensionReport, ImageSet, PortfolioData, StylePreferences

logger = logging.getLogger(__name__)

# --- CONSTANTS ---
# Keyword lists and thresholds are part of the scoring contract; keep them verbatim.

HEX_COLOR = re.compile(r'#[0-9a-fA-F]{3,6}')
RGB_COLOR = re.compile(r'rgba?\([^)]+\)')
NAMED_COLOR = re.compile(
    r'\b(red|blue|green|yellow|purple|orange|pink|gray|grey|black|white|brown|cyan|magenta)\b',
    re.IGNORECASE
)
NEGATIVE_MARGIN = re.compile(r'margin[\w-]*\s*:\s*-')

EXPERIMENTAL_FEATURES = [
    'clip-path:', 'shape-outside:', 'mask:', 'mix-blend-mode:', 'backdrop-filter:',
    'transform: skew', 'transform: rotate', 'filter:', 'writing-mode:',
]

TEMPLATE_INDICATORS = [
    'hero-section', 'about-section', 'work-section', 'contact-section',
    'btn-primary', 'navbar-nav', 'container-fluid',
]

CREATIVE_INDICATORS = [
    'transform:', 'clip-path:', 'mix-blend-mode:', 'position: absolute', 'position: fixed',
    'z-index:', '@keyframes', 'filter:', 'backdrop-filter:',
]

TYPOGRAPHIC_TECHNIQUES = [
    'font-weight: 900', 'font-weight: 100', 'letter-spacing:', 'text-transform:', 'font-size: clamp',
    'font-variant:', 'text-shadow:', 'writing-mode:', '@import', 'font-family:',
]

CREATIVE_FEATURES = [
    'transform:', 'clip-path:', 'mix-blend-mode:', 'position: absolute', '@keyframes',
    'filter:', 'backdrop-filter:', 'mask:', 'shape-outside:',
]

SPACING_INDICATORS = ['margin:', 'padding:', 'gap:', 'space-between', 'space-around']

VISUAL_INTEREST_INDICATORS = ['gradient', 'shadow', 'border-radius', 'transform', 'transition']

MOOD_KEYWORDS = {
    'professional': ['clean', 'minimal', 'corporate', 'business', 'formal'],
    'creative': ['artistic', 'bold', 'vibrant', 'experimental', 'creative'],
    'playful': ['fun', 'colorful', 'animated', 'quirky', 'playful'],
    'elegant': ['sophisticated', 'refined', 'luxury', 'premium', 'elegant'],
    'minimal': ['simple', 'clean', 'whitespace', 'minimal', 'sparse'],
    'modern': ['contemporary', 'sleek', 'modern', 'current'],
    'funky': ['wild', 'crazy', 'neon', 'experimental', 'unique'],
}

NAV_SELECTOR = 'nav, .nav, .navbar, .navigation'
DENSITY_SELECTOR = 'p, div, span, h1, h2, h3, h4, h5, h6'

TEMPLATE_CRITICAL_COUNT = 3
CREATIVE_PASS_COUNT = 3
LAYOUT_VARIETY_RATIO = 0.5
TYPOGRAPHY_ADVANCED_COUNT = 4
TYPOGRAPHY_SOME_COUNT = 2
CLIENT_IMAGE_RATIO = 0.7
MIN_PALETTE = 2
MAX_BALANCED_PALETTE = 8
VISUAL_INTEREST_PASS_COUNT = 3


# --- EXTRACTION ---

def extract_colors(doc: ArtifactDocument) -> List[str]:
    """Collects hex, rgb(a) and named colours from style blocks and inline styles, lower-cased, first-seen order."""
    colors: Dict[str, None] = {}
    for css in [doc.css_text, *doc.inline_styles]:
        for pattern in (HEX_COLOR, RGB_COLOR, NAMED_COLOR):
            for match in pattern.findall(css):
                colors.setdefault(match.lower(), None)
    return list(colors)


def _count_present(haystack: str, needles: List[str]) -> int:
    return sum(1 for needle in needles if needle in haystack)


def detect_asymmetry(css: str) -> bool:
    return (
        ('margin-left:' in css and 'margin-right:' in css)
        or ('text-align: left' in css and 'text-align: right' in css)
        or 'float:' in css
        or 'position: absolute' in css
    )


def detect_overlap(css: str) -> bool:
    return (
        'z-index:' in css
        or 'position: absolute' in css
        or 'position: fixed' in css
        or bool(NEGATIVE_MARGIN.search(css))
    )


def detect_experimental(css: str) -> bool:
    return any(feature in css for feature in EXPERIMENTAL_FEATURES)


def classify_navigation(doc: ArtifactDocument) -> str:
    nav = doc.soup.select_one(NAV_SELECTOR)
    if nav is None:
        return 'none'

    nav_content = str(nav).lower()
    if 'hamburger' in nav_content or 'mobile-menu' in nav_content:
        return 'mobile-first'
    if 'position: fixed' in nav_content or 'position: sticky' in nav_content:
        return 'sticky'
    if 'sidebar' in nav_content or 'vertical' in nav_content:
        return 'sidebar'
    if 'hidden' in nav_content or 'overlay' in nav_content:
        return 'experimental'
    return 'standard'


def classify_density(doc: ArtifactDocument) -> str:
    total = sum(len(el.get_text()) for el in doc.soup.select(DENSITY_SELECTOR))
    if total < 500:
        return 'minimal'
    if total < 1500:
        return 'moderate'
    return 'dense'


def classify_spacing(css: str) -> str:
    score = _count_present(css, SPACING_INDICATORS)
    if score >= 4:
        return 'generous'
    if score >= 2:
        return 'moderate'
    return 'tight'


def uses_grid(css: str) -> bool:
    return 'display: grid' in css or 'display:grid' in css


def uses_flex(css: str) -> bool:
    return 'display: flex' in css or 'display:flex' in css


def analyze_layout(doc: ArtifactDocument) -> Dict[str, Any]:
    css = doc.css_text
    return {
        "uses_grid": uses_grid(css),
        "uses_flex": uses_flex(css),
        "has_asymmetry": detect_asymmetry(css),
        "has_overlapping": detect_overlap(css),
        "has_experimental_layout": detect_experimental(css),
        "navigation_style": classify_navigation(doc),
        "content_density": classify_density(doc),
        "spatial_usage": classify_spacing(css),
    }


# --- MOODBOARD MODE ---

def check_moodboard_fidelity(doc: ArtifactDocument, colors: List[str], layout: Dict[str, Any], acc: ReportAccumulator) -> None:
    if layout["has_asymmetry"] or layout["has_experimental_layout"] or layout["has_overlapping"]:
        acc.add_pass("Creative layout patterns detected - shows moodboard influence")
    else:
        acc.add_issue(
            "generic_layout_despite_moodboard", "high",
            "Layout appears generic despite moodboard provided - may not reflect moodboard creativity",
            fix="Analyze moodboard for unique layout patterns and implement creative interpretations"
        )

    if len(colors) >= MIN_PALETTE:
        acc.add_pass(f"Color palette developed ({len(colors)} colors) - appropriate for moodboard-driven design")
    else:
        acc.add_suggestion(
            "limited_color_palette",
            "Very limited color palette - ensure it matches moodboard aesthetic",
            "If moodboard is minimal, limited colors are fine. If vibrant, expand palette."
        )

    template_score = _count_present(doc.markup_lower, TEMPLATE_INDICATORS)
    if template_score > TEMPLATE_CRITICAL_COUNT:
        acc.add_issue(
            "template_override_moodboard", "critical",
            "Design shows template patterns despite moodboard - moodboard may have been ignored",
            fix="Let moodboard drive structure, not templates. Break free from conventional layouts."
        )
    elif template_score == 0:
        acc.add_pass("No template patterns detected - design appears moodboard-driven")

    if _count_present(doc.markup_lower, CREATIVE_INDICATORS) >= CREATIVE_PASS_COUNT:
        acc.add_pass("Creative CSS techniques used - suggests moodboard-inspired experimentation")
    else:
        acc.add_suggestion(
            "lacks_creative_techniques",
            "Limited creative CSS techniques - may not fully capture moodboard inspiration",
            "Use advanced CSS (transforms, filters, positioning) to recreate moodboard aesthetics"
        )


def check_moodboard_layout(doc: ArtifactDocument, layout: Dict[str, Any], acc: ReportAccumulator) -> None:
    sections = doc.soup.select(SECTION_SELECTOR)

    if sections:
        variety = 0
        for section in sections:
            style = section.get('style', '')
            class_name = ' '.join(section.get('class') or [])
            if 'grid' in style or 'grid' in class_name:
                variety += 1
            if 'flex' in style or 'flex' in class_name:
                variety += 1
            if 'absolute' in style or 'fixed' in style:
                variety += 1
            if 'transform' in style or 'rotate' in style:
                variety += 1

        if variety >= len(sections) * LAYOUT_VARIETY_RATIO:
            acc.add_pass("Varied layout techniques across sections - suggests moodboard-driven creativity")
        else:
            acc.add_suggestion(
                "uniform_section_layouts",
                "Sections use similar layout patterns - may not reflect moodboard diversity",
                "Vary layout approaches between sections based on moodboard patterns"
            )

    nav_style = layout["navigation_style"]
    if nav_style == 'experimental':
        acc.add_pass("Creative navigation detected - shows moodboard influence on UX patterns")
    elif nav_style == 'standard':
        acc.add_suggestion(
            "standard_navigation",
            "Standard navigation pattern used - consider moodboard-inspired alternatives",
            "If moodboard shows creative layouts, consider non-standard navigation approaches"
        )


def check_moodboard_typography(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    typography_score = _count_present(doc.css_text, TYPOGRAPHIC_TECHNIQUES)

    if typography_score >= TYPOGRAPHY_ADVANCED_COUNT:
        acc.add_pass("Advanced typography techniques used - suggests moodboard-inspired text treatment")
    elif typography_score >= TYPOGRAPHY_SOME_COUNT:
        acc.add_pass("Some typography creativity detected")
    else:
        acc.add_suggestion(
            "basic_typography",
            "Basic typography treatment - may not reflect moodboard text styles",
            "Analyze moodboard typography and implement creative text treatments"
        )

    headings = doc.soup.find_all(HEADING_TAGS)
    if headings:
        sizes = set()
        for heading in headings:
            style = heading.get('style', '')
            if 'font-size:' in style:
                sizes.add(inline_font_size(style))
        if len(sizes) >= min(len(headings), 4):
            acc.add_pass("Varied heading sizes - shows typographic hierarchy consideration")


# --- FALLBACK MODE ---

def check_mood(doc: ArtifactDocument, mood: str, acc: ReportAccumulator) -> None:
    mood_lower = mood.lower()
    keywords = MOOD_KEYWORDS.get(mood_lower, [])
    markup = doc.markup_lower

    # Unknown moods have no keywords and are never reflected
    reflected = bool(keywords) and (mood_lower in markup or any(keyword in markup for keyword in keywords))
    if reflected:
        acc.add_pass(f'Portfolio reflects "{mood}" mood preference')
    else:
        acc.add_suggestion(
            "mood_not_reflected",
            f'Portfolio could better reflect "{mood}" mood preference',
            f"Consider adding {mood}-style elements and design patterns"
        )


def check_color_scheme(doc: ArtifactDocument, scheme: str, acc: ReportAccumulator) -> None:
    css = doc.css_text
    scheme_lower = scheme.lower()

    if scheme_lower in ('minimal', 'monochrome'):
        if '#000' in css or '#fff' in css or 'black' in css or 'white' in css:
            acc.add_pass(f"{scheme} color scheme appears to be followed")
    elif scheme_lower == 'vibrant':
        if 'rgb' in css or '#' in css:
            acc.add_pass("Vibrant colors detected")
    elif scheme_lower == 'warm':
        if 'red' in css or 'orange' in css or 'yellow' in css:
            acc.add_pass("Warm colors detected")
    elif scheme_lower == 'cool':
        if 'blue' in css or 'green' in css or 'purple' in css:
            acc.add_pass("Cool colors detected")


def check_typography_preference(doc: ArtifactDocument, typography: str, acc: ReportAccumulator) -> None:
    css = doc.css_text
    if 'font-family' in css:
        acc.add_pass(f'Typography preference "{typography}" - custom fonts used')
    if typography.lower() == 'bold' and 'font-weight' in css:
        acc.add_pass("Bold typography preference reflected in font weights")


def check_layout_preference(doc: ArtifactDocument, layout_style: str, acc: ReportAccumulator) -> None:
    css = doc.css_text
    style_lower = layout_style.lower()

    if style_lower == 'grid':
        if uses_grid(css):
            acc.add_pass("Grid layout preference followed")
    elif style_lower == 'minimal':
        if 'white' in css or '#fff' in css:
            acc.add_pass("Minimal layout style reflected")
    elif style_lower == 'asymmetric':
        acc.add_suggestion(
            "asymmetric_layout_check",
            "Asymmetric layout preference noted",
            "Ensure layout uses creative, non-symmetric arrangements"
        )


def check_style_preferences(doc: ArtifactDocument, prefs: StylePreferences, acc: ReportAccumulator) -> None:
    if prefs.is_empty():
        acc.add_suggestion(
            "no_style_guidance",
            "No moodboard or style preferences provided",
            "Design defaults to creative interpretation"
        )
        return

    if prefs.mood:
        check_mood(doc, prefs.mood, acc)
    if prefs.color_scheme:
        check_color_scheme(doc, prefs.color_scheme, acc)
    if prefs.typography:
        check_typography_preference(doc, prefs.typography, acc)
    if prefs.layout_style:
        check_layout_preference(doc, prefs.layout_style, acc)


def check_generic_quality(doc: ArtifactDocument, colors: List[str], acc: ReportAccumulator) -> None:
    if MIN_PALETTE <= len(colors) <= MAX_BALANCED_PALETTE:
        acc.add_pass(f"Balanced color palette ({len(colors)} colors)")
    elif len(colors) > MAX_BALANCED_PALETTE:
        acc.add_suggestion(
            "many_colors",
            f"Many colors used ({len(colors)}) - ensure intentional color strategy",
            "Consider limiting to 5-7 main colors for better harmony"
        )

    if _count_present(doc.markup_lower, VISUAL_INTEREST_INDICATORS) >= VISUAL_INTEREST_PASS_COUNT:
        acc.add_pass("Visual interest techniques detected")
    else:
        acc.add_suggestion(
            "increase_visual_interest",
            "Design could benefit from more visual interest",
            "Add gradients, shadows, or subtle animations"
        )


# --- UNIVERSAL CHECKS ---

def check_image_usage(doc: ArtifactDocument, images: ImageSet, acc: ReportAccumulator) -> None:
    img_tags = doc.soup.find_all('img')
    client_urls = [img.url for img in images.all_images()]
    total = len(client_urls)

    if total > 0:
        used = 0
        for tag in img_tags:
            src = tag.get('src', '')
            if any(url and url in src for url in client_urls):
                used += 1

        if used > 0:
            acc.add_pass(f"{used}/{total} client images used")
            if used < total * CLIENT_IMAGE_RATIO:
                acc.add_issue(
                    "underused_client_images", "medium",
                    f"Only {used}/{total} client images used",
                    fix="Include more of the client's provided images in the design"
                )
        else:
            acc.add_issue(
                "no_client_images_used", "high",
                "Client provided images but none were used",
                fix="Replace placeholder images with client's actual images"
            )
    else:
        acc.add_pass("No client images provided - using appropriate placeholders")

    styled = 0
    for tag in img_tags:
        style = tag.get('style', '')
        if 'border-radius' in style or 'box-shadow' in style or 'filter' in style or 'transform' in style:
            styled += 1
    if styled > 0:
        acc.add_pass(f"{styled} images have custom styling")


def check_responsive(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    css = doc.css_text

    if uses_grid(css) or uses_flex(css):
        acc.add_pass("Modern layout methods (Flexbox/Grid) used")

    if '@media' in css:
        acc.add_pass("Responsive design implemented")
    else:
        acc.add_issue(
            "not_responsive", "medium",
            "No responsive design detected",
            fix="Add media queries for different screen sizes"
        )


def check_technical_polish(doc: ArtifactDocument, acc: ReportAccumulator) -> None:
    css = doc.css_text

    if '--' in css and 'var(' in css:
        acc.add_pass("CSS custom properties used for maintainability")
    if 'transition:' in css or '@keyframes' in css:
        acc.add_pass("Animations and transitions implemented")
    if 'rem' in css or 'em' in css or 'vw' in css or 'vh' in css:
        acc.add_pass("Responsive sizing units used")


# --- DESCRIPTIVE ANALYSIS (never scored) ---

def analyze_moodboard_compliance(doc: ArtifactDocument, colors: List[str], layout: Dict[str, Any]) -> Dict[str, Any]:
    innovation = 0
    if layout["has_asymmetry"]:
        innovation += 2
    if layout["has_overlapping"]:
        innovation += 2
    if layout["has_experimental_layout"]:
        innovation += 3
    if layout["navigation_style"] == 'experimental':
        innovation += 2

    if 3 <= len(colors) <= 7:
        harmony = 'balanced'
    elif len(colors) < 3:
        harmony = 'minimal'
    else:
        harmony = 'complex'

    return {
        "creativity_score": _count_present(doc.markup_lower, CREATIVE_FEATURES),
        "layout_innovation": innovation,
        "color_harmony": harmony,
        "overall_compliance": "estimated",
    }


def build_recommendations(kinds: List[str], has_moodboard: bool) -> List[str]:
    recommendations = []

    if has_moodboard and any('moodboard' in kind for kind in kinds):
        recommendations.append("Consider regenerating with stronger emphasis on moodboard inspiration")
    if any('color' in kind or kind == 'poor_contrast' for kind in kinds):
        recommendations.append("Review and improve color palette and contrast")
    if any('client_images' in kind for kind in kinds):
        recommendations.append("Better utilize client's provided images in the design")
    if 'not_responsive' in kinds:
        recommendations.append("Implement responsive design for all device sizes")

    return recommendations


def summarize(score: int, has_moodboard: bool) -> str:
    prefix = "moodboard-driven design" if has_moodboard else "creative design"
    if score >= 90:
        return f"Excellent {prefix} - " + ("faithfully captures moodboard vision" if has_moodboard else "shows great creative interpretation")
    if score >= 75:
        return f"Good {prefix} - " + ("mostly reflects moodboard" if has_moodboard else "solid creative choices") + " with room for refinement"
    if score >= 60:
        return f"Fair {prefix} - " + ("partially captures moodboard" if has_moodboard else "basic creative approach") + " but needs improvement"
    return f"Poor {prefix} - " + ("fails to capture moodboard vision" if has_moodboard else "lacks creative vision") + " and needs major revision"


# --- ENTRY POINT ---

def validate(html: str, portfolio: PortfolioData, images: ImageSet) -> DimensionReport:
    """
    Moodboard-first design validation.

    With moodboard images the artifact is judged on creative interpretation
    (layout, template avoidance, typography). Without, it falls back to the
    stated style preferences plus generic palette/visual-interest checks.
    Universal image, responsive and polish checks run in both modes.
    """
    doc = DocumentBuilder().parse_doc(html)
    acc = ReportAccumulator()

    colors = extract_colors(doc)
    layout = analyze_layout(doc)
    has_moodboard = images.has_moodboard

    if has_moodboard:
        logger.debug(f"Validating fidelity to {len(images.moodboard)} moodboard images...")
        check_moodboard_fidelity(doc, colors, layout, acc)
        check_moodboard_layout(doc, layout, acc)
        check_moodboard_typography(doc, acc)
    else:
        check_style_preferences(doc, portfolio.style_preferences, acc)
        check_generic_quality(doc, colors, acc)

    check_image_usage(doc, images, acc)
    check_responsive(doc, acc)
    check_technical_polish(doc, acc)

    kinds = [issue.kind for issue in acc.issues]
    details: Dict[str, Any] = {
        "generated_colors": colors,
        "layout_analysis": layout,
        "moodboard_analysis": analyze_moodboard_compliance(doc, colors, layout) if has_moodboard else None,
        "recommendations": build_recommendations(kinds, has_moodboard),
    }

    return acc.build(summary=summarize(acc.score, has_moodboard), details=details)


# --- DEFINITION ---
DEFINITION = AnalyzerDefinition(
    dimension="design",
    validate=validate,
    description="Moodboard fidelity or style-preference adherence, plus image use and responsiveness"
)
