# src/folio_auditor/fixers/design.py
from typing import List

from ..dom.builder import DocumentBuilder, ensure_head
from ..dom.core import FixContext
from ..dom.registry import fix_spec
from ..model import ValidationIssue

MAX_IMAGE_SUBSTITUTIONS = 3
PLACEHOLDER_IMG_SELECTOR = 'img[src*="placeholder"], img[src*="picsum"], img[src*="via.placeholder"]'

RESPONSIVE_CSS = """
/* Basic responsive styles */
* { box-sizing: border-box; }
img { max-width: 100%; height: auto; }
@media (max-width: 768px) {
  body { padding: 10px; }
  .container { width: 100%; }
}
"""

CONTRAST_CSS = """
/* Improved contrast */
body { color: #333; background-color: #fff; }
.dark-text { color: #222; }
.light-bg { background-color: #f9f9f9; }
"""


def _new_style(ctx: FixContext, css: str):
    style = ctx.soup.new_tag('style')
    style.string = css
    ensure_head(ctx.soup).append(style)
    return style


@fix_spec(dimension="design", kinds=["not_responsive"])
def add_responsive_styles(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    styles = ctx.soup.find_all('style')
    if any('@media' in DocumentBuilder.tag_text(style) for style in styles):
        return []

    _new_style(ctx, RESPONSIVE_CSS)
    return ["Added basic responsive styles"]


@fix_spec(dimension="design", kinds=["no_client_images_used"])
def substitute_client_images(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    """Swaps up to three placeholder-looking images for the client's final images, in document order."""
    final_images = ctx.images.final
    if not final_images:
        return []

    placeholders = ctx.soup.select(PLACEHOLDER_IMG_SELECTOR)
    fixes = []
    for index, (img, client_image) in enumerate(zip(placeholders, final_images[:MAX_IMAGE_SUBSTITUTIONS])):
        img['src'] = client_image.url
        fixes.append(f"Replaced placeholder with client image {index + 1}")
    return fixes


@fix_spec(dimension="design", kinds=["poor_contrast"])
def add_contrast_styles(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    style = ctx.soup.find('style')
    if style is None:
        _new_style(ctx, CONTRAST_CSS)
    else:
        style.string = DocumentBuilder.tag_text(style) + CONTRAST_CSS
    return ["Added contrast improvements"]
