# src/folio_auditor/fixers/technical.py
from typing import List

from ..dom.builder import ensure_head
from ..dom.core import FixContext
from ..dom.registry import fix_spec
from ..model import ValidationIssue

VIEWPORT_CONTENT = "width=device-width, initial-scale=1.0"
PLACEHOLDER_SRC = "https://via.placeholder.com/400x300?text=Portfolio+Image+{index}"


@fix_spec(dimension="technical", kinds=["missing_viewport"])
def add_viewport(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    soup = ctx.soup
    if soup.find('meta', attrs={'name': 'viewport'}) is not None:
        return []

    head = ensure_head(soup)
    head.append(soup.new_tag('meta', attrs={'name': 'viewport', 'content': VIEWPORT_CONTENT}))
    return ["Added viewport meta tag"]


@fix_spec(dimension="technical", kinds=["missing_charset"])
def add_charset(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    soup = ctx.soup
    if soup.find('meta', attrs={'charset': True}) is not None:
        return []

    head = ensure_head(soup)
    # charset must come first in <head>
    head.insert(0, soup.new_tag('meta', attrs={'charset': 'UTF-8'}))
    return ["Added charset meta tag"]


@fix_spec(dimension="technical", kinds=["missing_title"])
def add_page_title(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    soup = ctx.soup
    text = f"{ctx.portfolio.personal_info.name} - Portfolio"

    title = soup.find('title')
    if title is None:
        title = soup.new_tag('title')
        title.string = text
        ensure_head(soup).append(title)
        return ["Added page title"]

    if not title.get_text().strip():
        title.string = text
        return ["Filled empty page title"]

    return []


@fix_spec(dimension="technical", kinds=["missing_lang_attribute"])
def add_lang(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    html_el = ctx.soup.find('html')
    if html_el is None or html_el.get('lang'):
        return []

    html_el['lang'] = ctx.default_lang
    return ["Added language attribute"]


@fix_spec(dimension="technical", kinds=["broken_image_src"])
def fix_broken_images(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    fixes = []
    broken = [img for img in ctx.soup.find_all('img') if not (img.get('src') or '').strip()]
    for index, img in enumerate(broken, start=1):
        img['src'] = PLACEHOLDER_SRC.format(index=index)
        fixes.append(f"Fixed broken image {index}")
    return fixes
