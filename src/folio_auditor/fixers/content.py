# src/folio_auditor/fixers/content.py
from typing import List

from ..dom.core import FixContext
from ..dom.registry import fix_spec
from ..model import ValidationIssue

PLACEHOLDER_MARKER = "lorem ipsum"
FALLBACK_COPY = "Professional portfolio content."
TEXT_CONTAINERS = ['p', 'div', 'span']


@fix_spec(dimension="content", kinds=["missing_name"])
def insert_name(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    """Puts the subject's name into the first h1-h3, or creates an h1 at the top of <body>."""
    soup = ctx.soup
    name = ctx.portfolio.personal_info.name
    if not name:
        return []

    first_heading = soup.find(['h1', 'h2', 'h3'])
    if first_heading is not None:
        if name in first_heading.get_text():
            return []
        first_heading.string = name
        return ["Added name to heading"]

    body = soup.find('body')
    if body is None:
        return []

    heading = soup.new_tag('h1')
    heading.string = name
    body.insert(0, heading)
    return ["Created name heading"]


@fix_spec(dimension="content", kinds=["missing_title"])
def insert_professional_title(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    soup = ctx.soup
    title = ctx.portfolio.personal_info.title
    name_heading = soup.find('h1')
    if name_heading is None or not title:
        return []

    title_heading = soup.new_tag('h2')
    title_heading.string = title
    name_heading.insert_after(title_heading)
    return ["Added professional title"]


@fix_spec(dimension="content", kinds=["placeholder_content"])
def replace_placeholder_text(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    """
    Replaces placeholder copy with the bio (or a generic line).
    Only the innermost p/div/span holding the placeholder is rewritten, so
    surrounding layout containers survive.
    """
    replacement = ctx.portfolio.personal_info.bio or FALLBACK_COPY

    def holds_placeholder(tag) -> bool:
        return PLACEHOLDER_MARKER in tag.get_text().lower()

    targets = [
        el for el in ctx.soup.find_all(TEXT_CONTAINERS)
        if holds_placeholder(el) and not any(holds_placeholder(inner) for inner in el.find_all(TEXT_CONTAINERS))
    ]

    fixes = []
    for el in targets:
        el.string = replacement
        fixes.append("Replaced placeholder text")
    return fixes
