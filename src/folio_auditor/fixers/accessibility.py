# src/folio_auditor/fixers/accessibility.py
from typing import List

from bs4 import Tag

from ..dom.core import FixContext
from ..dom.registry import fix_spec
from ..model import ValidationIssue

DEFAULT_ALT = "Portfolio image"


@fix_spec(dimension="accessibility", kinds=["missing_alt_text"])
def add_alt_text(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    fixes = []
    missing = [img for img in ctx.soup.find_all('img') if img.get('alt') is None]
    for index, img in enumerate(missing):
        img['alt'] = DEFAULT_ALT
        fixes.append(f"Added alt text to image {index + 1}")
    return fixes


@fix_spec(dimension="accessibility", kinds=["missing_main_landmark"])
def wrap_main_landmark(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    """Moves every element child of <body> except style/script into a new <main>."""
    soup = ctx.soup
    body = soup.find('body')
    if body is None or soup.find('main') is not None:
        return []

    main = soup.new_tag('main')
    for child in list(body.children):
        if isinstance(child, Tag) and child.name not in ('script', 'style'):
            main.append(child.extract())
    body.append(main)
    return ["Added main landmark"]


@fix_spec(dimension="accessibility", kinds=["missing_tabindex"])
def add_tabindex(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    fixes = []
    for div in ctx.soup.select('div[onclick], div[role="button"]'):
        if not div.get('tabindex'):
            div['tabindex'] = "0"
            fixes.append("Added keyboard accessibility to interactive element")
    return fixes


@fix_spec(dimension="accessibility", kinds=["missing_h1"])
def promote_first_heading(ctx: FixContext, issue: ValidationIssue) -> List[str]:
    soup = ctx.soup
    if soup.find('h1') is not None:
        return []

    first_heading = soup.find(['h2', 'h3', 'h4', 'h5', 'h6'])
    if first_heading is None:
        return []

    first_heading.name = 'h1'
    return ["Fixed heading hierarchy - added H1"]
