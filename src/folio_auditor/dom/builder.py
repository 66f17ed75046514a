# src/folio_auditor/dom/builder.py
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Doctype, Tag

from .models import ArtifactDocument

logger = logging.getLogger(__name__)

SECTION_SELECTOR = 'section, div[class*="section"], main > div'
HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']


class DocumentBuilder:
    """
    Parses a generated HTML artifact into an ArtifactDocument.

    All derived text views (CSS text, serialized markup, body text) are
    computed once here so the analyzers only run substring heuristics.
    """

    def parse_doc(self, html: str) -> ArtifactDocument:
        """
        Parses raw HTML into an ArtifactDocument.

        Args:
            html (str): The generated artifact, possibly truncated or malformed.

        Returns:
            ArtifactDocument: Parsed soup plus precomputed text views.
        """
        if not isinstance(html, str):
            raise TypeError(f"Artifact must be a string, got {type(html).__name__}")

        # Strip BOM; html.parser tolerates truncated markup
        clean_html = html.replace('\ufeff', '')
        soup = BeautifulSoup(clean_html, 'html.parser')

        found_doctype = any(
            isinstance(item, Doctype) and item.strip().lower().startswith('html')
            for item in soup.contents
        )

        style_blocks = [self.tag_text(style) for style in soup.find_all('style')]
        inline_styles = [tag.get('style', '') for tag in soup.find_all(style=True)]

        text_root = soup.body or soup
        return ArtifactDocument(
            soup=soup,
            has_doctype=found_doctype,
            css_text=''.join(style_blocks),
            inline_styles=inline_styles,
            markup_lower=str(soup).lower(),
            body_text=text_root.get_text(),
            document_text=soup.get_text(),
        )

    @staticmethod
    def tag_text(tag: Optional[Tag]) -> str:
        """textContent-like view of a tag; <style>/<script> keep their raw contents."""
        if tag is None:
            return ""
        return tag.string or tag.get_text() or ""


# --- Shared query helpers ---

def find_text(doc: ArtifactDocument, text: Optional[str]) -> bool:
    """
    Case-insensitive substring search of the first 50 characters of `text`
    against the document's concatenated node text. Targets under 3 characters never match.
    """
    if not text or len(text) < 3:
        return False
    needle = text.lower()[:50]
    return needle in doc.document_text.lower()


def find_section_by_heading(doc: ArtifactDocument, labels: List[str]) -> Optional[Tag]:
    """
    Finds a section by heading label, then by class/id substring.
    Labels are tried in order; the first hit wins.
    """
    soup = doc.soup
    headings = soup.find_all(HEADING_TAGS)
    for label in labels:
        needle = label.lower()
        for heading in headings:
            if needle in heading.get_text().lower():
                return heading.find_parent('section') or heading.find_parent('div') or heading.parent

        for tag in soup.find_all(True):
            if needle in attr_text(tag, 'class') or needle in attr_text(tag, 'id'):
                return tag
    return None


def attr_text(tag: Tag, name: str) -> str:
    """Attribute value as a string; bs4 returns lists for multi-valued attributes (class, rel)."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return ' '.join(value)
    return str(value)


def word_count(text: str) -> int:
    return len(text.split())


def inline_font_size(style: str) -> Optional[str]:
    match = re.search(r'font-size:\s*([^;]+)', style)
    return match.group(1).strip() if match else None


def ensure_head(soup: BeautifulSoup) -> Tag:
    """Returns the document head, creating it (before <body>, else inside <html>, else after the doctype) when absent."""
    head = soup.find('head')
    if head is not None:
        return head

    head = soup.new_tag('head')
    html_el = soup.find('html')
    body = soup.find('body')
    if body is not None:
        body.insert_before(head)
    elif html_el is not None:
        html_el.insert(0, head)
    else:
        position = 0
        for index, item in enumerate(soup.contents):
            if isinstance(item, Doctype):
                position = index + 1
                break
        soup.insert(position, head)
    return head
