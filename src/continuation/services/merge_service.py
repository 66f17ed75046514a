# src/continuation/services/merge_service.py
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Preamble a generator tends to repeat at the start of a continuation fragment
LEADING_DOCTYPE = re.compile(r'^<!DOCTYPE[^>]*>', re.IGNORECASE)
LEADING_HTML = re.compile(r'^<html\b[^>]*>', re.IGNORECASE)
LEADING_HEAD = re.compile(r'^<head\b[^>]*>.*?</head>', re.IGNORECASE | re.DOTALL)
LEADING_BODY = re.compile(r'^<body\b[^>]*>', re.IGNORECASE)

BODY_CLOSE = re.compile(r'</body\s*>', re.IGNORECASE)
HTML_CLOSE = re.compile(r'</html\s*>', re.IGNORECASE)

CODE_FENCE_OPEN = re.compile(r'^```[\w-]*[ \t]*\n?')
CODE_FENCE_CLOSE = re.compile(r'\n?```\s*$')


def clean_generated_html(text: Optional[str]) -> str:
    """Strips the Markdown code fence generators like to wrap HTML in."""
    if not text:
        return ""
    cleaned = text.strip()
    if cleaned.startswith('```'):
        cleaned = CODE_FENCE_OPEN.sub('', cleaned, count=1)
        cleaned = CODE_FENCE_CLOSE.sub('', cleaned, count=1)
    return cleaned.strip()


def _keep_last(text: str, pattern: re.Pattern) -> str:
    """Removes every match of `pattern` except the last one."""
    matches = list(pattern.finditer(text))
    if len(matches) <= 1:
        return text
    last_start = matches[-1].start()
    return pattern.sub('', text[:last_start]) + text[last_start:]


class MergeService:
    """
    Textual merge of a truncated artifact and its continuation fragment.

    Preamble stripping is best-effort: a malformed fragment may be under- or
    over-stripped. The merge only guarantees a single </body> and </html>.
    """

    def strip_preamble(self, continuation: str) -> str:
        fragment = continuation.strip()
        for pattern in (LEADING_DOCTYPE, LEADING_HTML, LEADING_HEAD, LEADING_BODY):
            fragment = pattern.sub('', fragment, count=1).lstrip()
        return fragment

    def merge_html_parts(self, partial_html: str, continuation: str) -> str:
        partial = (partial_html or "").strip()
        fragment = self.strip_preamble(continuation or "")

        merged = partial + fragment

        merged = _keep_last(merged, BODY_CLOSE)
        merged = _keep_last(merged, HTML_CLOSE)

        body_close = BODY_CLOSE.search(merged)
        html_close = HTML_CLOSE.search(merged)
        has_body_close = body_close is not None
        has_html_close = html_close is not None

        # </html> must come last
        if has_body_close and has_html_close and body_close.start() > html_close.start():
            merged = HTML_CLOSE.sub('', merged).rstrip() + '\n</html>'

        if not has_body_close:
            html_close = HTML_CLOSE.search(merged)
            if html_close:
                merged = merged[:html_close.start()] + '</body>\n' + merged[html_close.start():]
            else:
                merged += '\n</body>'
        if not has_html_close:
            merged += '\n</html>'

        logger.debug(f"Merged {len(partial)} + {len(fragment)} chars into {len(merged)} chars")
        return merged
