# src/continuation/services/completeness_service.py
import logging
import re
from typing import Any

from continuation.model import CompletenessReport, StructureFlags, TagBalanceStats

logger = logging.getLogger(__name__)

# Structural weights of the completion estimate (sum = 100)
WEIGHTS = {
    "has_doctype": 5,
    "has_html_open": 10,
    "has_head_section": 10,
    "has_body_open": 15,
    "has_styling": 20,
    "has_content": 20,
    "has_body_close": 10,
    "has_html_close": 10,
}

MIN_CONTENT_LENGTH = 1000
MIN_CONTINUABLE_LENGTH = 500
TAG_BALANCE_THRESHOLD = 0.8
MAX_ISSUES_BEFORE_PENALTY = 5
ISSUE_PENALTY = 20
PENALTY_FLOOR = 10
MISSING_CLOSER_CAP = 75
MAX_ISSUES_WHEN_CLOSED = 2

OPEN_TAG = re.compile(r'<[^/][^>]*>')
CLOSE_TAG = re.compile(r'</[^>]*>')
SELF_CLOSING_TAG = re.compile(r'<[^>]*/>')
UNFINISHED_TAG = re.compile(r'<[^>]*\Z')
BODY_CLOSE = re.compile(r'</body\s*>', re.IGNORECASE)
HTML_CLOSE = re.compile(r'</html\s*>', re.IGNORECASE)
CLEAN_ENDING = re.compile(r'(</html\s*>|</body\s*>|-->)\Z', re.IGNORECASE)


class CompletenessService:
    """
    Estimates whether a generated artifact was cut off by the generator's output limit.
    Purely textual: works on truncated markup that no parser would accept as a document.
    """

    def validate_completeness(self, html: Any) -> CompletenessReport:
        if not html or not isinstance(html, str):
            return CompletenessReport(
                is_complete=False,
                estimated_completion_percent=0,
                issues=["No HTML content provided"],
                can_continue=False
            )

        clean = html.strip()
        lower = clean.lower()

        structure = StructureFlags(
            has_doctype='<!doctype' in lower,
            has_html_open='<html' in lower,
            has_html_close=HTML_CLOSE.search(clean) is not None,
            has_body_open='<body' in lower,
            has_body_close=BODY_CLOSE.search(clean) is not None,
            has_head_section='<head' in lower,
            has_style_tag='<style' in lower,
            has_script_tag='<script' in lower,
        )
        has_styling = structure.has_style_tag or '<link' in lower
        has_content = len(clean) > MIN_CONTENT_LENGTH

        open_tags = len(OPEN_TAG.findall(clean))
        close_tags = len(CLOSE_TAG.findall(clean))
        self_closing = len(SELF_CLOSING_TAG.findall(clean))
        expected_closes = open_tags - self_closing

        estimate = 0
        if structure.has_doctype:
            estimate += WEIGHTS["has_doctype"]
        if structure.has_html_open:
            estimate += WEIGHTS["has_html_open"]
        if structure.has_head_section:
            estimate += WEIGHTS["has_head_section"]
        if structure.has_body_open:
            estimate += WEIGHTS["has_body_open"]
        if has_styling:
            estimate += WEIGHTS["has_styling"]
        if has_content:
            estimate += WEIGHTS["has_content"]
        if structure.has_body_close:
            estimate += WEIGHTS["has_body_close"]
        if structure.has_html_close:
            estimate += WEIGHTS["has_html_close"]

        ends_abruptly = CLEAN_ENDING.search(clean) is None
        unfinished_tag = UNFINISHED_TAG.search(clean) is not None
        unfinished_comment = '<!--' in clean and clean.rfind('<!--') > clean.rfind('-->')

        issues = []
        if not structure.has_doctype and structure.has_html_open:
            issues.append("Missing DOCTYPE declaration")
        if not structure.has_html_open:
            issues.append("Missing opening <html> tag")
        if not structure.has_head_section:
            issues.append("Missing <head> section")
        if not structure.has_body_open:
            issues.append("Missing opening <body> tag")
        if not has_styling:
            issues.append("No CSS styling detected")
        if not structure.has_body_close:
            issues.append("Missing closing </body> tag")
        if not structure.has_html_close:
            issues.append("Missing closing </html> tag")
        if unfinished_tag:
            issues.append("Incomplete HTML tag at end")
        if unfinished_comment:
            issues.append("Unclosed HTML comment")
        if ends_abruptly:
            issues.append("Content appears to end abruptly")
        if close_tags < expected_closes * TAG_BALANCE_THRESHOLD:
            issues.append("Significant number of unclosed HTML tags")

        can_continue = structure.has_html_open and structure.has_body_open and len(clean) > MIN_CONTINUABLE_LENGTH

        if len(issues) > MAX_ISSUES_BEFORE_PENALTY:
            estimate = max(estimate - ISSUE_PENALTY, PENALTY_FLOOR)
        if not structure.has_body_close or not structure.has_html_close:
            estimate = min(estimate, MISSING_CLOSER_CAP)

        is_complete = not issues or (
            structure.has_html_close and structure.has_body_close and len(issues) <= MAX_ISSUES_WHEN_CLOSED
        )

        report = CompletenessReport(
            is_complete=is_complete,
            estimated_completion_percent=min(max(estimate, 0), 100),
            issues=issues,
            can_continue=can_continue,
            structure=structure,
            stats=TagBalanceStats(
                total_length=len(clean),
                open_tags=open_tags,
                close_tags=close_tags,
                self_closing_tags=self_closing,
                tag_balance=close_tags / max(expected_closes, 1)
            )
        )
        logger.debug(
            f"Completeness: {report.estimated_completion_percent}% "
            f"(complete={report.is_complete}, issues={len(issues)})"
        )
        return report
