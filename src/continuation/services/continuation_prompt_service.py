# src/continuation/services/continuation_prompt_service.py
import json
import logging
from typing import Any, Dict, Optional, Union

from continuation.model import CompletenessReport
from continuation.services.completeness_service import CompletenessService, TAG_BALANCE_THRESHOLD
from folio_auditor.dom.core import js_round
from folio_auditor.model import PortfolioData

logger = logging.getLogger(__name__)

PROMPT_HEADER = """CONTINUE GENERATING THE INCOMPLETE HTML PORTFOLIO.

RULES:
1. The document below was cut off during generation.
2. Do NOT restart or regenerate it from the beginning.
3. Continue exactly where it stops, keeping its style and structure.
4. Return ONLY the missing remainder, which will be appended to the partial document.

---START OF INCOMPLETE HTML---
{partial}
---END OF INCOMPLETE HTML---

WHAT IS MISSING:
"""

PROMPT_FOOTER = """
COMPLETION STATUS: {percent}% complete

ORIGINAL REQUEST:
- Personal Info: {name} - {title}
- Number of Projects: {project_count}
- Style Preferences: {style_json}

FINISHING CHECKLIST:
1. Complete any unfinished element or section
2. Include every remaining project
3. Close all open tags, ending with </body> and </html>
4. Give every image descriptive alt text

RETURN FORMAT: only the HTML needed to complete the document, without repeating the partial content."""


class ContinuationPromptService:
    """Builds the instruction handed to the external generator to resume a truncated artifact."""

    def __init__(self, completeness_service: Optional[CompletenessService] = None):
        self.completeness = completeness_service or CompletenessService()

    @staticmethod
    def _defect_checklist(report: CompletenessReport) -> str:
        lines = []
        if not report.structure.has_body_close:
            lines.append("- Missing closing </body> tag")
        if not report.structure.has_html_close:
            lines.append("- Missing closing </html> tag")
        if report.stats.tag_balance < TAG_BALANCE_THRESHOLD:
            unclosed = js_round((1 - report.stats.tag_balance) * 100)
            lines.append(f"- Approximately {unclosed}% of tags are unclosed")
        for issue in report.issues:
            line = f"- {issue}"
            if line not in lines:
                lines.append(line)
        return "\n".join(lines) + "\n" if lines else "- No structural defects detected\n"

    def generate_continuation_prompt(
            self,
            partial_html: str,
            portfolio: Union[PortfolioData, Dict[str, Any]]
    ) -> str:
        """
        Packages the verbatim partial artifact, its structural defects, the completion
        estimate and the minimal request context into a single prompt.
        """
        if not isinstance(portfolio, PortfolioData):
            portfolio = PortfolioData.model_validate(portfolio or {})

        report = self.completeness.validate_completeness(partial_html)
        info = portfolio.personal_info
        style_json = json.dumps(portfolio.style_preferences.model_dump(by_alias=True, exclude_none=True))

        prompt = PROMPT_HEADER.format(partial=partial_html)
        prompt += self._defect_checklist(report)
        prompt += PROMPT_FOOTER.format(
            percent=report.estimated_completion_percent,
            name=info.name,
            title=info.title or "",
            project_count=len(portfolio.projects),
            style_json=style_json
        )

        logger.debug(f"Built continuation prompt ({len(prompt)} chars, {report.estimated_completion_percent}% complete)")
        return prompt
