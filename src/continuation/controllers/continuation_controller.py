# src/continuation/controllers/continuation_controller.py
import logging
from typing import Any, Callable, Dict, Optional, Union

from continuation.model import ContinuationResult
from continuation.services.completeness_service import CompletenessService
from continuation.services.continuation_prompt_service import ContinuationPromptService
from continuation.services.merge_service import MergeService, clean_generated_html
from folio_auditor.model import PortfolioData
from folio_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

Generator = Callable[[str], str]


class ContinuationController:
    """
    Drives the truncation-recovery loop: estimate, prompt, generate, merge, re-estimate.

    The generator is injected as a plain `generate(prompt) -> str` callable; this
    controller never talks to a model provider itself.
    """

    def __init__(self, generate: Generator, max_attempts: Optional[int] = None):
        self.generate = generate
        self.max_attempts = max_attempts if max_attempts is not None else int(
            config_manager.get_nested("continuation.max_attempts", 2)
        )
        self.completeness = CompletenessService()
        self.prompts = ContinuationPromptService(self.completeness)
        self.merger = MergeService()

    def continue_generation(
            self,
            partial_html: str,
            portfolio: Union[PortfolioData, Dict[str, Any]]
    ) -> ContinuationResult:
        report = self.completeness.validate_completeness(partial_html)

        if report.is_complete:
            logger.info("Artifact is already complete; nothing to continue.")
            return ContinuationResult(success=True, html=partial_html, attempts=0, completeness=report)

        if not report.can_continue:
            logger.warning("Artifact is too truncated to continue; regeneration required.")
            return ContinuationResult(
                success=False,
                html=partial_html if isinstance(partial_html, str) else "",
                completeness=report,
                needs_regeneration=True,
                error="Artifact too incomplete to continue"
            )

        current = partial_html
        attempts = 0
        while attempts < self.max_attempts:
            attempts += 1
            logger.info(f"🔄 Continuation attempt {attempts}/{self.max_attempts} ({report.estimated_completion_percent}% complete)")

            prompt = self.prompts.generate_continuation_prompt(current, portfolio)
            try:
                fragment = self.generate(prompt)
            except Exception as e:
                logger.warning(f"Generator failed on attempt {attempts}: {e}", exc_info=True)
                continue

            fragment = clean_generated_html(fragment)
            if not fragment:
                logger.warning(f"Generator returned an empty continuation on attempt {attempts}")
                continue

            current = self.merger.merge_html_parts(current, fragment)
            report = self.completeness.validate_completeness(current)

            if report.is_complete:
                logger.info(f"✅ Artifact completed after {attempts} attempt(s)")
                return ContinuationResult(success=True, html=current, attempts=attempts, completeness=report)

        logger.warning(f"Artifact still incomplete after {attempts} attempt(s)")
        return ContinuationResult(
            success=False,
            html=current,
            attempts=attempts,
            completeness=report,
            error="Max attempts reached"
        )
