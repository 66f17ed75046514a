# src/folio_auditor/controllers/autofix_controller.py
import logging
from typing import Dict, Any, List, Optional, Union

from bs4 import BeautifulSoup

from folio_auditor.dom.core import FixContext
from folio_auditor.dom.registry import FixerRegistry
from folio_auditor.model import AutoFixRecord, CompositeReport, DimensionReport, ImageSet, PortfolioData
from folio_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

# Stage order matters: later stages assume earlier structural repairs (head, main, h1) exist.
FIX_STAGES = [
    ("accessibility", 80),
    ("technical", 80),
    ("content", 80),
    ("design", 70),
]


class AutoFixController:
    """
    Applies mechanical repairs to a generated artifact based on a CompositeReport.

    All stages mutate one shared BeautifulSoup document, strictly in sequence.
    A stage only runs when its dimension scored below the stage threshold.
    """

    def __init__(self, default_lang: Optional[str] = None):
        FixerRegistry.discover()
        self.default_lang = default_lang or config_manager.get_nested("autofix.default_lang", "en")

    def _apply_stage(self, dimension: str, dim_report: DimensionReport, ctx: FixContext) -> List[str]:
        fixes: List[str] = []
        for issue in dim_report.issues:
            fixer = FixerRegistry.get(dimension, issue.kind)
            if fixer is None:
                logger.debug(f"No fixer for {dimension}/{issue.kind}; skipping.")
                continue
            try:
                fixes.extend(fixer(ctx, issue))
            except Exception as e:
                logger.warning(f"Failed to apply {dimension} fix for '{issue.kind}': {e}", exc_info=True)
        return fixes

    def apply_auto_fixes(
            self,
            html: str,
            report: Union[CompositeReport, Dict[str, Any]],
            portfolio: Union[PortfolioData, Dict[str, Any]],
            images: Union[ImageSet, Dict[str, Any], None] = None
    ) -> AutoFixRecord:
        """
        Runs the fix stages and returns an AutoFixRecord.

        Returns:
            AutoFixRecord: `improved_html` is the re-serialized document when any fix
            applied, otherwise the original artifact. On a top-level failure
            `success` is False and the original artifact is returned unchanged.
        """
        logger.info("⚡ Applying automatic fixes...")

        try:
            if not isinstance(html, str):
                raise TypeError(f"Artifact must be a string, got {type(html).__name__}")

            report = report if isinstance(report, CompositeReport) else CompositeReport.model_validate(report)
            portfolio = portfolio if isinstance(portfolio, PortfolioData) else PortfolioData.model_validate(portfolio or {})
            images = images if isinstance(images, ImageSet) else ImageSet.model_validate(images or {})

            soup = BeautifulSoup(html, 'html.parser')
            ctx = FixContext(soup, portfolio, images, default_lang=self.default_lang)

            fixes_applied: List[str] = []
            for dimension, threshold in FIX_STAGES:
                dim_report = report.dimension(dimension)
                if dim_report.score >= threshold:
                    continue
                stage_fixes = self._apply_stage(dimension, dim_report, ctx)
                logger.debug(f"{dimension} stage applied {len(stage_fixes)} fixes")
                fixes_applied.extend(stage_fixes)

            html_modified = len(fixes_applied) > 0
            logger.info(f"✅ Applied {len(fixes_applied)} automatic fixes")

            return AutoFixRecord(
                fixes_applied=fixes_applied,
                html_modified=html_modified,
                improved_html=str(soup) if html_modified else html,
                original_html=html,
                success=True
            )

        except Exception as e:
            logger.error(f"❌ Auto-fix failed: {e}", exc_info=True)
            original = html if isinstance(html, str) else ""
            return AutoFixRecord(
                improved_html=original,
                original_html=original,
                success=False,
                error=str(e)
            )
