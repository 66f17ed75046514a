# src/folio_auditor/controllers/quality_controller.py
import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List, Optional, Union

from folio_auditor.dom.core import Analyzer, js_round
from folio_auditor.dom.registry import AnalyzerRegistry
from folio_auditor.model import (
    DIMENSIONS, CompositeReport, DimensionReport, ImageSet, PortfolioData,
    ReportMetadata, Suggestion, ValidationIssue
)
from folio_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

WEIGHTS = {
    "content": 0.30,
    "design": 0.25,
    "technical": 0.25,
    "accessibility": 0.20,
}

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

DIMENSION_ICONS = {
    "content": "✅",
    "design": "🎨",
    "technical": "🔧",
    "accessibility": "♿",
}

DEFAULT_TIMEOUT_SECONDS = 10


def overall_status(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 80:
        return "good"
    if score >= 70:
        return "fair"
    if score >= 60:
        return "poor"
    return "critical"


def weighted_score(scores: Dict[str, int]) -> int:
    """round(0.30*content + 0.25*design + 0.25*technical + 0.20*accessibility), half-up."""
    return js_round(sum(scores.get(dim, 0) * weight for dim, weight in WEIGHTS.items()))


def suggestion_priority(dimension_score: int) -> str:
    """Priority comes from the owning dimension's score only, never from the suggestion itself."""
    if dimension_score < 60:
        return "high"
    if dimension_score < 80:
        return "medium"
    return "low"


def compile_suggestions(report: CompositeReport) -> List[Suggestion]:
    """Tags every dimension's suggestions with category + priority and sorts high first (stable)."""
    compiled = []
    for dimension in DIMENSIONS:
        dim_report = report.dimension(dimension)
        priority = suggestion_priority(dim_report.score)
        for suggestion in dim_report.suggestions:
            compiled.append(suggestion.model_copy(update={"category": dimension, "priority": priority}))

    return sorted(compiled, key=lambda s: PRIORITY_ORDER.get(s.priority, 0), reverse=True)


class QualityController:
    """
    Orchestrates the four dimension analyzers.

    Analyzers run concurrently in worker threads, each bounded by a timeout.
    A failing or timed-out analyzer never cancels its siblings: it is turned
    into a low-severity 'validation_error' issue and its dimension keeps score 0.
    """

    def __init__(self, analyzers: Optional[Dict[str, Analyzer]] = None, timeout: Optional[float] = None):
        """
        Args:
            analyzers: Optional overrides per dimension; built-in analyzers fill the rest.
            timeout: Per-analyzer timeout in seconds. Defaults to 'quality.analyzer_timeout_seconds'.
        """
        AnalyzerRegistry.discover()
        self.analyzers: Dict[str, Analyzer] = AnalyzerRegistry.get_all()
        if analyzers:
            self.analyzers.update(analyzers)

        if timeout is None:
            timeout = config_manager.get_nested("quality.analyzer_timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        self.timeout = float(timeout)

    # --- Task handling ---

    async def _run_analyzer(
            self, executor: ThreadPoolExecutor, dimension: str, html: str, portfolio: PortfolioData, images: ImageSet
    ) -> DimensionReport:
        analyzer = self.analyzers.get(dimension)
        if analyzer is None:
            raise LookupError(f"No analyzer registered for dimension '{dimension}'")

        loop = asyncio.get_running_loop()
        result = await asyncio.wait_for(
            loop.run_in_executor(executor, analyzer, html, portfolio, images),
            timeout=self.timeout
        )
        if isinstance(result, DimensionReport):
            return result
        # Externally supplied analyzers may return plain dicts
        return DimensionReport.model_validate(result)

    @staticmethod
    def _failure_report(dimension: str, error: BaseException) -> DimensionReport:
        if isinstance(error, asyncio.TimeoutError):
            reason = "timed out"
        else:
            reason = str(error) or type(error).__name__

        return DimensionReport(
            score=0,
            issues=[ValidationIssue(
                kind="validation_error",
                severity="low",
                message=f"{dimension.capitalize()} validation failed",
                details={"error": reason}
            )]
        )

    # --- Public API ---

    async def validate_portfolio(
            self,
            html: str,
            portfolio: Union[PortfolioData, Dict[str, Any]],
            images: Union[ImageSet, Dict[str, Any], None] = None
    ) -> CompositeReport:
        """
        Runs all dimension analyzers and aggregates a weighted CompositeReport.
        Never raises: a pipeline-level fault yields status 'error' with whatever was computed.
        """
        logger.info("🔍 Starting comprehensive portfolio validation...")
        start = time.perf_counter()
        report = CompositeReport(
            metadata=ReportMetadata(html_length=len(html) if isinstance(html, str) else 0)
        )

        try:
            if not isinstance(html, str):
                raise TypeError(f"Artifact must be a string, got {type(html).__name__}")

            portfolio = portfolio if isinstance(portfolio, PortfolioData) else PortfolioData.model_validate(portfolio or {})
            images = images if isinstance(images, ImageSet) else ImageSet.model_validate(images or {})

            report.metadata.portfolio_type = portfolio.style_preferences.mood or "unknown"
            report.metadata.has_images = images.has_any()

            # Never joined: a timed-out analyzer may still occupy its worker thread
            executor = ThreadPoolExecutor(max_workers=len(DIMENSIONS), thread_name_prefix="analyzer")
            try:
                results = await asyncio.gather(
                    *(self._run_analyzer(executor, dim, html, portfolio, images) for dim in DIMENSIONS),
                    return_exceptions=True
                )
            finally:
                executor.shutdown(wait=False, cancel_futures=True)

            for dimension, result in zip(DIMENSIONS, results):
                if isinstance(result, BaseException):
                    logger.warning(f"⚠️ {dimension.capitalize()} validation failed: {result!r}")
                    setattr(report, dimension, self._failure_report(dimension, result))
                else:
                    setattr(report, dimension, result)
                    logger.info(f"{DIMENSION_ICONS[dimension]} {dimension.capitalize()} validation: {result.score}/100")

            scores = {dim: report.dimension(dim).score for dim in DIMENSIONS}
            report.overall.score = weighted_score(scores)
            report.overall.status = overall_status(report.overall.score)
            report.suggestions = compile_suggestions(report)

            logger.info(f"🎯 Overall quality score: {report.overall.score}/100 ({report.overall.status})")

        except Exception as e:
            logger.error(f"❌ Validation failed: {e}", exc_info=True)
            report.overall.status = "error"

        report.metadata.validation_time_ms = int((time.perf_counter() - start) * 1000)
        return report

    def run(
            self,
            html: str,
            portfolio: Union[PortfolioData, Dict[str, Any]],
            images: Union[ImageSet, Dict[str, Any], None] = None
    ) -> CompositeReport:
        """Synchronous entry point. Must not be called from inside a running event loop."""
        return asyncio.run(self.validate_portfolio(html, portfolio, images))
