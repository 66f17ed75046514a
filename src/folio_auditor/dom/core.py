import math
from typing import Dict, Any, List, Callable, Optional

from ..model import DimensionReport, ImageSet, PortfolioData, Severity, Suggestion, ValidationIssue


def js_round(value: float) -> int:
    """Half-up rounding (75.5 -> 76), matching the scoring contract rather than banker's rounding."""
    return int(math.floor(value + 0.5))


def ratio_score(passed: int, issues: int) -> int:
    """score = round(100 * passed / (passed + issues)), 0 when nothing was checked."""
    total = passed + issues
    if total == 0:
        return 0
    return js_round(100 * passed / total)


class ReportAccumulator:
    """
    Call-scoped collector for passed checks, issues and suggestions.

    Every analyzer run allocates its own accumulator, so concurrent
    validate() calls never share state.
    """

    def __init__(self):
        self.passed: List[str] = []
        self.issues: List[ValidationIssue] = []
        self.suggestions: List[Suggestion] = []

    def add_pass(self, description: str) -> None:
        self.passed.append(description)

    def add_issue(
            self,
            kind: str,
            severity: Severity,
            message: str,
            fix: Optional[str] = None,
            element: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.issues.append(ValidationIssue(
            kind=kind, severity=severity, message=message, fix=fix, element=element, details=details
        ))

    def add_suggestion(self, kind: str, message: str, text: str = "", element: Optional[str] = None) -> None:
        self.suggestions.append(Suggestion(kind=kind, message=message, text=text, element=element))

    @property
    def score(self) -> int:
        return ratio_score(len(self.passed), len(self.issues))

    def build(self, summary: str = "", details: Optional[Dict[str, Any]] = None) -> DimensionReport:
        return DimensionReport(
            score=self.score,
            issues=self.issues,
            passed=self.passed,
            suggestions=self.suggestions,
            summary=summary,
            details=details or {}
        )


# Analyzer signature: (html, portfolio, images) -> DimensionReport
Analyzer = Callable[[str, PortfolioData, ImageSet], DimensionReport]


class AnalyzerDefinition:
    """
    Binds a quality dimension to the pure function that validates it.
    Discovered by the AnalyzerRegistry from the 'folio_auditor.analyzers' package.
    """

    def __init__(self, dimension: str, validate: Analyzer, description: str = ""):
        self.dimension = dimension
        self.validate = validate
        self.description = description


def score_band_summary(score: int, bands: Dict[str, str]) -> str:
    """Picks a summary line for a score using the shared 90/75/60 bands."""
    if score >= 90:
        return bands["excellent"]
    if score >= 75:
        return bands["good"]
    if score >= 60:
        return bands["fair"]
    return bands["poor"]


class FixContext:
    """
    Everything a fixer may touch: the one shared document plus the source data.
    Created once per AutoFixController run; stages mutate `soup` in order.
    """

    def __init__(self, soup, portfolio: PortfolioData, images: ImageSet, default_lang: str = "en"):
        self.soup = soup
        self.portfolio = portfolio
        self.images = images
        self.default_lang = default_lang
