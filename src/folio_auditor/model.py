# src/folio_auditor/model.py
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Literal
from pydantic import BaseModel, Field, field_validator

Severity = Literal["low", "medium", "high", "critical"]
Priority = Literal["low", "medium", "high"]

DIMENSIONS = ("content", "design", "technical", "accessibility")


# --- INPUT: data collected during onboarding ---

class PersonalInfo(BaseModel):
    name: str = ""
    title: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)

    # Contact fields
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    behance: Optional[str] = None


class Project(BaseModel):
    title: str = ""
    overview: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    problem: Optional[str] = None
    solution: Optional[str] = None
    reflection: Optional[str] = None


class StylePreferences(BaseModel):
    mood: Optional[str] = None
    color_scheme: Optional[str] = Field(default=None, alias="colorScheme")
    typography: Optional[str] = None
    layout_style: Optional[str] = Field(default=None, alias="layoutStyle")

    class Config:
        populate_by_name = True

    def is_empty(self) -> bool:
        return not any([self.mood, self.color_scheme, self.typography, self.layout_style])


class PortfolioData(BaseModel):
    """
    The structured record handed over by the data-collection step:
    personal info, an ordered project list and style preferences.
    """
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    projects: List[Project] = Field(default_factory=list)
    style_preferences: StylePreferences = Field(default_factory=StylePreferences, alias="stylePreferences")

    class Config:
        populate_by_name = True

    @field_validator('projects', mode='before')
    @classmethod
    def drop_empty_projects(cls, v: Any) -> List[Any]:
        """Treats a missing project list as empty."""
        return v or []


class ImageRef(BaseModel):
    """A client image. Only the URL and pixel dimensions are known; never fetched."""
    url: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


class ImageSet(BaseModel):
    moodboard: List[ImageRef] = Field(default_factory=list)
    process: List[ImageRef] = Field(default_factory=list)
    final: List[ImageRef] = Field(default_factory=list)

    @property
    def has_moodboard(self) -> bool:
        return len(self.moodboard) > 0

    def all_images(self) -> List[ImageRef]:
        return [*self.moodboard, *self.process, *self.final]

    def has_any(self) -> bool:
        return bool(self.moodboard or self.process or self.final)


# --- OUTPUT: findings and reports ---

class ValidationIssue(BaseModel):
    """
    A single quality defect found by one of the dimension analyzers.
    Issues are expected, data-driven findings, not faults.
    """
    kind: str  # e.g. 'missing_name', 'not_responsive', 'missing_alt_text'
    severity: Severity = "medium"
    message: str
    fix: Optional[str] = None
    element: Optional[str] = None
    details: Optional[Dict[str, Any]] = Field(default_factory=dict)

    @field_validator('details', mode='before')
    @classmethod
    def parse_details(cls, v: Any) -> Dict[str, Any]:
        return v or {}


class Suggestion(BaseModel):
    """Non-blocking advice. Category and priority are filled in by the QualityController."""
    kind: str
    message: str
    text: str = ""
    element: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None


class DimensionReport(BaseModel):
    score: int = Field(default=0, ge=0, le=100)
    issues: List[ValidationIssue] = Field(default_factory=list)
    passed: List[str] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    summary: str = ""

    # Descriptive extras (colour lists, layout analysis, ...). Never scored.
    details: Dict[str, Any] = Field(default_factory=dict)

    def issue_kinds(self) -> List[str]:
        return [issue.kind for issue in self.issues]


class OverallVerdict(BaseModel):
    score: int = 0
    status: str = "unknown"  # excellent / good / fair / poor / critical / error
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReportMetadata(BaseModel):
    html_length: int = 0
    validation_time_ms: int = 0
    portfolio_type: str = "unknown"
    has_images: bool = False


class CompositeReport(BaseModel):
    overall: OverallVerdict = Field(default_factory=OverallVerdict)
    content: DimensionReport = Field(default_factory=DimensionReport)
    design: DimensionReport = Field(default_factory=DimensionReport)
    technical: DimensionReport = Field(default_factory=DimensionReport)
    accessibility: DimensionReport = Field(default_factory=DimensionReport)
    auto_fix_applied: bool = False
    suggestions: List[Suggestion] = Field(default_factory=list)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)

    def dimension(self, name: str) -> DimensionReport:
        if name not in DIMENSIONS:
            raise KeyError(f"Unknown dimension: {name}")
        return getattr(self, name)


class AutoFixRecord(BaseModel):
    fixes_applied: List[str] = Field(default_factory=list)
    html_modified: bool = False
    improved_html: str = ""
    original_html: str = ""
    success: bool = True
    error: Optional[str] = None
