# src/continuation/model.py
from typing import List, Optional
from pydantic import BaseModel, Field


class StructureFlags(BaseModel):
    """Presence of the document-level landmarks in the raw text (case-insensitive substring checks)."""
    has_doctype: bool = False
    has_html_open: bool = False
    has_html_close: bool = False
    has_body_open: bool = False
    has_body_close: bool = False
    has_head_section: bool = False
    has_style_tag: bool = False
    has_script_tag: bool = False


class TagBalanceStats(BaseModel):
    total_length: int = 0
    open_tags: int = 0
    close_tags: int = 0
    self_closing_tags: int = 0
    tag_balance: float = 0.0  # close / expected closes; < 0.8 reads as "many unclosed tags"


class CompletenessReport(BaseModel):
    """
    Heuristic truncation estimate for a generated artifact.
    `can_continue` False means the artifact is unrecoverable and must be regenerated.
    """
    is_complete: bool = False
    estimated_completion_percent: int = 0
    issues: List[str] = Field(default_factory=list)
    can_continue: bool = False
    structure: StructureFlags = Field(default_factory=StructureFlags)
    stats: TagBalanceStats = Field(default_factory=TagBalanceStats)


class ContinuationResult(BaseModel):
    success: bool = False
    html: str = ""
    attempts: int = 0
    completeness: Optional[CompletenessReport] = None
    needs_regeneration: bool = False
    error: Optional[str] = None
