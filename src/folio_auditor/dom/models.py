# src/folio_auditor/dom/models.py
from typing import List
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field


class ArtifactDocument(BaseModel):
    """
    Represents a parsed generated artifact.

    Holds the BeautifulSoup tree alongside the serialized text views the
    heuristics run against (concatenated CSS, lower-cased markup, visible text).
    """
    soup: BeautifulSoup
    has_doctype: bool = False

    # Style sources
    css_text: str = ""
    inline_styles: List[str] = Field(default_factory=list)

    # Text views
    markup_lower: str = ""
    body_text: str = ""
    document_text: str = ""

    class Config:
        arbitrary_types_allowed = True
