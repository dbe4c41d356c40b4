from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

class SlideKind(str, Enum):
    TITLE = "title"
    CONTENT = "content"
    BULLET = "bullet"
    IMAGE = "image"

class StyleName(str, Enum):
    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    MINIMAL = "minimal"
    ACADEMIC = "academic"

DEFAULT_STYLE = StyleName.PROFESSIONAL

def resolve_style(style: Optional[str]) -> StyleName:
    """Unknown or missing style names fall back to professional."""
    if isinstance(style, StyleName):
        return style
    try:
        return StyleName(style)
    except ValueError:
        return DEFAULT_STYLE

class Palette(BaseModel):
    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    card_bg: str
    card_text: str

PALETTES: Dict[StyleName, Palette] = {
    StyleName.PROFESSIONAL: Palette(
        primary="#1a365d",
        secondary="#2b6cb0",
        accent="#ed8936",
        background="linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        text="#ffffff",
        card_bg="#ffffff",
        card_text="#2d3748",
    ),
    StyleName.CREATIVE: Palette(
        primary="#e53e3e",
        secondary="#dd6b20",
        accent="#38a169",
        background="linear-gradient(135deg, #ff6b6b 0%, #feca57 100%)",
        text="#ffffff",
        card_bg="#ffffff",
        card_text="#2d3748",
    ),
    StyleName.MINIMAL: Palette(
        primary="#000000",
        secondary="#2d3748",
        accent="#4299e1",
        background="linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%)",
        text="#2d3748",
        card_bg="#ffffff",
        card_text="#2d3748",
    ),
    StyleName.ACADEMIC: Palette(
        primary="#2c5282",
        secondary="#2b6cb0",
        accent="#d69e2e",
        background="linear-gradient(135deg, #4a5568 0%, #2d3748 100%)",
        text="#ffffff",
        card_bg="#ffffff",
        card_text="#2d3748",
    ),
}

def get_palette(style: Optional[str]) -> Palette:
    return PALETTES[resolve_style(style)]

class Slide(BaseModel):
    title: str
    content: str = ""
    type: SlideKind = SlideKind.CONTENT
    bulletPoints: Optional[List[str]] = None
    imageDescription: Optional[str] = None
    html: Optional[str] = None

# --- Structured generation schema ---
# This is what the model must return; `image` slides are never requested.

class GeneratedSlide(BaseModel):
    title: str
    content: str
    type: Literal["title", "content", "bullet"]
    bulletPoints: Optional[List[str]] = None

    @model_validator(mode="after")
    def require_bullets_for_bullet_slides(self):
        if self.type == "bullet" and not self.bulletPoints:
            raise ValueError("bullet slides need at least one bullet point")
        return self

class GeneratedDeck(BaseModel):
    slides: List[GeneratedSlide] = Field(..., min_length=1)

    def to_slides(self) -> List[Slide]:
        return [Slide(**slide.model_dump()) for slide in self.slides]

# --- Request bodies ---

class GenerateSlidesFromContentRequest(BaseModel):
    content: Optional[str] = None
    style: Optional[str] = DEFAULT_STYLE.value
    slideCount: int = Field(5, ge=1, le=20)

class GenerateSlidesFromTopicRequest(BaseModel):
    topic: Optional[str] = None
    slideCount: int = Field(5, ge=1, le=20)
    style: Optional[str] = DEFAULT_STYLE.value
    userId: Optional[str] = None

class ConvertToPptRequest(BaseModel):
    slides: List[Dict[str, Any]] = []
    title: Optional[str] = None
    style: Optional[str] = DEFAULT_STYLE.value
    userId: Optional[str] = None
